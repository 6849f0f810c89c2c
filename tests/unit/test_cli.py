"""Tests for the command line entry point."""

import xml.etree.ElementTree as ET

import pytest

from motiongen.cli import UsageError, main, non_negative_int, parse_args
from motiongen.io.xml_io import read_trace


def assert_usage(capsys):
    out = capsys.readouterr().out
    assert "Usage: motiongen" in out
    assert "brownian <width> <height>" in out


class TestUsage:
    """Malformed invocations print usage and write nothing."""

    @pytest.mark.parametrize(
        "argv",
        [
            [],
            ["help"],
            ["HELP"],
            ["teleport", "1", "2"],
            ["brownian", "100", "100", "3", "1"],
            ["brownian", "100", "abc", "3", "1", "out.xml"],
            ["brownian", "100", "-5", "3", "1", "out.xml"],
            ["brownian", "100", "1.5", "3", "1", "out.xml"],
            ["transport", "graph.xml", "out.xml", "1"],
            ["transport", "missing.xml", "out.xml", "1", "5"],
            ["plot", "missing.xml", "out.png"],
        ],
    )
    def test_prints_usage(self, argv, capsys, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main(argv) == 0
        assert_usage(capsys)
        assert list(tmp_path.iterdir()) == []

    def test_transport_number_error_with_existing_input(self, write_graph, tmp_path, capsys):
        graph = write_graph([("A", 0, 0), ("B", 100, 0)], [("A", "B"), ("B", "A")])
        out = tmp_path / "out.xml"
        assert main(["transport", str(graph), str(out), "x", "5"]) == 0
        assert_usage(capsys)
        assert not out.exists()


class TestParsing:
    """Tests for argument parsing helpers."""

    def test_non_negative_int(self):
        assert non_negative_int("0") == 0
        assert non_negative_int("42") == 42

    def test_brownian_args(self):
        args = parse_args(["brownian", "100", "80", "3", "7", "out.xml", "--seed", "9"])
        assert (args.width, args.height, args.node_count, args.generation_count) == (100, 80, 3, 7)
        assert str(args.output) == "out.xml"
        assert args.seed == 9

    def test_command_is_case_insensitive(self):
        args = parse_args(["Brownian", "1", "1", "1", "1", "Out.XML"])
        assert args.command == "brownian"
        # File names keep their case
        assert str(args.output) == "Out.XML"

    def test_transport_requires_existing_input(self, tmp_path):
        with pytest.raises(UsageError, match="not found"):
            parse_args(["transport", str(tmp_path / "nope.xml"), "out.xml", "1", "1"])


class TestBrownianCommand:
    """End-to-end random-walk runs."""

    def test_writes_trace(self, tmp_path):
        out = tmp_path / "out.xml"
        assert main(["brownian", "100", "100", "3", "1", str(out), "--seed", "1"]) == 0

        root = ET.parse(out).getroot()
        assert root.attrib == {"width": "100", "height": "100", "generationCount": "1"}
        (gen,) = root.findall("gen")
        assert gen.get("n") == "1"
        assert len(gen.findall("node")) == 3

    def test_seed_reproducible(self, tmp_path):
        a = tmp_path / "a.xml"
        b = tmp_path / "b.xml"
        main(["brownian", "200", "200", "10", "20", str(a), "--seed", "77"])
        main(["brownian", "200", "200", "10", "20", str(b), "--seed", "77"])
        assert a.read_bytes() == b.read_bytes()

    def test_verbose_logs_summary(self, tmp_path, caplog):
        out = tmp_path / "out.xml"
        with caplog.at_level("INFO"):
            main(["brownian", "100", "100", "4", "3", str(out), "--seed", "3", "-v"])
        assert "3 generations" in caplog.text


class TestTransportCommand:
    """End-to-end transport-graph runs."""

    def test_writes_trace(self, write_graph, tmp_path):
        graph = write_graph(
            [("A", 0, 0), ("B", 200, 0), ("C", 200, 200)],
            [("A", "B"), ("B", "C"), ("C", "A"), ("A", "ghost")],
            width=250,
            height=250,
        )
        out = tmp_path / "out.xml"
        assert main(["transport", str(graph), str(out), "4", "30", "--seed", "5"]) == 0

        trace = read_trace(out)
        assert (trace.width, trace.height) == (250, 250)
        assert trace.generation_count == 30
        assert all(len(g.nodes) == 4 for g in trace.generations)

    def test_unescapable_graph_fails_without_output(self, write_graph, tmp_path, caplog):
        graph = write_graph([("A", 0, 0), ("B", 10, 0)], [("A", "B"), ("B", "A")])
        out = tmp_path / "out.xml"
        assert main(["transport", str(graph), str(out), "1", "5", "--seed", "1"]) == 1
        assert not out.exists()
        assert "Transport run failed" in caplog.text

    def test_dead_end_fails_without_output(self, write_graph, tmp_path):
        graph = write_graph([("A", 0, 0)], [])
        out = tmp_path / "out.xml"
        assert main(["transport", str(graph), str(out), "1", "5"]) == 1
        assert not out.exists()

    def test_malformed_coordinate_fails_without_output(self, write_graph, tmp_path, caplog):
        graph = write_graph([("A", "zero", 0), ("B", 50, 0)], [("A", "B"), ("B", "A")])
        out = tmp_path / "out.xml"
        assert main(["transport", str(graph), str(out), "1", "5"]) == 1
        assert not out.exists()
        assert "not an integer" in caplog.text

    def test_unparseable_graph_fails_without_output(self, tmp_path, caplog):
        graph = tmp_path / "graph.xml"
        graph.write_text('<field width="100"', encoding="utf-8")
        out = tmp_path / "out.xml"
        assert main(["transport", str(graph), str(out), "1", "5"]) == 1
        assert not out.exists()
        assert "Transport run failed" in caplog.text


class TestPlotCommand:
    """Rendering a recorded trace."""

    def test_plot_summary(self, tmp_path):
        trace = tmp_path / "trace.xml"
        image = tmp_path / "trace.png"
        main(["brownian", "150", "150", "6", "10", str(trace), "--seed", "2"])
        assert main(["plot", str(trace), str(image)]) == 0
        assert image.stat().st_size > 0

    def test_plot_single_generation(self, tmp_path):
        trace = tmp_path / "trace.xml"
        image = tmp_path / "gen.png"
        main(["brownian", "150", "150", "6", "10", str(trace), "--seed", "2"])
        assert main(["plot", str(trace), str(image), "--generation", "4"]) == 0
        assert image.exists()

    def test_plot_generation_out_of_range(self, tmp_path):
        trace = tmp_path / "trace.xml"
        image = tmp_path / "gen.png"
        main(["brownian", "150", "150", "6", "10", str(trace), "--seed", "2"])
        assert main(["plot", str(trace), str(image), "--generation", "11"]) == 1
        assert not image.exists()
