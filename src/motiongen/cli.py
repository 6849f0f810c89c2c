"""
Command line entry point.

    motiongen brownian <width> <height> <nodeCount> <generationCount> <outputFile>
    motiongen transport <inputFile> <outputFile> <nodeCount> <generationCount>
    motiongen plot <traceFile> <imageFile>
    motiongen help

Malformed invocations print the usage text and exit without writing
anything.
"""

from __future__ import annotations
import argparse
import logging
import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Sequence

import numpy as np

from motiongen import __version__
from motiongen.analysis.connectivity import summarize
from motiongen.core.trace import (
    BrownianConfig,
    Trace,
    TransportConfig,
    generate_brownian,
    generate_transport,
)
from motiongen.core.transport import TransportError
from motiongen.io.xml_io import read_trace, read_transport_graph, write_trace


logger = logging.getLogger(__name__)

USAGE = f"""\
motiongen {__version__}
Usage: motiongen <command> [arguments] [--seed N] [-v]

help
    Print this text.

brownian <width> <height> <nodeCount> <generationCount> <outputFile>
    Random-walk motion on a width x height field.
        width, height    - field size
        nodeCount        - number of nodes
        generationCount  - number of time steps
        outputFile       - trace XML file to write

transport <inputFile> <outputFile> <nodeCount> <generationCount>
    Motion along a transport graph.
        inputFile        - transport graph XML file
        outputFile       - trace XML file to write
        nodeCount        - number of nodes
        generationCount  - number of time steps

plot <traceFile> <imageFile> [--generation N]
    Render a trace: node paths, proximity graph, connectivity over time.

Options:
    --seed N     seed the random generator (reproducible traces)
    -v           log progress (repeat for debug output)
"""


class UsageError(Exception):
    """The command line does not match any command."""


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    common = _Parser(add_help=False)
    common.add_argument("--seed", type=non_negative_int, default=None)
    common.add_argument("-v", "--verbose", action="count", default=0)

    parser = _Parser(prog="motiongen", add_help=False)
    commands = parser.add_subparsers(dest="command", required=True, parser_class=_Parser)

    brownian = commands.add_parser("brownian", parents=[common], add_help=False)
    brownian.add_argument("width", type=non_negative_int)
    brownian.add_argument("height", type=non_negative_int)
    brownian.add_argument("node_count", type=non_negative_int)
    brownian.add_argument("generation_count", type=non_negative_int)
    brownian.add_argument("output", type=Path)
    brownian.set_defaults(handler=run_brownian)

    transport = commands.add_parser("transport", parents=[common], add_help=False)
    transport.add_argument("input", type=Path)
    transport.add_argument("output", type=Path)
    transport.add_argument("node_count", type=non_negative_int)
    transport.add_argument("generation_count", type=non_negative_int)
    transport.set_defaults(handler=run_transport)

    plot = commands.add_parser("plot", parents=[common], add_help=False)
    plot.add_argument("trace", type=Path)
    plot.add_argument("image", type=Path)
    plot.add_argument("--generation", type=non_negative_int, default=None)
    plot.set_defaults(handler=run_plot)

    return parser


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    """
    Parse a command line.

    Raises:
        UsageError: unknown command, wrong argument count, a non-integer or
            negative number, or a missing input file
    """
    argv = list(argv)
    if not argv:
        raise UsageError("no command given")
    # Command names are case-insensitive
    argv[0] = argv[0].lower()

    args = build_parser().parse_args(argv)
    if args.command == "transport" and not args.input.is_file():
        raise UsageError(f"input file not found: {args.input}")
    if args.command == "plot" and not args.trace.is_file():
        raise UsageError(f"trace file not found: {args.trace}")
    return args


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def log_summary(trace: Trace) -> None:
    if trace.generation_count == 0:
        logger.info("Trace is empty")
        return
    summary = summarize(trace)
    logger.info(
        "%d generations: %.1f edges/gen, mean degree %.2f, %.1f components/gen, "
        "%d generations without edges",
        trace.generation_count,
        summary.edge_counts.mean(),
        summary.mean_degree.mean(),
        summary.component_counts.mean(),
        summary.empty_generations,
    )


def run_brownian(args: argparse.Namespace, rng: np.random.Generator) -> int:
    config = BrownianConfig(
        width=args.width,
        height=args.height,
        node_count=args.node_count,
        generation_count=args.generation_count,
    )
    trace = generate_brownian(config, rng)
    log_summary(trace)
    write_trace(trace, args.output)
    return 0


def run_transport(args: argparse.Namespace, rng: np.random.Generator) -> int:
    config = TransportConfig(
        node_count=args.node_count,
        generation_count=args.generation_count,
    )
    try:
        graph = read_transport_graph(args.input)
        trace = generate_transport(graph, config, rng)
    except (TransportError, ValueError, ET.ParseError) as exc:
        logger.error("Transport run failed: %s", exc)
        return 1
    log_summary(trace)
    write_trace(trace, args.output)
    return 0


def run_plot(args: argparse.Namespace, rng: np.random.Generator) -> int:
    from motiongen.viz.traces import plot_trace, plot_trace_summary, save_figure

    trace = read_trace(args.trace)
    if args.generation is not None:
        if not 1 <= args.generation <= trace.generation_count:
            logger.error(
                "Generation %d out of range 1..%d", args.generation, trace.generation_count
            )
            return 1
        fig, _ = plot_trace(trace, generation=args.generation)
    else:
        fig = plot_trace_summary(trace)
    save_figure(fig, args.image)
    logger.info("Saved %s", args.image)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        args = parse_args(argv)
    except UsageError as exc:
        logger.debug("Usage error: %s", exc)
        print(USAGE)
        return 0

    configure_logging(args.verbose)
    rng = np.random.default_rng(args.seed)
    return args.handler(args, rng)


if __name__ == "__main__":
    sys.exit(main())
