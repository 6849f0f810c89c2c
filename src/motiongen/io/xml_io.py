"""
XML documents: trace output and transport-graph input.

Trace document:

    <field width="W" height="H" generationCount="N">
      <gen n="1">
        <node id="n1" x=".." y=".."/>
        <edge id="e0" from="n1" to="n2"/>
      </gen>
    </field>

Transport-graph document (flat, no generations):

    <field width="W" height="H">
      <node id="A" x=".." y=".."/>
      <edge from="A" to="B"/>
    </field>

Documents are written UTF-8 with an XML declaration and two-space indent.
"""

from __future__ import annotations
import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from motiongen.core.proximity import Edge
from motiongen.core.trace import Generation, Trace
from motiongen.core.transport import TransportGraph


logger = logging.getLogger(__name__)


def _require(element: ET.Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise ValueError(f"<{element.tag}> is missing attribute '{name}'")
    return value


def _require_int(element: ET.Element, name: str) -> int:
    value = _require(element, name)
    try:
        return int(value)
    except ValueError:
        raise ValueError(
            f"<{element.tag}> attribute '{name}' is not an integer: {value!r}"
        ) from None


def _root(path: str | Path) -> ET.Element:
    root = ET.parse(path).getroot()
    if root.tag != "field":
        raise ValueError(f"{path}: expected <field> root, found <{root.tag}>")
    return root


# ═══════════════════════════════════════════════════════════════
# Trace
# ═══════════════════════════════════════════════════════════════

def trace_to_element(trace: Trace) -> ET.Element:
    """Build the <field> element tree for a trace."""
    root = ET.Element("field", {
        "width": str(trace.width),
        "height": str(trace.height),
        "generationCount": str(trace.generation_count),
    })
    for gen in trace.generations:
        gen_el = ET.SubElement(root, "gen", {"n": str(gen.n)})
        for node_id, x, y in gen.nodes:
            ET.SubElement(gen_el, "node", {"id": node_id, "x": str(x), "y": str(y)})
        for edge in gen.edges:
            ET.SubElement(gen_el, "edge", {
                "id": edge.edge_id,
                "from": edge.source,
                "to": edge.target,
            })
    return root


def trace_to_bytes(trace: Trace) -> bytes:
    """Serialize a trace to UTF-8 XML bytes."""
    tree = ET.ElementTree(trace_to_element(trace))
    ET.indent(tree, space="  ")
    return ET.tostring(tree.getroot(), encoding="utf-8", xml_declaration=True)


def write_trace(trace: Trace, path: str | Path) -> None:
    """Write a trace document to `path`."""
    path = Path(path)
    data = trace_to_bytes(trace)
    with open(path, "wb") as f:
        f.write(data)
    logger.info("Wrote %d generations to %s", trace.generation_count, path)


def read_trace(path: str | Path) -> Trace:
    """Parse a trace document written by `write_trace`."""
    root = _root(path)
    trace = Trace(width=_require_int(root, "width"), height=_require_int(root, "height"))
    for gen_el in root.findall("gen"):
        nodes = [
            (_require(el, "id"), _require_int(el, "x"), _require_int(el, "y"))
            for el in gen_el.findall("node")
        ]
        edges = [
            Edge(_require(el, "id"), _require(el, "from"), _require(el, "to"))
            for el in gen_el.findall("edge")
        ]
        trace.generations.append(Generation(n=_require_int(gen_el, "n"), nodes=nodes, edges=edges))

    if root.get("generationCount") is not None:
        declared = _require_int(root, "generationCount")
        if declared != trace.generation_count:
            logger.warning(
                "%s declares %d generations but holds %d",
                path, declared, trace.generation_count,
            )
    return trace


# ═══════════════════════════════════════════════════════════════
# Transport graph
# ═══════════════════════════════════════════════════════════════

def read_transport_graph(path: str | Path) -> TransportGraph:
    """
    Parse a transport-graph document.

    Waypoint ids are kept verbatim. Edges naming an unknown waypoint are
    dropped without error.
    """
    root = _root(path)
    graph = TransportGraph(_require_int(root, "width"), _require_int(root, "height"))

    for el in root.iter("node"):
        graph.add_waypoint(_require(el, "id"), _require_int(el, "x"), _require_int(el, "y"))

    edges = [(_require(el, "from"), _require(el, "to")) for el in root.iter("edge")]
    kept = graph.add_edges(edges)

    logger.info(
        "Loaded transport graph from %s: %d waypoints, %d edges (%d dropped)",
        path, len(graph), kept, len(edges) - kept,
    )
    return graph


def write_transport_graph(graph: TransportGraph, path: str | Path) -> None:
    """Write a transport graph in the input-document format."""
    root = ET.Element("field", {"width": str(graph.width), "height": str(graph.height)})
    for wp in graph.waypoints:
        ET.SubElement(root, "node", {"id": wp.node_id, "x": str(wp.x), "y": str(wp.y)})
    for wp in graph.waypoints:
        for j in wp.neighbors:
            ET.SubElement(root, "edge", {"from": wp.node_id, "to": graph.waypoints[j].node_id})

    tree = ET.ElementTree(root)
    ET.indent(tree, space="  ")
    tree.write(path, encoding="utf-8", xml_declaration=True)
