"""
Document I/O: trace output and transport-graph input as XML.
"""

from motiongen.io.xml_io import (
    read_trace,
    read_transport_graph,
    trace_to_bytes,
    write_trace,
    write_transport_graph,
)

__all__ = [
    "read_trace",
    "read_transport_graph",
    "trace_to_bytes",
    "write_trace",
    "write_transport_graph",
]
