"""
motiongen: synthetic mobility traces for point nodes on a 2D field.

Two motion models drive the nodes:
- Brownian: random-walk motion with a reflecting horizontal bound
- Transport: constant-speed motion along the edges of a transport graph

Every generation (tick) records node positions plus a proximity graph
linking nodes that are within a fixed radius of each other.
"""

__version__ = "0.1.0"
