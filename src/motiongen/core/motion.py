"""
Motion engine: the per-node step function.

Free nodes take a random-walk step; guided nodes take a constant-speed
step toward their navigation target. The dispatch is decided by whether
the node has a target.

Free mode, one tick:
1. x reflection: flip x_speed if x + x_speed leaves [0, width]
2. y "reflection": flip y_speed if y + y_speed > y or y_speed < 0.
   This compares against the node's own y, not the field height, so the
   vertical bound is not enforced. The condition is kept as is; the
   vertical velocity alternates sign every tick.
3. Apply the (possibly flipped) velocity
4. With probability REDRAW_PROBABILITY redraw both speeds in
   [SPEED_LOW, SPEED_HIGH)

Guided mode, one tick:
    Move by round(d * linear_speed / |d|) per axis, where d is the offset
    to the target. Rounding is half-to-even (Python's round).
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

import numpy as np

from motiongen.core.node import Node, distance

if TYPE_CHECKING:
    from motiongen.core.node import Waypoint


REDRAW_PROBABILITY = 0.01
SPEED_LOW = -10  # Inclusive
SPEED_HIGH = 10  # Exclusive


def draw_speed(rng: np.random.Generator) -> int:
    """Draw one velocity component uniformly from [SPEED_LOW, SPEED_HIGH)."""
    return int(rng.integers(SPEED_LOW, SPEED_HIGH))


def move_free(node: Node, width: int, height: int, rng: np.random.Generator) -> None:
    """Advance a free node by one tick."""
    if node.x + node.x_speed > width or node.x + node.x_speed < 0:
        node.x_speed = -node.x_speed
    if node.y + node.y_speed > node.y or node.y_speed < 0:
        node.y_speed = -node.y_speed

    node.x += node.x_speed
    node.y += node.y_speed

    if rng.random() < REDRAW_PROBABILITY:
        node.x_speed = draw_speed(rng)
        node.y_speed = draw_speed(rng)


def move_guided(node: Node, target: tuple[int, int]) -> None:
    """
    Advance a guided node one tick toward `target`.

    Raises:
        ValueError: if the node already sits on its target. Callers re-route
            nodes within reach distance before moving, so this only happens
            when that contract is broken.
    """
    dx = target[0] - node.x
    dy = target[1] - node.y
    dist = distance(node.position, target)
    if dist == 0:
        raise ValueError(
            f"Node {node.node_id} is on its target at {target}; cannot pick a direction"
        )

    scale = node.linear_speed / dist
    node.x += round(dx * scale)
    node.y += round(dy * scale)


def step(
    node: Node,
    width: int,
    height: int,
    waypoints: Sequence["Waypoint"],
    rng: np.random.Generator,
) -> None:
    """Advance one node by one tick, using the motion model of its mode."""
    if node.target is None:
        move_free(node, width, height, rng)
    else:
        move_guided(node, waypoints[node.target].position)
