"""
Motion integrator: moves agents toward their immediate hop.

Speed model:
- Off-graph (no current edge): base_speed
- On an edge with n uses: base_speed + log(n + 1) * use_speed_scale

The log gives diminishing returns: the first few trips make a path much
faster, later trips only a little. Motion is linear interpolation toward
the destination and snaps onto it when the step would overshoot.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from desirepaths.core.config import SimConfig
    from desirepaths.core.graph import Agent, GraphStore, Point


def distance(p1: "Point", p2: "Point") -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(p2[0] - p1[0], p2[1] - p1[1]))


def scaled_speed(uses: int, base_speed: float, use_speed_scale: float) -> float:
    """Speed on an edge that has been selected `uses` times."""
    return float(base_speed + np.log(uses + 1) * use_speed_scale)


@dataclass
class MotionIntegrator:
    """Advances agent positions one tick at a time."""

    store: "GraphStore"
    config: "SimConfig"

    def edge_speed(self, uses: int) -> float:
        return scaled_speed(uses, self.config.base_speed, self.config.use_speed_scale)

    def agent_speed(self, agent: "Agent") -> float:
        """Effective speed for an agent given its current edge."""
        if agent.current_edge is None:
            return self.config.base_speed
        edge = self.store.get_edge(agent.current_edge)
        return self.edge_speed(edge.uses)

    def at_destination(self, agent: "Agent") -> bool:
        """True once the agent is within overlap_threshold of its current hop."""
        destination = self.store.get_node(agent.current_dest)
        return distance(agent.position, destination.position) < self.config.overlap_threshold

    def next_position(self, agent: "Agent", delta: float = 1.0) -> "Point":
        """
        Position after one step toward the current destination.

        Args:
            agent: Agent to move (not mutated)
            delta: Frames elapsed; only applied when config.scale_by_delta

        Returns:
            New (x, y) position
        """
        curr = agent.position
        dest = self.store.get_node(agent.current_dest).position
        dist = distance(curr, dest)

        speed = self.agent_speed(agent)
        if self.config.scale_by_delta:
            speed *= delta

        # Snap when the step reaches or passes the destination
        if dist == 0.0 or speed / dist >= 1.0:
            return dest

        scale = speed / dist
        dx = dest[0] - curr[0]
        dy = dest[1] - curr[1]
        return curr[0] + dx * scale, curr[1] + dy * scale

    def step(self, agent: "Agent", delta: float = 1.0) -> None:
        """Move the agent in place."""
        agent.position = self.next_position(agent, delta)
