"""
Engine constants.

Every tunable number of the simulation lives in SimConfig. Positions are
in the unit square, so speeds and thresholds are fractions of its side.
"""

from dataclasses import dataclass
from typing import Literal


ROUTER_NAMES = ("greedy", "shortest_path")


@dataclass
class SimConfig:
    """Configuration for a simulation run."""

    # Population ceilings
    max_nodes: int = 100
    max_agents: int = 50

    # Spawn periods in ticks (one node / agent every N ticks)
    node_spawn_rate: int = 25
    agent_spawn_rate: int = 50

    # Motion
    base_speed: float = 0.002  # Off-graph speed per tick
    use_speed_scale: float = 0.002  # speed = base + log(uses + 1) * scale
    overlap_threshold: float = 0.001  # Arrival distance

    # Multiply each step by the caller's delta (frames elapsed).
    # Off by default: every tick is one unit of simulated time.
    scale_by_delta: bool = False

    # Routing policy
    router: Literal["greedy", "shortest_path"] = "greedy"

    def __post_init__(self):
        for name in ("max_nodes", "max_agents", "node_spawn_rate", "agent_spawn_rate"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")
        if self.base_speed <= 0:
            raise ValueError(f"base_speed must be positive, got {self.base_speed}")
        if self.use_speed_scale < 0:
            raise ValueError(f"use_speed_scale must be >= 0, got {self.use_speed_scale}")
        if self.overlap_threshold <= 0:
            raise ValueError(
                f"overlap_threshold must be positive, got {self.overlap_threshold}"
            )
        if self.router not in ROUTER_NAMES:
            raise ValueError(f"Unknown router: {self.router}")
