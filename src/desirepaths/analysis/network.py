"""
Network diagnostics derived from a running simulation.

Read-only: nothing here feeds back into the engine. Useful for checking
that usage concentrates on a few well-worn paths as the run goes on.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from desirepaths.core.motion import distance

if TYPE_CHECKING:
    from desirepaths.core.graph import Edge
    from desirepaths.core.sim import Sim


@dataclass
class NetworkSummary:
    """Snapshot statistics of the road network."""

    n_nodes: int
    n_edges: int
    n_agents: int
    road_length: float  # Total length of undirected roads (each pair counted once)
    mean_uses: float
    max_uses: int
    on_graph_fraction: float  # Agents currently travelling on an edge
    idle_agents: int  # Agents parked on their goal node


def edge_usage_array(sim: "Sim") -> np.ndarray:
    """Usage counts of every edge, in store order."""
    return np.array([edge.uses for edge in sim.edges.values()], dtype=np.int64)


def edge_lengths(sim: "Sim") -> np.ndarray:
    """Euclidean length of every edge, in store order."""
    return np.array(
        [distance(*sim.get_edge_position(edge_id)) for edge_id in sim.edges],
        dtype=np.float64,
    )


def top_edges(sim: "Sim", n: int = 10) -> list["Edge"]:
    """The n most-used edges, most used first (ties by creation order)."""
    ranked = sorted(sim.edges.values(), key=lambda e: (-e.uses, e.id))
    return ranked[:n]


def summarize_network(sim: "Sim") -> NetworkSummary:
    uses = edge_usage_array(sim)
    lengths = edge_lengths(sim)

    # Edges come in pairs; count each undirected road once
    seen: set[tuple[int, int]] = set()
    road_length = 0.0
    for length, edge in zip(lengths, sim.edges.values()):
        key = (min(edge.src, edge.dst), max(edge.src, edge.dst))
        if key not in seen:
            seen.add(key)
            road_length += float(length)

    n_agents = len(sim.agents)
    on_graph = sum(1 for agent in sim.agents.values() if agent.current_edge is not None)
    idle = sum(1 for agent in sim.agents.values() if agent.idle)

    return NetworkSummary(
        n_nodes=len(sim.nodes),
        n_edges=len(sim.edges),
        n_agents=n_agents,
        road_length=road_length,
        mean_uses=float(uses.mean()) if uses.size else 0.0,
        max_uses=int(uses.max()) if uses.size else 0,
        on_graph_fraction=on_graph / n_agents if n_agents else 0.0,
        idle_agents=idle,
    )
