"""
Routers decide an arrived agent's next hop.

Cost metric is the scaled distance: Euclidean length divided by the speed
an agent would travel at (base_speed off-graph, usage-boosted on an edge).

Two policies share the same bookkeeping (Router.route):
- GreedyRouter: one-level lookahead. Compare going straight to the goal
  against every outgoing edge followed by a straight finish. Constant
  cost per candidate edge, no graph search.
- ShortestPathRouter: Dijkstra over the usage-weighted edge graph, then a
  straight off-graph finish from whichever node makes the total cheapest.

Either way edges are created lazily (the first crossing between two
unconnected nodes lays a bidirectional pair) and reused edges are
reinforced (uses += 1).
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import dijkstra

from desirepaths.core.config import ROUTER_NAMES
from desirepaths.core.graph import Edge
from desirepaths.core.motion import distance, scaled_speed

if TYPE_CHECKING:
    from desirepaths.core.config import SimConfig
    from desirepaths.core.graph import Agent, EdgeId, GraphStore, NodeId
    from desirepaths.core.ids import IdAllocator
    from desirepaths.core.random_source import RandomSource

logger = logging.getLogger(__name__)


class Router(ABC):
    """Base class: hop selection is abstract, edge bookkeeping is shared."""

    def __init__(
        self,
        store: "GraphStore",
        ids: "IdAllocator",
        config: "SimConfig",
        rng: "RandomSource",
    ):
        self.store = store
        self.ids = ids
        self.config = config
        self.rng = rng

    def edge_cost(self, edge: Edge) -> float:
        """Scaled distance along an existing edge."""
        src = self.store.get_node(edge.src)
        dst = self.store.get_node(edge.dst)
        speed = scaled_speed(edge.uses, self.config.base_speed, self.config.use_speed_scale)
        return distance(src.position, dst.position) / speed

    def straight_cost(self, src_id: "NodeId", dst_id: "NodeId") -> float:
        """Scaled distance going off-graph at base speed."""
        src = self.store.get_node(src_id)
        dst = self.store.get_node(dst_id)
        return distance(src.position, dst.position) / self.config.base_speed

    @abstractmethod
    def next_step(self, from_id: "NodeId", to_id: "NodeId") -> tuple["NodeId", Edge | None]:
        """
        Pick the immediate hop from from_id toward to_id.

        Returns:
            (hop node id, existing edge to it or None for off-graph)
            hop == from_id means there is nowhere to go.
        """
        ...

    def route(self, agent: "Agent", tick: int) -> list["EdgeId"]:
        """
        Re-plan an agent that has arrived at its current destination.

        Picks a new final destination when the old one was reached, then
        moves the agent onto its next hop, creating or reinforcing edges.

        Args:
            agent: Arrived agent (mutated in place)
            tick: Current tick index, stamped on edges as last_use

        Returns:
            Ids of edges created (empty or one forward/backward pair)
        """
        if agent.current_dest == agent.final_dest:
            agent.final_dest = self.rng.choice(self.store.node_ids())
            logger.debug("Agent %s heading for node %s", agent.id, agent.final_dest)

        src = agent.current_dest
        hop, edge = self.next_step(src, agent.final_dest)

        if hop == src:
            # Goal is the node we stand on; stay idle until the next reselection
            agent.current_edge = None
            return []

        added: list[int] = []
        if edge is None:
            edge = self.store.find_edge(src, hop)

        if edge is None:
            forward, backward = self._create_edge_pair(src, hop, tick)
            added.extend([forward.id, backward.id])
            edge = forward
            logger.debug("Created edges %s/%s between %s and %s", forward.id, backward.id, src, hop)
        else:
            edge.uses += 1
            edge.last_use = tick
            logger.debug("Reusing edge %s (uses=%d)", edge.id, edge.uses)

        agent.current_dest = hop
        agent.current_edge = edge.id
        return added

    def _create_edge_pair(self, a: "NodeId", b: "NodeId", tick: int) -> tuple[Edge, Edge]:
        forward = self.store.add_edge(Edge(id=self.ids.next(), src=a, dst=b, uses=1, last_use=tick))
        backward = self.store.add_edge(Edge(id=self.ids.next(), src=b, dst=a, uses=1, last_use=tick))
        return forward, backward


class GreedyRouter(Router):
    """One-level lookahead: edge + straight finish vs. straight from here."""

    def remaining_cost(self, src_id: "NodeId", dst_id: "NodeId") -> float:
        """Straight-line finish, at a direct edge's speed when one exists."""
        direct = self.store.find_edge(src_id, dst_id)
        if direct is not None:
            return self.edge_cost(direct)
        return self.straight_cost(src_id, dst_id)

    def next_step(self, from_id, to_id):
        best_hop = to_id
        best_edge = None
        best_cost = self.straight_cost(from_id, to_id)

        for edge in self.store.outgoing(from_id):
            cost = self.edge_cost(edge) + self.remaining_cost(edge.dst, to_id)
            # Strict comparison: the first candidate wins ties
            if cost < best_cost:
                best_hop = edge.dst
                best_edge = edge
                best_cost = cost

        return best_hop, best_edge


class ShortestPathRouter(Router):
    """Dijkstra over reinforced edges plus a straight off-graph finish."""

    def weight_matrix(self, node_ids: list["NodeId"]) -> csr_matrix:
        """Sparse [n, n] matrix of edge costs, indexed by position in node_ids."""
        index = {node_id: i for i, node_id in enumerate(node_ids)}
        costs: dict[tuple[int, int], float] = {}
        for edge in self.store.edges.values():
            key = (index[edge.src], index[edge.dst])
            cost = self.edge_cost(edge)
            if key not in costs or cost < costs[key]:
                costs[key] = cost

        n = len(node_ids)
        if not costs:
            return csr_matrix((n, n), dtype=np.float64)
        rows, cols = zip(*costs.keys())
        return csr_matrix(
            (np.fromiter(costs.values(), dtype=np.float64), (rows, cols)),
            shape=(n, n),
        )

    def next_step(self, from_id, to_id):
        if from_id == to_id:
            return from_id, None

        node_ids = self.store.node_ids()
        source = node_ids.index(from_id)
        on_graph, predecessors = dijkstra(
            self.weight_matrix(node_ids),
            directed=True,
            indices=source,
            return_predecessors=True,
        )

        best = source
        best_cost = self.straight_cost(from_id, to_id)
        for i, node_id in enumerate(node_ids):
            if i == source or not np.isfinite(on_graph[i]):
                continue
            finish = 0.0 if node_id == to_id else self.straight_cost(node_id, to_id)
            cost = on_graph[i] + finish
            if cost < best_cost:
                best = i
                best_cost = cost

        if best == source:
            return to_id, None

        # Walk back to the first hop out of the source
        hop = best
        while predecessors[hop] != source:
            hop = predecessors[hop]
        hop_id = node_ids[hop]
        return hop_id, self.store.find_edge(from_id, hop_id)


def create_router(
    name: str,
    store: "GraphStore",
    ids: "IdAllocator",
    config: "SimConfig",
    rng: "RandomSource",
) -> Router:
    """
    Factory for routing policies.

    Args:
        name: One of ROUTER_NAMES ("greedy" is the default behaviour)
    """
    if name not in ROUTER_NAMES:
        raise ValueError(f"Unknown router: {name}")
    router_cls = GreedyRouter if name == "greedy" else ShortestPathRouter
    return router_cls(store, ids, config, rng)
