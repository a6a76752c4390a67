"""
Sim: the tick orchestrator and the engine's public API.

One tick:
1. Spawner adds at most one node and one agent
2. For each agent: if it has arrived, the router picks its next hop
   (possibly laying new edges), then the motion integrator moves it
3. The ids added this tick are returned as a SimUpdate
4. The tick counter advances

Ticks are atomic and synchronous. The caller drives the loop (one tick
per frame) and reads positions back through the query methods.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from desirepaths.core.config import SimConfig
from desirepaths.core.graph import (
    Agent,
    AgentId,
    Edge,
    EdgeId,
    GraphStore,
    Node,
    NodeId,
    Point,
)
from desirepaths.core.ids import IdAllocator
from desirepaths.core.motion import MotionIntegrator
from desirepaths.core.random_source import NumpyRandomSource, RandomSource
from desirepaths.core.router import Router, create_router
from desirepaths.core.settings import Settings, default_settings
from desirepaths.core.spawner import Spawner

logger = logging.getLogger(__name__)


@dataclass
class SimUpdate:
    """
    Topology diff produced by one tick.

    Removal lists are reserved for future pruning of agents, nodes or
    edges and are always empty for now.
    """

    added_agents: list[AgentId] = field(default_factory=list)
    added_nodes: list[NodeId] = field(default_factory=list)
    added_edges: list[EdgeId] = field(default_factory=list)
    removed_agents: list[AgentId] = field(default_factory=list)
    removed_nodes: list[NodeId] = field(default_factory=list)
    removed_edges: list[EdgeId] = field(default_factory=list)


class Sim:
    """
    The desire-path simulation engine.

    Owns the graph store, the id counter and the tick counter. Settings
    are kept for collaborators and never influence the mechanics.
    """

    def __init__(
        self,
        config: SimConfig | None = None,
        settings: Settings | None = None,
        rng: RandomSource | None = None,
    ):
        self.config = config if config is not None else SimConfig()
        self.settings = settings if settings is not None else default_settings()
        self.rng = rng if rng is not None else NumpyRandomSource()

        self.store = GraphStore()
        self.ids = IdAllocator()
        self.elapsed = 0

        self.spawner = Spawner(self.store, self.ids, self.config, self.rng)
        self.router: Router = create_router(
            self.config.router, self.store, self.ids, self.config, self.rng
        )
        self.motion = MotionIntegrator(self.store, self.config)

    def set_settings(self, settings: Settings) -> None:
        """Replace the settings snapshot wholesale."""
        self.settings = settings

    def get_agent(self, agent_id: AgentId) -> Agent:
        return self.store.get_agent(agent_id)

    def get_node(self, node_id: NodeId) -> Node:
        return self.store.get_node(node_id)

    def get_edge(self, edge_id: EdgeId) -> Edge:
        return self.store.get_edge(edge_id)

    def get_agent_position(self, agent_id: AgentId) -> Point:
        return self.store.get_agent(agent_id).position

    def get_node_position(self, node_id: NodeId) -> Point:
        return self.store.get_node(node_id).position

    def get_edge_position(self, edge_id: EdgeId) -> tuple[Point, Point]:
        """Endpoint positions (source, destination) of an edge."""
        edge = self.store.get_edge(edge_id)
        return self.store.get_node(edge.src).position, self.store.get_node(edge.dst).position

    @property
    def nodes(self) -> dict[NodeId, Node]:
        return self.store.nodes

    @property
    def edges(self) -> dict[EdgeId, Edge]:
        return self.store.edges

    @property
    def agents(self) -> dict[AgentId, Agent]:
        return self.store.agents

    def tick(self, delta: float = 1.0) -> SimUpdate:
        """
        Advance the simulation by one step.

        Args:
            delta: Frames elapsed since the previous tick. Ignored unless
                   config.scale_by_delta is set.

        Returns:
            SimUpdate listing ids created this tick

        Raises:
            ValueError: delta is negative or NaN
        """
        if not delta >= 0:
            raise ValueError(f"delta must be >= 0, got {delta}")

        added_nodes, added_agents = self.spawner.spawn(self.elapsed)
        added_edges: list[EdgeId] = []

        for agent in list(self.store.agents.values()):
            if self.motion.at_destination(agent):
                logger.debug("Agent %s reached node %s", agent.id, agent.current_dest)
                added_edges.extend(self.router.route(agent, self.elapsed))
            self.motion.step(agent, delta)

        self.elapsed += 1
        return SimUpdate(
            added_agents=added_agents,
            added_nodes=added_nodes,
            added_edges=added_edges,
        )

    def run(self, n_ticks: int, delta: float = 1.0) -> dict:
        """Run n_ticks ticks and return a summary of the resulting state."""
        n_added_edges = 0
        for _ in range(n_ticks):
            n_added_edges += len(self.tick(delta).added_edges)

        return {
            "n_ticks": n_ticks,
            "elapsed": self.elapsed,
            "n_nodes": self.store.n_nodes,
            "n_agents": self.store.n_agents,
            "n_edges": self.store.n_edges,
            "edges_added": n_added_edges,
        }
