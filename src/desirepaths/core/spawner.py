"""
Spawner: grows the world one node / one agent at a time.

Schedule (elapsed = ticks completed so far):
- elapsed == 0: always one node and one agent, so the world never starts empty
- otherwise a node every node_spawn_rate ticks while below max_nodes
- and an agent every agent_spawn_rate ticks while below max_agents

New agents appear on a random existing node and start idle there.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from desirepaths.core.graph import Agent, Node

if TYPE_CHECKING:
    from desirepaths.core.config import SimConfig
    from desirepaths.core.graph import AgentId, GraphStore, NodeId
    from desirepaths.core.ids import IdAllocator
    from desirepaths.core.random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class Spawner:
    store: "GraphStore"
    ids: "IdAllocator"
    config: "SimConfig"
    rng: "RandomSource"

    def should_spawn_node(self, elapsed: int) -> bool:
        if elapsed == 0:
            return True
        return (
            self.store.n_nodes < self.config.max_nodes
            and elapsed % self.config.node_spawn_rate == 0
        )

    def should_spawn_agent(self, elapsed: int) -> bool:
        if elapsed == 0:
            return True
        return (
            self.store.n_agents < self.config.max_agents
            and elapsed % self.config.agent_spawn_rate == 0
        )

    def spawn(self, elapsed: int) -> tuple[list["NodeId"], list["AgentId"]]:
        """
        Create whatever is due this tick.

        Args:
            elapsed: Index of the tick being run

        Returns:
            (added_node_ids, added_agent_ids), each with at most one entry
        """
        added_nodes: list[int] = []
        added_agents: list[int] = []

        if self.should_spawn_node(elapsed):
            node = self.store.add_node(
                Node(id=self.ids.next(), position=self.rng.random_position())
            )
            added_nodes.append(node.id)
            logger.debug("Spawned node %s at (%.3f, %.3f)", node.id, *node.position)

        if self.should_spawn_agent(elapsed) and self.store.n_nodes > 0:
            spawn_node = self.store.get_node(self.rng.choice(self.store.node_ids()))
            agent = self.store.add_agent(
                Agent(
                    id=self.ids.next(),
                    position=spawn_node.position,
                    final_dest=spawn_node.id,
                    current_dest=spawn_node.id,
                )
            )
            added_agents.append(agent.id)
            logger.debug("Spawned agent %s on node %s", agent.id, spawn_node.id)

        return added_nodes, added_agents
