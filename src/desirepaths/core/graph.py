"""
Graph store: the nodes, edges and agents that make up the road network.

Relations are id references into one central store rather than object
pointers:
- Node.edges holds the ids of outgoing edges
- Edge.src / Edge.dst hold node ids
- Agent.current_dest / final_dest / current_edge hold node and edge ids

The store only guarantees referential bookkeeping (an inserted edge is
registered on its source node). Pairing edges A->B / B->A is the router's
job.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator

NodeId = int
EdgeId = int
AgentId = int
Point = tuple[float, float]


class NotFoundError(LookupError):
    """Raised when an id is not present in the graph store."""

    def __init__(self, kind: str, entity_id: int):
        super().__init__(f"No {kind} with ID: {entity_id}")
        self.kind = kind
        self.id = entity_id


@dataclass
class Node:
    """A fixed point in the plane that agents travel between."""

    id: NodeId
    position: Point
    edges: list[EdgeId] = field(default_factory=list)  # Outgoing edge ids


@dataclass
class Edge:
    """A directed connection; usage makes it faster."""

    id: EdgeId
    src: NodeId
    dst: NodeId
    uses: int = 1  # Never decreases
    last_use: int = 0  # Tick index of the most recent selection


@dataclass
class Agent:
    """A traveller with a long-term goal and an immediate next hop."""

    id: AgentId
    position: Point
    final_dest: NodeId
    current_dest: NodeId
    current_edge: EdgeId | None = None  # None while moving off-graph

    @property
    def idle(self) -> bool:
        return self.current_dest == self.final_dest and self.current_edge is None


class GraphStore:
    """Owns every Node, Edge and Agent, keyed by id."""

    def __init__(self):
        self.nodes: dict[NodeId, Node] = {}
        self.edges: dict[EdgeId, Edge] = {}
        self.agents: dict[AgentId, Agent] = {}

    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        return node

    def add_edge(self, edge: Edge) -> Edge:
        """Insert an edge and register it on its source node's outgoing list."""
        source = self.get_node(edge.src)
        self.get_node(edge.dst)
        self.edges[edge.id] = edge
        source.edges.append(edge.id)
        return edge

    def add_agent(self, agent: Agent) -> Agent:
        self.agents[agent.id] = agent
        return agent

    def get_node(self, node_id: NodeId) -> Node:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise NotFoundError("node", node_id) from None

    def get_edge(self, edge_id: EdgeId) -> Edge:
        try:
            return self.edges[edge_id]
        except KeyError:
            raise NotFoundError("edge", edge_id) from None

    def get_agent(self, agent_id: AgentId) -> Agent:
        try:
            return self.agents[agent_id]
        except KeyError:
            raise NotFoundError("agent", agent_id) from None

    def find_edge(self, src: NodeId, dst: NodeId) -> Edge | None:
        """First outgoing edge of src that leads to dst, if any."""
        for edge_id in self.get_node(src).edges:
            edge = self.edges[edge_id]
            if edge.dst == dst:
                return edge
        return None

    def outgoing(self, node_id: NodeId) -> Iterator[Edge]:
        """Iterate over a node's outgoing edges in insertion order."""
        for edge_id in self.get_node(node_id).edges:
            yield self.edges[edge_id]

    def node_ids(self) -> list[NodeId]:
        return list(self.nodes.keys())

    @property
    def n_nodes(self) -> int:
        return len(self.nodes)

    @property
    def n_edges(self) -> int:
        return len(self.edges)

    @property
    def n_agents(self) -> int:
        return len(self.agents)
