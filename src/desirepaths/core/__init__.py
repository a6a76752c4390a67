"""
Core engine primitives.

This layer knows NOTHING about drawing, colors or how the process starts.
It only knows:
- Nodes, directed edges and agents held in one id-keyed store
- When new nodes and agents spawn
- How an arrived agent picks its next hop (and lays or reinforces edges)
- How far an agent moves in one tick
- Which ids appeared during a tick (SimUpdate)

Two routers are available:
- GreedyRouter: one-level lookahead heuristic (default)
- ShortestPathRouter: Dijkstra over usage-weighted edges
"""

from desirepaths.core.config import SimConfig
from desirepaths.core.graph import Agent, Edge, GraphStore, Node, NotFoundError
from desirepaths.core.ids import IdAllocator
from desirepaths.core.motion import MotionIntegrator, distance, scaled_speed
from desirepaths.core.random_source import NumpyRandomSource, RandomSource
from desirepaths.core.router import GreedyRouter, Router, ShortestPathRouter, create_router
from desirepaths.core.settings import Palette, Settings, default_settings
from desirepaths.core.sim import Sim, SimUpdate
from desirepaths.core.spawner import Spawner

__all__ = [
    "SimConfig",
    "Agent",
    "Edge",
    "GraphStore",
    "Node",
    "NotFoundError",
    "IdAllocator",
    "MotionIntegrator",
    "distance",
    "scaled_speed",
    "NumpyRandomSource",
    "RandomSource",
    "Router",
    "GreedyRouter",
    "ShortestPathRouter",
    "create_router",
    "Palette",
    "Settings",
    "default_settings",
    "Sim",
    "SimUpdate",
    "Spawner",
]
