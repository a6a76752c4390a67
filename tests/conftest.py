"""
Pytest configuration and shared fixtures.
"""

import pytest


class ScriptedRandomSource:
    """
    Deterministic RandomSource for tests.

    positions are handed out in order (cycling); picks are indices into
    whatever sequence is being chosen from (taken modulo its length).
    """

    def __init__(self, positions=None, picks=None):
        self.positions = list(positions or [(0.5, 0.5)])
        self.picks = list(picks or [0])
        self._position_calls = 0
        self._pick_calls = 0

    def random_position(self):
        position = self.positions[self._position_calls % len(self.positions)]
        self._position_calls += 1
        return position

    def choice(self, items):
        index = self.picks[self._pick_calls % len(self.picks)]
        self._pick_calls += 1
        return items[index % len(items)]


@pytest.fixture
def small_config():
    """Configuration for a small, fast-growing world."""
    from desirepaths.core import SimConfig
    return SimConfig(
        max_nodes=8,
        max_agents=4,
        node_spawn_rate=5,
        agent_spawn_rate=10,
    )


@pytest.fixture
def rng():
    """Reproducible random source."""
    from desirepaths.core import NumpyRandomSource
    return NumpyRandomSource(seed=42)


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandomSource


@pytest.fixture
def store_with_nodes():
    """
    Factory: GraphStore + IdAllocator holding nodes at the given positions.

    Returns (store, ids, node_ids) with node ids in the order given.
    """
    from desirepaths.core import GraphStore, IdAllocator, Node

    def _build(*positions):
        store = GraphStore()
        ids = IdAllocator()
        node_ids = []
        for position in positions:
            node = store.add_node(Node(id=ids.next(), position=position))
            node_ids.append(node.id)
        return store, ids, node_ids

    return _build
