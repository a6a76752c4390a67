"""Unit tests for the motion integrator."""

import numpy as np
import pytest

from desirepaths.core.config import SimConfig
from desirepaths.core.graph import Agent, Edge
from desirepaths.core.motion import MotionIntegrator, distance, scaled_speed
from desirepaths.core.random_source import NumpyRandomSource
from desirepaths.core.sim import Sim


class TestSpeedModel:
    """Tests for distance and scaled_speed."""

    def test_distance(self):
        assert distance((0.0, 0.0), (0.3, 0.4)) == pytest.approx(0.5)
        assert distance((0.2, 0.2), (0.2, 0.2)) == 0.0

    def test_scaled_speed_formula(self):
        speed = scaled_speed(3, base_speed=0.002, use_speed_scale=0.002)
        assert speed == pytest.approx(0.002 + np.log(4) * 0.002)

    def test_speed_grows_with_uses(self):
        speeds = [scaled_speed(n, 0.002, 0.002) for n in (1, 2, 10, 100, 1000)]
        assert all(a < b for a, b in zip(speeds, speeds[1:]))

    def test_diminishing_returns(self):
        gain_early = scaled_speed(2, 0.002, 0.002) - scaled_speed(1, 0.002, 0.002)
        gain_late = scaled_speed(101, 0.002, 0.002) - scaled_speed(100, 0.002, 0.002)
        assert gain_late < gain_early


@pytest.fixture
def two_nodes(store_with_nodes):
    """Nodes at (0.1, 0.5) and (0.9, 0.5) plus an edge pair between them."""
    store, ids, (a, b) = store_with_nodes((0.1, 0.5), (0.9, 0.5))
    store.add_edge(Edge(id=ids.next(), src=a, dst=b, uses=10))
    store.add_edge(Edge(id=ids.next(), src=b, dst=a, uses=1))
    return store, ids, a, b


class TestMotionIntegrator:
    """Tests for MotionIntegrator."""

    def test_off_graph_step(self, two_nodes):
        store, ids, a, b = two_nodes
        motion = MotionIntegrator(store, SimConfig())
        agent = Agent(id=ids.next(), position=(0.1, 0.5), final_dest=b, current_dest=b)

        motion.step(agent)

        assert agent.position[0] == pytest.approx(0.1 + 0.002)
        assert agent.position[1] == pytest.approx(0.5)

    def test_on_edge_step_is_faster(self, two_nodes):
        store, ids, a, b = two_nodes
        motion = MotionIntegrator(store, SimConfig())
        agent = Agent(id=ids.next(), position=(0.1, 0.5), final_dest=b, current_dest=b, current_edge=2)

        motion.step(agent)

        expected = 0.002 + np.log(11) * 0.002
        assert agent.position[0] == pytest.approx(0.1 + expected)
        assert motion.agent_speed(agent) == pytest.approx(expected)

    def test_snaps_instead_of_overshooting(self, two_nodes):
        store, ids, a, b = two_nodes
        motion = MotionIntegrator(store, SimConfig())
        agent = Agent(id=ids.next(), position=(0.8995, 0.5), final_dest=b, current_dest=b)

        motion.step(agent)

        assert agent.position == (0.9, 0.5)

    def test_zero_distance_stays_put(self, two_nodes):
        store, ids, a, b = two_nodes
        motion = MotionIntegrator(store, SimConfig())
        agent = Agent(id=ids.next(), position=(0.1, 0.5), final_dest=a, current_dest=a)

        motion.step(agent)

        assert agent.position == (0.1, 0.5)

    def test_interpolates_along_diagonal(self, store_with_nodes):
        store, ids, (a, b) = store_with_nodes((0.0, 0.0), (0.6, 0.8))
        motion = MotionIntegrator(store, SimConfig(base_speed=0.1))
        agent = Agent(id=ids.next(), position=(0.0, 0.0), final_dest=b, current_dest=b)

        motion.step(agent)

        assert agent.position[0] == pytest.approx(0.06)
        assert agent.position[1] == pytest.approx(0.08)

    def test_positions_stay_in_unit_square(self, store_with_nodes):
        store, ids, (a, b) = store_with_nodes((0.0, 1.0), (1.0, 0.0))
        motion = MotionIntegrator(store, SimConfig(base_speed=0.07))
        agent = Agent(id=ids.next(), position=(0.0, 1.0), final_dest=b, current_dest=b)

        for _ in range(30):
            motion.step(agent)
            assert 0.0 <= agent.position[0] <= 1.0
            assert 0.0 <= agent.position[1] <= 1.0
        assert agent.position == (1.0, 0.0)


class TestArrival:
    """Tests for at_destination."""

    def test_within_threshold(self, two_nodes):
        store, ids, a, b = two_nodes
        motion = MotionIntegrator(store, SimConfig(overlap_threshold=0.001))

        near = Agent(id=ids.next(), position=(0.8995, 0.5), final_dest=b, current_dest=b)
        far = Agent(id=ids.next(), position=(0.8980, 0.5), final_dest=b, current_dest=b)

        assert motion.at_destination(near)
        assert not motion.at_destination(far)


class TestDelta:
    """Tests for delta handling."""

    def test_delta_ignored_by_default(self, two_nodes):
        store, ids, a, b = two_nodes
        motion = MotionIntegrator(store, SimConfig())
        agent = Agent(id=ids.next(), position=(0.1, 0.5), final_dest=b, current_dest=b)

        assert motion.next_position(agent, delta=5.0) == motion.next_position(agent, delta=1.0)

    def test_delta_scales_step_when_enabled(self, two_nodes):
        store, ids, a, b = two_nodes
        motion = MotionIntegrator(store, SimConfig(scale_by_delta=True))
        agent = Agent(id=ids.next(), position=(0.1, 0.5), final_dest=b, current_dest=b)

        x_one = motion.next_position(agent, delta=1.0)[0]
        x_three = motion.next_position(agent, delta=3.0)[0]

        assert x_one == pytest.approx(0.102)
        assert x_three == pytest.approx(0.106)

    @pytest.mark.parametrize("delta", [-1.0, float("nan")])
    def test_tick_rejects_bad_delta(self, delta):
        config = SimConfig(scale_by_delta=True, max_nodes=4, node_spawn_rate=1)
        sim = Sim(config=config, rng=NumpyRandomSource(seed=1))
        for _ in range(5):
            sim.tick(1.0)
        before = {agent_id: agent.position for agent_id, agent in sim.agents.items()}

        with pytest.raises(ValueError):
            sim.tick(delta)

        assert sim.elapsed == 5
        assert {agent_id: agent.position for agent_id, agent in sim.agents.items()} == before

    def test_scaled_ticks_stay_in_unit_square(self):
        config = SimConfig(scale_by_delta=True, max_nodes=4, node_spawn_rate=1)
        sim = Sim(config=config, rng=NumpyRandomSource(seed=1))

        for i in range(2000):
            sim.tick(0.0 if i % 7 == 0 else 2.5)
            for agent in sim.agents.values():
                x, y = agent.position
                assert 0.0 <= x <= 1.0
                assert 0.0 <= y <= 1.0
