# Tests for ride rollout collection

import pytest
import numpy as np

from coaster.core.types import SimulationState, TrackPoint
from coaster.core.vector import Vec3
from coaster.sim.engine import PhysicsEngine
from coaster.sim.rollout import RideRollout, collect_ride, simulate_ride


class TestRideRollout:

    def test_empty(self):
        rollout = RideRollout.empty(8, dt=0.1)

        assert len(rollout) == 8
        assert rollout.speed.shape == (8,)
        assert rollout.on_chain_lift.dtype == bool
        assert rollout.duration == pytest.approx(0.8)

    def test_from_states(self):
        states = [
            SimulationState.initial(Vec3(0.0, float(i), 0.0), speed=float(i + 1))
            for i in range(3)
        ]
        rollout = RideRollout.from_states(states, dt=0.5)

        assert np.allclose(rollout.speed, [1.0, 2.0, 3.0])
        assert np.allclose(rollout.height, [0.0, 1.0, 2.0])
        assert np.allclose(rollout.time, [0.5, 1.0, 1.5])

    def test_to_records(self):
        rollout = RideRollout.from_states(
            [SimulationState.initial(Vec3(0.0, 2.0, 0.0), speed=1.0)]
        )
        records = rollout.to_records()

        assert len(records) == 1
        assert records[0]["height"] == 2.0
        assert records[0]["on_chain_lift"] is False


class TestCollectRide:

    def test_shapes(self, loop_track, dt):
        engine = PhysicsEngine()
        engine.set_track(loop_track, looped=True)

        rollout = collect_ride(engine, num_steps=120, dt=dt)

        assert len(rollout) == 120
        assert rollout.dt == dt
        assert not np.isnan(rollout.g_total).any()
        assert rollout.progress[-1] == pytest.approx(engine.state.progress)

    def test_invalid_dt(self, loop_track):
        engine = PhysicsEngine()
        engine.set_track(loop_track, looped=True)

        with pytest.raises(ValueError):
            collect_ride(engine, num_steps=10, dt=0.0)


class TestSimulateRide:

    def test_one_circuit(self, loop_track):
        """Stops at the wrap, so progress only increases."""
        rollout = simulate_ride(loop_track, looped=True, dt=0.05, max_steps=20000)

        assert len(rollout) > 0
        assert np.all(np.diff(rollout.progress) >= 0.0)
        assert rollout.on_chain_lift[0]

    def test_respects_max_steps(self, launch_hill_track):
        rollout = simulate_ride(launch_hill_track, looped=False, max_steps=50)
        assert len(rollout) <= 50

    def test_degenerate_track(self):
        rollout = simulate_ride([TrackPoint(Vec3(0.0, 1.0, 0.0))], looped=False)
        assert len(rollout) == 0

    def test_invalid_dt(self, straight_track):
        with pytest.raises(ValueError):
            simulate_ride(straight_track, looped=False, dt=-0.1)
