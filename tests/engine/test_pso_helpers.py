import logging

import numpy as np
import pytest

from pswarm.engine.algorithm.pso.helpers import (
    initialize_swarm,
    prepare_starting_point,
    update_global_best,
    update_personal_bests,
)
from pswarm.foundation.exceptions import StartingPointError


def _spread_swarm(mode, n=4):
    st = initialize_swarm(np.zeros((2, 1)), n, mode)
    st.positions[:] = np.arange(n, dtype=float)[:, None, None]
    return st


class TestPrepareStartingPoint:
    def test_copies_and_keeps_2d(self):
        x = np.array([[1.0, 2.0]])
        x0 = prepare_starting_point(x)
        assert x0.shape == (1, 2)
        x0[0, 0] = 99.0
        assert x[0, 0] == 1.0

    def test_keeps_1d_layout(self):
        assert prepare_starting_point([1, 2, 3]).shape == (3,)

    @pytest.mark.parametrize(
        "bad",
        [
            np.array([[np.nan, 1.0]]),
            np.array([np.inf]),
            np.zeros((0, 2)),
            np.zeros((2, 2, 2)),
            np.float64(3.0),
            ["a", "b"],
        ],
    )
    def test_rejects_bad_points(self, bad):
        with pytest.raises(StartingPointError):
            prepare_starting_point(bad)


class TestInitializeSwarm:
    def test_every_slab_copies_starting_point(self):
        x0 = np.array([[1.0], [2.0]])
        st = initialize_swarm(x0, 3, "shared")
        assert st.positions.shape == (3, 2, 1)
        assert st.velocities.shape == (3, 2, 1)
        for k in range(3):
            np.testing.assert_array_equal(st.positions[k], x0)
            np.testing.assert_array_equal(st.velocities[k], x0)
        np.testing.assert_array_equal(st.personal_best_X, x0)
        np.testing.assert_array_equal(st.global_best_X, x0)
        assert st.global_best_F == np.inf
        assert float(st.personal_best_F) == np.inf

    def test_per_particle_slots(self):
        st = initialize_swarm(np.ones((2, 1)), 5, "per_particle")
        assert st.personal_best_X.shape == (5, 2, 1)
        assert st.personal_best_F.shape == (5,)
        assert np.all(np.isinf(st.personal_best_F))

    def test_velocity_is_not_a_view_of_positions(self):
        st = initialize_swarm(np.ones((1, 1)), 2, "shared")
        st.positions += 1.0
        np.testing.assert_array_equal(st.velocities, np.ones((2, 1, 1)))


class TestSharedPersonalBest:
    def test_tie_goes_to_lowest_index(self):
        st = _spread_swarm("shared")
        update_personal_bests(st, np.array([5.0, 1.0, 1.0, 3.0]))
        assert float(st.personal_best_F) == 1.0
        np.testing.assert_array_equal(st.personal_best_X, st.positions[1])

    def test_keeps_previous_when_not_better(self):
        st = _spread_swarm("shared")
        update_personal_bests(st, np.array([2.0, 4.0, 4.0, 4.0]))
        update_personal_bests(st, np.array([3.0, 2.0, 9.0, 9.0]))
        assert float(st.personal_best_F) == 2.0
        np.testing.assert_array_equal(st.personal_best_X, st.positions[0])

    def test_slot_is_a_copy(self):
        st = _spread_swarm("shared")
        update_personal_bests(st, np.array([0.0, 1.0, 2.0, 3.0]))
        st.positions += 10.0
        np.testing.assert_array_equal(st.personal_best_X, np.zeros((2, 1)))

    def test_non_finite_values_excluded(self, caplog):
        st = _spread_swarm("shared")
        with caplog.at_level(logging.WARNING, logger="pswarm"):
            update_personal_bests(st, np.array([np.nan, -np.inf, 7.0, np.nan]))
        assert float(st.personal_best_F) == 7.0
        np.testing.assert_array_equal(st.personal_best_X, st.positions[2])
        assert "non-finite" in caplog.text

    def test_all_non_finite_leaves_slot(self):
        st = _spread_swarm("shared")
        update_personal_bests(st, np.full(4, np.nan))
        assert float(st.personal_best_F) == np.inf


class TestPerParticlePersonalBest:
    def test_each_particle_tracks_itself(self):
        st = _spread_swarm("per_particle")
        update_personal_bests(st, np.array([4.0, 3.0, 2.0, 1.0]))
        st.positions += 1.0
        update_personal_bests(st, np.array([5.0, 1.0, np.nan, 0.5]))
        np.testing.assert_array_equal(st.personal_best_F, [4.0, 1.0, 2.0, 0.5])
        np.testing.assert_array_equal(st.personal_best_X[:, 0, 0], [0.0, 2.0, 2.0, 4.0])


class TestGlobalBest:
    def test_shared_promotion(self):
        st = _spread_swarm("shared")
        update_personal_bests(st, np.array([3.0, 2.0, 1.0, 4.0]))
        assert update_global_best(st) is True
        assert st.global_best_F == 1.0
        np.testing.assert_array_equal(st.global_best_X, st.positions[2])
        assert update_global_best(st) is False

    def test_per_particle_tie_goes_to_lowest_index(self):
        st = _spread_swarm("per_particle")
        update_personal_bests(st, np.array([3.0, 1.0, 1.0, 1.0]))
        update_global_best(st)
        np.testing.assert_array_equal(st.global_best_X, st.positions[1])

    def test_global_best_never_increases(self):
        st = _spread_swarm("per_particle")
        update_personal_bests(st, np.array([3.0, 1.0, 2.0, 5.0]))
        update_global_best(st)
        st.positions += 1.0
        update_personal_bests(st, np.array([9.0, 9.0, 9.0, 9.0]))
        update_global_best(st)
        assert st.global_best_F == 1.0
