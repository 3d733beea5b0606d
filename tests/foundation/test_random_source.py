import numpy as np
import pytest

from pswarm.foundation.random import NumpyRandomSource, RandomSource, resolve_random_source


def test_uniform_shape_and_range():
    rs = NumpyRandomSource(seed=3)
    draws = rs.uniform((4, 5))
    assert draws.shape == (4, 5)
    assert np.all(draws >= 0.0)
    assert np.all(draws < 1.0)


def test_reseed_with_fixed_seed_restarts_stream():
    rs = NumpyRandomSource(seed=11)
    first = rs.uniform((3, 2))
    rs.uniform((3, 2))
    rs.reseed()
    np.testing.assert_array_equal(rs.uniform((3, 2)), first)


def test_reseed_without_seed_gives_fresh_stream():
    rs = NumpyRandomSource()
    rs.reseed()
    a = rs.uniform((50,))
    rs.reseed()
    b = rs.uniform((50,))
    assert not np.array_equal(a, b)


def test_satisfies_protocol():
    assert isinstance(NumpyRandomSource(), RandomSource)


def test_resolve_random_source():
    assert resolve_random_source(None).seed is None
    assert resolve_random_source(7).seed == 7
    assert resolve_random_source(np.int64(5)).seed == 5
    custom = NumpyRandomSource(1)
    assert resolve_random_source(custom) is custom
    with pytest.raises(TypeError):
        resolve_random_source("seed")
