# tests/sde/test_brownian.py
import numpy as np
import pytest

from quant_montecarlo.exceptions import SimulationError
from quant_montecarlo.sde.brownian import BrownianMotion
from quant_montecarlo.sde.time_grid import TimeGrid


def test_brownian_shapes_and_reproducibility():
    grid = TimeGrid.uniform(0.0, 50, 1.0 / 252.0)
    bm1 = BrownianMotion(grid, 2, 100, seed=777)
    bm2 = BrownianMotion(grid, 2, 100, seed=777)

    assert bm1.increments().shape == (50, 2, 100)
    assert np.array_equal(bm1.increments(), bm2.increments())

    dW = bm1.brownian_increment(3, 1)
    assert dW.size == 100
    assert dW.filtration_time == grid.time(4)


def test_brownian_increment_variance_matches_dt():
    grid = TimeGrid([0.0, 0.5, 2.0])
    bm = BrownianMotion(grid, 1, 200_000, seed=3141)

    assert abs(bm.brownian_increment(0, 0).variance() - 0.5) < 0.01
    assert abs(bm.brownian_increment(1, 0).variance() - 1.5) < 0.03
    assert abs(bm.brownian_increment(1, 0).expectation()) < 0.01


def test_clone_with_modified_seed_changes_stream():
    grid = TimeGrid.uniform(0.0, 5, 0.2)
    bm = BrownianMotion(grid, 1, 50, seed=1)
    other = bm.clone_with_modified_seed(2)

    assert other.seed == 2
    assert other.number_of_paths == 50
    assert not np.array_equal(bm.increments(), other.increments())


def test_clone_with_shifted_grid_reuses_increments():
    grid = TimeGrid.uniform(0.0, 5, 0.2)
    bm = BrownianMotion(grid, 1, 50, seed=42)
    shifted = bm.clone_with_modified_time_grid(grid.time_shifted(1.0))

    assert shifted.seed == 42
    assert shifted.time_grid.first_time == 1.0
    assert np.allclose(bm.increments(), shifted.increments())


def test_invalid_arguments():
    grid = TimeGrid([0.0, 1.0])
    with pytest.raises(ValueError):
        BrownianMotion(grid, 0, 10, seed=1)
    with pytest.raises(ValueError):
        BrownianMotion(grid, 1, 0, seed=1)
    with pytest.raises(ValueError):
        BrownianMotion(grid, 1, 10, seed=-1)

    bm = BrownianMotion(grid, 1, 10, seed=1)
    with pytest.raises(SimulationError):
        bm.brownian_increment(1, 0)
    with pytest.raises(SimulationError):
        bm.brownian_increment(0, 1)
