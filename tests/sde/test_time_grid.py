# tests/sde/test_time_grid.py
import numpy as np
import pytest

from quant_montecarlo.exceptions import TimeOutOfRange
from quant_montecarlo.sde.time_grid import TimeGrid


def test_uniform_grid_and_lookup():
    grid = TimeGrid.uniform(0.0, 4, 0.25)

    assert grid.number_of_time_points == 5
    assert grid.number_of_time_steps == 4
    assert np.allclose(grid.times, [0.0, 0.25, 0.5, 0.75, 1.0])
    assert grid.time(2) == 0.5
    assert grid.time_index(0.75) == 3
    assert np.isclose(grid.time_step(1), 0.25)


def test_time_index_not_on_grid_is_negative():
    grid = TimeGrid([0.0, 0.5, 1.0])

    assert grid.time_index(0.7) == -3
    assert grid.time_index_nearest_less_or_equal(0.7) == 1
    assert grid.time_index_nearest_greater_or_equal(0.7) == 2
    assert grid.time_index_nearest_less_or_equal(-0.1) == -1


def test_time_index_tolerates_rounding():
    grid = TimeGrid.uniform(0.0, 10, 0.1)
    assert grid.time_index(0.1 * 3) == 3


def test_time_shifted_keeps_steps():
    grid = TimeGrid([0.0, 0.5, 1.0])
    shifted = grid.time_shifted(2.0)

    assert shifted.first_time == 2.0
    assert np.allclose(np.diff(shifted.times), np.diff(grid.times))
    # original untouched
    assert grid.first_time == 0.0


def test_invalid_grids_and_indices():
    with pytest.raises(ValueError):
        TimeGrid([])
    with pytest.raises(ValueError):
        TimeGrid([0.0, 1.0, 1.0])
    with pytest.raises(ValueError):
        TimeGrid([0.0, float("nan")])

    grid = TimeGrid([0.0, 1.0])
    with pytest.raises(TimeOutOfRange):
        grid.time(2)
    with pytest.raises(ValueError):
        grid.times[0] = 5.0


def test_equality():
    assert TimeGrid([0.0, 0.5, 1.0]) == TimeGrid.uniform(0.0, 2, 0.5)
    assert TimeGrid([0.0, 1.0]) != TimeGrid([0.0, 2.0])
