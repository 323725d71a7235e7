# tests/sde/test_euler.py
import math
from typing import List

import numpy as np
import pytest

from quant_montecarlo.exceptions import SimulationError
from quant_montecarlo.sde.brownian import BrownianMotion
from quant_montecarlo.sde.processes.black_scholes import BlackScholesModel
from quant_montecarlo.sde.random_variable import RandomVariable
from quant_montecarlo.sde.simulators.euler import EulerSchemeFromProcessModel
from quant_montecarlo.sde.time_grid import TimeGrid


def _process(n_paths=1000, seed=2024, sigma=0.2):
    grid = TimeGrid.uniform(0.0, 10, 0.1)
    model = BlackScholesModel(initial_value=100.0, risk_free_rate=0.03, volatility=sigma)
    return EulerSchemeFromProcessModel(model, BrownianMotion(grid, 1, n_paths, seed))


def test_log_euler_matches_exact_solution():
    process = _process()
    bm = process.stochastic_driver
    W = np.cumsum(bm.increments()[:, 0, :], axis=0)

    mu = 0.03 - 0.5 * 0.2**2
    for i in (1, 5, 10):
        t = process.time(i)
        expected = 100.0 * np.exp(mu * t + 0.2 * W[i - 1])
        assert np.allclose(process.process_value(i, 0).to_numpy(), expected, rtol=1e-10)


def test_initial_value_and_weights():
    process = _process(n_paths=250)

    s0 = process.process_value(0, 0).to_numpy()
    assert np.allclose(s0, 100.0, rtol=1e-12)

    w = process.monte_carlo_weights(4)
    assert w.is_deterministic()
    assert w.get(0) == 1.0 / 250


def test_values_are_memoized_and_reproducible():
    p1 = _process(seed=9)
    p2 = _process(seed=9)

    a = p1.state_value(7, 0).to_numpy()
    b = p1.state_value(7, 0).to_numpy()
    c = p2.state_value(7, 0).to_numpy()
    assert a is b
    assert np.array_equal(a, c)
    assert np.array_equal(p1.process_value(7, 0).to_numpy(), p2.process_value(7, 0).to_numpy())


def test_zero_volatility_is_deterministic_growth():
    process = _process(n_paths=10, sigma=0.0)
    values = process.process_value(10, 0).to_numpy()
    assert np.allclose(values, 100.0 * math.exp(0.03 * 1.0))


def test_invalid_time_index():
    process = _process(n_paths=10)
    with pytest.raises(SimulationError):
        process.process_value(11, 0)
    with pytest.raises(SimulationError):
        process.process_value(-1, 0)
    with pytest.raises(SimulationError):
        process.monte_carlo_weights(42)


class _ExplodingModel(BlackScholesModel):
    def drift(self, process, time_index: int, state: List[RandomVariable]) -> List[RandomVariable]:
        return [self.random_variable_for_constant(float("inf"))]


def test_numerical_failure_surfaces_as_simulation_error():
    grid = TimeGrid([0.0, 1.0])
    model = _ExplodingModel(initial_value=1.0, risk_free_rate=0.0, volatility=0.1)
    process = EulerSchemeFromProcessModel(model, BrownianMotion(grid, 1, 5, seed=1))

    with pytest.raises(SimulationError):
        process.process_value(1, 0)


def test_clone_with_modified_data_rebinds():
    process = _process(n_paths=10)
    new_model = process.model.clone_with_modified_data({"volatility": 0.3})
    clone = process.clone_with_modified_data(model=new_model)

    assert clone.model is new_model
    assert clone.stochastic_driver is process.stochastic_driver
