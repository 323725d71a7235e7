# src/quant_montecarlo/sde/simulators/euler.py
from __future__ import annotations

import logging
import threading
from typing import List, Optional

import numpy as np

from quant_montecarlo.exceptions import SimulationError
from quant_montecarlo.sde.brownian import BrownianMotion
from quant_montecarlo.sde.integrators import euler_maruyama_step
from quant_montecarlo.sde.random_variable import RandomVariable, RandomVariableFromArray
from quant_montecarlo.sde.simulators.simulator import MonteCarloProcess, ProcessModel

logger = logging.getLogger(__name__)


def _as_paths(rv: RandomVariable, n_paths: int) -> np.ndarray:
    if rv.is_deterministic():
        return np.full(n_paths, rv.get(0))
    return rv.to_numpy()


class EulerSchemeFromProcessModel(MonteCarloProcess):
    """
    Euler-Maruyama discretization of a ProcessModel in its state space:

        X_{i+1} = X_i + mu(t_i, X_i) dt_i + sum_k lambda_k(t_i, X_i) dW_k,i

    The whole grid is simulated on first access and kept for the lifetime of
    the instance. Values returned are in the model's (transformed) space.
    """

    def __init__(self, model: ProcessModel, stochastic_driver: BrownianMotion):
        if stochastic_driver.number_of_factors < model.number_of_factors:
            raise ValueError(
                f"driver has {stochastic_driver.number_of_factors} factor(s), "
                f"model needs {model.number_of_factors}"
            )
        self._model = model
        self._driver = stochastic_driver

        # states[i][c] : state of component c at time index i (paths array)
        self._states: Optional[List[List[np.ndarray]]] = None
        self._lock = threading.Lock()

    @property
    def model(self) -> ProcessModel:
        return self._model

    @property
    def stochastic_driver(self) -> BrownianMotion:
        return self._driver

    def _simulate(self) -> List[List[np.ndarray]]:
        if self._states is not None:
            return self._states
        with self._lock:
            if self._states is None:
                self._states = self._run_scheme()
        return self._states

    def _run_scheme(self) -> List[List[np.ndarray]]:
        grid = self.time_grid
        n_paths = self.number_of_paths
        n_components = self._model.number_of_components
        n_factors = self._model.number_of_factors
        increments = self._driver.increments()

        logger.debug(
            "Euler scheme: simulating %d component(s) over %d step(s), %d paths",
            n_components,
            grid.number_of_time_steps,
            n_paths,
        )

        state = [_as_paths(x, n_paths) for x in self._model.initial_state(self)]
        for x in state:
            x.setflags(write=False)
        states = [state]
        for i in range(grid.number_of_time_steps):
            dt = grid.time_step(i)
            dW = increments[i, :n_factors, :]
            state_rv = [RandomVariableFromArray(grid.time(i), x) for x in state]
            drift = self._model.drift(self, i, state_rv)

            next_state = []
            for c in range(n_components):
                loadings = self._model.factor_loading(self, i, c, state_rv)
                diffusion = np.stack([_as_paths(loading, n_paths) for loading in loadings])
                x_next = euler_maruyama_step(
                    state[c], _as_paths(drift[c], n_paths), diffusion, dt, dW
                )
                if not np.all(np.isfinite(x_next)):
                    raise SimulationError(
                        f"Euler scheme: non-finite state for component {c} "
                        f"at time index {i + 1} (t={grid.time(i + 1)})"
                    )
                x_next.setflags(write=False)
                next_state.append(x_next)
            state = next_state
            states.append(state)
        return states

    def _check_index(self, operation: str, time_index: int) -> None:
        if time_index < 0 or time_index >= self.time_grid.number_of_time_points:
            raise SimulationError(
                f"{operation}: time index {time_index} outside "
                f"[0, {self.time_grid.number_of_time_points - 1}]"
            )

    def state_value(self, time_index: int, component: int) -> RandomVariable:
        """Untransformed state X at the given time index."""
        self._check_index("state_value", time_index)
        if component < 0 or component >= self._model.number_of_components:
            raise SimulationError(f"state_value: invalid component {component}")
        x = self._simulate()[time_index][component]
        return RandomVariableFromArray(self.time(time_index), x)

    def process_value(self, time_index: int, component: int) -> RandomVariable:
        x = self.state_value(time_index, component)
        return self._model.apply_state_space_transform(self, time_index, component, x)

    def monte_carlo_weights(self, time_index: int) -> RandomVariable:
        self._check_index("monte_carlo_weights", time_index)
        return RandomVariableFromArray(self.time(time_index), 1.0 / self.number_of_paths)

    def clone_with_modified_data(
        self,
        model: Optional[ProcessModel] = None,
        stochastic_driver: Optional[BrownianMotion] = None,
    ) -> "EulerSchemeFromProcessModel":
        return EulerSchemeFromProcessModel(
            model if model is not None else self._model,
            stochastic_driver if stochastic_driver is not None else self._driver,
        )

    def __repr__(self) -> str:
        return f"EulerSchemeFromProcessModel(model={self._model!r}, driver={self._driver!r})"
