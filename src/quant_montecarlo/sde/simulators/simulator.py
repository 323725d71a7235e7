# src/quant_montecarlo/sde/simulators/simulator.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

from quant_montecarlo.sde.random_variable import RandomVariable
from quant_montecarlo.sde.time_grid import TimeGrid

if TYPE_CHECKING:
    from quant_montecarlo.sde.brownian import BrownianMotion


class ProcessModel(ABC):
    """
    Parameters of an SDE in state space,

        dX = mu(t, X) dt + sum_k lambda_k(t, X) dW_k,   S = f(X),

    handed to a numerical scheme (MonteCarloProcess).
    """

    @property
    @abstractmethod
    def number_of_components(self) -> int:
        ...

    @property
    @abstractmethod
    def number_of_factors(self) -> int:
        ...

    @abstractmethod
    def initial_state(self, process: "MonteCarloProcess") -> List[RandomVariable]:
        ...

    @abstractmethod
    def drift(
        self,
        process: "MonteCarloProcess",
        time_index: int,
        state: List[RandomVariable],
    ) -> List[RandomVariable]:
        ...

    @abstractmethod
    def factor_loading(
        self,
        process: "MonteCarloProcess",
        time_index: int,
        component: int,
        state: List[RandomVariable],
    ) -> List[RandomVariable]:
        ...

    @abstractmethod
    def apply_state_space_transform(
        self, process: "MonteCarloProcess", time_index: int, component: int, x: RandomVariable
    ) -> RandomVariable:
        ...

    @abstractmethod
    def numeraire(self, process: "MonteCarloProcess", time: float) -> RandomVariable:
        ...

    @abstractmethod
    def random_variable_for_constant(self, value: float) -> RandomVariable:
        ...


class MonteCarloProcess(ABC):
    """A discretized, path-wise simulation of a ProcessModel driven by a BrownianMotion."""

    @property
    @abstractmethod
    def model(self) -> ProcessModel:
        ...

    @property
    @abstractmethod
    def stochastic_driver(self) -> "BrownianMotion":
        ...

    @abstractmethod
    def process_value(self, time_index: int, component: int) -> RandomVariable:
        ...

    @abstractmethod
    def monte_carlo_weights(self, time_index: int) -> RandomVariable:
        ...

    @property
    def time_grid(self) -> TimeGrid:
        return self.stochastic_driver.time_grid

    @property
    def number_of_paths(self) -> int:
        return self.stochastic_driver.number_of_paths

    @property
    def number_of_factors(self) -> int:
        return self.stochastic_driver.number_of_factors

    def time(self, time_index: int) -> float:
        return self.time_grid.time(time_index)

    def time_index(self, time: float) -> int:
        return self.time_grid.time_index(time)
