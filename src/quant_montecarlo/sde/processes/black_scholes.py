# src/quant_montecarlo/sde/processes/black_scholes.py
from __future__ import annotations

import math
from datetime import datetime
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from quant_montecarlo.exceptions import TimeOutOfRange
from quant_montecarlo.sde.random_variable import RandomVariable, RandomVariableFromArray
from quant_montecarlo.sde.schemas import ModelOverrides
from quant_montecarlo.sde.simulators.simulator import MonteCarloProcess, ProcessModel


class BlackScholesModel(BaseModel, ProcessModel):
    """
    Black-Scholes model

        dS = r S dt + sigma S dW,   S(0) = S0,
        dN = r N dt,                N(0) = N0,

    given to a numerical scheme in log space: X = log(S),

        dX = (r - 0.5 sigma^2) dt + sigma dW,   S = exp(X).

    Instances are immutable; use clone_with_modified_data for perturbations.
    """

    model_config = ConfigDict(frozen=True)

    initial_value: float = Field(..., gt=0.0)
    risk_free_rate: float
    volatility: float = Field(..., ge=0.0)
    reference_date: Optional[datetime] = None

    # N(0)
    initial_numeraire: float = Field(default=1.0, gt=0.0)

    @property
    def number_of_components(self) -> int:
        return 1

    @property
    def number_of_factors(self) -> int:
        return 1

    def initial_state(self, process: MonteCarloProcess) -> List[RandomVariable]:
        return [self.random_variable_for_constant(math.log(self.initial_value))]

    def drift(
        self,
        process: MonteCarloProcess,
        time_index: int,
        state: List[RandomVariable],
    ) -> List[RandomVariable]:
        mu = self.risk_free_rate - 0.5 * self.volatility * self.volatility
        return [self.random_variable_for_constant(mu)]

    def factor_loading(
        self,
        process: MonteCarloProcess,
        time_index: int,
        component: int,
        state: List[RandomVariable],
    ) -> List[RandomVariable]:
        return [self.random_variable_for_constant(self.volatility)]

    def apply_state_space_transform(
        self, process: MonteCarloProcess, time_index: int, component: int, x: RandomVariable
    ) -> RandomVariable:
        return x.exp()

    def numeraire(self, process: MonteCarloProcess, time: float) -> RandomVariable:
        """N(t) = N0 exp(r t); defined for every finite t."""
        if not math.isfinite(time):
            raise TimeOutOfRange(f"numeraire: time {time} is not finite")
        return RandomVariableFromArray(
            time, self.initial_numeraire * math.exp(self.risk_free_rate * time)
        )

    def random_variable_for_constant(self, value: float) -> RandomVariable:
        return RandomVariableFromArray.constant(value)

    def clone_with_modified_data(
        self, overrides: Union[ModelOverrides, Mapping[str, Any], None]
    ) -> "BlackScholesModel":
        """
        New model with initialValue / riskFreeRate / volatility replaced.

        Other recognized keys (seed, initialTime) concern the simulation and
        are ignored here.
        """
        updates = ModelOverrides.parse(overrides).dynamics_updates()
        return self.model_copy(update=updates)
