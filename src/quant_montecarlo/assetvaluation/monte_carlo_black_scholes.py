# src/quant_montecarlo/assetvaluation/monte_carlo_black_scholes.py
from __future__ import annotations

import logging
import math
import numbers
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from quant_montecarlo.assetvaluation.base import (
    AssetModelMonteCarloSimulationModel,
    TimeOrIndex,
)
from quant_montecarlo.exceptions import InvalidAssetIndex, InvalidOverride, TimeOutOfRange
from quant_montecarlo.sde.brownian import BrownianMotion
from quant_montecarlo.sde.processes.black_scholes import BlackScholesModel
from quant_montecarlo.sde.random_variable import RandomVariable
from quant_montecarlo.sde.schemas import ModelOverrides
from quant_montecarlo.sde.simulators.euler import EulerSchemeFromProcessModel
from quant_montecarlo.sde.simulators.simulator import MonteCarloProcess
from quant_montecarlo.sde.time_grid import TIME_TOLERANCE, TimeGrid

logger = logging.getLogger(__name__)

# seed used when the driver is created from a time grid
DEFAULT_SEED = 3141


class MonteCarloBlackScholesModel(AssetModelMonteCarloSimulationModel):
    """
    Monte-Carlo simulation of the Black-Scholes model.

    Glues a BlackScholesModel (the SDE parameters) to an Euler scheme driven
    by a BrownianMotion and exposes the result as a single-asset market:

        dS = r S dt + sigma S dW,   S(0) = S0,
        dN = r N dt,                N(0) = N0.

    The process is simulated in log space (X = log S), so the Euler scheme is
    exact on the grid. Instances never change after construction; parameter,
    seed or time-origin changes produce new instances via the clone methods.
    """

    def __init__(
        self,
        initial_value: float,
        risk_free_rate: float,
        volatility: float,
        brownian_motion: BrownianMotion,
        reference_date: Optional[datetime] = None,
    ):
        self._model = BlackScholesModel(
            initial_value=initial_value,
            risk_free_rate=risk_free_rate,
            volatility=volatility,
            reference_date=reference_date,
        )
        self._process: MonteCarloProcess = EulerSchemeFromProcessModel(
            self._model, brownian_motion
        )

    @classmethod
    def from_time_grid(
        cls,
        time_grid: TimeGrid,
        number_of_paths: int,
        initial_value: float,
        risk_free_rate: float,
        volatility: float,
        seed: int = DEFAULT_SEED,
        reference_date: Optional[datetime] = None,
    ) -> "MonteCarloBlackScholesModel":
        """Simulation on `time_grid` with a one-factor Brownian motion seeded by `seed`."""
        brownian_motion = BrownianMotion(
            time_grid, number_of_factors=1, number_of_paths=number_of_paths, seed=seed
        )
        return cls(
            initial_value,
            risk_free_rate,
            volatility,
            brownian_motion,
            reference_date=reference_date,
        )

    @classmethod
    def _from_components(
        cls, model: BlackScholesModel, process: MonteCarloProcess
    ) -> "MonteCarloBlackScholesModel":
        if process.model is not model:
            raise ValueError("process must be bound to the given model")
        instance = cls.__new__(cls)
        instance._model = model
        instance._process = process
        return instance

    # ------------------------------------------------------------------
    # time resolution
    # ------------------------------------------------------------------

    def _resolve_time_index(self, operation: str, time: TimeOrIndex) -> int:
        if isinstance(time, bool):
            raise TypeError(f"{operation}: time must be an int index or a float time")
        if isinstance(time, numbers.Integral):
            return int(time)

        grid = self.time_grid
        time = float(time)
        if (
            not math.isfinite(time)
            or time < grid.first_time - TIME_TOLERANCE
            or time > grid.last_time + TIME_TOLERANCE
        ):
            raise TimeOutOfRange(
                f"{operation}: time {time} outside grid "
                f"[{grid.first_time}, {grid.last_time}]"
            )
        return grid.time_index_nearest_less_or_equal(time)

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def asset_value(self, time: TimeOrIndex, asset_index: int) -> RandomVariable:
        if asset_index != 0:
            raise InvalidAssetIndex(asset_index, self.number_of_assets, "asset_value")
        time_index = self._resolve_time_index("asset_value", time)
        return self._process.process_value(time_index, asset_index)

    def numeraire(self, time: TimeOrIndex) -> RandomVariable:
        if isinstance(time, numbers.Integral) and not isinstance(time, bool):
            time = self.time(int(time))
        return self._model.numeraire(self._process, float(time))

    def monte_carlo_weights(self, time: TimeOrIndex) -> RandomVariable:
        time_index = self._resolve_time_index("monte_carlo_weights", time)
        return self._process.monte_carlo_weights(time_index)

    @property
    def number_of_assets(self) -> int:
        return 1

    @property
    def number_of_paths(self) -> int:
        return self._process.number_of_paths

    @property
    def reference_date(self) -> Optional[datetime]:
        return self._model.reference_date

    @property
    def time_grid(self) -> TimeGrid:
        return self._process.time_grid

    def time(self, time_index: int) -> float:
        return self._process.time(time_index)

    def time_index(self, time: float) -> int:
        return self._process.time_index(time)

    def random_variable_for_constant(self, value: float) -> RandomVariable:
        return self._model.random_variable_for_constant(value)

    @property
    def model(self) -> BlackScholesModel:
        return self._model

    @property
    def process(self) -> MonteCarloProcess:
        return self._process

    # ------------------------------------------------------------------
    # clones
    # ------------------------------------------------------------------

    def clone_with_modified_data(
        self, overrides: Union[ModelOverrides, Mapping[str, Any], None]
    ) -> "MonteCarloBlackScholesModel":
        """
        New simulation with some model or simulation data replaced.

        Recognized keys: initialValue, riskFreeRate, volatility, seed,
        initialTime. Each key may be given in camelCase or snake_case, but not
        both: passing e.g. initialValue and initial_value together is rejected.
        Unknown keys and invalid values (including an initialTime whose shifted
        grid is no longer strictly increasing) raise InvalidOverride before
        anything new is built.

        Without a seed change the Brownian increments of this simulation are
        reused (common random numbers). A new initialTime shifts the whole
        time grid and rebuilds the driver with the same seed.
        """
        parsed = ModelOverrides.parse(overrides)

        brownian_motion = self._process.stochastic_driver
        time_grid = brownian_motion.time_grid
        if parsed.initial_time is not None:
            time_shift = parsed.initial_time - self.time(0)
            if time_shift != 0.0:
                logger.debug("clone_with_modified_data: shifting time grid by %g", time_shift)
                try:
                    time_grid = time_grid.time_shifted(time_shift)
                except ValueError as e:
                    raise InvalidOverride(
                        f"Invalid override 'initialTime': {e}", key="initialTime"
                    ) from e

        new_model = self._model.clone_with_modified_data(parsed)

        if parsed.seed is not None and parsed.seed != brownian_motion.seed:
            logger.debug(
                "clone_with_modified_data: new driver for seed %d (was %d)",
                parsed.seed,
                brownian_motion.seed,
            )
            brownian_motion = BrownianMotion(
                time_grid,
                number_of_factors=1,
                number_of_paths=brownian_motion.number_of_paths,
                seed=parsed.seed,
            )
        elif time_grid is not brownian_motion.time_grid:
            brownian_motion = brownian_motion.clone_with_modified_time_grid(time_grid)

        process = EulerSchemeFromProcessModel(new_model, brownian_motion)
        return self._from_components(new_model, process)

    def clone_with_modified_seed(self, seed: int) -> "MonteCarloBlackScholesModel":
        """Same model, new Brownian motion with the given seed."""
        seed = ModelOverrides.parse({"seed": seed}).seed
        current = self._process.stochastic_driver
        brownian_motion = BrownianMotion(
            current.time_grid,
            number_of_factors=1,
            number_of_paths=current.number_of_paths,
            seed=seed,
        )
        process = EulerSchemeFromProcessModel(self._model, brownian_motion)
        return self._from_components(self._model, process)

    def __repr__(self) -> str:
        return (
            f"MonteCarloBlackScholesModel(initial_value={self._model.initial_value}, "
            f"risk_free_rate={self._model.risk_free_rate}, "
            f"volatility={self._model.volatility}, paths={self.number_of_paths}, "
            f"seed={self._process.stochastic_driver.seed})"
        )
