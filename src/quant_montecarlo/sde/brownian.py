# src/quant_montecarlo/sde/brownian.py
from __future__ import annotations

import logging
import threading
from typing import Optional

import numpy as np

from quant_montecarlo.exceptions import SimulationError
from quant_montecarlo.sde.integrators import gaussian_increments, rng_with_seed
from quant_montecarlo.sde.random_variable import RandomVariable, RandomVariableFromArray
from quant_montecarlo.sde.time_grid import TimeGrid

logger = logging.getLogger(__name__)


class BrownianMotion:
    """
    Brownian driver on a time grid.

    Increments dW_k(t_i) for each factor k and path are drawn lazily on first
    access from a Mersenne-Twister generator seeded with `seed`. For a fixed
    (time grid, factors, paths, seed) the increments are reproducible.
    """

    def __init__(
        self,
        time_grid: TimeGrid,
        number_of_factors: int,
        number_of_paths: int,
        seed: int,
    ):
        if number_of_factors < 1:
            raise ValueError("number_of_factors must be >= 1")
        if number_of_paths < 1:
            raise ValueError("number_of_paths must be >= 1")
        if seed < 0:
            raise ValueError("seed must be >= 0")
        self._time_grid = time_grid
        self._number_of_factors = int(number_of_factors)
        self._number_of_paths = int(number_of_paths)
        self._seed = int(seed)

        self._increments: Optional[np.ndarray] = None
        self._lock = threading.Lock()

    @property
    def time_grid(self) -> TimeGrid:
        return self._time_grid

    @property
    def number_of_factors(self) -> int:
        return self._number_of_factors

    @property
    def number_of_paths(self) -> int:
        return self._number_of_paths

    @property
    def seed(self) -> int:
        return self._seed

    def _ensure_generated(self) -> np.ndarray:
        if self._increments is None:
            with self._lock:
                if self._increments is None:
                    logger.debug(
                        "Generating Brownian increments: steps=%d factors=%d paths=%d seed=%d",
                        self._time_grid.number_of_time_steps,
                        self._number_of_factors,
                        self._number_of_paths,
                        self._seed,
                    )
                    rng = rng_with_seed(self._seed)
                    dts = np.diff(self._time_grid.times)
                    increments = gaussian_increments(
                        rng,
                        (dts.size, self._number_of_factors, self._number_of_paths),
                        dts,
                    )
                    increments.setflags(write=False)
                    self._increments = increments
        return self._increments

    def increments(self) -> np.ndarray:
        """All increments, shape (n_steps, n_factors, n_paths), read-only."""
        return self._ensure_generated()

    def brownian_increment(self, time_index: int, factor: int) -> RandomVariable:
        """Increment W_k(t_{i+1}) - W_k(t_i) for factor k."""
        n_steps = self._time_grid.number_of_time_steps
        if time_index < 0 or time_index >= n_steps:
            raise SimulationError(
                f"brownian_increment: time index {time_index} outside [0, {n_steps - 1}]"
            )
        if factor < 0 or factor >= self._number_of_factors:
            raise SimulationError(
                f"brownian_increment: factor {factor} outside [0, {self._number_of_factors - 1}]"
            )
        values = self._ensure_generated()[time_index, factor]
        return RandomVariableFromArray(self._time_grid.time(time_index + 1), values)

    def clone_with_modified_seed(self, seed: int) -> "BrownianMotion":
        return BrownianMotion(
            self._time_grid, self._number_of_factors, self._number_of_paths, seed
        )

    def clone_with_modified_time_grid(self, time_grid: TimeGrid) -> "BrownianMotion":
        return BrownianMotion(
            time_grid, self._number_of_factors, self._number_of_paths, self._seed
        )

    def __repr__(self) -> str:
        return (
            f"BrownianMotion(time_grid={self._time_grid!r}, "
            f"factors={self._number_of_factors}, paths={self._number_of_paths}, "
            f"seed={self._seed})"
        )
