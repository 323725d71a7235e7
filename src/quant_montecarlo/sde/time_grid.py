# src/quant_montecarlo/sde/time_grid.py
from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from quant_montecarlo.exceptions import TimeOutOfRange

# tolerance used when matching a time against a grid point
TIME_TOLERANCE = 1e-10


class TimeGrid:
    """
    Immutable, strictly increasing set of simulation times.

    The times array is stored read-only; every "modification" (e.g. a time
    shift) returns a new grid.
    """

    def __init__(self, times: Iterable[float]):
        arr = np.array(list(times), dtype=float)
        if arr.ndim != 1 or arr.size == 0:
            raise ValueError("times must be a non-empty 1D sequence")
        if not np.all(np.isfinite(arr)):
            raise ValueError("times must be finite")
        if arr.size > 1 and np.any(np.diff(arr) <= 0.0):
            raise ValueError("times must be strictly increasing")
        arr.setflags(write=False)
        self._times = arr

    @classmethod
    def uniform(cls, initial: float, n_steps: int, dt: float) -> "TimeGrid":
        """Grid initial, initial + dt, ..., initial + n_steps * dt."""
        if n_steps < 1:
            raise ValueError("n_steps must be >= 1")
        if dt <= 0.0:
            raise ValueError("dt must be > 0")
        return cls(initial + dt * np.arange(n_steps + 1))

    @property
    def times(self) -> np.ndarray:
        return self._times

    @property
    def number_of_time_points(self) -> int:
        return int(self._times.size)

    @property
    def number_of_time_steps(self) -> int:
        return int(self._times.size) - 1

    @property
    def first_time(self) -> float:
        return float(self._times[0])

    @property
    def last_time(self) -> float:
        return float(self._times[-1])

    def time(self, index: int) -> float:
        if index < 0 or index >= self._times.size:
            raise TimeOutOfRange(
                f"time index {index} outside grid [0, {self._times.size - 1}]"
            )
        return float(self._times[index])

    def time_step(self, index: int) -> float:
        """Length of the interval [t_index, t_{index+1}]."""
        if index < 0 or index >= self.number_of_time_steps:
            raise TimeOutOfRange(
                f"time step index {index} outside [0, {self.number_of_time_steps - 1}]"
            )
        return float(self._times[index + 1] - self._times[index])

    def time_index(self, time: float) -> int:
        """
        Index of `time` on the grid.

        If `time` is not a grid point, returns -(insertion_point) - 1, so a
        negative value always means "not on the grid".
        """
        pos = int(np.searchsorted(self._times, time, side="left"))
        for candidate in (pos - 1, pos):
            if 0 <= candidate < self._times.size and math.isclose(
                self._times[candidate], time, rel_tol=0.0, abs_tol=TIME_TOLERANCE
            ):
                return candidate
        return -pos - 1

    def time_index_nearest_less_or_equal(self, time: float) -> int:
        """Largest index i with t_i <= time (up to tolerance); -1 if none."""
        index = self.time_index(time)
        if index >= 0:
            return index
        return -index - 2

    def time_index_nearest_greater_or_equal(self, time: float) -> int:
        """Smallest index i with t_i >= time; number_of_time_points if none."""
        index = self.time_index(time)
        if index >= 0:
            return index
        return -index - 1

    def time_shifted(self, shift: float) -> "TimeGrid":
        return TimeGrid(self._times + shift)

    def __len__(self) -> int:
        return int(self._times.size)

    def __iter__(self):
        return iter(float(t) for t in self._times)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeGrid):
            return NotImplemented
        return self._times.shape == other._times.shape and bool(
            np.array_equal(self._times, other._times)
        )

    def __repr__(self) -> str:
        return (
            f"TimeGrid(first={self.first_time}, last={self.last_time}, "
            f"n_steps={self.number_of_time_steps})"
        )
