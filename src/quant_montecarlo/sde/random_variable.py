# src/quant_montecarlo/sde/random_variable.py
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Union

import numpy as np


class RandomVariable(ABC):
    """
    Distribution-valued quantity: one value per Monte-Carlo path.

    Callers only rely on this interface, never on the concrete storage.
    """

    @property
    @abstractmethod
    def filtration_time(self) -> float:
        ...

    @property
    @abstractmethod
    def size(self) -> int:
        ...

    @abstractmethod
    def is_deterministic(self) -> bool:
        ...

    @abstractmethod
    def get(self, path: int) -> float:
        ...

    @abstractmethod
    def expectation(self) -> float:
        ...

    @abstractmethod
    def variance(self) -> float:
        ...

    @abstractmethod
    def to_numpy(self) -> np.ndarray:
        ...

    @abstractmethod
    def exp(self) -> "RandomVariable":
        ...

    @abstractmethod
    def log(self) -> "RandomVariable":
        ...

    def standard_deviation(self) -> float:
        return math.sqrt(self.variance())

    def standard_error(self) -> float:
        """Standard error of the Monte-Carlo estimate of the expectation."""
        if self.is_deterministic():
            return 0.0
        return self.standard_deviation() / math.sqrt(self.size)


Operand = Union[RandomVariable, float, int]


class RandomVariableFromArray(RandomVariable):
    """
    Numpy-backed random variable.

    A deterministic value is stored as a single float (size 1) and broadcasts
    against stochastic operands.
    """

    def __init__(self, time: float, values: Union[float, np.ndarray]):
        self._time = float(time)
        if np.ndim(values) == 0:
            self._scalar = float(values)
            self._values = None
        else:
            arr = np.asarray(values, dtype=float)
            if arr.ndim != 1:
                raise ValueError("values must be a scalar or a 1D array")
            arr = arr.copy() if arr.flags.writeable else arr
            arr.setflags(write=False)
            self._values = arr
            self._scalar = None

    @classmethod
    def constant(cls, value: float, time: float = -math.inf) -> "RandomVariableFromArray":
        return cls(time, float(value))

    @property
    def filtration_time(self) -> float:
        return self._time

    @property
    def size(self) -> int:
        return 1 if self._values is None else int(self._values.size)

    def is_deterministic(self) -> bool:
        return self._values is None

    def get(self, path: int) -> float:
        if self._values is None:
            return self._scalar
        return float(self._values[path])

    def expectation(self) -> float:
        if self._values is None:
            return self._scalar
        return float(np.mean(self._values))

    def variance(self) -> float:
        if self._values is None:
            return 0.0
        return float(np.var(self._values))

    def to_numpy(self) -> np.ndarray:
        if self._values is None:
            return np.array([self._scalar])
        return self._values

    # ------------------------------------------------------------------
    # arithmetic
    # ------------------------------------------------------------------

    def _raw(self):
        return self._scalar if self._values is None else self._values

    def _combine(self, other: Operand, op) -> "RandomVariableFromArray":
        if isinstance(other, RandomVariable):
            other_raw = (
                other.get(0) if other.is_deterministic() else other.to_numpy()
            )
            time = max(self._time, other.filtration_time)
        else:
            other_raw = float(other)
            time = self._time
        return RandomVariableFromArray(time, op(self._raw(), other_raw))

    def _apply(self, fn) -> "RandomVariableFromArray":
        return RandomVariableFromArray(self._time, fn(self._raw()))

    def __add__(self, other: Operand):
        return self._combine(other, np.add)

    __radd__ = __add__

    def __sub__(self, other: Operand):
        return self._combine(other, np.subtract)

    def __mul__(self, other: Operand):
        return self._combine(other, np.multiply)

    __rmul__ = __mul__

    def __truediv__(self, other: Operand):
        return self._combine(other, np.divide)

    def exp(self) -> "RandomVariableFromArray":
        return self._apply(np.exp)

    def log(self) -> "RandomVariableFromArray":
        return self._apply(np.log)

    def __repr__(self) -> str:
        if self._values is None:
            return f"RandomVariableFromArray(time={self._time}, value={self._scalar})"
        return (
            f"RandomVariableFromArray(time={self._time}, size={self.size}, "
            f"mean={self.expectation():.6g})"
        )
