# src/quant_montecarlo/exceptions.py
from __future__ import annotations

from typing import Optional


class MonteCarloValuationError(Exception):
    """Base class for all errors raised by quant_montecarlo."""

    pass


class InvalidAssetIndex(MonteCarloValuationError):
    """Raised when an asset index other than the supported ones is requested."""

    def __init__(self, asset_index: int, number_of_assets: int, operation: str):
        self.asset_index = asset_index
        self.number_of_assets = number_of_assets
        self.operation = operation
        super().__init__(
            f"{operation}: asset index {asset_index} out of range "
            f"(model has {number_of_assets} asset(s))"
        )


class TimeOutOfRange(MonteCarloValuationError):
    """Raised when a time (or time index) cannot be resolved against the time grid."""

    pass


class SimulationError(MonteCarloValuationError):
    """Raised when a process cannot be advanced to a requested time index."""

    pass


class InvalidOverride(MonteCarloValuationError):
    """Raised when a clone override has an unknown key, wrong type or invalid value."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)
