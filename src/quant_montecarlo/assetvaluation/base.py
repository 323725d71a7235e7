# src/quant_montecarlo/assetvaluation/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from quant_montecarlo.sde.random_variable import RandomVariable
from quant_montecarlo.sde.schemas import ModelOverrides
from quant_montecarlo.sde.time_grid import TimeGrid

TimeOrIndex = Union[int, float]


class AssetModelMonteCarloSimulationModel(ABC):
    """
    A simulated asset market queried by time or by time index.

    An int argument is a time index, a float argument is a time.
    """

    @abstractmethod
    def asset_value(self, time: TimeOrIndex, asset_index: int) -> RandomVariable:
        ...

    @abstractmethod
    def numeraire(self, time: TimeOrIndex) -> RandomVariable:
        ...

    @abstractmethod
    def monte_carlo_weights(self, time: TimeOrIndex) -> RandomVariable:
        ...

    @property
    @abstractmethod
    def number_of_assets(self) -> int:
        ...

    @property
    @abstractmethod
    def number_of_paths(self) -> int:
        ...

    @property
    @abstractmethod
    def reference_date(self) -> Optional[datetime]:
        ...

    @property
    @abstractmethod
    def time_grid(self) -> TimeGrid:
        ...

    @abstractmethod
    def time(self, time_index: int) -> float:
        ...

    @abstractmethod
    def time_index(self, time: float) -> int:
        ...

    @abstractmethod
    def random_variable_for_constant(self, value: float) -> RandomVariable:
        ...

    @abstractmethod
    def clone_with_modified_data(
        self, overrides: Union[ModelOverrides, Mapping[str, Any], None]
    ) -> "AssetModelMonteCarloSimulationModel":
        ...

    @abstractmethod
    def clone_with_modified_seed(self, seed: int) -> "AssetModelMonteCarloSimulationModel":
        ...
