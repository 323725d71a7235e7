from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from quant_montecarlo.assetvaluation.monte_carlo_black_scholes import DEFAULT_SEED
from quant_montecarlo.sde.schemas import ModelOverrides


# ============================================================
# Time grid
# ============================================================


class TimeGridSettings(BaseModel):
    """
    Uniform time grid: initial_time, initial_time + dt, ..., initial_time + n_steps * dt.
    """

    model_config = ConfigDict(extra="forbid")

    initial_time: float = 0.0
    n_steps: int = Field(..., ge=1)
    dt: float = Field(..., gt=0.0)


# ============================================================
# Model parameters
# ============================================================


class ModelSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    initial_value: float = Field(..., gt=0.0)
    risk_free_rate: float
    volatility: float = Field(..., ge=0.0)
    reference_date: Optional[datetime] = None


# ============================================================
# Simulation settings
# ============================================================


class SimulationSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    number_of_paths: int = Field(default=10_000, ge=1)
    seed: int = Field(default=DEFAULT_SEED, ge=0, description="Seed of the Brownian driver.")


# ============================================================
# Top-level ValuationConfig
# ============================================================


class ValuationConfig(BaseModel):
    """
    Global simulation configuration.

    `scenarios` are override sets applied with clone_with_modified_data on
    top of the base simulation.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = "default_run"

    time_grid: TimeGridSettings
    model: ModelSettings
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)

    scenarios: List[ModelOverrides] = Field(default_factory=list)
