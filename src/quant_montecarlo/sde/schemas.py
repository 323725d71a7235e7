# src/quant_montecarlo/sde/schemas.py
from __future__ import annotations

import numbers
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from quant_montecarlo.exceptions import InvalidOverride


class ModelOverrides(BaseModel):
    """
    Sparse set of parameter overrides for "clone with modified data".

    Keys may be given in camelCase (initialValue, riskFreeRate, volatility,
    seed, initialTime) or snake_case, but not both for the same key. Unknown
    keys are rejected.

    initial_value: new spot S0 (> 0)
    risk_free_rate: new constant short rate r
    volatility: new log-volatility sigma (>= 0)
    seed: new Brownian seed (>= 0), forces a new driver
    initial_time: new first grid time, shifts the whole grid
    """

    model_config = ConfigDict(
        extra="forbid", populate_by_name=True, frozen=True, allow_inf_nan=False
    )

    initial_value: Optional[float] = Field(default=None, alias="initialValue", gt=0.0)
    risk_free_rate: Optional[float] = Field(default=None, alias="riskFreeRate")
    volatility: Optional[float] = Field(default=None, ge=0.0)
    seed: Optional[int] = Field(default=None, ge=0)
    initial_time: Optional[float] = Field(default=None, alias="initialTime")

    @field_validator(
        "initial_value", "risk_free_rate", "volatility", "initial_time", mode="before"
    )
    @classmethod
    def _require_real(cls, v: Any) -> Any:
        if v is not None and (isinstance(v, bool) or not isinstance(v, numbers.Real)):
            raise ValueError(f"expected a real number, got {type(v).__name__}")
        return v

    @field_validator("seed", mode="before")
    @classmethod
    def _require_integer(cls, v: Any) -> Any:
        if v is not None and (
            isinstance(v, bool) or not isinstance(v, numbers.Integral)
        ):
            raise ValueError(f"expected an integer seed, got {type(v).__name__}")
        return None if v is None else int(v)

    @classmethod
    def parse(
        cls, overrides: Union["ModelOverrides", Mapping[str, Any], None]
    ) -> "ModelOverrides":
        """Validate a mapping into ModelOverrides, raising InvalidOverride on failure."""
        if overrides is None:
            return cls()
        if isinstance(overrides, ModelOverrides):
            return overrides
        if not isinstance(overrides, Mapping):
            raise InvalidOverride(
                f"overrides must be a mapping or ModelOverrides "
                f"(got {type(overrides).__name__})"
            )
        try:
            return cls.model_validate(dict(overrides))
        except ValidationError as e:
            first = e.errors()[0]
            key = str(first["loc"][0]) if first.get("loc") else None
            raise InvalidOverride(
                f"Invalid override '{key}': {first['msg']}", key=key
            ) from e

    def dynamics_updates(self) -> Dict[str, float]:
        """Overrides that apply to the dynamics model (snake_case field names)."""
        return self.model_dump(
            include={"initial_value", "risk_free_rate", "volatility"},
            exclude_none=True,
        )
