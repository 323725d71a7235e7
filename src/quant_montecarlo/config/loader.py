from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from quant_montecarlo.assetvaluation.monte_carlo_black_scholes import (
    MonteCarloBlackScholesModel,
)
from quant_montecarlo.config.models import ValuationConfig
from quant_montecarlo.sde.time_grid import TimeGrid

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> ValuationConfig:
    """
    Load a ValuationConfig from YAML or JSON.

    Automatically validates using Pydantic v2.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    text = path.read_text()

    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            raw = yaml.safe_load(text)
        elif path.suffix.lower() == ".json":
            raw = json.loads(text)
        else:
            raise ValueError("Config path must be YAML or JSON.")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to parse config: {e}") from e

    try:
        return ValuationConfig.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid ValuationConfig: {e}") from e


def build_model(cfg: ValuationConfig) -> MonteCarloBlackScholesModel:
    """Create the base simulation described by `cfg`."""
    grid = TimeGrid.uniform(cfg.time_grid.initial_time, cfg.time_grid.n_steps, cfg.time_grid.dt)
    logger.info(
        "Building simulation '%s': %d steps, %d paths, seed %d",
        cfg.name,
        grid.number_of_time_steps,
        cfg.simulation.number_of_paths,
        cfg.simulation.seed,
    )
    return MonteCarloBlackScholesModel.from_time_grid(
        grid,
        cfg.simulation.number_of_paths,
        cfg.model.initial_value,
        cfg.model.risk_free_rate,
        cfg.model.volatility,
        seed=cfg.simulation.seed,
        reference_date=cfg.model.reference_date,
    )
