"""Monte-Carlo simulation of the Black-Scholes model: time grids, Brownian drivers, Euler schemes and the asset-model adapter."""

__version__ = "0.1.0"

from quant_montecarlo.assetvaluation.monte_carlo_black_scholes import (  # noqa: E402
    DEFAULT_SEED,
    MonteCarloBlackScholesModel,
)
from quant_montecarlo.exceptions import (  # noqa: E402
    InvalidAssetIndex,
    InvalidOverride,
    MonteCarloValuationError,
    SimulationError,
    TimeOutOfRange,
)
from quant_montecarlo.sde.brownian import BrownianMotion  # noqa: E402
from quant_montecarlo.sde.processes.black_scholes import BlackScholesModel  # noqa: E402
from quant_montecarlo.sde.schemas import ModelOverrides  # noqa: E402
from quant_montecarlo.sde.time_grid import TimeGrid  # noqa: E402

__all__ = [
    "DEFAULT_SEED",
    "MonteCarloBlackScholesModel",
    "BlackScholesModel",
    "BrownianMotion",
    "TimeGrid",
    "ModelOverrides",
    "MonteCarloValuationError",
    "InvalidAssetIndex",
    "InvalidOverride",
    "SimulationError",
    "TimeOutOfRange",
]
