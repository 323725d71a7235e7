# src/quant_montecarlo/sde/integrators.py
from __future__ import annotations

from typing import Tuple

import numpy as np


def rng_with_seed(seed: int) -> np.random.Generator:
    """Create a Mersenne-Twister backed numpy Generator deterministically from seed."""
    return np.random.Generator(np.random.MT19937(seed))


def gaussian_increments(
    rng: np.random.Generator, shape: Tuple[int, int, int], dts: np.ndarray
) -> np.ndarray:
    """
    Brownian increments with variance dt_i along the first axis.

    shape = (n_steps, n_factors, n_paths), dts has length n_steps.
    """
    z = rng.standard_normal(size=shape)
    return z * np.sqrt(dts)[:, None, None]


def euler_maruyama_step(
    x: np.ndarray, drift: np.ndarray, diffusion: np.ndarray, dt: float, dW: np.ndarray
) -> np.ndarray:
    """
    Single vectorized Euler-Maruyama step:
    X_{t+dt} = X_t + a(X_t)*dt + sum_k b_k(X_t)*dW_k

    diffusion and dW carry the factor index on their first axis.
    """
    return x + drift * dt + np.sum(diffusion * dW, axis=0)
