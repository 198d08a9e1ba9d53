"""
Initial conditions phi(x, 0) and the exact periodic solution.
"""

import numpy as np
from typing import Callable, Dict

from .errors import InvalidConfigError


def gaussian(x: np.ndarray) -> np.ndarray:
    """Gaussian bump centred at x = 0.5 with width 0.1."""
    return np.exp(-(x - 0.5)**2 / 0.1**2)


def wave_packet(x: np.ndarray) -> np.ndarray:
    """Sine wave modulated by a Gaussian envelope."""
    return np.sin(16.0 * np.pi * x) * np.exp(-36.0 * (x - 0.5)**2)


def square_wave(x: np.ndarray) -> np.ndarray:
    """Unit pulse on [0.333, 0.666), zero elsewhere."""
    x = np.asarray(x, dtype=float)
    return np.where((x >= 0.333) & (x < 0.666), 1.0, 0.0)


INITIAL_CONDITIONS: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
    'gaussian': gaussian,
    'packet': wave_packet,
    'square': square_wave,
}


def get_initial_condition(name: str) -> Callable[[np.ndarray], np.ndarray]:
    """Look up an initial condition by name."""
    try:
        return INITIAL_CONDITIONS[name.strip().lower()]
    except (KeyError, AttributeError):
        options = ', '.join(repr(k) for k in INITIAL_CONDITIONS)
        raise InvalidConfigError('initial_condition', f"unknown option {name!r}. Options: {options}")


def exact_solution(ic: Callable[[np.ndarray], np.ndarray], x: np.ndarray, t: float,
                   u: float, x_min: float, x_max: float) -> np.ndarray:
    """
    Exact solution of periodic linear advection: the initial profile
    translated by u*t and wrapped back into [x_min, x_max).
    """
    L = x_max - x_min
    xi = x_min + np.mod(np.asarray(x) - u * t - x_min, L)
    return ic(xi)


def error_norms(numerical: np.ndarray, exact: np.ndarray, dx: float) -> Dict[str, float]:
    """L1, L2 and Linf norms of the difference (grid-weighted)."""
    err = np.abs(np.asarray(numerical) - np.asarray(exact))
    return {
        'L1': float(np.sum(err) * dx),
        'L2': float(np.sqrt(np.sum(err**2) * dx)),
        'Linf': float(np.max(err)) if err.size else 0.0,
    }
