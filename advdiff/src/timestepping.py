"""
Time integration schemes and timestep computation.
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, Union

from .boundary import BoundaryCondition
from .errors import InvalidConfigError
from .mesh import Grid1D

if TYPE_CHECKING:
    from .advection import AdvectionOperator


# Two-stage Runge-Kutta family members, by the name used in output labels
INTEGRATORS = {
    'RK2': 1.0,         # standard second-order Runge-Kutta
    'MP': 0.5,          # midpoint
    'HEUN': 2.0 / 3.0,
}


def compute_timestep(dx: float, u: float, cfl: float) -> float:
    """
    Compute time step based on CFL condition.

    Args:
        dx: Cell width
        u: Advection velocity
        cfl: Courant number (<= 1 for stability)

    Returns:
        dt: Time step, cfl * dx / |u|
    """
    if u == 0:
        raise InvalidConfigError('velocity', "must be non-zero")
    return cfl * dx / abs(u)


def clamp_timestep(dt: float, t: float, t_end: float) -> float:
    """Shorten dt so that t + dt lands exactly on t_end instead of passing it (never negative)."""
    if t + dt > t_end:
        return max(t_end - t, 0.0)
    return dt


def resolve_alpha(value: Union[str, float]) -> float:
    """
    Alpha coefficient of the two-stage family, from a number or an
    integrator name ('RK2', 'MP', 'HEUN').
    """
    if isinstance(value, str):
        key = value.strip().upper()
        if key in INTEGRATORS:
            return INTEGRATORS[key]
        try:
            value = float(key)
        except ValueError:
            options = ', '.join(repr(k) for k in INTEGRATORS)
            raise InvalidConfigError('alpha', f"unknown integrator {value!r}. "
                                              f"Options: {options} or a positive number")

    alpha = float(value)
    if not math.isfinite(alpha) or alpha <= 0:
        raise InvalidConfigError('alpha', f"must be a positive number, got {value!r}")
    return alpha


def integrator_name(alpha: float) -> str:
    """Output label for an alpha value."""
    for name, value in INTEGRATORS.items():
        if math.isclose(alpha, value, rel_tol=1e-12):
            return name
    return f"RK2a={alpha:g}"


@dataclass
class StageBuffers:
    """Per-step work arrays, allocated once and reused every step."""
    k1: np.ndarray
    k2: np.ndarray
    phi_stage: np.ndarray

    @classmethod
    def for_grid(cls, grid: Grid1D) -> 'StageBuffers':
        return cls(k1=grid.scratch_array(),
                   k2=grid.scratch_array(),
                   phi_stage=grid.scratch_array())


def rk2_step(phi: np.ndarray, operator: 'AdvectionOperator', alpha: float,
             bc: BoundaryCondition, t: float = 0.0, t_end: Optional[float] = None,
             buffers: Optional[StageBuffers] = None) -> Tuple[np.ndarray, float]:
    """
    One step of the two-stage Runge-Kutta family

        phi* = phi + alpha * dt * L(phi)
        phi' = phi + dt * ((1 - 1/(2 alpha)) * L(phi) + 1/(2 alpha) * L(phi*))

    alpha = 1 is RK2, 0.5 the midpoint method, 2/3 Heun's variant.

    The time step is computed by the first stage from the CFL condition and
    clamped to t_end; the second stage reuses it.

    Args:
        phi: Field with ghost cells; the interior is updated in place
        operator: Spatial discretization L
        alpha: Family coefficient (> 0)
        bc: Boundary condition used to refresh ghost cells
        t: Current time
        t_end: Time not to step past (optional)
        buffers: Reusable stage arrays (allocated if not given)

    Returns:
        phi: The updated field (same array)
        dt: Time step taken
    """
    alpha = resolve_alpha(alpha)
    grid = operator.grid
    if buffers is None:
        buffers = StageBuffers.for_grid(grid)
    s = grid.interior

    bc.fill(phi, grid)
    k1, dt = operator.rhs(phi, recompute_dt=True, t=t, t_end=t_end, out=buffers.k1)

    phi_stage = buffers.phi_stage
    phi_stage[s] = phi[s] + alpha * dt * k1[s]
    bc.fill(phi_stage, grid)

    k2, _ = operator.rhs(phi_stage, dt, out=buffers.k2)

    w2 = 1.0 / (2.0 * alpha)
    w1 = 1.0 - w2
    phi[s] += dt * (w1 * k1[s] + w2 * k2[s])

    return phi, dt
