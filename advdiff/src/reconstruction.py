"""
Interface reconstruction for the linear advection equation.

Conventions (0-based, n_ghost ghost cells on each side):

        |             |             |             |
       -+------+------+------+------+------+------+--
        |     i-1     |      i      |     i+1     |
                    phi_l,i  phi_r,i

Interface i is the left edge of cell i. phi_l[i] is the state just left of
the interface (extrapolated from cell i-1), phi_r[i] the state just right of
it (extrapolated from cell i). Only interfaces n_ghost .. n_ghost + n_cells
are filled; the rest of the output arrays is left untouched.
"""

import numpy as np
from enum import Enum
from typing import Optional, Tuple

from .boundary import apply_periodic
from .errors import InvalidConfigError


class Reconstruction(str, Enum):
    """Order of the interface reconstruction."""
    CONSTANT = 'constant'   # Godunov, piecewise constant
    LINEAR = 'linear'       # piecewise linear (PLM), slope limited

    @classmethod
    def parse(cls, value) -> 'Reconstruction':
        return _parse_option(cls, value, 'reconstruction',
                             {'godunov': cls.CONSTANT, 'plm': cls.LINEAR})


class Limiter(str, Enum):
    """Slope limiter for the piecewise linear reconstruction."""
    MC = 'MC'
    SUPERBEE = 'SuperBee'
    TVD = 'TVD'

    @classmethod
    def parse(cls, value) -> 'Limiter':
        return _parse_option(cls, value, 'limiter', {'sbee': cls.SUPERBEE})


def _parse_option(enum_cls, value, field: str, aliases: dict):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for member in enum_cls:
            if member.value.lower() == key:
                return member
        if key in aliases:
            return aliases[key]
    options = ', '.join(repr(m.value) for m in enum_cls)
    raise InvalidConfigError(field, f"unknown option {value!r}. Options: {options}")


# ---------------------------------------------------------------------------
# Limiter functions
# ---------------------------------------------------------------------------

def minmod(a, b):
    """
    Argument of smaller magnitude if a and b share a sign, else 0.

    Works elementwise on arrays.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    return np.where(a * b > 0, np.where(np.abs(a) <= np.abs(b), a, b), 0.0)


def maxmod(a, b):
    """Argument of larger magnitude if a and b share a sign, else 0."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    return np.where(a * b > 0, np.where(np.abs(a) >= np.abs(b), a, b), 0.0)


def mc_slopes(phi: np.ndarray, dx: float, out: np.ndarray) -> np.ndarray:
    """
    Monotonized central slopes, per unit length.

    Fills cells 1 .. n_total-2 of out (cells with both neighbours).
    """
    dl = (phi[1:-1] - phi[:-2]) / dx
    dr = (phi[2:] - phi[1:-1]) / dx
    dc = 0.5 * (phi[2:] - phi[:-2]) / dx

    out[1:-1] = minmod(minmod(2.0 * dl, 2.0 * dr), dc)
    return out


def superbee_slopes(phi: np.ndarray, dx: float, out: np.ndarray) -> np.ndarray:
    """SuperBee slopes, per unit length."""
    dl = (phi[1:-1] - phi[:-2]) / dx
    dr = (phi[2:] - phi[1:-1]) / dx

    slope1 = minmod(dr, 2.0 * dl)
    slope2 = minmod(2.0 * dr, dl)

    out[1:-1] = maxmod(slope1, slope2)
    return out


def tvd_slopes(phi: np.ndarray, dx: float, out: np.ndarray) -> np.ndarray:
    """
    TVD (harmonic) half-increments, already scaled by the cell width:

        sigma_i = max(dr * dl, 0) / (phi_{i+1} - phi_{i-1})

    Zero at extrema and in flat regions, where the denominator vanishes.
    """
    dl = phi[1:-1] - phi[:-2]
    dr = phi[2:] - phi[1:-1]
    num = np.maximum(dr * dl, 0.0)
    den = phi[2:] - phi[:-2]

    inner = out[1:-1]
    inner[:] = 0.0
    np.divide(num, den, out=inner, where=den != 0.0)
    return out


# ---------------------------------------------------------------------------
# Interface states
# ---------------------------------------------------------------------------

def _face_slices(n_total: int, n_ghost: int) -> Tuple[slice, slice]:
    """Interfaces n_ghost .. n_total-n_ghost and the cells to their left."""
    faces = slice(n_ghost, n_total - n_ghost + 1)
    left_cells = slice(n_ghost - 1, n_total - n_ghost)
    return faces, left_cells


def _characteristic_states(phi, slope, dx, dt, u, n_ghost, phi_l, phi_r):
    # dx/2 in space and dt/2 in time towards the interface
    cx = u * dt / dx
    faces, left_cells = _face_slices(len(phi), n_ghost)

    phi_l[faces] = phi[left_cells] + 0.5 * dx * (1.0 - cx) * slope[left_cells]
    phi_r[faces] = phi[faces] - 0.5 * dx * (1.0 + cx) * slope[faces]


def _spatial_states(phi, sigma, dx, dt, u, n_ghost, phi_l, phi_r):
    # cell edge values phi -/+ sigma, no time centering
    faces, left_cells = _face_slices(len(phi), n_ghost)

    phi_l[faces] = phi[left_cells] + sigma[left_cells]
    phi_r[faces] = phi[faces] - sigma[faces]


LIMITERS = {
    Limiter.MC: (mc_slopes, _characteristic_states),
    Limiter.SUPERBEE: (superbee_slopes, _characteristic_states),
    Limiter.TVD: (tvd_slopes, _spatial_states),
}


def _buffers(n_total: int, out):
    if out is None:
        return np.zeros(n_total), np.zeros(n_total)
    return out


def reconstruct_first_order(phi: np.ndarray, n_ghost: int = 1,
                            out: Optional[Tuple[np.ndarray, np.ndarray]] = None
                            ) -> Tuple[np.ndarray, np.ndarray]:
    """
    First-order reconstruction (piecewise constant, Godunov).

    Left state = left cell value, right state = right cell value.
    Monotone by construction, only 1st order accurate.

    Args:
        phi: Field with valid ghost cells (n_cells + 2*n_ghost)
        n_ghost: Number of ghost cells on each side
        out: Optional (phi_l, phi_r) buffers to fill

    Returns:
        phi_l, phi_r: Interface states, indexed by interface
    """
    phi_l, phi_r = _buffers(len(phi), out)
    faces, left_cells = _face_slices(len(phi), n_ghost)

    phi_l[faces] = phi[left_cells]
    phi_r[faces] = phi[faces]

    return phi_l, phi_r


def reconstruct_plm(phi: np.ndarray, dx: float, dt: float, u: float,
                    limiter: Limiter = Limiter.MC, n_ghost: int = 1,
                    out: Optional[Tuple[np.ndarray, np.ndarray]] = None,
                    slope: Optional[np.ndarray] = None
                    ) -> Tuple[np.ndarray, np.ndarray]:
    """
    Piecewise linear reconstruction with a slope limiter.

    MC and SuperBee slopes are traced to the interface by dx/2 in space and
    dt/2 in time (donor-cell Taylor expansion). TVD uses the untraced cell
    edge values phi -/+ sigma.

    Slopes of the outermost ghost ring are taken from their periodic images.

    Args:
        phi: Field with valid ghost cells (n_cells + 2*n_ghost)
        dx: Cell width
        dt: Time step the states are centred on
        u: Advection velocity
        limiter: Slope limiter
        n_ghost: Number of ghost cells on each side
        out: Optional (phi_l, phi_r) buffers to fill
        slope: Optional scratch buffer for the limited slopes

    Returns:
        phi_l, phi_r: Interface states, indexed by interface
    """
    slope_func, states_func = LIMITERS[Limiter.parse(limiter)]

    n_total = len(phi)
    phi_l, phi_r = _buffers(n_total, out)
    if slope is None:
        slope = np.zeros(n_total)

    slope_func(phi, dx, slope)
    apply_periodic(slope, n_total - 2 * n_ghost, n_ghost)

    states_func(phi, slope, dx, dt, u, n_ghost, phi_l, phi_r)

    return phi_l, phi_r


def reconstruct(phi: np.ndarray, dx: float, dt: float, u: float,
                order: Reconstruction, limiter: Limiter = Limiter.MC,
                n_ghost: int = 1,
                out: Optional[Tuple[np.ndarray, np.ndarray]] = None,
                slope: Optional[np.ndarray] = None
                ) -> Tuple[np.ndarray, np.ndarray]:
    """Interface states for the given reconstruction order (limiter only used for LINEAR)."""
    order = Reconstruction.parse(order)
    if order is Reconstruction.CONSTANT:
        return reconstruct_first_order(phi, n_ghost, out)
    return reconstruct_plm(phi, dx, dt, u, limiter, n_ghost, out, slope)
