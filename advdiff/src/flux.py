"""
Numerical flux schemes for the linear advection equation.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Optional


class FluxScheme(ABC):
    """Abstract base class for numerical flux schemes."""

    @abstractmethod
    def compute_flux(self, phi_l: float, phi_r: float, u: float) -> float:
        """
        Compute numerical flux at a single interface.

        Args:
            phi_l: State left of the interface
            phi_r: State right of the interface
            u: Advection velocity

        Returns:
            Numerical flux
        """
        pass

    def compute_flux_vectorized(self, phi_l: np.ndarray, phi_r: np.ndarray, u: float,
                                out: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Compute numerical fluxes at all interfaces.

        Args:
            phi_l: Left states (n_faces,)
            phi_r: Right states (n_faces,)
            u: Advection velocity
            out: Optional buffer for the result

        Returns:
            Fluxes at all interfaces (n_faces,)
        """
        # Default implementation: loop over faces
        F = np.zeros(len(phi_l)) if out is None else out
        for i in range(len(phi_l)):
            F[i] = self.compute_flux(phi_l[i], phi_r[i], u)
        return F


class UpwindFlux(FluxScheme):
    """
    Exact upwind flux for linear advection, f = u * phi.

    There is no Riemann problem to solve: the interface carries the state
    of the cell the information comes from, i.e. the left state for u > 0
    and the right state otherwise.
    """

    def compute_flux_vectorized(self, phi_l: np.ndarray, phi_r: np.ndarray, u: float,
                                out: Optional[np.ndarray] = None) -> np.ndarray:
        upwind = phi_l if u > 0 else phi_r
        return np.multiply(u, upwind, out=out)

    def compute_flux(self, phi_l: float, phi_r: float, u: float) -> float:
        """Single-interface flux."""
        return u * (phi_l if u > 0 else phi_r)
