"""
Boundary conditions for the 1D advection solver.
"""

import numpy as np
from abc import ABC, abstractmethod

from .mesh import Grid1D


def apply_periodic(phi: np.ndarray, n_cells: int, n_ghost: int) -> np.ndarray:
    """
    Fill ghost cells with the periodic image of the interior (in-place).

    Left ghosts take the last n_ghost interior cells, right ghosts take the
    first n_ghost interior cells.

    Args:
        phi: Field with ghost cells (n_cells + 2*n_ghost)
        n_cells: Number of interior cells
        n_ghost: Number of ghost cells on each side

    Returns:
        phi, with ghost cells set
    """
    ihi = n_ghost + n_cells

    phi[:n_ghost] = phi[n_cells:ihi]
    phi[ihi:ihi + n_ghost] = phi[n_ghost:2 * n_ghost]

    return phi


class BoundaryCondition(ABC):
    """Abstract base class for boundary conditions."""

    @abstractmethod
    def apply(self, phi: np.ndarray, grid: Grid1D, side: str) -> np.ndarray:
        """
        Apply boundary condition to ghost cells.

        Args:
            phi: Field including ghost cells
            grid: Computational grid
            side: 'left' or 'right'

        Returns:
            Modified phi with ghost cells set
        """
        pass

    def fill(self, phi: np.ndarray, grid: Grid1D) -> np.ndarray:
        """Set the ghost cells on both sides."""
        self.apply(phi, grid, 'left')
        self.apply(phi, grid, 'right')
        return phi


class PeriodicBC(BoundaryCondition):
    """
    Periodic wrap: ghost cells are copies of the interior cells on the
    opposite side of the domain.
    """

    def apply(self, phi: np.ndarray, grid: Grid1D, side: str) -> np.ndarray:
        ng, n = grid.n_ghost, grid.n_cells

        if side == 'left':
            phi[:ng] = phi[n:n + ng]
        elif side == 'right':
            phi[ng + n:] = phi[ng:2 * ng]
        else:
            raise ValueError(f"Unknown side: {side!r}. Options: 'left', 'right'")

        return phi

    def fill(self, phi: np.ndarray, grid: Grid1D) -> np.ndarray:
        return apply_periodic(phi, grid.n_cells, grid.n_ghost)
