"""
Spatial discretization of the advection equation phi_t + (u phi)_x = 0.
"""

import numpy as np
from typing import Optional, Tuple

from .flux import FluxScheme, UpwindFlux
from .mesh import Grid1D
from .reconstruction import Limiter, Reconstruction, reconstruct
from .timestepping import clamp_timestep, compute_timestep


class AdvectionOperator:
    """
    Finite volume right-hand side L(phi) = -(F_{i+1/2} - F_{i-1/2}) / dx.

    Interface states, slopes and fluxes live in buffers sized to the padded
    grid and are overwritten on every call.
    """

    def __init__(self, grid: Grid1D, velocity: float, cfl: float,
                 reconstruction: Reconstruction = Reconstruction.CONSTANT,
                 limiter: Limiter = Limiter.MC,
                 flux_scheme: Optional[FluxScheme] = None):
        self.grid = grid
        self.velocity = velocity
        self.cfl = cfl
        self.reconstruction = Reconstruction.parse(reconstruction)
        self.limiter = Limiter.parse(limiter)
        self.flux_scheme = flux_scheme if flux_scheme is not None else UpwindFlux()

        self.phi_l = grid.scratch_array()
        self.phi_r = grid.scratch_array()
        self.slope = grid.scratch_array()
        self.flux = grid.scratch_array()

    def timestep(self, t: float = 0.0, t_end: Optional[float] = None) -> float:
        """CFL time step, clamped to t_end when given."""
        dt = compute_timestep(self.grid.dx, self.velocity, self.cfl)
        if t_end is not None:
            dt = clamp_timestep(dt, t, t_end)
        return dt

    def rhs(self, phi: np.ndarray, dt: Optional[float] = None, recompute_dt: bool = False,
            t: float = 0.0, t_end: Optional[float] = None,
            out: Optional[np.ndarray] = None) -> Tuple[np.ndarray, float]:
        """
        Compute the right-hand side of dphi/dt = L(phi).

        Ghost cells of phi must already hold valid boundary values.

        Args:
            phi: Field with ghost cells (n_cells + 2*n_ghost)
            dt: Time step used to centre the reconstruction
            recompute_dt: Compute dt from the CFL condition (clamped to t_end)
            t, t_end: Current and final time for the clamp
            out: Optional buffer for the result

        Returns:
            RHS: Time derivative, filled on the interior cells
            dt: Time step used
        """
        if recompute_dt:
            dt = self.timestep(t, t_end)
        elif dt is None:
            raise ValueError("dt must be given unless recompute_dt is set")

        grid = self.grid
        reconstruct(phi, grid.dx, dt, self.velocity, self.reconstruction, self.limiter,
                    grid.n_ghost, out=(self.phi_l, self.phi_r), slope=self.slope)

        faces = grid.interfaces
        F = self.flux
        self.flux_scheme.compute_flux_vectorized(self.phi_l[faces], self.phi_r[faces],
                                                 self.velocity, out=F[faces])

        RHS = grid.scratch_array() if out is None else out
        ilo, ihi = grid.ilo, grid.ihi
        RHS[ilo:ihi + 1] = (F[ilo:ihi + 1] - F[ilo + 1:ihi + 2]) / grid.dx

        return RHS, dt
