"""
1D Linear Advection Solver Package
==================================

A finite volume solver for the advective part of a Strang-split
advection-diffusion integrator:

    phi_t + (u * phi)_x = 0,   periodic in x

Features:
- Uniform cell-centered grid with periodic ghost cells
- Godunov (piecewise constant) or piecewise linear reconstruction
- MC, SuperBee and TVD slope limiters
- Upwind flux
- Two-stage Runge-Kutta family (RK2, midpoint, Heun) in one update
- CFL time step that lands exactly on the end time

Field representation:
    phi - cell-centered values with n_ghost ghost cells on each side,
          shape (n_cells + 2 * n_ghost,)

Example:
    config = SolverConfig(n_cells=64, reconstruction='linear', limiter='MC',
                          alpha='RK2', t_end=1.0)
    solver = Solver1D(config)
    solver.set_initial_condition()      # config.initial_condition
    result = solver.solve(output_dir='results')
    x, phi = solver.get_solution()
"""

from .errors import AdvDiffError, InvalidConfigError, NumericalInstabilityError
from .mesh import Grid1D
from .boundary import BoundaryCondition, PeriodicBC, apply_periodic
from .reconstruction import (
    Reconstruction, Limiter, minmod, maxmod,
    reconstruct, reconstruct_first_order, reconstruct_plm,
)
from .flux import FluxScheme, UpwindFlux
from .timestepping import (
    INTEGRATORS, StageBuffers, compute_timestep, clamp_timestep,
    resolve_alpha, rk2_step,
)
from .advection import AdvectionOperator
from .initial_conditions import (
    INITIAL_CONDITIONS, gaussian, wave_packet, square_wave,
    get_initial_condition, exact_solution, error_norms,
)
from .output import output_filename, write_output, read_output, plot_solution
from .solver import Solver1D, SolverConfig

__all__ = [
    # Errors
    'AdvDiffError',
    'InvalidConfigError',
    'NumericalInstabilityError',

    # Grid and boundaries
    'Grid1D',
    'BoundaryCondition',
    'PeriodicBC',
    'apply_periodic',

    # Reconstruction
    'Reconstruction',
    'Limiter',
    'minmod',
    'maxmod',
    'reconstruct',
    'reconstruct_first_order',
    'reconstruct_plm',

    # Flux schemes
    'FluxScheme',
    'UpwindFlux',

    # Time integration
    'INTEGRATORS',
    'StageBuffers',
    'compute_timestep',
    'clamp_timestep',
    'resolve_alpha',
    'rk2_step',
    'AdvectionOperator',

    # Initial conditions
    'INITIAL_CONDITIONS',
    'gaussian',
    'wave_packet',
    'square_wave',
    'get_initial_condition',
    'exact_solution',
    'error_norms',

    # Output
    'output_filename',
    'write_output',
    'read_output',
    'plot_solution',

    # Solver
    'Solver1D',
    'SolverConfig',
]

__version__ = '1.0.0'
