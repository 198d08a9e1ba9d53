"""
advdiff - 1D Linear Advection Solver
====================================

Re-exports all public components from advdiff.src
"""

from advdiff.src import (
    # Errors
    AdvDiffError,
    InvalidConfigError,
    NumericalInstabilityError,
    # Grid and boundaries
    Grid1D,
    BoundaryCondition,
    PeriodicBC,
    # Reconstruction and fluxes
    Reconstruction,
    Limiter,
    FluxScheme,
    UpwindFlux,
    AdvectionOperator,
    # Solver
    Solver1D,
    SolverConfig,
)

__all__ = [
    'AdvDiffError',
    'InvalidConfigError',
    'NumericalInstabilityError',
    'Grid1D',
    'BoundaryCondition',
    'PeriodicBC',
    'Reconstruction',
    'Limiter',
    'FluxScheme',
    'UpwindFlux',
    'AdvectionOperator',
    'Solver1D',
    'SolverConfig',
]
