"""
Main solver class for 1D linear advection on a periodic domain.
"""

import dataclasses
import json
import logging
import math
import numpy as np
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from .advection import AdvectionOperator
from .boundary import BoundaryCondition, PeriodicBC
from .errors import InvalidConfigError, NumericalInstabilityError
from .initial_conditions import error_norms, exact_solution, get_initial_condition
from .mesh import Grid1D
from .output import run_label, write_output
from .reconstruction import Limiter, Reconstruction
from .timestepping import StageBuffers, integrator_name, resolve_alpha, rk2_step

logger = logging.getLogger(__name__)

# relative tolerance for snapping the clock onto t_end
TIME_TOL = 1e-12


def _as_float(value, field: str) -> float:
    if isinstance(value, bool):
        raise InvalidConfigError(field, f"must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidConfigError(field, f"must be a number, got {value!r}")


@dataclass
class SolverConfig:
    """Configuration for the 1D advection solver."""
    n_cells: int = 64
    n_ghost: int = 1
    x_min: float = 0.0
    x_max: float = 1.0
    velocity: float = 1.0
    cfl: float = 0.8
    initial_condition: str = 'gaussian'  # Options: 'gaussian', 'packet', 'square'
    reconstruction: Reconstruction = Reconstruction.CONSTANT
    limiter: Limiter = Limiter.MC  # only used for linear reconstruction
    alpha: Union[float, str] = 1.0  # 1.0 / 'RK2', 0.5 / 'MP', 2/3 / 'HEUN'
    t_end: float = 5.0
    print_interval: int = 100
    check_finite: bool = True  # raise NumericalInstabilityError on NaN/inf
    max_iter: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Check every option, normalising names to enums and alpha to a float."""
        if isinstance(self.n_cells, bool) or not isinstance(self.n_cells, (int, np.integer)) \
                or self.n_cells <= 0:
            raise InvalidConfigError('n_cells', f"must be a positive integer, got {self.n_cells!r}")
        if isinstance(self.n_ghost, bool) or not isinstance(self.n_ghost, (int, np.integer)) \
                or not 1 <= self.n_ghost <= self.n_cells:
            raise InvalidConfigError('n_ghost', f"must be an integer in [1, n_cells], got {self.n_ghost!r}")
        for name in ('x_min', 'x_max', 'velocity', 'cfl', 't_end'):
            setattr(self, name, _as_float(getattr(self, name), name))

        if not (math.isfinite(self.x_min) and math.isfinite(self.x_max)):
            raise InvalidConfigError('x_min', "domain bounds must be finite")
        if not self.x_max > self.x_min:
            raise InvalidConfigError('x_max', f"must exceed x_min ({self.x_max} <= {self.x_min})")
        if not math.isfinite(self.velocity) or self.velocity == 0:
            raise InvalidConfigError('velocity', f"must be finite and non-zero, got {self.velocity!r}")
        if not 0 < self.cfl <= 1:
            raise InvalidConfigError('cfl', f"must be in (0, 1], got {self.cfl!r}")
        if not math.isfinite(self.t_end) or self.t_end < 0:
            raise InvalidConfigError('t_end', f"must be finite and >= 0, got {self.t_end!r}")
        if self.print_interval < 1:
            raise InvalidConfigError('print_interval', f"must be >= 1, got {self.print_interval!r}")
        if self.max_iter is not None and self.max_iter < 0:
            raise InvalidConfigError('max_iter', f"must be >= 0, got {self.max_iter!r}")

        get_initial_condition(self.initial_condition)
        self.initial_condition = self.initial_condition.strip().lower()
        self.reconstruction = Reconstruction.parse(self.reconstruction)
        self.limiter = Limiter.parse(self.limiter)
        self.alpha = resolve_alpha(self.alpha)

    @classmethod
    def from_dict(cls, dct: Dict) -> 'SolverConfig':
        """Build a config from a dict, rejecting unknown keys."""
        names = {f.name for f in dataclasses.fields(cls)}
        for key in dct:
            if key not in names:
                raise InvalidConfigError(key, "unknown option")
        return cls(**dct)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'SolverConfig':
        try:
            with open(path) as f:
                dct = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise InvalidConfigError('config', f"{path}: {e}") from e
        if not isinstance(dct, dict):
            raise InvalidConfigError('config', f"{path} must contain a JSON object")
        return cls.from_dict(dct)

    def to_dict(self) -> Dict:
        dct = dataclasses.asdict(self)
        dct['reconstruction'] = self.reconstruction.value
        dct['limiter'] = self.limiter.value
        return dct


class Solver1D:
    """
    1D linear advection solver (finite volume, periodic).

    Features:
    - Godunov or piecewise linear reconstruction (MC, SuperBee, TVD limiters)
    - Upwind flux
    - Two-stage Runge-Kutta family in time (RK2, midpoint, Heun)
    - CFL time step, clamped to land exactly on the end time

    The solver owns the field phi (with ghost cells), the clock and all
    per-step buffers.
    """

    def __init__(self, config: SolverConfig = None, bc: BoundaryCondition = None):
        """
        Initialize the solver.

        Args:
            config: Solver configuration
            bc: Boundary condition (periodic by default)
        """
        self.config = config if config is not None else SolverConfig()
        cfg = self.config

        self.grid = Grid1D.build(cfg.x_min, cfg.x_max, cfg.n_cells, cfg.n_ghost)
        self.bc = bc if bc is not None else PeriodicBC()

        # Numerical components
        self.operator = AdvectionOperator(self.grid, cfg.velocity, cfg.cfl,
                                          cfg.reconstruction, cfg.limiter)
        self.buffers = StageBuffers.for_grid(self.grid)

        # Solution storage
        self.phi = None
        self.ic = None
        self.time = 0.0
        self.dt = None
        self.iteration = 0

    def set_initial_condition(self, ic: Union[Callable, np.ndarray, None] = None):
        """
        Set the initial field.

        Args:
            ic: Function of x evaluated at the interior cell centers, or an
                array of interior values. Defaults to config.initial_condition.
        """
        if ic is None:
            ic = get_initial_condition(self.config.initial_condition)

        phi = self.grid.scratch_array()
        if callable(ic):
            phi[self.grid.interior] = ic(self.grid.x_interior)
            self.ic = ic
        else:
            values = np.asarray(ic, dtype=float)
            if values.shape != (self.grid.n_cells,):
                raise ValueError(f"Initial values must have shape ({self.grid.n_cells},), "
                                 f"got {values.shape}")
            phi[self.grid.interior] = values
            self.ic = None

        self.bc.fill(phi, self.grid)
        self.phi = phi
        self.time = 0.0
        self.dt = None
        self.iteration = 0

    def get_solution(self):
        """Interior cell centers and field values (copies)."""
        s = self.grid.interior
        return self.grid.x[s].copy(), self.phi[s].copy()

    def exact(self) -> Optional[np.ndarray]:
        """Exact solution on the interior at the current time, if the initial condition is a function."""
        if self.ic is None:
            return None
        g = self.grid
        return exact_solution(self.ic, g.x_interior, self.time, self.config.velocity,
                              g.x_left, g.x_right)

    def check_finite(self):
        """Raise NumericalInstabilityError if the interior holds NaN or inf."""
        n_bad = int(np.count_nonzero(~np.isfinite(self.phi[self.grid.interior])))
        if n_bad:
            raise NumericalInstabilityError(self.time, self.iteration, n_bad)

    def step(self, t_end: Optional[float] = None) -> float:
        """
        Perform one time step.

        Returns:
            dt: Time step taken
        """
        t_end = self.config.t_end if t_end is None else t_end
        if t_end < self.time:
            raise InvalidConfigError('t_end', f"{t_end!r} is before the current time {self.time!r}")

        self.bc.fill(self.phi, self.grid)
        _, dt = rk2_step(self.phi, self.operator, self.config.alpha, self.bc,
                         self.time, t_end, self.buffers)

        # Update time and iteration
        self.time += dt
        if t_end - self.time <= TIME_TOL * max(1.0, abs(t_end)):
            self.time = t_end
        self.dt = dt
        self.iteration += 1

        if self.config.check_finite:
            self.check_finite()

        return dt

    def solve(self, t_end: Optional[float] = None,
              output_dir: Union[str, Path, None] = None, tag: str = "") -> Dict:
        """
        Advance the solution to t_end.

        Args:
            t_end: Final time (defaults to config.t_end)
            output_dir: Write the initial and final states here (optional)
            tag: Extra label for the output file names

        Returns:
            Dictionary with run info
        """
        if self.phi is None:
            raise ValueError("Initial condition must be set before solving")

        cfg = self.config
        t_end = cfg.t_end if t_end is None else t_end
        if not math.isfinite(t_end) or t_end < 0:
            raise InvalidConfigError('t_end', f"must be finite and >= 0, got {t_end!r}")

        logger.info("Starting 1D advection solver")
        logger.info(f"Cells: {cfg.n_cells}, u: {cfg.velocity:g}, CFL: {cfg.cfl:g}, "
                    f"scheme: {run_label(cfg)}, t_end: {t_end:g}")

        if output_dir is not None:
            write_output(self.grid, self.phi, self.time, cfg, output_dir, tag)

        while self.time < t_end:
            if cfg.max_iter is not None and self.iteration >= cfg.max_iter:
                logger.warning(f"Stopped at max_iter = {cfg.max_iter} before t_end "
                               f"(t = {self.time:.4e})")
                break

            dt = self.step(t_end)

            if self.iteration % cfg.print_interval == 0:
                logger.info(f"Iter {self.iteration:6d}, t = {self.time:.4e}, dt = {dt:.4e}")
            else:
                logger.debug(f"Iter {self.iteration:6d}, t = {self.time:.4e}, dt = {dt:.4e}")

        self.bc.fill(self.phi, self.grid)

        result = {
            'iterations': self.iteration,
            'time': self.time,
            'final_dt': self.dt,
            'reached_end': self.time >= t_end,
        }

        exact = self.exact()
        if exact is not None:
            result['errors'] = error_norms(self.phi[self.grid.interior], exact, self.grid.dx)

        if output_dir is not None:
            result['output'] = write_output(self.grid, self.phi, self.time, cfg, output_dir, tag)

        logger.info(f"Finished: {self.iteration} iterations, t = {self.time:.4e}, "
                    f"integrator {integrator_name(cfg.alpha)}")

        return result
