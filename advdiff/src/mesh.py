"""
Uniform 1D cell-centered grid padded with ghost cells.
"""

import numpy as np
from dataclasses import dataclass, field

from .errors import InvalidConfigError


@dataclass
class Grid1D:
    """
    Uniform cell-centered finite volume grid.

    The coordinate array covers the interior cells and n_ghost ghost cells
    on each side, all at the same spacing. Centers are laid out from x_min
    starting with the leftmost ghost cell, so the interior sits n_ghost*dx
    to the right of x_min; with periodic boundaries only the spacing and the
    period (x_max - x_min) matter:

        | g | 0 | 1 | ... | n-1 | g |
        ^ x_min

    - dx: cell width, (x_max - x_min) / n_cells
    - x: cell centers including ghosts (n_cells + 2*n_ghost), read-only
    """
    x_min: float
    x_max: float
    n_cells: int
    n_ghost: int = 1
    dx: float = field(init=False)
    x: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        if self.n_cells <= 0:
            raise InvalidConfigError('n_cells', f"must be positive, got {self.n_cells}")
        if self.n_ghost < 1 or self.n_ghost > self.n_cells:
            raise InvalidConfigError('n_ghost', f"must be in [1, n_cells], got {self.n_ghost}")
        if not self.x_max > self.x_min:
            raise InvalidConfigError('x_max', f"must exceed x_min ({self.x_max} <= {self.x_min})")

        self.dx = (self.x_max - self.x_min) / self.n_cells

        i = np.arange(1, self.n_total + 1)
        self.x = self.x_min + (i - 0.5) * self.dx
        self.x.flags.writeable = False

    @classmethod
    def build(cls, x_min: float, x_max: float, n_cells: int, n_ghost: int = 1) -> 'Grid1D':
        """Create a grid, validating the domain and cell counts."""
        return cls(x_min=x_min, x_max=x_max, n_cells=n_cells, n_ghost=n_ghost)

    @property
    def n_total(self) -> int:
        return self.n_cells + 2 * self.n_ghost

    @property
    def length(self) -> float:
        return self.x_max - self.x_min

    @property
    def ilo(self) -> int:
        """Index of the first interior cell."""
        return self.n_ghost

    @property
    def ihi(self) -> int:
        """Index of the last interior cell."""
        return self.n_ghost + self.n_cells - 1

    @property
    def interior(self) -> slice:
        return slice(self.ilo, self.ihi + 1)

    @property
    def interfaces(self) -> slice:
        """Interfaces bounding the interior; interface i is the left edge of cell i."""
        return slice(self.ilo, self.ihi + 2)

    @property
    def x_left(self) -> float:
        """Left edge of the first interior cell."""
        return self.x_min + self.n_ghost * self.dx

    @property
    def x_right(self) -> float:
        """Right edge of the last interior cell."""
        return self.x_left + self.length

    @property
    def x_interior(self) -> np.ndarray:
        return self.x[self.interior]

    def scratch_array(self) -> np.ndarray:
        """Zeroed array with the padded grid's shape."""
        return np.zeros(self.n_total)
