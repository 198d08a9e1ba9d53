"""
Pytest tests for the grid and the periodic boundary condition.

Tests verify:
1. Uniform spacing and cell-center layout including ghost cells
2. Rejection of invalid grids
3. Ghost cells hold the periodic image of the interior
"""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from advdiff.src import Grid1D, InvalidConfigError, PeriodicBC, apply_periodic


@pytest.fixture
def grid():
    return Grid1D.build(0.0, 1.0, 64, 1)


class TestGrid:
    """Tests for grid construction."""

    def test_spacing(self, grid):
        assert grid.dx == pytest.approx(1.0 / 64)
        assert np.allclose(np.diff(grid.x), grid.dx)

    def test_size_includes_ghosts(self, grid):
        assert grid.n_total == 66
        assert len(grid.x) == 66
        assert len(grid.x_interior) == 64
        assert len(grid.scratch_array()) == 66

    def test_cell_centers(self, grid):
        """Center i (1-based) sits at x_min + (i - 0.5) * dx."""
        i = np.arange(1, grid.n_total + 1)
        assert np.allclose(grid.x, 0.0 + (i - 0.5) * grid.dx)
        assert grid.x[0] == pytest.approx(0.5 * grid.dx)

    def test_index_ranges(self, grid):
        assert grid.ilo == 1
        assert grid.ihi == 64
        assert grid.interior == slice(1, 65)
        # n_cells + 1 interfaces bound the interior
        assert len(range(grid.n_total + 1)[grid.interfaces]) == 65

    def test_interior_window(self, grid):
        # interior cells are offset one ghost width from x_min
        assert grid.x_left == pytest.approx(grid.dx)
        assert grid.x_right - grid.x_left == pytest.approx(1.0)
        assert grid.x_interior[0] - 0.5 * grid.dx == pytest.approx(grid.x_left)
        assert grid.x_interior[-1] + 0.5 * grid.dx == pytest.approx(grid.x_right)

    def test_coordinates_read_only(self, grid):
        with pytest.raises(ValueError):
            grid.x[0] = 3.0

    def test_wider_ghost_layer(self):
        grid = Grid1D.build(-1.0, 1.0, 10, 2)
        assert grid.dx == pytest.approx(0.2)
        assert grid.n_total == 14
        assert grid.interior == slice(2, 12)

    @pytest.mark.parametrize("args, field", [
        ((0.0, 1.0, 0, 1), 'n_cells'),
        ((0.0, 1.0, -4, 1), 'n_cells'),
        ((1.0, 1.0, 8, 1), 'x_max'),
        ((1.0, 0.0, 8, 1), 'x_max'),
        ((0.0, 1.0, 8, 0), 'n_ghost'),
        ((0.0, 1.0, 2, 3), 'n_ghost'),
    ])
    def test_invalid_grid(self, args, field):
        with pytest.raises(InvalidConfigError) as excinfo:
            Grid1D.build(*args)
        assert excinfo.value.field == field


class TestPeriodicBoundary:
    """Tests for periodic ghost cells."""

    @pytest.mark.parametrize("n_cells, n_ghost", [(5, 1), (8, 2), (3, 3)])
    def test_ghosts_are_periodic_images(self, n_cells, n_ghost):
        phi = np.arange(n_cells + 2 * n_ghost, dtype=float)
        interior = phi[n_ghost:n_ghost + n_cells].copy()

        apply_periodic(phi, n_cells, n_ghost)

        assert np.array_equal(phi[:n_ghost], interior[-n_ghost:])
        assert np.array_equal(phi[n_ghost + n_cells:], interior[:n_ghost])
        # interior untouched
        assert np.array_equal(phi[n_ghost:n_ghost + n_cells], interior)

    def test_single_ghost_layer(self):
        phi = np.array([-1.0, 10.0, 20.0, 30.0, -1.0])
        apply_periodic(phi, 3, 1)
        assert phi[0] == 30.0
        assert phi[-1] == 10.0

    def test_bc_sides(self, grid):
        bc = PeriodicBC()
        phi = grid.scratch_array()
        phi[grid.interior] = np.sin(2 * np.pi * grid.x_interior)

        bc.apply(phi, grid, 'left')
        assert phi[0] == phi[grid.ihi]
        assert phi[-1] == 0.0

        bc.apply(phi, grid, 'right')
        assert phi[-1] == phi[grid.ilo]

    def test_fill_matches_function(self, grid):
        phi = np.random.default_rng(0).random(grid.n_total)
        expected = apply_periodic(phi.copy(), grid.n_cells, grid.n_ghost)
        PeriodicBC().fill(phi, grid)
        assert np.array_equal(phi, expected)

    def test_unknown_side(self, grid):
        with pytest.raises(ValueError):
            PeriodicBC().apply(grid.scratch_array(), grid, 'top')


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
