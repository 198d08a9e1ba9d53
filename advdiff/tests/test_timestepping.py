"""
Pytest tests for time step control, the advection operator and the
two-stage Runge-Kutta family.

Tests verify:
1. dt = cfl * dx / |u| and the end-time clamp
2. Integrator names and alpha validation
3. Zero right-hand side (and no update) for a uniform field
4. The generic update matches the two-stage formula for every alpha
5. Conservation of the interior sum on a periodic domain
"""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from advdiff.src import (
    AdvectionOperator, Grid1D, InvalidConfigError, Limiter, PeriodicBC, Reconstruction,
    StageBuffers, clamp_timestep, compute_timestep, gaussian, resolve_alpha, rk2_step,
)
from advdiff.src.timestepping import integrator_name

SCHEMES = [
    (Reconstruction.CONSTANT, Limiter.MC),
    (Reconstruction.LINEAR, Limiter.MC),
    (Reconstruction.LINEAR, Limiter.SUPERBEE),
    (Reconstruction.LINEAR, Limiter.TVD),
]


@pytest.fixture
def grid():
    return Grid1D.build(0.0, 1.0, 64, 1)


@pytest.fixture
def bc():
    return PeriodicBC()


def gaussian_field(grid, bc):
    phi = grid.scratch_array()
    phi[grid.interior] = gaussian(grid.x_interior)
    return bc.fill(phi, grid)


class TestTimestep:
    """Tests for the CFL time step and the clamp."""

    @pytest.mark.parametrize("u", [1.0, -1.0, 2.5, -0.25])
    def test_cfl_timestep(self, u):
        dx = 1.0 / 64
        assert compute_timestep(dx, u, 0.8) == pytest.approx(0.8 * dx / abs(u))

    def test_zero_velocity(self):
        with pytest.raises(InvalidConfigError) as excinfo:
            compute_timestep(0.1, 0.0, 0.8)
        assert excinfo.value.field == 'velocity'

    def test_clamp_final_step(self):
        dt = clamp_timestep(0.2, 0.9, 1.0)
        assert dt == pytest.approx(0.1)
        assert 0.9 + dt == 1.0

    def test_no_clamp(self):
        assert clamp_timestep(0.05, 0.5, 1.0) == 0.05
        assert clamp_timestep(0.5, 0.5, 1.0) == 0.5

    def test_clamp_at_end(self):
        assert clamp_timestep(0.1, 1.0, 1.0) == 0.0

    def test_clamp_past_end(self):
        assert clamp_timestep(0.1, 1.2, 1.0) == 0.0


class TestIntegratorFamily:
    """Tests for alpha resolution."""

    @pytest.mark.parametrize("value, alpha", [
        ('RK2', 1.0),
        ('mp', 0.5),
        ('HEUN', 2.0 / 3.0),
        (0.75, 0.75),
        ('0.75', 0.75),
        (1, 1.0),
    ])
    def test_resolve(self, value, alpha):
        assert resolve_alpha(value) == pytest.approx(alpha)

    @pytest.mark.parametrize("value", [0.0, -1.0, 'euler', float('nan'), float('inf')])
    def test_invalid(self, value):
        with pytest.raises(InvalidConfigError) as excinfo:
            resolve_alpha(value)
        assert excinfo.value.field == 'alpha'

    def test_names(self):
        assert integrator_name(1.0) == 'RK2'
        assert integrator_name(0.5) == 'MP'
        assert integrator_name(2.0 / 3.0) == 'HEUN'
        assert integrator_name(0.75) == 'RK2a=0.75'


class TestAdvectionOperator:
    """Tests for the spatial right-hand side."""

    @pytest.mark.parametrize("reconstruction, limiter", SCHEMES)
    def test_uniform_field_zero_rhs(self, grid, reconstruction, limiter):
        op = AdvectionOperator(grid, 1.0, 0.8, reconstruction, limiter)
        rhs, dt = op.rhs(np.full(grid.n_total, 3.0), recompute_dt=True)
        assert dt == pytest.approx(0.8 * grid.dx)
        assert np.allclose(rhs[grid.interior], 0.0)

    def test_uniform_field_flux(self, grid):
        op = AdvectionOperator(grid, -2.0, 0.8)
        op.rhs(np.full(grid.n_total, 3.0), dt=0.001)
        assert np.allclose(op.flux[grid.interfaces], -6.0)

    def test_godunov_rhs(self, grid, bc):
        """Constant reconstruction with u > 0 is first-order upwind."""
        phi = gaussian_field(grid, bc)
        op = AdvectionOperator(grid, 2.0, 0.8, Reconstruction.CONSTANT)
        rhs, _ = op.rhs(phi, dt=0.001)
        s = grid.interior
        expected = -2.0 * (phi[s] - phi[grid.ilo - 1:grid.ihi]) / grid.dx
        assert np.allclose(rhs[s], expected)

    def test_godunov_rhs_negative_velocity(self, grid, bc):
        phi = gaussian_field(grid, bc)
        op = AdvectionOperator(grid, -1.0, 0.8, Reconstruction.CONSTANT)
        rhs, _ = op.rhs(phi, dt=0.001)
        s = grid.interior
        expected = (phi[grid.ilo + 1:grid.ihi + 2] - phi[s]) / grid.dx
        assert np.allclose(rhs[s], expected)

    def test_dt_required(self, grid):
        op = AdvectionOperator(grid, 1.0, 0.8)
        with pytest.raises(ValueError):
            op.rhs(np.ones(grid.n_total))

    def test_recompute_dt_clamped(self, grid):
        op = AdvectionOperator(grid, 1.0, 0.8)
        _, dt = op.rhs(np.ones(grid.n_total), recompute_dt=True, t=0.995, t_end=1.0)
        assert dt == pytest.approx(0.005)

    def test_given_dt_kept(self, grid):
        op = AdvectionOperator(grid, 1.0, 0.8, Reconstruction.LINEAR)
        _, dt = op.rhs(np.ones(grid.n_total), dt=0.004)
        assert dt == 0.004


class TestRK2Step:
    """Tests for the generic two-stage update."""

    @pytest.mark.parametrize("reconstruction, limiter", SCHEMES)
    @pytest.mark.parametrize("alpha", ['RK2', 'MP', 'HEUN'])
    def test_uniform_field_unchanged(self, grid, bc, reconstruction, limiter, alpha):
        op = AdvectionOperator(grid, 1.0, 0.8, reconstruction, limiter)
        phi = np.full(grid.n_total, 0.7)
        phi, dt = rk2_step(phi, op, alpha, bc)
        assert dt == pytest.approx(0.8 * grid.dx)
        assert np.allclose(phi[grid.interior], 0.7)

    @pytest.mark.parametrize("reconstruction, limiter", SCHEMES)
    @pytest.mark.parametrize("alpha", [1.0, 0.5, 2.0 / 3.0, 0.3])
    def test_two_stage_formula(self, grid, bc, reconstruction, limiter, alpha):
        op = AdvectionOperator(grid, 1.0, 0.8, reconstruction, limiter)
        phi0 = gaussian_field(grid, bc)
        s = grid.interior

        # reference: the two stages written out
        k1, dt = op.rhs(phi0.copy(), recompute_dt=True)
        k1 = k1.copy()
        stage = phi0.copy()
        stage[s] = phi0[s] + alpha * dt * k1[s]
        bc.fill(stage, grid)
        k2, _ = op.rhs(stage, dt)
        expected = phi0[s] + dt * ((1 - 1 / (2 * alpha)) * k1[s] + 1 / (2 * alpha) * k2[s])

        phi, dt_step = rk2_step(phi0.copy(), op, alpha, bc)
        assert dt_step == dt
        assert np.allclose(phi[s], expected, rtol=0, atol=1e-14)

    def test_updates_in_place(self, grid, bc):
        op = AdvectionOperator(grid, 1.0, 0.8)
        phi = gaussian_field(grid, bc)
        before = phi.copy()
        result, _ = rk2_step(phi, op, 1.0, bc)
        assert result is phi
        assert not np.allclose(phi, before)

    def test_clamped_to_end_time(self, grid, bc):
        op = AdvectionOperator(grid, 1.0, 0.8)
        phi = gaussian_field(grid, bc)
        _, dt = rk2_step(phi, op, 1.0, bc, t=0.99, t_end=1.0)
        assert dt == pytest.approx(0.01)
        assert 0.99 + dt == 1.0

    def test_buffers_reused(self, grid, bc):
        op = AdvectionOperator(grid, 1.0, 0.8, Reconstruction.LINEAR)
        buffers = StageBuffers.for_grid(grid)
        phi = gaussian_field(grid, bc)
        rk2_step(phi, op, 1.0, bc, buffers=buffers)
        assert np.any(buffers.k1 != 0.0)
        assert np.any(buffers.k2 != 0.0)

    def test_invalid_alpha(self, grid, bc):
        op = AdvectionOperator(grid, 1.0, 0.8)
        with pytest.raises(InvalidConfigError):
            rk2_step(np.ones(grid.n_total), op, 0.0, bc)

    @pytest.mark.parametrize("reconstruction, limiter", SCHEMES)
    @pytest.mark.parametrize("u", [1.0, -1.0])
    def test_conservation(self, grid, bc, reconstruction, limiter, u):
        """Periodic flux form: the interior sum does not change."""
        op = AdvectionOperator(grid, u, 0.8, reconstruction, limiter)
        phi = gaussian_field(grid, bc)
        total = np.sum(phi[grid.interior])
        buffers = StageBuffers.for_grid(grid)
        for _ in range(20):
            rk2_step(phi, op, 1.0, bc, buffers=buffers)
        assert np.sum(phi[grid.interior]) == pytest.approx(total, rel=1e-12)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
