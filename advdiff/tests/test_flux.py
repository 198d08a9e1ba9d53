"""
Pytest tests for the upwind flux.

Tests verify:
1. Uniform states give flux u * c at every interface
2. The upwind state is chosen by the sign of the velocity
3. Vectorized and single-interface evaluation agree
"""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from advdiff.src import FluxScheme, UpwindFlux


class CentralFlux(FluxScheme):
    """Average of the two states, only defines the single-interface flux."""

    def compute_flux(self, phi_l, phi_r, u):
        return 0.5 * u * (phi_l + phi_r)


@pytest.fixture
def states():
    rng = np.random.default_rng(3)
    return rng.normal(size=20), rng.normal(size=20)


class TestUpwindFlux:
    """Tests for the upwind rule."""

    @pytest.mark.parametrize("u", [2.0, -0.5])
    def test_uniform_states(self, u):
        c = 1.25
        F = UpwindFlux().compute_flux_vectorized(np.full(10, c), np.full(10, c), u)
        assert np.allclose(F, u * c)

    def test_positive_velocity_takes_left_state(self, states):
        phi_l, phi_r = states
        F = UpwindFlux().compute_flux_vectorized(phi_l, phi_r, 1.5)
        assert np.allclose(F, 1.5 * phi_l)

    def test_negative_velocity_takes_right_state(self, states):
        phi_l, phi_r = states
        F = UpwindFlux().compute_flux_vectorized(phi_l, phi_r, -1.5)
        assert np.allclose(F, -1.5 * phi_r)

    def test_zero_velocity(self, states):
        F = UpwindFlux().compute_flux_vectorized(*states, 0.0)
        assert np.all(F == 0.0)

    @pytest.mark.parametrize("u", [1.0, -1.0])
    def test_single_interface_matches_vectorized(self, states, u):
        phi_l, phi_r = states
        scheme = UpwindFlux()
        F = scheme.compute_flux_vectorized(phi_l, phi_r, u)
        for i in range(len(phi_l)):
            assert scheme.compute_flux(phi_l[i], phi_r[i], u) == pytest.approx(F[i])

    def test_output_buffer(self, states):
        out = np.zeros(20)
        F = UpwindFlux().compute_flux_vectorized(*states, 1.0, out=out)
        assert F is out
        assert np.allclose(out, states[0])


class TestFluxSchemeBase:
    """The default vectorized implementation loops over interfaces."""

    def test_default_loop(self, states):
        phi_l, phi_r = states
        F = CentralFlux().compute_flux_vectorized(phi_l, phi_r, 2.0)
        assert np.allclose(F, phi_l + phi_r)

    def test_abstract(self):
        with pytest.raises(TypeError):
            FluxScheme()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
