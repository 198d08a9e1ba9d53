"""
Advect an initial profile once around the periodic domain with every
reconstruction / limiter combination and compare against the exact solution.

This script demonstrates:
1. Numerical diffusion of Godunov's method vs. piecewise linear schemes
2. Limiter behaviour on smooth (gaussian), oscillatory (packet) and
   discontinuous (square) profiles
3. Resolution study

Run from the project root:
    python advdiff/scripts/run_periodic_advection.py [gaussian|packet|square]
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import logging
import matplotlib.pyplot as plt
from advdiff.src import Solver1D, SolverConfig
from advdiff.src.output import run_label

SCHEMES = [
    ('constant', 'MC'),
    ('linear', 'MC'),
    ('linear', 'SuperBee'),
    ('linear', 'TVD'),
]


def run_case(initial_condition: str, reconstruction: str, limiter: str,
             n_cells: int = 64, alpha='RK2'):
    config = SolverConfig(n_cells=n_cells, velocity=1.0, cfl=0.8,
                          initial_condition=initial_condition,
                          reconstruction=reconstruction, limiter=limiter,
                          alpha=alpha, t_end=1.0, print_interval=1000)
    solver = Solver1D(config)
    solver.set_initial_condition()
    result = solver.solve()
    return solver, result


def plot_comparison(initial_condition: str, filename: str = None):
    """Final profiles of all schemes after one domain crossing."""
    fig, ax = plt.subplots(figsize=(10, 6))

    for reconstruction, limiter in SCHEMES:
        solver, result = run_case(initial_condition, reconstruction, limiter)
        x, phi = solver.get_solution()
        ax.plot(x, phi, '.-', linewidth=1.5,
                label=f"{run_label(solver.config)} (L1 = {result['errors']['L1']:.2e})")
        print(f"{run_label(solver.config):20s} L1 = {result['errors']['L1']:.4e}  "
              f"Linf = {result['errors']['Linf']:.4e}")

    ax.plot(x, solver.exact(), 'k--', linewidth=2, label='Exact')
    ax.set_xlabel('x')
    ax.set_ylabel(r'$\phi$')
    ax.set_title(f'One period of linear advection: {initial_condition}')
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()

    if filename:
        fig.savefig(filename, dpi=150, bbox_inches='tight')
        print(f"Saved plot to {filename}")

    plt.show()


def resolution_study(initial_condition: str):
    """L1 error vs. number of cells for each scheme."""
    print("\n" + "=" * 60)
    print(f"RESOLUTION STUDY ({initial_condition})")
    print("=" * 60)

    for reconstruction, limiter in SCHEMES:
        errors = []
        for n_cells in [32, 64, 128, 256]:
            _, result = run_case(initial_condition, reconstruction, limiter, n_cells=n_cells)
            errors.append(result['errors']['L1'])
        rates = [e0 / e1 for e0, e1 in zip(errors[:-1], errors[1:])]
        print(f"{reconstruction:8s} {limiter:8s} "
              + "  ".join(f"{e:.3e}" for e in errors)
              + "   ratios " + "  ".join(f"{r:.2f}" for r in rates))


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    ic = sys.argv[1] if len(sys.argv) > 1 else 'gaussian'

    plot_comparison(ic, filename=f'advection_{ic}.png')
    resolution_study(ic)
