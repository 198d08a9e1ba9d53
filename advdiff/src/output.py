"""
Writing and plotting solver results.

Files hold the interior (x, phi) pairs as two whitespace-separated columns,
named after the run configuration, e.g.

    AdvDiff-Strang-plm+MC-RK2+CN-gaussian-ncells=64-t=5.00
"""

import logging
import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple, Union

from .mesh import Grid1D
from .reconstruction import Limiter, Reconstruction
from .timestepping import integrator_name

if TYPE_CHECKING:
    from .solver import SolverConfig

logger = logging.getLogger(__name__)

LIMITER_LABELS = {
    Limiter.MC: 'MC',
    Limiter.SUPERBEE: 'SBee',
    Limiter.TVD: 'TVD',
}


def reconstruction_label(reconstruction: Reconstruction, limiter: Limiter) -> str:
    if Reconstruction.parse(reconstruction) is Reconstruction.CONSTANT:
        return 'godunov'
    return f"plm+{LIMITER_LABELS[Limiter.parse(limiter)]}"


def run_label(config: 'SolverConfig') -> str:
    """Short description of the scheme, e.g. 'plm+MC / RK2'."""
    return (f"{reconstruction_label(config.reconstruction, config.limiter)} / "
            f"{integrator_name(config.alpha)}")


def output_filename(config: 'SolverConfig', t: float, tag: str = "") -> str:
    recon = reconstruction_label(config.reconstruction, config.limiter)
    tint = integrator_name(config.alpha)
    return (f"AdvDiff{tag}-Strang-{recon}-{tint}+CN-{config.initial_condition}"
            f"-ncells={config.n_cells}-t={t:.2f}")


def write_output(grid: Grid1D, phi: np.ndarray, t: float, config: 'SolverConfig',
                 directory: Union[str, Path] = '.', tag: str = "") -> Path:
    """
    Write the interior (x, phi) pairs to a text file.

    Args:
        grid: Computational grid
        phi: Field with ghost cells
        t: Simulation time
        config: Run configuration (used for the file name)
        directory: Output directory, created if missing
        tag: Extra label appended to the file name prefix

    Returns:
        Path of the written file
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / output_filename(config, t, tag)

    s = grid.interior
    np.savetxt(path, np.column_stack([grid.x[s], phi[s]]))
    logger.info(f"Saved t = {t:.4f} to {path}")

    return path


def read_output(path: Union[str, Path]) -> Tuple[np.ndarray, np.ndarray]:
    """Load (x, phi) columns written by write_output."""
    data = np.loadtxt(path, ndmin=2)
    return data[:, 0], data[:, 1]


def plot_solution(grid: Grid1D, phi: np.ndarray, t: float, config: 'SolverConfig',
                  exact: Optional[np.ndarray] = None, filename: Optional[str] = None,
                  show: bool = False):
    """Plot the interior field, optionally against the exact solution."""
    s = grid.interior
    x = grid.x[s]

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(x, phi[s], 'b.-', linewidth=1.5, label=run_label(config))
    if exact is not None:
        ax.plot(x, exact, 'r--', linewidth=1.5, label='Exact')
    ax.set_xlabel('x')
    ax.set_ylabel(r'$\phi$')
    ax.set_title(f'Linear advection, u = {config.velocity:g}, '
                 f'{config.n_cells} cells (t = {t:.4f})')
    ax.grid(True, alpha=0.3)
    ax.legend()

    fig.tight_layout()

    if filename:
        fig.savefig(filename, dpi=150, bbox_inches='tight')
        logger.info(f"Saved plot to {filename}")

    if show:
        plt.show()

    return fig
