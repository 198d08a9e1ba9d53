"""
Command line entry point: run one advection simulation.

    advdiff-run config.json --limiter TVD --reconstruction linear -o results -v
"""

import argparse
import logging
import sys

from .errors import InvalidConfigError, NumericalInstabilityError
from .output import output_filename, plot_solution
from .solver import Solver1D, SolverConfig

logger = logging.getLogger(__name__)

# command line flag -> SolverConfig field
OVERRIDES = {
    'n_cells': int,
    'x_min': float,
    'x_max': float,
    'velocity': float,
    'cfl': float,
    'initial_condition': str,
    'reconstruction': str,
    'limiter': str,
    'alpha': str,
    't_end': float,
    'print_interval': int,
    'max_iter': int,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("advdiff-run",
                                     description="Solve 1D periodic linear advection with a "
                                                 "finite volume scheme.")
    parser.add_argument("config", nargs="?", help="path to a JSON run configuration")
    for name, kind in OVERRIDES.items():
        parser.add_argument(f"--{name.replace('_', '-')}", dest=name, type=kind, default=None,
                            help=f"override config option {name}")
    parser.add_argument("--no-check-finite", action="store_true",
                        help="do not stop when NaN/inf appear in the field")
    parser.add_argument("-o", "--output-dir", default=None, help="directory for result files")
    parser.add_argument("--tag", default="", help="extra label for result file names")
    parser.add_argument("--plot", action="store_true", help="save a plot next to the results")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable verbose output")
    parser.add_argument("-vv", "--very-verbose", action="store_true", help="enable very verbose output")
    return parser


def configure_logging(verbose: bool = False, very_verbose: bool = False):
    root = logging.getLogger('advdiff')

    if very_verbose:
        root.setLevel(logging.DEBUG)
        ch = logging.StreamHandler(stream=sys.stdout)
        ch.setLevel(logging.DEBUG)
    elif verbose:
        root.setLevel(logging.INFO)
        ch = logging.StreamHandler(stream=sys.stdout)
        ch.setLevel(logging.INFO)
    else:
        root.setLevel(logging.WARNING)
        ch = logging.StreamHandler(stream=sys.stderr)
        ch.setLevel(logging.WARNING)

    # Create formatter for message output
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    ch.setFormatter(formatter)
    root.addHandler(ch)


def load_config(args: argparse.Namespace) -> SolverConfig:
    """Config file (if any) with command line overrides applied."""
    dct = {}
    if args.config:
        dct = SolverConfig.from_json(args.config).to_dict()
    for name in OVERRIDES:
        value = getattr(args, name)
        if value is not None:
            dct[name] = value
    if args.no_check_finite:
        dct['check_finite'] = False
    return SolverConfig.from_dict(dct)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.very_verbose)

    try:
        config = load_config(args)
    except InvalidConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    solver = Solver1D(config)
    solver.set_initial_condition()

    try:
        result = solver.solve(output_dir=args.output_dir, tag=args.tag)
    except NumericalInstabilityError as e:
        logger.error(f"Numerical instability: {e}")
        return 3

    print(f"Iterations: {result['iterations']}, t = {result['time']:.4f}")
    if 'errors' in result:
        errors = result['errors']
        print(f"L1 error: {errors['L1']:.6e}, Linf error: {errors['Linf']:.6e}")
    if 'output' in result:
        print(f"Saved {result['output']}")

    if args.plot:
        directory = args.output_dir or '.'
        filename = f"{directory}/{output_filename(config, solver.time, args.tag)}.png"
        plot_solution(solver.grid, solver.phi, solver.time, config,
                      exact=solver.exact(), filename=filename)

    return 0


if __name__ == "__main__":
    sys.exit(main())
