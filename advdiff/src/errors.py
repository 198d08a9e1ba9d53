"""
Exceptions raised by the advection solver.
"""


class AdvDiffError(Exception):
    """Base class for solver errors."""


class InvalidConfigError(AdvDiffError, ValueError):
    """A run option is missing, out of range, or unknown."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class NumericalInstabilityError(AdvDiffError, ArithmeticError):
    """Non-finite values appeared in the field after a time step."""

    def __init__(self, time: float, iteration: int, n_bad: int):
        self.time = time
        self.iteration = iteration
        self.n_bad = n_bad
        super().__init__(f"{n_bad} non-finite cell(s) after iteration {iteration} "
                         f"(t = {time:.6e})")
