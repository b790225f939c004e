from __future__ import annotations

from typing import Optional, Tuple


class InputError(ValueError):
    """Invalid solver input (unknown count, non-positive values, units label...)."""


class ConvergenceError(RuntimeError):
    """
    Raised when the root finder cannot bracket a sign change or exhausts its
    iteration budget. Never replaced by a partially converged value.
    """
    def __init__(
        self,
        message: str,
        *,
        bracket: Optional[Tuple[float, float]] = None,
        iterations: int = 0,
        expansions: int = 0,
    ):
        self.bracket = bracket
        self.iterations = iterations
        self.expansions = expansions
        super().__init__(message)


class RegimeWarning(UserWarning):
    """Non-fatal: turbulence assumption (or critical state) flagged on a result."""
