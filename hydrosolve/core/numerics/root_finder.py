# hydrosolve/core/numerics/root_finder.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple
import logging
import math

from scipy.optimize import brentq

from hydrosolve.core.build.config import RootFinderConfig
from hydrosolve.core.models.errors import ConvergenceError


logger = logging.getLogger(__name__)

Residual = Callable[[float], float]


@dataclass(frozen=True)
class RootResult:
    root: float
    residual: float
    iterations: int
    function_calls: int
    expansions: int
    bracket: Tuple[float, float]    # final bracket handed to Brent


def _checked(g: Residual, name: str) -> Residual:
    def wrapped(x: float) -> float:
        val = float(g(x))
        if not math.isfinite(val):
            raise ConvergenceError(f"{name}: non-finite residual at x={x!r} ({val!r})")
        return val
    return wrapped


def _step_down(lo: float, hi: float, factor: float, lower_limit: Optional[float]) -> float:
    if lo > 0:
        new = lo / factor
    else:
        new = lo - (hi - lo) * (factor - 1.0)
    if lower_limit is not None:
        new = max(new, lower_limit)
    return new


def _step_up(lo: float, hi: float, factor: float, upper_limit: Optional[float]) -> float:
    if hi > 0:
        new = hi * factor
    else:
        new = hi + (hi - lo) * (factor - 1.0)
    if upper_limit is not None:
        new = min(new, upper_limit)
    return new


def expand_bracket(
    g: Residual,
    lo: float,
    hi: float,
    *,
    factor: float = 2.0,
    max_expand: int = 60,
    lower_limit: Optional[float] = None,
    upper_limit: Optional[float] = None,
    name: str = "g",
) -> Tuple[float, float, float, float, int]:
    """
    Geometric bracket expansion until g(lo) and g(hi) differ in sign.

    The end with the smaller |g| is moved (the root most likely lies beyond it);
    an end pinned at its admissible limit is left alone.
    Returns (lo, hi, g(lo), g(hi), n_expansions).
    """
    g = _checked(g, name)
    if not lo < hi:
        raise ValueError(f"{name}: invalid bracket lo={lo!r} >= hi={hi!r}")

    glo, ghi = g(lo), g(hi)
    k = 0
    while glo * ghi > 0.0:
        if k >= max_expand:
            raise ConvergenceError(
                f"{name}: no sign change found after {k} bracket expansions "
                f"(lo={lo:.6g}, g(lo)={glo:.6g}; hi={hi:.6g}, g(hi)={ghi:.6g})",
                bracket=(lo, hi),
                expansions=k,
            )

        can_down = lower_limit is None or lo > lower_limit
        can_up = upper_limit is None or hi < upper_limit
        if not (can_down or can_up):
            raise ConvergenceError(
                f"{name}: no sign change inside admissible interval "
                f"[{lower_limit!r}, {upper_limit!r}] (g={glo:.6g} .. {ghi:.6g})",
                bracket=(lo, hi),
                expansions=k,
            )

        move_up = can_up and (not can_down or abs(ghi) <= abs(glo))
        if move_up:
            new_hi = _step_up(lo, hi, factor, upper_limit)
            lo, glo = hi, ghi
            hi, ghi = new_hi, g(new_hi)
        else:
            new_lo = _step_down(lo, hi, factor, lower_limit)
            hi, ghi = lo, glo
            lo, glo = new_lo, g(new_lo)
        k += 1
        logger.debug("%s: bracket expansion %d -> [%.6g, %.6g]", name, k, lo, hi)

    return lo, hi, glo, ghi, k


def find_root(
    g: Residual,
    *,
    bracket: Optional[Tuple[float, float]] = None,
    x0: Optional[float] = None,
    cfg: Optional[RootFinderConfig] = None,
    lower_limit: Optional[float] = None,
    upper_limit: Optional[float] = None,
    name: str = "g",
) -> RootResult:
    """
    Scalar root of g via Brent's method (bisection / secant / inverse quadratic).

    Either `bracket=(lo, hi)` or a positive initial guess `x0` is required; with
    x0 the starting bracket is [x0/factor, x0*factor]. When the residual does
    not change sign the bracket is auto-expanded within [lower_limit, upper_limit].

    Raises ConvergenceError when no sign change can be found, the residual is
    not finite, or the iteration budget (cfg.max_iter) is exhausted.
    """
    cfg = cfg or RootFinderConfig()

    if bracket is None:
        if x0 is None:
            raise ValueError(f"{name}: either bracket or x0 is required")
        if not (x0 > 0):
            raise ValueError(f"{name}: initial guess must be > 0 (got {x0!r})")
        lo, hi = x0 / cfg.expand_factor, x0 * cfg.expand_factor
    else:
        lo, hi = float(bracket[0]), float(bracket[1])

    if lower_limit is not None:
        lo = max(lo, lower_limit)
    if upper_limit is not None:
        hi = min(hi, upper_limit)

    lo, hi, glo, ghi, n_exp = expand_bracket(
        g,
        lo,
        hi,
        factor=cfg.expand_factor,
        max_expand=cfg.max_expand,
        lower_limit=lower_limit,
        upper_limit=upper_limit,
        name=name,
    )

    if glo == 0.0:
        return RootResult(root=lo, residual=0.0, iterations=0, function_calls=0, expansions=n_exp, bracket=(lo, hi))
    if ghi == 0.0:
        return RootResult(root=hi, residual=0.0, iterations=0, function_calls=0, expansions=n_exp, bracket=(lo, hi))

    x, r = brentq(
        _checked(g, name),
        lo,
        hi,
        xtol=cfg.xtol,
        rtol=cfg.rtol,
        maxiter=cfg.max_iter,
        full_output=True,
        disp=False,
    )
    if not r.converged:
        raise ConvergenceError(
            f"{name}: Brent did not converge in {r.iterations} iterations "
            f"(bracket [{lo:.6g}, {hi:.6g}], flag={r.flag!r})",
            bracket=(lo, hi),
            iterations=r.iterations,
            expansions=n_exp,
        )

    logger.debug(
        "%s: root=%.10g in %d iterations (%d calls, %d expansions)",
        name, x, r.iterations, r.function_calls, n_exp,
    )
    return RootResult(
        root=float(x),
        residual=float(g(x)),
        iterations=int(r.iterations),
        function_calls=int(r.function_calls),
        expansions=n_exp,
        bracket=(lo, hi),
    )
