# hydrosolve/core/hydraulics/friction.py
from __future__ import annotations

from typing import Optional
import math

from hydrosolve.core.build.config import RootFinderConfig
from hydrosolve.core.models.errors import InputError
from hydrosolve.core.numerics.root_finder import find_root


# Intervalo inicial: cubre los f físicamente realistas. Se expande si hace falta
# (tubos muy lisos a Re muy alto quedan bajo 0.008; Re bajo da f nominal > 0.1).
COLEBROOK_BRACKET = (0.008, 0.1)
COLEBROOK_LIMITS = (1e-5, 1e3)


def colebrook_residual(f: float, *, Re: float, eps_over_D: float) -> float:
    """
    residual(f) = 1/sqrt(f) + 2 log10( eps/(3.7D) + 2.51/(Re sqrt(f)) )
    Zero at the Colebrook friction factor; decreasing in f.
    """
    sf = math.sqrt(f)
    return 1.0 / sf + 2.0 * math.log10(eps_over_D / 3.7 + 2.51 / (Re * sf))


def colebrook_f(*, Re: float, eps_over_D: float, cfg: Optional[RootFinderConfig] = None) -> float:
    """
    Factor de fricción Darcy por Colebrook (implícito), resuelto con Brent.

    Re below the turbulent threshold still yields a nominal value; attaching the
    regime warning is the caller's job.
    """
    if not (Re > 0) or not math.isfinite(Re):
        raise InputError(f"Colebrook: Re must be > 0 (got {Re!r})")
    if not (eps_over_D >= 0) or not math.isfinite(eps_over_D):
        raise InputError(f"Colebrook: relative roughness ks/D must be >= 0 (got {eps_over_D!r})")

    res = find_root(
        lambda f: colebrook_residual(f, Re=Re, eps_over_D=eps_over_D),
        bracket=COLEBROOK_BRACKET,
        lower_limit=COLEBROOK_LIMITS[0],
        upper_limit=COLEBROOK_LIMITS[1],
        cfg=cfg,
        name="colebrook",
    )
    return res.root


def swamee_jain_f(*, eps_over_D: float, Re: float) -> float:
    """
    Swamee–Jain (turbulento), explicit approximation of Colebrook (~1% error).
    f = 0.25 / [log10( eps/(3.7D) + 5.74/Re^0.9 )]^2
    """
    if Re <= 0:
        return float("nan")
    term = (eps_over_D / 3.7) + (5.74 / (Re ** 0.9))
    return 0.25 / (math.log10(term) ** 2)


def velocity_from_q(*, q: float, area: float) -> float:
    return (q / area) if area > 0 else float("nan")


def reynolds(*, V: float, D: float, nu: float) -> float:
    return (V * D / nu) if (D > 0 and nu > 0) else float("nan")


def rr_eps_over_D(*, eps: float, D: float) -> float:
    return (eps / D) if D > 0 else float("nan")


def pipe_area(D: float) -> float:
    return math.pi * D ** 2 / 4.0


def friction_factor(
    *,
    ks: float,
    V: float,
    D: float,
    nu: float,
    cfg: Optional[RootFinderConfig] = None,
) -> float:
    """Colebrook f from pipe velocity, diameter, roughness and viscosity."""
    if D <= 0 or nu <= 0 or V <= 0:
        raise InputError(f"friction_factor: V, D and nu must be > 0 (V={V!r}, D={D!r}, nu={nu!r})")
    return colebrook_f(
        Re=reynolds(V=V, D=D, nu=nu),
        eps_over_D=rr_eps_over_D(eps=ks, D=D),
        cfg=cfg,
    )
