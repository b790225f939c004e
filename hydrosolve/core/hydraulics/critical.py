# hydrosolve/core/hydraulics/critical.py
from __future__ import annotations

from typing import Optional
import math

from hydrosolve.core.build.config import RootFinderConfig
from hydrosolve.core.models.errors import InputError
from hydrosolve.core.models.geometry import ChannelGeometry, CircularSection, hydraulic_depth
from hydrosolve.core.numerics.root_finder import find_root


def froude(section: ChannelGeometry, y: float, *, Q: float, g: float) -> float:
    """Fr = V / sqrt(g D_h), D_h = A / B."""
    V = Q / section.area(y)
    return V / math.sqrt(g * hydraulic_depth(section, y))


def critical_residual(section: ChannelGeometry, y: float, *, Q: float, g: float) -> float:
    """Q^2 B / (g A^3) - 1  (= Fr^2 - 1)"""
    A = section.area(y)
    return Q ** 2 * section.top_width(y) / (g * A ** 3) - 1.0


def critical_depth(
    section: ChannelGeometry,
    *,
    Q: float,
    g: float,
    cfg: Optional[RootFinderConfig] = None,
) -> float:
    """
    Tirante crítico yc: Fr(yc) = 1.

    Bracket from the characteristic length (Q^2/g)^(1/5), auto-expanded.
    Circular sections are bounded by (0, d): B -> 0 at the crown so a root
    always exists below it.
    """
    if not (Q > 0):
        raise InputError(f"critical depth: Q must be > 0 (got {Q!r})")

    def g_res(y: float) -> float:
        return critical_residual(section, y, Q=Q, g=g)

    if isinstance(section, CircularSection):
        lo, hi = section.d * 1e-6, section.d * (1.0 - 1e-9)
        res = find_root(g_res, bracket=(lo, hi), lower_limit=lo, upper_limit=hi, cfg=cfg, name="critical_depth")
        return res.root

    Lc = (Q ** 2 / g) ** 0.2
    res = find_root(
        g_res,
        bracket=(1e-3 * Lc, 2.0 * Lc),
        lower_limit=1e-12 * Lc,
        cfg=cfg,
        name="critical_depth",
    )
    return res.root
