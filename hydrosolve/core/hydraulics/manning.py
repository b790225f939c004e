# hydrosolve/core/hydraulics/manning.py
from __future__ import annotations

from typing import Tuple
import math

import numpy as np

from hydrosolve.core.models.geometry import ChannelGeometry, hydraulic_radius


def manning_flow(section: ChannelGeometry, y: float, *, n: float, slope: float, C: float) -> float:
    """Q = (C/n) A R^(2/3) Sf^(1/2)"""
    A = section.area(y)
    R = hydraulic_radius(section, y)
    return (C / n) * A * R ** (2.0 / 3.0) * math.sqrt(slope)


def manning_slope(section: ChannelGeometry, y: float, *, n: float, Q: float, C: float) -> float:
    """Sf = (Q n / (C A R^(2/3)))^2"""
    A = section.area(y)
    R = hydraulic_radius(section, y)
    return (Q * n / (C * A * R ** (2.0 / 3.0))) ** 2


def manning_length_scale(*, Q: float, n: float, slope: float, C: float) -> float:
    """
    (Q n / (C sqrt(Sf)))^(3/8): the length whose A R^(2/3) matches the flow.
    Used to size depth / width brackets.
    """
    return (Q * n / (C * math.sqrt(slope))) ** 0.375


def optimal_trapezoid(*, Q: float, n: float, slope: float, m: float, C: float) -> Tuple[float, float]:
    """
    Sección hidráulicamente óptima para talud m (máximo R para Q, n, Sf dados):
      yopt = 2^(1/4) (Q n / (C (2 sqrt(1+m^2) - m) sqrt(Sf)))^(3/8)
      bopt = 2 yopt (sqrt(1+m^2) - m)
    """
    k = math.sqrt(1.0 + m ** 2)
    yopt = 2.0 ** 0.25 * (Q * n / (C * (2.0 * k - m) * math.sqrt(slope))) ** 0.375
    bopt = 2.0 * yopt * (k - m)
    return yopt, bopt


def specific_energy(*, y: float, V: float, g: float) -> float:
    return y + V ** 2 / (2.0 * g)


def specific_energy_curve(
    section: ChannelGeometry,
    *,
    Q: float,
    g: float,
    y_max: float,
    npts: int = 200,
) -> Tuple[np.ndarray, np.ndarray]:
    """E(y) = y + Q^2 / (2 g A(y)^2) sampled on (0, y_max]."""
    y = np.linspace(y_max / npts, y_max, npts)
    A = np.array([section.area(float(yi)) for yi in y], dtype=float)
    E = y + Q ** 2 / (2.0 * g * A ** 2)
    return y, E
