# hydrosolve/core/hydraulics/hazen_williams.py
"""
Hazen-Williams pipe relation (dimensional, water only).

    V = k C R^0.63 S^0.54,   R = D/4,  S = hf/L
    k = 0.849 (SI) | 1.318 (Eng)

All three unknowns (Q, D, S) are closed form.
"""
from __future__ import annotations

import math

#: Exponent on S
ES_HW = 0.54

#: Exponent on R
ER_HW = 0.63


def _section_factor(D: float) -> float:
    # A R^0.63 for a full circular pipe
    return (math.pi * D ** 2 / 4.0) * (D / 4.0) ** ER_HW


def hw_flow(*, D: float, S: float, C: float, k: float) -> float:
    return k * C * _section_factor(D) * S ** ES_HW


def hw_slope(*, Q: float, D: float, C: float, k: float) -> float:
    return (Q / (k * C * _section_factor(D))) ** (1.0 / ES_HW)


def hw_diameter(*, Q: float, S: float, C: float, k: float) -> float:
    # A R^0.63 = (pi/4) 4^-0.63 D^(2.63)
    coef = k * C * (math.pi / 4.0) * 4.0 ** (-ER_HW) * S ** ES_HW
    return (Q / coef) ** (1.0 / (2.0 + ER_HW))
