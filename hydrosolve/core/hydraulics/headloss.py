# hydrosolve/core/hydraulics/headloss.py
from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class DarcyWeisbach:
    """
    Pérdida de carga por fricción: hf = R * Q * |Q|,
    R = f (L/D) / (2 g A^2)  ->  hf = 8 f L Q^2 / (pi^2 g D^5)
    """
    g: float = 9.81

    def resistance(self, *, f: float, L: float, D: float) -> float:
        """Escalar: R para hf = R * Q * |Q|."""
        if D <= 0 or L < 0:
            raise ValueError(f"Geometría inválida: D={D}, L={L}")
        A = math.pi * D ** 2 / 4.0
        return (float(f) * (L / D)) / (2.0 * self.g * (A ** 2))

    def headloss(self, *, f: float, L: float, D: float, Q: float) -> float:
        return self.resistance(f=f, L=L, D=D) * Q * abs(Q)

    def diameter_for(self, *, f: float, L: float, Q: float, hf: float) -> float:
        """Closed-form D for a fixed f (used as the starting estimate of the D solve)."""
        if hf <= 0:
            raise ValueError(f"hf debe ser > 0 (recibido {hf})")
        return (8.0 * f * L * Q ** 2 / (math.pi ** 2 * self.g * hf)) ** 0.2
