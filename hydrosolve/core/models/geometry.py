# hydrosolve/core/models/geometry.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union
import math


SectionKind = Literal["rectangular", "triangular", "trapezoidal", "circular"]


@dataclass(frozen=True, slots=True)
class TrapezoidSection:
    """
    Prismatic trapezoidal channel (covers rectangular m=0 and triangular b=0).

    Notes:
    - b: bottom width [L], b >= 0
    - m: side slope, horizontal:vertical, m >= 0
    """
    b: float
    m: float

    @property
    def kind(self) -> SectionKind:
        if self.m == 0.0:
            return "rectangular"
        if self.b == 0.0:
            return "triangular"
        return "trapezoidal"

    def area(self, y: float) -> float:
        return (self.b + self.m * y) * y

    def wetted_perimeter(self, y: float) -> float:
        return self.b + 2.0 * y * math.sqrt(1.0 + self.m ** 2)

    def top_width(self, y: float) -> float:
        return self.b + 2.0 * self.m * y


@dataclass(frozen=True, slots=True)
class CircularSection:
    """
    Conducto circular parcialmente lleno.
    Ángulo central theta(y) = 2 acos(1 - 2y/d), 0 < y < d.
    """
    d: float

    @property
    def kind(self) -> SectionKind:
        return "circular"

    def theta(self, y: float) -> float:
        ratio = min(max(y / self.d, 0.0), 1.0)
        return 2.0 * math.acos(1.0 - 2.0 * ratio)

    def area(self, y: float) -> float:
        th = self.theta(y)
        return (th - math.sin(th)) * self.d ** 2 / 8.0

    def wetted_perimeter(self, y: float) -> float:
        return self.d * self.theta(y) / 2.0

    def top_width(self, y: float) -> float:
        return self.d * math.sin(self.theta(y) / 2.0)


ChannelGeometry = Union[TrapezoidSection, CircularSection]


def rectangular(b: float) -> TrapezoidSection:
    return TrapezoidSection(b=float(b), m=0.0)


def triangular(m: float) -> TrapezoidSection:
    return TrapezoidSection(b=0.0, m=float(m))


def trapezoidal(b: float, m: float) -> TrapezoidSection:
    return TrapezoidSection(b=float(b), m=float(m))


def circular(d: float) -> CircularSection:
    return CircularSection(d=float(d))


def hydraulic_radius(section: ChannelGeometry, y: float) -> float:
    P = section.wetted_perimeter(y)
    return section.area(y) / P if P > 0 else 0.0


def hydraulic_depth(section: ChannelGeometry, y: float) -> float:
    B = section.top_width(y)
    return section.area(y) / B if B > 0 else float("inf")
