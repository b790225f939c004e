from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple
import math


PipeSolveMode = Literal["flow", "diameter", "headloss"]


@dataclass(frozen=True, slots=True)
class PipeFlowInput:
    """
    Darcy-Weisbach pipe problem (core model).

    Notes:
    - exactly one of flow / diameter / headloss is None (the unknown)
    - length, roughness and nu are required knowns
    - values may be floats or pint quantities (converted to `units` before solving)
    - friction factor and Reynolds number are outputs only
    """
    flow: Optional[Any] = None          # Q [m3/s | ft3/s]
    diameter: Optional[Any] = None      # D [m | ft]
    headloss: Optional[Any] = None      # hf [m | ft]

    length: Optional[Any] = None        # L [m | ft]
    roughness: Optional[Any] = None     # ks [m | ft] rugosidad absoluta
    nu: Optional[Any] = None            # kinematic viscosity [m2/s | ft2/s]

    units: str = "SI"
    return_typed: bool = False

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "PipeFlowInput":
        return PipeFlowInput(
            flow=d.get("flow", d.get("Q", d.get("q"))),
            diameter=d.get("diameter", d.get("D")),
            headloss=d.get("headloss", d.get("hf")),
            length=d.get("length", d.get("L")),
            roughness=d.get("roughness", d.get("ks")),
            nu=d.get("nu", d.get("kinematic_viscosity")),
            units=str(d.get("units", "SI")),
            return_typed=bool(d.get("return_typed", d.get("ret_units", False))),
        )


@dataclass(frozen=True, slots=True)
class PipeFlowState:
    """Solved pipe state. Numeric fields become pint quantities when typed."""
    flow: Any
    diameter: Any
    length: Any
    roughness: Any
    nu: Any
    headloss: Any
    friction_factor: Any
    reynolds: Any
    velocity: Any

    units: str
    solved_for: PipeSolveMode
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def area(self) -> Any:
        return math.pi * (self.diameter ** 2) / 4.0

    @property
    def relative_roughness(self) -> Any:
        return self.roughness / self.diameter

    def to_dict(self) -> Dict[str, Any]:
        return {
            "solver": "darcy_weisbach",
            "units": self.units,
            "solved_for": self.solved_for,
            "Q": self.flow,
            "D": self.diameter,
            "L": self.length,
            "ks": self.roughness,
            "nu": self.nu,
            "hf": self.headloss,
            "f": self.friction_factor,
            "Re": self.reynolds,
            "V": self.velocity,
            "warnings": "; ".join(self.warnings),
        }


@dataclass(frozen=True, slots=True)
class HazenWilliamsInput:
    """
    Hazen-Williams pipe problem: one unknown among flow / diameter / headloss.
    nu is optional and only used to report Re (and the turbulence check).
    """
    flow: Optional[Any] = None
    diameter: Optional[Any] = None
    headloss: Optional[Any] = None

    length: Optional[Any] = None
    c_factor: Optional[Any] = None      # C de Hazen-Williams
    nu: Optional[Any] = None

    units: str = "SI"
    return_typed: bool = False

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "HazenWilliamsInput":
        return HazenWilliamsInput(
            flow=d.get("flow", d.get("Q", d.get("q"))),
            diameter=d.get("diameter", d.get("D")),
            headloss=d.get("headloss", d.get("hf")),
            length=d.get("length", d.get("L")),
            c_factor=d.get("c_factor", d.get("C", d.get("Cf"))),
            nu=d.get("nu", d.get("kinematic_viscosity")),
            units=str(d.get("units", "SI")),
            return_typed=bool(d.get("return_typed", d.get("ret_units", False))),
        )


@dataclass(frozen=True, slots=True)
class HazenWilliamsState:
    flow: Any
    diameter: Any
    length: Any
    c_factor: Any
    headloss: Any
    slope: Any                          # S = hf / L
    velocity: Any
    reynolds: Optional[Any]

    units: str
    solved_for: PipeSolveMode
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "solver": "hazen_williams",
            "units": self.units,
            "solved_for": self.solved_for,
            "Q": self.flow,
            "D": self.diameter,
            "L": self.length,
            "C": self.c_factor,
            "hf": self.headloss,
            "S": self.slope,
            "V": self.velocity,
            "Re": self.reynolds,
            "warnings": "; ".join(self.warnings),
        }
