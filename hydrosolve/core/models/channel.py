from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple

from hydrosolve.core.models.geometry import ChannelGeometry, CircularSection, TrapezoidSection


ChannelSolveMode = Literal["flow", "slope", "depth", "width"]
FlowClass = Literal["subcritical", "critical", "supercritical"]


@dataclass(frozen=True, slots=True)
class ChannelFlowInput:
    """
    Canal trapezoidal (Manning). Rectangular: side_slope=0. Triangular: bottom_width=0.

    Exactly one of flow / slope / depth / bottom_width is None.
    nu is optional (only used for the Reynolds check); default from water at the
    configured temperature.
    """
    flow: Optional[Any] = None          # Q
    slope: Optional[Any] = None         # Sf [-]
    depth: Optional[Any] = None         # y
    bottom_width: Optional[Any] = None  # b

    n: Optional[Any] = None             # Manning n
    side_slope: Optional[Any] = 0.0     # m (H:V)
    nu: Optional[Any] = None

    units: str = "SI"
    return_typed: bool = False

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "ChannelFlowInput":
        m = d.get("side_slope", d.get("m"))
        return ChannelFlowInput(
            flow=d.get("flow", d.get("Q", d.get("q"))),
            slope=d.get("slope", d.get("Sf", d.get("S"))),
            depth=d.get("depth", d.get("y")),
            bottom_width=d.get("bottom_width", d.get("b")),
            n=d.get("n", d.get("manning_n")),
            side_slope=0.0 if m is None else m,
            nu=d.get("nu", d.get("kinematic_viscosity")),
            units=str(d.get("units", "SI")),
            return_typed=bool(d.get("return_typed", d.get("ret_units", False))),
        )


@dataclass(frozen=True, slots=True)
class CircularChannelInput:
    """Partially full circular conduit (Manning). The diameter is always known."""
    flow: Optional[Any] = None
    slope: Optional[Any] = None
    depth: Optional[Any] = None

    n: Optional[Any] = None
    diameter: Optional[Any] = None
    nu: Optional[Any] = None

    units: str = "SI"
    return_typed: bool = False

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "CircularChannelInput":
        return CircularChannelInput(
            flow=d.get("flow", d.get("Q", d.get("q"))),
            slope=d.get("slope", d.get("Sf", d.get("S"))),
            depth=d.get("depth", d.get("y")),
            n=d.get("n", d.get("manning_n")),
            diameter=d.get("diameter", d.get("d", d.get("D"))),
            nu=d.get("nu", d.get("kinematic_viscosity")),
            units=str(d.get("units", "SI")),
            return_typed=bool(d.get("return_typed", d.get("ret_units", False))),
        )


@dataclass(frozen=True, slots=True)
class ChannelFlowState:
    """
    Solved channel state.

    Notes:
    - critical_depth is always computed
    - optimal_depth / optimal_width only when depth or width was the unknown
      (trapezoidal family); otherwise None
    """
    geometry: ChannelGeometry
    flow: Any
    n: Any
    slope: Any
    depth: Any

    area: Any
    wetted_perimeter: Any
    hydraulic_radius: Any
    top_width: Any
    velocity: Any

    froude: Any
    flow_class: FlowClass
    reynolds: Any
    nu: Any

    critical_depth: Any
    critical_slope: Any
    specific_energy: Any

    optimal_depth: Optional[Any]
    optimal_width: Optional[Any]

    units: str
    solved_for: ChannelSolveMode
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def bottom_width(self) -> Optional[float]:
        return self.geometry.b if isinstance(self.geometry, TrapezoidSection) else None

    @property
    def side_slope(self) -> Optional[float]:
        return self.geometry.m if isinstance(self.geometry, TrapezoidSection) else None

    @property
    def diameter(self) -> Optional[float]:
        return self.geometry.d if isinstance(self.geometry, CircularSection) else None

    @property
    def hydraulic_depth(self) -> Any:
        return self.area / self.top_width

    def to_dict(self) -> Dict[str, Any]:
        return {
            "solver": "manning",
            "section": self.geometry.kind,
            "units": self.units,
            "solved_for": self.solved_for,
            "Q": self.flow,
            "n": self.n,
            "Sf": self.slope,
            "y": self.depth,
            "b": self.bottom_width,
            "m": self.side_slope,
            "d": self.diameter,
            "A": self.area,
            "P": self.wetted_perimeter,
            "R": self.hydraulic_radius,
            "B": self.top_width,
            "V": self.velocity,
            "Fr": self.froude,
            "flow_class": self.flow_class,
            "Re": self.reynolds,
            "yc": self.critical_depth,
            "Sc": self.critical_slope,
            "E": self.specific_energy,
            "yopt": self.optimal_depth,
            "bopt": self.optimal_width,
            "warnings": "; ".join(self.warnings),
        }
