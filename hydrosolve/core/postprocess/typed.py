# hydrosolve/core/postprocess/typed.py
from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Literal, Optional

import pint

from hydrosolve.core.models.channel import ChannelFlowState
from hydrosolve.core.models.errors import InputError
from hydrosolve.core.models.pipe import HazenWilliamsState, PipeFlowState
from hydrosolve.core.models.units import UnitSystem, unit_system


ureg = pint.UnitRegistry()
Q_ = ureg.Quantity

QuantityKind = Literal["length", "area", "flow", "velocity", "viscosity", "dimensionless"]


def unit_for(kind: QuantityKind, us: UnitSystem) -> str:
    units: Dict[str, str] = {
        "length": us.length_unit,
        "area": us.area_unit,
        "flow": us.flow_unit,
        "velocity": us.velocity_unit,
        "viscosity": us.viscosity_unit,
        "dimensionless": "dimensionless",
    }
    return units[kind]


def magnitude_in(value: Any, kind: QuantityKind, us: UnitSystem, *, field: str = "") -> Optional[float]:
    """
    float magnitude of `value` in the unit system's unit for `kind`.
    Plain numbers are taken as already expressed in that unit; None passes through.
    """
    if value is None:
        return None
    if isinstance(value, pint.Quantity):
        try:
            return float(value.to(unit_for(kind, us)).magnitude)
        except pint.DimensionalityError as e:
            raise InputError(
                f"{field or kind}: {value!r} is not convertible to {unit_for(kind, us)}"
            ) from e
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InputError(f"{field or kind}: not numeric: {value!r}") from e


def _q(x: Optional[float], unit: str) -> Any:
    return None if x is None else Q_(x, unit)


def tag_pipe_state(state: PipeFlowState) -> PipeFlowState:
    us = unit_system(state.units)
    return replace(
        state,
        flow=_q(state.flow, us.flow_unit),
        diameter=_q(state.diameter, us.length_unit),
        length=_q(state.length, us.length_unit),
        roughness=_q(state.roughness, us.length_unit),
        nu=_q(state.nu, us.viscosity_unit),
        headloss=_q(state.headloss, us.length_unit),
        friction_factor=_q(state.friction_factor, "dimensionless"),
        reynolds=_q(state.reynolds, "dimensionless"),
        velocity=_q(state.velocity, us.velocity_unit),
    )


def tag_hazen_williams_state(state: HazenWilliamsState) -> HazenWilliamsState:
    us = unit_system(state.units)
    return replace(
        state,
        flow=_q(state.flow, us.flow_unit),
        diameter=_q(state.diameter, us.length_unit),
        length=_q(state.length, us.length_unit),
        c_factor=_q(state.c_factor, "dimensionless"),
        headloss=_q(state.headloss, us.length_unit),
        slope=_q(state.slope, "dimensionless"),
        velocity=_q(state.velocity, us.velocity_unit),
        reynolds=_q(state.reynolds, "dimensionless"),
    )


def tag_channel_state(state: ChannelFlowState) -> ChannelFlowState:
    us = unit_system(state.units)
    L, A = us.length_unit, us.area_unit
    return replace(
        state,
        flow=_q(state.flow, us.flow_unit),
        slope=_q(state.slope, "dimensionless"),
        depth=_q(state.depth, L),
        area=_q(state.area, A),
        wetted_perimeter=_q(state.wetted_perimeter, L),
        hydraulic_radius=_q(state.hydraulic_radius, L),
        top_width=_q(state.top_width, L),
        velocity=_q(state.velocity, us.velocity_unit),
        froude=_q(state.froude, "dimensionless"),
        reynolds=_q(state.reynolds, "dimensionless"),
        nu=_q(state.nu, us.viscosity_unit),
        critical_depth=_q(state.critical_depth, L),
        critical_slope=_q(state.critical_slope, "dimensionless"),
        specific_energy=_q(state.specific_energy, L),
        optimal_depth=_q(state.optimal_depth, L),
        optimal_width=_q(state.optimal_width, L),
    )
