from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from hydrosolve.core.models.channel import ChannelFlowInput, CircularChannelInput
from hydrosolve.core.models.errors import InputError
from hydrosolve.core.models.pipe import HazenWilliamsInput, PipeFlowInput
from hydrosolve.core.models.units import SI, UnitSystem, unit_system
from hydrosolve.core.postprocess.typed import QuantityKind, magnitude_in


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationIssue:
    level: str              # "error" | "warning"
    message: str
    hint: Optional[str] = None


class InputValidationError(InputError):
    """Raised when validation finds one or more errors."""
    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        lines = ["Input validation failed with errors:"]
        for it in issues:
            if it.level == "error":
                lines.append(f"- {it.message}" + (f" | hint: {it.hint}" if it.hint else ""))
        super().__init__("\n".join(lines))


# ============================================================
# Helpers
# ============================================================

def _units(units: Any, issues: List[ValidationIssue]) -> UnitSystem:
    try:
        return unit_system(units)
    except InputError as e:
        issues.append(ValidationIssue("error", str(e), "Use units='SI' or units='Eng'."))
        # seguimos validando el resto con SI
        return SI


def _unknown_group(
    group: Dict[str, Any],
    issues: List[ValidationIssue],
    *,
    solver: str,
) -> List[str]:
    """Exactly one member of the group must be None (the unknown)."""
    missing = [name for name, v in group.items() if v is None]
    if len(missing) != 1:
        issues.append(ValidationIssue(
            "error",
            f"{solver}: exactly one of {sorted(group)} must be unknown (None); "
            f"got {len(missing)} unknown: {missing}",
            "Leave exactly one of these fields as None.",
        ))
    return missing


def _number(
    name: str,
    value: Any,
    kind: QuantityKind,
    us: UnitSystem,
    issues: List[ValidationIssue],
    *,
    required: bool = True,
    allow_zero: bool = False,
) -> Optional[float]:
    if value is None:
        if required:
            issues.append(ValidationIssue("error", f"{name} is required (got None)."))
        return None
    try:
        v = magnitude_in(value, kind, us, field=name)
    except InputError as e:
        issues.append(ValidationIssue("error", str(e)))
        return None

    ok = (v >= 0) if allow_zero else (v > 0)
    if not ok or v != v or v == float("inf"):
        bound = ">= 0" if allow_zero else "> 0"
        issues.append(ValidationIssue("error", f"{name} must be {bound} and finite (got {v!r})."))
        return None
    return v


# ============================================================
# Pipes
# ============================================================

def validate_pipe_input(inp: PipeFlowInput) -> List[ValidationIssue]:
    """
    Validate a Darcy-Weisbach input record.
    Returns a list of issues (errors and warnings). If errors exist, caller may raise.
    """
    issues: List[ValidationIssue] = []
    us = _units(inp.units, issues)

    _unknown_group(
        {"flow": inp.flow, "diameter": inp.diameter, "headloss": inp.headloss},
        issues,
        solver="darcy_weisbach",
    )

    _number("flow", inp.flow, "flow", us, issues, required=False)
    D = _number("diameter", inp.diameter, "length", us, issues, required=False)
    _number("headloss", inp.headloss, "length", us, issues, required=False)

    _number("length", inp.length, "length", us, issues)
    ks = _number("roughness", inp.roughness, "length", us, issues)
    _number("nu", inp.nu, "viscosity", us, issues)

    if ks is not None and D is not None and ks / D > 0.05:
        issues.append(ValidationIssue(
            "warning",
            f"Relative roughness ks/D={ks / D:.4g} is beyond the usual Moody range (<= 0.05).",
            "Check that roughness and diameter use the same length unit.",
        ))
    return issues


def validate_hazen_williams_input(inp: HazenWilliamsInput) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    us = _units(inp.units, issues)

    _unknown_group(
        {"flow": inp.flow, "diameter": inp.diameter, "headloss": inp.headloss},
        issues,
        solver="hazen_williams",
    )

    _number("flow", inp.flow, "flow", us, issues, required=False)
    _number("diameter", inp.diameter, "length", us, issues, required=False)
    _number("headloss", inp.headloss, "length", us, issues, required=False)
    _number("length", inp.length, "length", us, issues)
    C = _number("c_factor", inp.c_factor, "dimensionless", us, issues)
    _number("nu", inp.nu, "viscosity", us, issues, required=False)

    if C is not None and not (40.0 <= C <= 160.0):
        issues.append(ValidationIssue(
            "warning",
            f"Hazen-Williams C={C:g} seems unusual.",
            "C is typically ~60-150 depending on material and age.",
        ))
    return issues


# ============================================================
# Channels
# ============================================================

def _check_manning_n(n: Optional[float], issues: List[ValidationIssue]) -> None:
    if n is not None and not (0.008 <= n <= 0.2):
        issues.append(ValidationIssue(
            "warning",
            f"Manning n={n:g} seems unusual.",
            "Manning n is typically ~0.01-0.15 (varies with lining/vegetation).",
        ))


def validate_channel_input(inp: ChannelFlowInput) -> List[ValidationIssue]:
    """Trapezoidal family (rectangular m=0, triangular b=0)."""
    issues: List[ValidationIssue] = []
    us = _units(inp.units, issues)

    _unknown_group(
        {"flow": inp.flow, "slope": inp.slope, "depth": inp.depth, "bottom_width": inp.bottom_width},
        issues,
        solver="manning_trapezoid",
    )

    _number("flow", inp.flow, "flow", us, issues, required=False)
    _number("slope", inp.slope, "dimensionless", us, issues, required=False)
    _number("depth", inp.depth, "length", us, issues, required=False)
    b = _number("bottom_width", inp.bottom_width, "length", us, issues, required=False, allow_zero=True)
    m = _number("side_slope", inp.side_slope, "dimensionless", us, issues, allow_zero=True)
    n = _number("n", inp.n, "dimensionless", us, issues)
    _number("nu", inp.nu, "viscosity", us, issues, required=False)

    if b == 0.0 and m == 0.0:
        issues.append(ValidationIssue(
            "error",
            "bottom_width and side_slope cannot both be 0 (degenerate section).",
            "Rectangular: side_slope=0 with b>0. Triangular: bottom_width=0 with m>0.",
        ))
    _check_manning_n(n, issues)
    return issues


def validate_circular_input(inp: CircularChannelInput) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    us = _units(inp.units, issues)

    _unknown_group(
        {"flow": inp.flow, "slope": inp.slope, "depth": inp.depth},
        issues,
        solver="manning_circular",
    )

    _number("flow", inp.flow, "flow", us, issues, required=False)
    _number("slope", inp.slope, "dimensionless", us, issues, required=False)
    y = _number("depth", inp.depth, "length", us, issues, required=False)
    d = _number("diameter", inp.diameter, "length", us, issues)
    n = _number("n", inp.n, "dimensionless", us, issues)
    _number("nu", inp.nu, "viscosity", us, issues, required=False)

    if y is not None and d is not None and not (y < d):
        issues.append(ValidationIssue(
            "error",
            f"depth must be < diameter for partially full flow (y={y:g}, d={d:g}).",
            "Full-pipe flow belongs to the Darcy-Weisbach solver.",
        ))
    _check_manning_n(n, issues)
    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    errors = [i for i in issues if i.level == "error"]
    if errors:
        raise InputValidationError(errors)


def issue_labels(issues: List[ValidationIssue]) -> List[str]:
    """Warning-level messages, logged and returned as result labels."""
    out: List[str] = []
    for it in issues:
        if it.level == "warning":
            logger.warning("%s", it.message)
            out.append(it.message)
    return out
