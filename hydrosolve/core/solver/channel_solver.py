# hydrosolve/core/solver/channel_solver.py
from __future__ import annotations

from typing import List, Optional
import logging
import math

from hydrosolve.core.build.config import DEFAULT_CONFIG, SolverConfig
from hydrosolve.core.build.validate import (
    issue_labels,
    raise_on_errors,
    validate_channel_input,
    validate_circular_input,
)
from hydrosolve.core.hydraulics.critical import critical_depth, froude
from hydrosolve.core.hydraulics.manning import (
    manning_flow,
    manning_length_scale,
    manning_slope,
    optimal_trapezoid,
    specific_energy,
)
from hydrosolve.core.hydraulics.regime import channel_regime_warnings, classify_froude
from hydrosolve.core.hydraulics.water import kvisc
from hydrosolve.core.models.channel import (
    ChannelFlowInput,
    ChannelFlowState,
    ChannelSolveMode,
    CircularChannelInput,
)
from hydrosolve.core.models.errors import ConvergenceError
from hydrosolve.core.models.geometry import ChannelGeometry, CircularSection, TrapezoidSection
from hydrosolve.core.models.units import UnitSystem, unit_system
from hydrosolve.core.numerics.root_finder import find_root
from hydrosolve.core.postprocess.typed import magnitude_in, tag_channel_state


logger = logging.getLogger(__name__)


def channel_solve_mode(inp: ChannelFlowInput | CircularChannelInput) -> ChannelSolveMode:
    """Which field is the unknown. Assumes exactly one of the group is None."""
    if inp.flow is None:
        return "flow"
    if inp.slope is None:
        return "slope"
    if inp.depth is None:
        return "depth"
    return "width"


# ============================================================
# Trapezoidal family
# ============================================================

def solve_channel_flow(inp: ChannelFlowInput, *, cfg: Optional[SolverConfig] = None) -> ChannelFlowState:
    """
    Manning en canal trapezoidal / rectangular / triangular.

    - flow, slope: closed form.
    - depth: Brent on y in (0, ~2 Lc], Lc = (Q n / (C sqrt(Sf)))^(3/8), auto-expanded.
    - width: Brent on b in [0, upper], auto-expanded upward.

    yc is always computed; yopt / bopt only when depth or width was the unknown.
    """
    cfg = cfg or DEFAULT_CONFIG

    issues = validate_channel_input(inp)
    raise_on_errors(issues)
    labels = issue_labels(issues)

    us = unit_system(inp.units)
    Q = magnitude_in(inp.flow, "flow", us)
    Sf = magnitude_in(inp.slope, "dimensionless", us)
    y = magnitude_in(inp.depth, "length", us)
    b = magnitude_in(inp.bottom_width, "length", us)
    m = magnitude_in(inp.side_slope, "dimensionless", us)
    n = magnitude_in(inp.n, "dimensionless", us)
    C = us.manning_c

    mode = channel_solve_mode(inp)
    logger.debug("manning_trapezoid: solving for %s (units=%s)", mode, us.name)

    if mode == "flow":
        Q = manning_flow(TrapezoidSection(b=b, m=m), y, n=n, slope=Sf, C=C)

    elif mode == "slope":
        Sf = manning_slope(TrapezoidSection(b=b, m=m), y, n=n, Q=Q, C=C)

    elif mode == "depth":
        section = TrapezoidSection(b=b, m=m)
        Lc = manning_length_scale(Q=Q, n=n, slope=Sf, C=C)
        res = find_root(
            lambda yy: manning_flow(section, yy, n=n, slope=Sf, C=C) - Q,
            bracket=(1e-4 * Lc, 2.0 * Lc),
            lower_limit=1e-12 * Lc,
            cfg=cfg.root,
            name="manning:depth",
        )
        y = res.root

    else:
        q_min = manning_flow(TrapezoidSection(b=0.0, m=m), y, n=n, slope=Sf, C=C)
        if q_min > Q:
            raise ConvergenceError(
                f"manning:width: Q={Q:.6g} is below the flow {q_min:.6g} carried at b=0 "
                f"(m={m:g}, y={y:g}); no bottom width >= 0 gives this flow",
                bracket=(0.0, 0.0),
            )
        Lc = manning_length_scale(Q=Q, n=n, slope=Sf, C=C)
        res = find_root(
            lambda bb: manning_flow(TrapezoidSection(b=bb, m=m), y, n=n, slope=Sf, C=C) - Q,
            bracket=(0.0, max(2.0 * Lc, 10.0 * y)),
            lower_limit=0.0,
            cfg=cfg.root,
            name="manning:width",
        )
        b = res.root

    section = TrapezoidSection(b=b, m=m)

    yopt = bopt = None
    if mode in ("depth", "width"):
        yopt, bopt = optimal_trapezoid(Q=Q, n=n, slope=Sf, m=m, C=C)

    return _finish(
        section,
        Q=Q, n=n, Sf=Sf, y=y,
        nu=magnitude_in(inp.nu, "viscosity", us),
        us=us, mode=mode, cfg=cfg, labels=labels,
        yopt=yopt, bopt=bopt,
        return_typed=inp.return_typed,
    )


# ============================================================
# Circular, partially full
# ============================================================

def depth_of_max_capacity(section: CircularSection, cfg: Optional[SolverConfig] = None) -> float:
    """
    Depth (~0.938 d) at which Manning capacity A R^(2/3) peaks.

    d/dtheta [(theta - sin theta)^(5/3) / theta^(2/3)] = 0
      <=>  5 theta (1 - cos theta) = 2 (theta - sin theta),  theta in (pi, 2 pi)
    """
    cfg = cfg or DEFAULT_CONFIG
    res = find_root(
        lambda th: 5.0 * th * (1.0 - math.cos(th)) - 2.0 * (th - math.sin(th)),
        bracket=(math.pi, 2.0 * math.pi),
        lower_limit=math.pi,
        upper_limit=2.0 * math.pi,
        cfg=cfg.root,
        name="manning:circular_capacity",
    )
    return 0.5 * section.d * (1.0 - math.cos(0.5 * res.root))


def solve_circular_flow(inp: CircularChannelInput, *, cfg: Optional[SolverConfig] = None) -> ChannelFlowState:
    """
    Manning en conducto circular parcialmente lleno (d siempre conocido).

    The depth solve is bounded by (0, y_Qmax) so the returned depth is the
    lower (normal) root; a flow above the peak capacity raises ConvergenceError.
    """
    cfg = cfg or DEFAULT_CONFIG

    issues = validate_circular_input(inp)
    raise_on_errors(issues)
    labels = issue_labels(issues)

    us = unit_system(inp.units)
    Q = magnitude_in(inp.flow, "flow", us)
    Sf = magnitude_in(inp.slope, "dimensionless", us)
    y = magnitude_in(inp.depth, "length", us)
    d = magnitude_in(inp.diameter, "length", us)
    n = magnitude_in(inp.n, "dimensionless", us)
    C = us.manning_c

    section = CircularSection(d=d)
    mode = channel_solve_mode(inp)
    logger.debug("manning_circular: solving for %s (units=%s)", mode, us.name)

    if mode == "flow":
        Q = manning_flow(section, y, n=n, slope=Sf, C=C)

    elif mode == "slope":
        Sf = manning_slope(section, y, n=n, Q=Q, C=C)

    else:
        y_qmax = depth_of_max_capacity(section, cfg)
        q_max = manning_flow(section, y_qmax, n=n, slope=Sf, C=C)
        if Q > q_max:
            raise ConvergenceError(
                f"manning:circular_depth: Q={Q:.6g} exceeds the conduit capacity "
                f"{q_max:.6g} (at y={y_qmax:.6g}, d={d:g})",
                bracket=(0.0, y_qmax),
            )
        lo = 1e-9 * d
        res = find_root(
            lambda yy: manning_flow(section, yy, n=n, slope=Sf, C=C) - Q,
            bracket=(lo, y_qmax),
            lower_limit=lo,
            upper_limit=y_qmax,
            cfg=cfg.root,
            name="manning:circular_depth",
        )
        y = res.root

    return _finish(
        section,
        Q=Q, n=n, Sf=Sf, y=y,
        nu=magnitude_in(inp.nu, "viscosity", us),
        us=us, mode=mode, cfg=cfg, labels=labels,
        yopt=None, bopt=None,
        return_typed=inp.return_typed,
    )


# ============================================================
# Estado final (común)
# ============================================================

def _finish(
    section: ChannelGeometry,
    *,
    Q: float,
    n: float,
    Sf: float,
    y: float,
    nu: Optional[float],
    us: UnitSystem,
    mode: ChannelSolveMode,
    cfg: SolverConfig,
    labels: List[str],
    yopt: Optional[float],
    bopt: Optional[float],
    return_typed: bool,
) -> ChannelFlowState:
    g = us.g
    A = section.area(y)
    P = section.wetted_perimeter(y)
    R = A / P
    B = section.top_width(y)
    V = Q / A

    if nu is None:
        nu = kvisc(cfg.fluid.default_temperature(us.name), us.name)
    Re = V * 4.0 * R / nu

    Fr = froude(section, y, Q=Q, g=g)
    yc = critical_depth(section, Q=Q, g=g, cfg=cfg.root)

    labels = labels + channel_regime_warnings(Re, Fr, cfg.regime)

    state = ChannelFlowState(
        geometry=section,
        flow=Q,
        n=n,
        slope=Sf,
        depth=y,
        area=A,
        wetted_perimeter=P,
        hydraulic_radius=R,
        top_width=B,
        velocity=V,
        froude=Fr,
        flow_class=classify_froude(Fr, tol=cfg.regime.froude_critical_tol),
        reynolds=Re,
        nu=nu,
        critical_depth=yc,
        critical_slope=manning_slope(section, yc, n=n, Q=Q, C=us.manning_c),
        specific_energy=specific_energy(y=y, V=V, g=g),
        optimal_depth=yopt,
        optimal_width=bopt,
        units=us.name,
        solved_for=mode,
        warnings=tuple(labels),
    )
    return tag_channel_state(state) if return_typed else state
