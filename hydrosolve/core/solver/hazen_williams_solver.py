# hydrosolve/core/solver/hazen_williams_solver.py
from __future__ import annotations

from typing import Optional
import logging

from hydrosolve.core.build.config import DEFAULT_CONFIG, SolverConfig
from hydrosolve.core.build.validate import issue_labels, raise_on_errors, validate_hazen_williams_input
from hydrosolve.core.hydraulics.friction import pipe_area, reynolds, velocity_from_q
from hydrosolve.core.hydraulics.hazen_williams import hw_diameter, hw_flow, hw_slope
from hydrosolve.core.hydraulics.regime import pipe_regime_warnings
from hydrosolve.core.models.pipe import HazenWilliamsInput, HazenWilliamsState, PipeSolveMode
from hydrosolve.core.models.units import unit_system
from hydrosolve.core.postprocess.typed import magnitude_in, tag_hazen_williams_state


logger = logging.getLogger(__name__)


def _mode(inp: HazenWilliamsInput) -> PipeSolveMode:
    if inp.flow is None:
        return "flow"
    if inp.diameter is None:
        return "diameter"
    return "headloss"


def solve_hazen_williams(inp: HazenWilliamsInput, *, cfg: Optional[SolverConfig] = None) -> HazenWilliamsState:
    """
    Hazen-Williams: Q, D o hf en forma cerrada.
    Re (and the turbulence label) only when nu is given.
    """
    cfg = cfg or DEFAULT_CONFIG

    issues = validate_hazen_williams_input(inp)
    raise_on_errors(issues)
    labels = issue_labels(issues)

    us = unit_system(inp.units)
    Q = magnitude_in(inp.flow, "flow", us)
    D = magnitude_in(inp.diameter, "length", us)
    hf = magnitude_in(inp.headloss, "length", us)
    L = magnitude_in(inp.length, "length", us)
    C = magnitude_in(inp.c_factor, "dimensionless", us)
    nu = magnitude_in(inp.nu, "viscosity", us)
    k = us.hazen_williams_k

    mode = _mode(inp)
    logger.debug("hazen_williams: solving for %s (units=%s)", mode, us.name)

    if mode == "flow":
        S = hf / L
        Q = hw_flow(D=D, S=S, C=C, k=k)
    elif mode == "diameter":
        S = hf / L
        D = hw_diameter(Q=Q, S=S, C=C, k=k)
    else:
        S = hw_slope(Q=Q, D=D, C=C, k=k)
        hf = S * L

    V = velocity_from_q(q=Q, area=pipe_area(D))
    Re = reynolds(V=V, D=D, nu=nu) if nu is not None else None
    labels.extend(pipe_regime_warnings(Re, cfg.regime, model="Hazen-Williams"))

    state = HazenWilliamsState(
        flow=Q,
        diameter=D,
        length=L,
        c_factor=C,
        headloss=hf,
        slope=S,
        velocity=V,
        reynolds=Re,
        units=us.name,
        solved_for=mode,
        warnings=tuple(labels),
    )
    return tag_hazen_williams_state(state) if inp.return_typed else state
