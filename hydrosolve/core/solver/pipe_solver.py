# hydrosolve/core/solver/pipe_solver.py
from __future__ import annotations

from typing import Optional, Tuple
import logging

from hydrosolve.core.build.config import DEFAULT_CONFIG, SolverConfig
from hydrosolve.core.build.validate import issue_labels, raise_on_errors, validate_pipe_input
from hydrosolve.core.hydraulics.friction import colebrook_f, pipe_area, reynolds, velocity_from_q
from hydrosolve.core.hydraulics.headloss import DarcyWeisbach
from hydrosolve.core.hydraulics.regime import pipe_regime_warnings
from hydrosolve.core.models.pipe import PipeFlowInput, PipeFlowState, PipeSolveMode
from hydrosolve.core.models.units import unit_system
from hydrosolve.core.numerics.root_finder import find_root
from hydrosolve.core.postprocess.typed import magnitude_in, tag_pipe_state


logger = logging.getLogger(__name__)

# f usado solo para estimar D inicial
F_ESTIMATE = 0.02


def pipe_solve_mode(inp: PipeFlowInput) -> PipeSolveMode:
    """Which of Q / D / hf is the unknown. Assumes exactly one is None."""
    if inp.flow is None:
        return "flow"
    if inp.diameter is None:
        return "diameter"
    return "headloss"


def solve_pipe_flow(inp: PipeFlowInput, *, cfg: Optional[SolverConfig] = None) -> PipeFlowState:
    """
    Darcy-Weisbach + Colebrook: resuelve la incógnita (Q, D o hf).

    - headloss: closed form once f is known (Re from Q, D).
    - flow: Brent on Q over [v_min A, v_max A] (auto-expanded); each
      evaluation re-solves Colebrook at the trial Re.
    - diameter: Brent on D around the fixed-f estimate D0, [D0/4, 4 D0].

    Raises InputError (before any root finding) or ConvergenceError.
    """
    cfg = cfg or DEFAULT_CONFIG

    issues = validate_pipe_input(inp)
    raise_on_errors(issues)
    labels = issue_labels(issues)

    us = unit_system(inp.units)
    Q = magnitude_in(inp.flow, "flow", us)
    D = magnitude_in(inp.diameter, "length", us)
    hf = magnitude_in(inp.headloss, "length", us)
    L = magnitude_in(inp.length, "length", us)
    ks = magnitude_in(inp.roughness, "length", us)
    nu = magnitude_in(inp.nu, "viscosity", us)

    dw = DarcyWeisbach(g=us.g)
    mode = pipe_solve_mode(inp)
    logger.debug("darcy_weisbach: solving for %s (units=%s)", mode, us.name)

    def evaluate(q: float, d: float) -> Tuple[float, float, float]:
        # -> (hf, f, Re)
        V = velocity_from_q(q=q, area=pipe_area(d))
        Re = reynolds(V=V, D=d, nu=nu)
        f = colebrook_f(Re=Re, eps_over_D=ks / d, cfg=cfg.root)
        return dw.headloss(f=f, L=L, D=d, Q=q), f, Re

    if mode == "headloss":
        hf, f, Re = evaluate(Q, D)

    elif mode == "flow":
        A = pipe_area(D)
        q_lo, q_hi = us.v_min * A, us.v_max * A
        res = find_root(
            lambda q: evaluate(q, D)[0] - hf,
            bracket=(q_lo, q_hi),
            lower_limit=q_lo * 1e-6,
            cfg=cfg.root,
            name="darcy_weisbach:flow",
        )
        Q = res.root
        _, f, Re = evaluate(Q, D)

    else:
        D0 = dw.diameter_for(f=F_ESTIMATE, L=L, Q=Q, hf=hf)
        res = find_root(
            lambda d: evaluate(Q, d)[0] - hf,
            bracket=(D0 / 4.0, D0 * 4.0),
            lower_limit=D0 * 1e-6,
            cfg=cfg.root,
            name="darcy_weisbach:diameter",
        )
        D = res.root
        _, f, Re = evaluate(Q, D)

    labels.extend(pipe_regime_warnings(Re, cfg.regime))

    state = PipeFlowState(
        flow=Q,
        diameter=D,
        length=L,
        roughness=ks,
        nu=nu,
        headloss=hf,
        friction_factor=f,
        reynolds=Re,
        velocity=velocity_from_q(q=Q, area=pipe_area(D)),
        units=us.name,
        solved_for=mode,
        warnings=tuple(labels),
    )
    return tag_pipe_state(state) if inp.return_typed else state
