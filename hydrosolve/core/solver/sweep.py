# hydrosolve/core/solver/sweep.py
from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Iterable, List, Optional, Union

from hydrosolve.core.build.config import SolverConfig
from hydrosolve.core.models.channel import ChannelFlowInput, ChannelFlowState, CircularChannelInput
from hydrosolve.core.models.errors import InputError
from hydrosolve.core.models.pipe import HazenWilliamsInput, HazenWilliamsState, PipeFlowInput, PipeFlowState
from hydrosolve.core.solver.channel_solver import solve_channel_flow, solve_circular_flow
from hydrosolve.core.solver.hazen_williams_solver import solve_hazen_williams
from hydrosolve.core.solver.pipe_solver import solve_pipe_flow


def _check_field(base: Any, field: str) -> None:
    names = {f.name for f in fields(base)}
    if field not in names:
        raise InputError(f"sweep: {type(base).__name__} has no field {field!r} (fields: {sorted(names)})")


def sweep_pipe(
    base: Union[PipeFlowInput, HazenWilliamsInput],
    field: str,
    values: Iterable[Any],
    *,
    cfg: Optional[SolverConfig] = None,
) -> List[Union[PipeFlowState, HazenWilliamsState]]:
    """
    Resuelve `base` una vez por valor, reemplazando `field`.
    Ej: sweep_pipe(inp, "length", [100, 200, 400])
    """
    _check_field(base, field)
    solve = solve_hazen_williams if isinstance(base, HazenWilliamsInput) else solve_pipe_flow
    return [solve(replace(base, **{field: v}), cfg=cfg) for v in values]


def sweep_channel(
    base: Union[ChannelFlowInput, CircularChannelInput],
    field: str,
    values: Iterable[Any],
    *,
    cfg: Optional[SolverConfig] = None,
) -> List[ChannelFlowState]:
    _check_field(base, field)
    solve = solve_circular_flow if isinstance(base, CircularChannelInput) else solve_channel_flow
    return [solve(replace(base, **{field: v}), cfg=cfg) for v in values]
