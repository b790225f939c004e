from __future__ import annotations

from typing import Any, Dict, List, Optional, Union
import logging
import os

import pandas as pd

from hydrosolve.core.build.config import SolverConfig
from hydrosolve.core.models.channel import ChannelFlowInput, ChannelFlowState, CircularChannelInput
from hydrosolve.core.models.pipe import HazenWilliamsInput, HazenWilliamsState, PipeFlowInput, PipeFlowState
from hydrosolve.core.solver.channel_solver import solve_channel_flow, solve_circular_flow
from hydrosolve.core.solver.hazen_williams_solver import solve_hazen_williams
from hydrosolve.core.solver.pipe_solver import solve_pipe_flow


logger = logging.getLogger(__name__)


# -----------------------------
# Table contract (Spanish or English headers)
# -----------------------------
# canonical field -> accepted headers (compared lower-case, stripped)
COLUMN_ALIASES: Dict[str, tuple[str, ...]] = {
    "flow": ("flow", "q", "caudal"),
    "diameter": ("diameter", "d", "diametro", "diámetro"),
    "headloss": ("headloss", "hf", "perdida", "pérdida"),
    "length": ("length", "l", "longitud"),
    "roughness": ("roughness", "ks", "rugosidad"),
    "c_factor": ("c_factor", "c", "c_hw", "coef_hw"),
    "nu": ("nu", "viscosity", "viscosidad"),
    "slope": ("slope", "sf", "s", "pendiente"),
    "depth": ("depth", "y", "tirante"),
    "bottom_width": ("bottom_width", "b", "width", "ancho"),
    "side_slope": ("side_slope", "m", "talud"),
    "n": ("n", "manning_n"),
    "units": ("units", "unidades"),
}

# header row + 1-based rows
ROW_OFFSET = 2


class CaseError(ValueError):
    """A row of the case table could not be solved."""
    def __init__(self, row: int, cause: Exception):
        self.row = row
        self.cause = cause
        super().__init__(f"Fila {row}: {type(cause).__name__}: {cause}")


def _norm_str(x: Any) -> str:
    if x is None or (isinstance(x, float) and pd.isna(x)):
        return ""
    return str(x).strip()


def _cell(x: Any) -> Optional[Any]:
    """Blank cell -> None (the unknown)."""
    if x is None or (isinstance(x, float) and pd.isna(x)):
        return None
    if isinstance(x, str):
        s = x.strip()
        if s == "":
            return None
        try:
            return float(s.replace(",", "."))
        except ValueError:
            return s
    return x


def normalize_case_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename Spanish / English headers to canonical field names; unknown columns are kept."""
    lookup = {alias: canon for canon, aliases in COLUMN_ALIASES.items() for alias in aliases}
    renamed: Dict[Any, str] = {}
    for c in df.columns:
        key = _norm_str(c).lower()
        if key in lookup:
            if lookup[key] in renamed.values():
                raise ValueError(f"Columna duplicada para '{lookup[key]}': {c!r}")
            renamed[c] = lookup[key]
    return df.rename(columns=renamed)


def read_cases(path: str, sheet: Union[str, int] = 0) -> pd.DataFrame:
    """
    Lee una tabla de casos desde Excel (.xlsx) o CSV.
    Columns are normalized to canonical names; empty rows are dropped.
    """
    ext = os.path.splitext(path)[1].lower()
    if ext in (".xlsx", ".xlsm"):
        df = pd.read_excel(path, sheet_name=sheet, engine="openpyxl")
    elif ext == ".csv":
        # blank lines stay as NaN rows so the index matches the file row
        df = pd.read_csv(path, skip_blank_lines=False)
    else:
        raise ValueError(f"Formato no soportado: {ext!r} (use .xlsx o .csv)")
    return normalize_case_columns(df.dropna(how="all"))


def _row_dict(row: pd.Series) -> Dict[str, Any]:
    d = {k: _cell(v) for k, v in row.items()}
    if d.get("units") is None:
        d["units"] = "SI"
    return d


def _as_frame(cases: Union[pd.DataFrame, str]) -> pd.DataFrame:
    return read_cases(cases) if isinstance(cases, str) else normalize_case_columns(cases)


def _run(cases, build, *, skip_errors: bool):
    # the index survives dropna, so it still points at the sheet row
    df = _as_frame(cases)
    out = []
    for idx, row in df.iterrows():
        row_no = int(idx) + ROW_OFFSET
        try:
            out.append(build(_row_dict(row)))
        except Exception as e:
            if not skip_errors:
                raise CaseError(row_no, e) from e
            logger.warning("Fila %d omitida: %s", row_no, e)
    return out


def run_pipe_cases(
    cases: Union[pd.DataFrame, str],
    *,
    cfg: Optional[SolverConfig] = None,
    skip_errors: bool = False,
) -> List[Union[PipeFlowState, HazenWilliamsState]]:
    """
    Solve every row as a pipe case. Rows with a Hazen-Williams C and no roughness
    go to the Hazen-Williams solver; the rest to Darcy-Weisbach.
    """
    def build(d: Dict[str, Any]):
        if d.get("roughness") is None and d.get("c_factor") is not None:
            return solve_hazen_williams(HazenWilliamsInput.from_dict(d), cfg=cfg)
        return solve_pipe_flow(PipeFlowInput.from_dict(d), cfg=cfg)

    return _run(cases, build, skip_errors=skip_errors)


def run_channel_cases(
    cases: Union[pd.DataFrame, str],
    *,
    cfg: Optional[SolverConfig] = None,
    skip_errors: bool = False,
) -> List[ChannelFlowState]:
    """
    Solve every row as a channel case. A filled diameter cell means a partially
    full circular conduit; otherwise the trapezoidal family (b, m).
    """
    def build(d: Dict[str, Any]):
        if d.get("diameter") is not None:
            return solve_circular_flow(CircularChannelInput.from_dict(d), cfg=cfg)
        return solve_channel_flow(ChannelFlowInput.from_dict(d), cfg=cfg)

    return _run(cases, build, skip_errors=skip_errors)
