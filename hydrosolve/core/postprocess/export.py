from __future__ import annotations

from typing import Any, Sequence

import pandas as pd


def _plain(value: Any) -> Any:
    # pint quantities -> magnitude; the unit system is in the "units" column
    return getattr(value, "magnitude", value)


def states_to_frame(states: Sequence[Any]) -> pd.DataFrame:
    """
    One row per solved state (pipe, Hazen-Williams or channel).
    Columns follow each state's to_dict(); mixed kinds leave NaN where a column
    does not apply.
    """
    rows = [{k: _plain(v) for k, v in s.to_dict().items()} for s in states]
    return pd.DataFrame(rows)


def export_states_csv(states: Sequence[Any], path_csv: str) -> None:
    states_to_frame(states).to_csv(path_csv, index=False)


def export_states_excel(
    states: Sequence[Any],
    path_xlsx: str,
    sheet_name: str = "resultados",
) -> None:
    """
    Export solved states to Excel (one sheet).
    """
    df = states_to_frame(states)
    with pd.ExcelWriter(path_xlsx, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
