"""Last-observation-carried-forward alignment onto a primary date axis."""

from typing import Mapping, Sequence

import pandas as pd

from net_liquidity_monitor.models import AlignedRow, ObservationPoint


PRIMARY_COLUMN = "__primary__"


def _frame(points: Sequence[ObservationPoint], column: str) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "date": pd.to_datetime([p.date for p in points]),
            column: pd.Series([p.value for p in points], dtype=float),
        }
    )


def carry_forward(
    primary: Sequence[ObservationPoint],
    auxiliary: Mapping[str, Sequence[ObservationPoint]],
    initial: float | None = 0.0,
) -> list[AlignedRow]:
    """
    Align lower-frequency series onto the dates of ``primary``.

    For each primary observation, every auxiliary series contributes its
    latest value dated on or before the primary date (backward as-of
    merge). Before an auxiliary series' first observation the value is
    ``initial`` (zero by default; pass None to leave the gap visible to the
    caller).

    All inputs must be in ascending date order.
    """
    if not primary:
        return []

    out = _frame(primary, PRIMARY_COLUMN)
    for name, series in auxiliary.items():
        if not series:
            out[name] = float("nan")
            continue
        out = pd.merge_asof(out, _frame(series, name), on="date", direction="backward")

    names = list(auxiliary)
    if initial is not None and names:
        out[names] = out[names].fillna(initial)

    rows = []
    for point, (_, record) in zip(primary, out.iterrows()):
        aux_values = {
            name: None if pd.isna(record[name]) else float(record[name]) for name in names
        }
        rows.append(AlignedRow(date=point.date, primary_value=point.value, aux_values=aux_values))
    return rows
