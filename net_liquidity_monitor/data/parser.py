"""Parse FRED graph CSV exports into observation points."""

import numpy as np
import pandas as pd

from net_liquidity_monitor.models import ObservationPoint


MISSING_VALUE = "."


def parse_fred_csv(text: str) -> list[ObservationPoint]:
    """
    Turn a FRED CSV body into ordered observations.

    The first line is a header. Each following row is ``date,value`` and may
    carry extra trailing fields, which are ignored. Rows with an empty or
    invalid date, the "." missing-value marker, or a value that is not a
    finite number are dropped. Row order is preserved.
    """
    rows = [line.split(",") for line in text.strip().splitlines()[1:] if line.strip()]
    if not rows:
        return []

    df = pd.DataFrame(
        {
            "date": [row[0].strip() for row in rows],
            "value": [row[1].strip() if len(row) > 1 else "" for row in rows],
        }
    )
    df = df[df["value"] != MISSING_VALUE].copy()
    df["date"] = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce")
    df["value"] = pd.to_numeric(df["value"], errors="coerce").astype(float)
    df = df[df["date"].notna() & np.isfinite(df["value"])]

    return [
        ObservationPoint(date=ts.date(), value=float(val))
        for ts, val in zip(df["date"], df["value"])
    ]
