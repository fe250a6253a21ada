"""Expand sparse (quarterly) series into a daily lookup."""

import logging
from collections.abc import Mapping
from datetime import date
from types import MappingProxyType
from typing import Iterator, Sequence

import numpy as np
import pandas as pd

from net_liquidity_monitor.config import GDP_HOLD_DAYS
from net_liquidity_monitor.models import ObservationPoint


logger = logging.getLogger(__name__)


class DailyIndex(Mapping):
    """Read-only mapping of ISO date string to value."""

    def __init__(self, values: dict[str, float] | None = None) -> None:
        self._values = MappingProxyType(dict(values or {}))

    @classmethod
    def from_points(cls, points: Sequence[ObservationPoint]) -> "DailyIndex":
        """Exact-date lookup with no filling, for callers that need raw values by day.

        Public helper; the history calculation aligns TGA/RRP with carry_forward.
        """
        return cls({p.date.isoformat(): p.value for p in points})

    def __getitem__(self, key: str) -> float:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def on(self, day: date) -> float | None:
        """Value for a calendar date, or None when the index has no entry."""
        return self._values.get(day.isoformat())

    def __repr__(self) -> str:
        return f"DailyIndex({len(self)} days)"


def interpolate_daily(
    points: Sequence[ObservationPoint], hold_days: int = GDP_HOLD_DAYS
) -> DailyIndex:
    """
    Linearly interpolate ascending observations to one value per day.

    Each consecutive pair (d0, v0), (d1, v1) fills [d0, d1) with
    v0 + (v1 - v0) * offset / (d1 - d0). The last observation is held flat
    from its own date through ``hold_days`` days later so recent dates have
    a value before the next release. Pairs with no gap between them are
    skipped.
    """
    values: dict[str, float] = {}

    for current, following in zip(points, points[1:]):
        total_days = (following.date - current.date).days
        if total_days <= 0:
            logger.debug(f"Skipping zero-length gap at {current.date}")
            continue
        days = pd.date_range(current.date, periods=total_days, freq="D")
        fractions = np.arange(total_days) / total_days
        interpolated = current.value + (following.value - current.value) * fractions
        for day, value in zip(days, interpolated):
            values[day.date().isoformat()] = float(value)

    if points:
        last = points[-1]
        for day in pd.date_range(last.date, periods=hold_days + 1, freq="D"):
            values[day.date().isoformat()] = last.value

    return DailyIndex(values)
