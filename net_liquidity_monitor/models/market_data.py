"""Data models for liquidity series and derived metrics."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union


@dataclass(frozen=True)
class ObservationPoint:
    """Single observation from a FRED series, in source-native units."""

    date: date
    value: float


@dataclass(frozen=True)
class SeriesError:
    """Marks a series whose fetch failed upstream."""

    series_id: str
    status_code: int | None  # None for transport failures (timeouts, DNS)
    message: str = ""


SeriesData = Union[list[ObservationPoint], SeriesError]
SeriesResult = dict[str, SeriesData]


@dataclass(frozen=True)
class AlignedRow:
    """A primary observation joined with carried-forward auxiliary values."""

    date: date
    primary_value: float
    aux_values: dict[str, float | None]


@dataclass(frozen=True)
class YtdDelta:
    """Year-to-date change for one component, in billions."""

    name: str
    value: float


@dataclass(frozen=True)
class HistoryPoint:
    """Net liquidity as a percentage of GDP on one date."""

    date: date
    pct: float


@dataclass(frozen=True)
class LiquiditySnapshot:
    """Latest values for each component.

    Monetary fields are in millions USD (ON RRP already scaled from
    billions); gdp stays in billions.
    """

    date: date
    total_assets: float
    treasuries: float
    agency_debt: float
    mbs: float
    tga: float
    on_rrp: float
    gdp: float
    net_liquidity: float
    pct_gdp: float


@dataclass(frozen=True)
class RefreshState:
    """Everything the presentation layer needs after a refresh cycle."""

    snapshot: LiquiditySnapshot | None = None
    ytd_deltas: tuple[YtdDelta, ...] = ()
    history: tuple[HistoryPoint, ...] = ()
    last_updated: datetime | None = None
    last_error: str | None = None
    history_error: str | None = None

    @property
    def is_stale(self) -> bool:
        """True when the latest refresh failed but older results are shown."""
        return self.last_error is not None and self.snapshot is not None
