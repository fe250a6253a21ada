"""Derive net liquidity metrics from fetched FRED series."""

import logging
from datetime import date
from typing import Callable, Sequence

from net_liquidity_monitor.config import (
    FALLBACK_AGENCY_DEBT,
    FALLBACK_GDP,
    GDP_HOLD_DAYS,
    MILLIONS_PER_BILLION,
    MIN_HISTORY_POINTS,
    PCT_GDP_BOUNDS,
    RRP_TO_MILLIONS,
)
from net_liquidity_monitor.errors import DegenerateHistoryError, IncompleteDataError
from net_liquidity_monitor.indicators.alignment import carry_forward
from net_liquidity_monitor.indicators.interpolation import interpolate_daily
from net_liquidity_monitor.models import (
    HistoryPoint,
    LiquiditySnapshot,
    ObservationPoint,
    SeriesResult,
    YtdDelta,
)


logger = logging.getLogger(__name__)


# (label, series_id, divisor to billions)
YTD_COMPONENTS: list[tuple[str, str, float]] = [
    ("Treasuries", "TREAST", MILLIONS_PER_BILLION),
    ("Agency Debt", "FEDDT", MILLIONS_PER_BILLION),
    ("MBS", "WSHOMCB", MILLIONS_PER_BILLION),
    ("TGA", "WTREGEN", MILLIONS_PER_BILLION),
    ("ON RRP", "RRPONTSYD", 1.0),  # already billions
]
NET_DELTA_NAME = "NET LIQ Δ"

# Asset components add liquidity, TGA and ON RRP drain it
DRAINS = {"TGA", "ON RRP"}


def pct_of_gdp(net_liquidity: float, gdp: float) -> float:
    """Net liquidity (millions) as a percentage of GDP (billions).

    Returns 0 for non-positive GDP.
    """
    if gdp <= 0:
        return 0.0
    return (net_liquidity / MILLIONS_PER_BILLION) / gdp * 100


def find_year_anchor(
    points: Sequence[ObservationPoint], year: int
) -> ObservationPoint | None:
    """
    Pick the observation that stands for the close of ``year``.

    Tried in order, first match wins:
      1. exactly Dec 31
      2. the date nearest Dec 31 between Dec 29 and Jan 2
      3. the first date on or after Dec 24
      4. the earliest observation
    """
    if not points:
        return None

    year_end = date(year, 12, 31)
    window_start, window_end = date(year, 12, 29), date(year + 1, 1, 2)
    cutoff = date(year, 12, 24)

    chain: list[tuple[str, Callable[[], ObservationPoint | None]]] = [
        ("year-end", lambda: next((p for p in points if p.date == year_end), None)),
        (
            "year-end window",
            lambda: min(
                (p for p in points if window_start <= p.date <= window_end),
                key=lambda p: abs((p.date - year_end).days),
                default=None,
            ),
        ),
        ("late December", lambda: next((p for p in points if p.date >= cutoff), None)),
        ("earliest", lambda: points[0]),
    ]

    for label, finder in chain:
        anchor = finder()
        if anchor is not None:
            logger.debug(f"Year anchor for {year}: {anchor.date} ({label})")
            return anchor
    return None


def _points(data: SeriesResult, series_id: str) -> list[ObservationPoint] | None:
    """Observations for a series, or None if it failed or came back empty."""
    series = data.get(series_id)
    if isinstance(series, list) and series:
        return series
    return None


def _require(
    data: SeriesResult, series_ids: Sequence[str], computation: str
) -> dict[str, list[ObservationPoint]]:
    found = {sid: _points(data, sid) for sid in series_ids}
    missing = [sid for sid, points in found.items() if points is None]
    if missing:
        raise IncompleteDataError(computation, missing)
    return found


class LiquidityCalculator:
    """Turns fetched series into snapshot, YTD and history metrics.

    Stateless: every method depends only on its arguments.
    """

    def __init__(
        self,
        min_history_points: int = MIN_HISTORY_POINTS,
        gdp_hold_days: int = GDP_HOLD_DAYS,
    ) -> None:
        self.min_history_points = min_history_points
        self.gdp_hold_days = gdp_hold_days

    def snapshot(self, data: SeriesResult) -> LiquiditySnapshot:
        """
        Latest net liquidity level and % of GDP.

        FEDDT and GDP fall back to fixed values when unavailable; every other
        component is required.
        """
        series = _require(
            data, ["WALCL", "TREAST", "WSHOMCB", "WTREGEN", "RRPONTSYD"], "snapshot"
        )
        latest = {sid: points[-1] for sid, points in series.items()}

        agency = _points(data, "FEDDT")
        agency_debt = agency[-1].value if agency else FALLBACK_AGENCY_DEBT
        gdp_points = _points(data, "GDP")
        gdp = gdp_points[-1].value if gdp_points else FALLBACK_GDP
        if agency is None or gdp_points is None:
            logger.warning("Snapshot using fallback values for FEDDT/GDP")

        total_assets = latest["WALCL"].value
        tga = latest["WTREGEN"].value
        on_rrp = latest["RRPONTSYD"].value * RRP_TO_MILLIONS
        net_liquidity = total_assets - tga - on_rrp

        return LiquiditySnapshot(
            date=latest["WALCL"].date,
            total_assets=total_assets,
            treasuries=latest["TREAST"].value,
            agency_debt=agency_debt,
            mbs=latest["WSHOMCB"].value,
            tga=tga,
            on_rrp=on_rrp,
            gdp=gdp,
            net_liquidity=net_liquidity,
            pct_gdp=pct_of_gdp(net_liquidity, gdp),
        )

    def ytd_deltas(
        self, data: SeriesResult, anchor_year: int | None = None
    ) -> list[YtdDelta]:
        """
        Change since the year anchor for each component, in billions.

        The final entry is the net effect: asset changes minus TGA and
        ON RRP changes. ``anchor_year`` defaults to the year before the
        latest Treasuries observation.
        """
        series = _require(data, ["TREAST", "WSHOMCB", "WTREGEN", "RRPONTSYD"], "ytd")
        if anchor_year is None:
            anchor_year = series["TREAST"][-1].date.year - 1

        raw: dict[str, float] = {}
        for name, series_id, divisor in YTD_COMPONENTS:
            points = _points(data, series_id)
            if points is None:
                # FEDDT is the only optional component
                raw[name] = 0.0
                continue
            anchor = find_year_anchor(points, anchor_year)
            raw[name] = (points[-1].value - anchor.value) / divisor

        net = sum(-value if name in DRAINS else value for name, value in raw.items())

        deltas = [YtdDelta(name=name, value=round(value, 1)) for name, value in raw.items()]
        deltas.append(YtdDelta(name=NET_DELTA_NAME, value=round(net, 1)))
        return deltas

    def history(self, data: SeriesResult) -> list[HistoryPoint]:
        """
        Net liquidity as % of GDP on every WALCL date.

        TGA and ON RRP are carried forward onto the weekly WALCL dates; GDP
        is interpolated to daily. Points with non-positive GDP or a
        percentage outside (0, 50) are dropped.

        Raises:
            IncompleteDataError: WALCL, WTREGEN or GDP unavailable
            DegenerateHistoryError: too few valid points survive
        """
        series = _require(data, ["WALCL", "WTREGEN", "GDP"], "history")
        rrp = _points(data, "RRPONTSYD") or []
        rrp_millions = [
            ObservationPoint(date=p.date, value=p.value * RRP_TO_MILLIONS) for p in rrp
        ]

        gdp_daily = interpolate_daily(series["GDP"], self.gdp_hold_days)
        rows = carry_forward(
            series["WALCL"], {"WTREGEN": series["WTREGEN"], "RRPONTSYD": rrp_millions}
        )

        low, high = PCT_GDP_BOUNDS
        result = []
        for row in rows:
            gdp = gdp_daily.on(row.date)
            if gdp is None or gdp <= 0:
                continue
            net = row.primary_value - row.aux_values["WTREGEN"] - row.aux_values["RRPONTSYD"]
            pct = round(pct_of_gdp(net, gdp), 2)
            if low < pct < high:
                result.append(HistoryPoint(date=row.date, pct=pct))

        if len(result) <= self.min_history_points:
            raise DegenerateHistoryError(len(result), self.min_history_points)

        logger.info(f"History: {len(result)} points from {len(rows)} WALCL dates")
        return result
