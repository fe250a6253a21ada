"""Synthetic FRED series shared by the calculator and monitor tests."""

from datetime import date, timedelta

from net_liquidity_monitor.models import ObservationPoint


def pts(*pairs):
    return [ObservationPoint(date=date.fromisoformat(d), value=v) for d, v in pairs]


def weekly(start: date, weeks: int, value: float) -> list[ObservationPoint]:
    return [ObservationPoint(date=start + timedelta(weeks=i), value=value) for i in range(weeks)]


def history_data(weeks: int) -> dict:
    """WALCL/TGA/RRP/GDP that give roughly 20% of GDP on every week."""
    start = date(2024, 1, 3)
    return {
        "WALCL": weekly(start, weeks, 7_000_000.0),
        "WTREGEN": weekly(start, weeks, 700_000.0),
        "RRPONTSYD": weekly(start, weeks, 500.0),
        "GDP": pts(
            ("2024-01-01", 28000.0),
            ("2024-04-01", 28500.0),
            ("2024-07-01", 29000.0),
            ("2024-10-01", 29500.0),
            ("2025-01-01", 30000.0),
            ("2025-04-01", 30300.0),
        ),
    }


def snapshot_data() -> dict:
    return {
        "WALCL": pts(("2026-01-07", 6_450_000.0), ("2026-01-14", 6_500_000.0)),
        "TREAST": pts(("2025-12-31", 4_100_000.0), ("2026-01-14", 4_200_000.0)),
        "FEDDT": pts(("2025-12-31", 2347.0), ("2026-01-14", 2347.0)),
        "WSHOMCB": pts(("2025-12-31", 2_100_000.0), ("2026-01-14", 2_080_000.0)),
        "WTREGEN": pts(("2025-12-31", 800_000.0), ("2026-01-14", 700_000.0)),
        "RRPONTSYD": pts(("2025-12-31", 10.0), ("2026-01-13", 200.0)),
        "GDP": pts(("2025-07-01", 30300.0)),
    }
