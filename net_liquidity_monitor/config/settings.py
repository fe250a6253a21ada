"""Configuration settings for the liquidity monitor."""

from dataclasses import dataclass, field
from datetime import date
import os

from dotenv import load_dotenv


load_dotenv()


# Snapshot series - latest values feed the level, % of GDP and YTD deltas
SNAPSHOT_SERIES: dict[str, str] = {
    "WALCL": "Fed Total Assets",
    "TREAST": "Treasuries Held Outright",
    "FEDDT": "Federal Agency Debt Securities",
    "WSHOMCB": "Mortgage-Backed Securities",
    "WTREGEN": "Treasury General Account",
    "RRPONTSYD": "Overnight Reverse Repurchase Agreements",
    "GDP": "Nominal Gross Domestic Product",
}

# Long-run history - net liquidity as % of GDP
HISTORY_SERIES: dict[str, str] = {
    "WALCL": SNAPSHOT_SERIES["WALCL"],
    "WTREGEN": SNAPSHOT_SERIES["WTREGEN"],
    "RRPONTSYD": SNAPSHOT_SERIES["RRPONTSYD"],
    "GDP": SNAPSHOT_SERIES["GDP"],
}

# Units: H.4.1 series are in millions, RRPONTSYD and GDP in billions
MILLIONS_PER_BILLION = 1000.0
RRP_TO_MILLIONS = MILLIONS_PER_BILLION

# Used when the upstream series is missing from a snapshot batch
FALLBACK_AGENCY_DEBT = 2347.0  # millions
FALLBACK_GDP = 30300.0  # billions

GDP_HOLD_DAYS = 400
MIN_HISTORY_POINTS = 50
PCT_GDP_BOUNDS = (0.0, 50.0)  # exclusive

DEFAULT_START = "2024-12-01"
HISTORY_START = "2003-01-01"
FRED_CSV_URL = "https://fred.stlouisfed.org/graph/fredgraph.csv"


def _parse_iso(value: str, name: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"{name} must be an ISO date (YYYY-MM-DD), got {value!r}") from None


@dataclass
class Settings:
    """Application settings."""

    fred_csv_url: str = field(
        default_factory=lambda: os.getenv("FRED_CSV_URL", FRED_CSV_URL)
    )
    timeout: float = field(
        default_factory=lambda: float(os.getenv("FRED_TIMEOUT", "30"))
    )
    max_workers: int = field(
        default_factory=lambda: int(os.getenv("FRED_MAX_WORKERS", "8"))
    )
    snapshot_start: str = field(
        default_factory=lambda: os.getenv("SNAPSHOT_START", DEFAULT_START)
    )
    history_start: str = field(
        default_factory=lambda: os.getenv("HISTORY_START", HISTORY_START)
    )
    refresh_interval_minutes: float = field(
        default_factory=lambda: float(os.getenv("REFRESH_INTERVAL_MINUTES", "30"))
    )

    @property
    def refresh_interval_seconds(self) -> float:
        return self.refresh_interval_minutes * 60

    def validate(self) -> None:
        """Validate settings."""
        if self.timeout <= 0:
            raise ValueError("FRED_TIMEOUT must be positive")
        if self.max_workers < 1:
            raise ValueError("FRED_MAX_WORKERS must be at least 1")
        if self.refresh_interval_minutes <= 0:
            raise ValueError("REFRESH_INTERVAL_MINUTES must be positive")
        _parse_iso(self.snapshot_start, "SNAPSHOT_START")
        _parse_iso(self.history_start, "HISTORY_START")
