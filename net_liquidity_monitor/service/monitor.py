"""Periodic refresh of the liquidity metrics.

LiquidityMonitor owns the latest results. Each refresh builds a fresh
RefreshState from scratch and swaps it in; a failed refresh keeps the
previous values and records the error so the front end can mark them stale.
"""

import logging
import threading
from dataclasses import replace
from datetime import datetime
from typing import Callable

import httpx

from net_liquidity_monitor.config import HISTORY_SERIES, SNAPSHOT_SERIES, Settings
from net_liquidity_monitor.data import FredFetcher
from net_liquidity_monitor.errors import LiquidityError
from net_liquidity_monitor.indicators import LiquidityCalculator
from net_liquidity_monitor.models import RefreshState


logger = logging.getLogger(__name__)


class LiquidityMonitor:
    """Fetches, computes and holds the current liquidity state."""

    def __init__(
        self,
        settings: Settings | None = None,
        fetcher: FredFetcher | None = None,
        calculator: LiquidityCalculator | None = None,
        on_refresh: Callable[[RefreshState], None] | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.settings.validate()
        self.fetcher = fetcher or FredFetcher(self.settings)
        self.calculator = calculator or LiquidityCalculator()
        self.on_refresh = on_refresh

        self._state = RefreshState()
        self._state_lock = threading.Lock()
        self._cycles = 0  # refreshes started
        self._installed_cycle = 0  # cycle that produced self._state
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> RefreshState:
        """Latest state; never mutated, replaced on each refresh."""
        with self._state_lock:
            return self._state

    def _install(self, cycle: int, build: Callable[[RefreshState], RefreshState]) -> RefreshState:
        """Swap in the state built from the current one, unless a newer cycle already did."""
        with self._state_lock:
            if cycle < self._installed_cycle:
                logger.info(f"Discarding refresh #{cycle}; #{self._installed_cycle} finished first")
                return self._state
            self._state = build(self._state)
            self._installed_cycle = cycle
            return self._state

    def refresh(self) -> RefreshState:
        """
        Run one full refresh cycle.

        Snapshot and YTD failures fail the whole cycle. A history failure
        (missing series or too few points) keeps the previous history.
        Overlapping calls are safe: results from a cycle that started
        earlier never replace those of a cycle that started later.
        """
        with self._state_lock:
            self._cycles += 1
            cycle = self._cycles

        logger.info(f"Refreshing liquidity data (#{cycle})...")
        try:
            recent = self.fetcher.fetch_many(list(SNAPSHOT_SERIES), self.settings.snapshot_start)
            snapshot = self.calculator.snapshot(recent)
            ytd = tuple(self.calculator.ytd_deltas(recent))
        except (LiquidityError, httpx.HTTPError) as e:
            logger.error(f"Refresh failed: {e}")
            return self._install(cycle, lambda previous: replace(previous, last_error=str(e)))

        history = None
        history_error = None
        try:
            full = self.fetcher.fetch_many(list(HISTORY_SERIES), self.settings.history_start)
            history = tuple(self.calculator.history(full))
        except (LiquidityError, httpx.HTTPError) as e:
            logger.warning(f"History not updated: {e}")
            history_error = str(e)

        state = self._install(
            cycle,
            lambda previous: RefreshState(
                snapshot=snapshot,
                ytd_deltas=ytd,
                history=history if history is not None else previous.history,
                last_updated=datetime.now(),
                last_error=None,
                history_error=history_error,
            ),
        )

        logger.info(
            f"Net liquidity {snapshot.net_liquidity:,.0f}M "
            f"({snapshot.pct_gdp:.2f}% of GDP) as of {snapshot.date}"
        )
        return state

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                state = self.refresh()
                if self.on_refresh is not None:
                    self.on_refresh(state)
            except Exception:
                logger.exception("Refresh cycle failed; retrying on the next tick")
            self._stop.wait(self.settings.refresh_interval_seconds)

    def start(self) -> None:
        """Refresh now and then every refresh interval on a background thread."""
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="liquidity-refresh", daemon=True)
        self._thread.start()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def stop(self, timeout: float | None = None) -> None:
        """Stop the background loop; an in-flight refresh is allowed to finish."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def close(self) -> None:
        self.stop()
        self.fetcher.close()

    def __enter__(self) -> "LiquidityMonitor":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def print_summary(state: RefreshState) -> None:
    """Print the state as a short text report."""
    snap = state.snapshot
    if snap is None:
        print(f"No data available: {state.last_error}")
        return

    print(f"\nNet Liquidity - As of {snap.date}")
    print("=" * 60)
    print(f"\nNET LIQUIDITY: ${snap.net_liquidity / 1_000_000:.2f}T ({snap.pct_gdp:.2f}% of GDP)")
    print("\n" + "-" * 60)
    print("Components (millions):\n")
    for label, value in [
        ("Total Assets", snap.total_assets),
        ("Treasuries", snap.treasuries),
        ("Agency Debt", snap.agency_debt),
        ("MBS", snap.mbs),
        ("TGA", snap.tga),
        ("ON RRP", snap.on_rrp),
    ]:
        print(f"  {label:20} | {value:>14,.0f}")

    print("\n" + "-" * 60)
    print("Year-to-date change (billions):\n")
    for delta in state.ytd_deltas:
        print(f"  {delta.name:20} | {delta.value:>+10.1f}")

    if state.history:
        first, last = state.history[0], state.history[-1]
        print(f"\nHistory: {len(state.history)} points, {first.date} {first.pct:.2f}% -> {last.date} {last.pct:.2f}%")
    if state.history_error:
        print(f"History not updated: {state.history_error}")
    if state.is_stale:
        print(f"\nSTALE: last refresh failed ({state.last_error})")


def main() -> None:
    """CLI entry point."""
    import argparse
    import sys
    from pathlib import Path

    from net_liquidity_monitor.service.export import write_json

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Compute Fed net liquidity from FRED")
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and refresh on the configured interval",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write results as JSON to this path after each refresh",
    )
    parser.add_argument(
        "--start",
        type=str,
        help="Start date for the snapshot series (YYYY-MM-DD)",
    )
    args = parser.parse_args()

    try:
        settings = Settings()
        if args.start:
            settings.snapshot_start = args.start
        monitor = LiquidityMonitor(settings)
    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    with monitor:
        if not args.watch:
            state = monitor.refresh()
            print_summary(state)
            if args.output:
                write_json(state, args.output)
            sys.exit(1 if state.last_error else 0)

        def publish(state: RefreshState) -> None:
            print_summary(state)
            if args.output:
                write_json(state, args.output)

        monitor.on_refresh = publish
        monitor.start()
        try:
            while monitor.is_running:
                monitor.join(1.0)
        except KeyboardInterrupt:
            logger.info("Stopped")


if __name__ == "__main__":
    main()
