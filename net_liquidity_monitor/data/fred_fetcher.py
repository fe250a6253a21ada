"""FRED graph CSV fetcher with concurrent fan-out."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Iterable

import httpx

from net_liquidity_monitor.config import Settings
from net_liquidity_monitor.data.parser import parse_fred_csv
from net_liquidity_monitor.errors import InvalidRequestError
from net_liquidity_monitor.models import ObservationPoint, SeriesError, SeriesResult


logger = logging.getLogger(__name__)


def normalize_series_ids(series_ids: str | Iterable[str] | None) -> list[str]:
    """
    Validate a series identifier set.

    Accepts a list of ids or the comma-separated form used in query strings.
    Duplicates are collapsed, first occurrence wins.
    """
    if series_ids is None:
        raise InvalidRequestError("missing series ids")
    if isinstance(series_ids, str):
        series_ids = series_ids.split(",")

    ids = [str(sid).strip() for sid in series_ids]
    if not ids:
        raise InvalidRequestError("missing series ids")
    if any(not sid for sid in ids):
        raise InvalidRequestError("series ids must be non-empty strings")
    return list(dict.fromkeys(ids))


def normalize_start(start: str | date | None, default: str) -> str:
    """Return the start date as an ISO string, falling back to ``default``."""
    if start is None or start == "":
        start = default
    if isinstance(start, date):
        return start.isoformat()
    try:
        return date.fromisoformat(start).isoformat()
    except ValueError:
        raise InvalidRequestError(f"invalid start date: {start!r}") from None


class FredFetcher:
    """Fetches series from the public FRED CSV endpoint (no API key)."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.settings.validate()
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.settings.timeout)
            self._owns_client = True
        return self._client

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "FredFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def fetch_series(
        self, series_id: str, start: str | date | None = None
    ) -> list[ObservationPoint] | SeriesError:
        """
        Fetch one series from ``start`` onward.

        Args:
            series_id: FRED series ID
            start: ISO start date; defaults to the configured snapshot start

        Returns:
            Observations in ascending date order, or a SeriesError when the
            upstream request fails
        """
        if not series_id or not series_id.strip():
            raise InvalidRequestError("series id must be a non-empty string")
        cosd = normalize_start(start, self.settings.snapshot_start)

        try:
            response = self.client.get(
                self.settings.fred_csv_url,
                params={"id": series_id, "cosd": cosd},
            )
        except httpx.HTTPError as e:
            logger.error(f"Transport error fetching {series_id}: {e}")
            return SeriesError(series_id=series_id, status_code=None, message=str(e))

        if not response.is_success:
            logger.error(f"HTTP error fetching {series_id}: {response.status_code}")
            return SeriesError(
                series_id=series_id,
                status_code=response.status_code,
                message=response.reason_phrase,
            )

        points = parse_fred_csv(response.text)
        logger.info(f"Fetched {series_id}: {len(points)} observations from {cosd}")
        return points

    def fetch_many(
        self,
        series_ids: str | Iterable[str] | None,
        start: str | date | None = None,
    ) -> SeriesResult:
        """
        Fetch several series concurrently.

        A failure in one series is recorded as a SeriesError in its own slot
        and never aborts the others.

        Returns:
            Dict mapping series_id to observations or SeriesError, in the
            order the ids were given
        """
        ids = normalize_series_ids(series_ids)
        cosd = normalize_start(start, self.settings.snapshot_start)
        self.client  # create the shared client before workers start
        logger.info(f"Fetching {len(ids)} series from {cosd}...")

        results: SeriesResult = {}
        workers = min(self.settings.max_workers, len(ids))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                sid: executor.submit(self.fetch_series, sid, cosd) for sid in ids
            }
            for sid, future in futures.items():
                try:
                    results[sid] = future.result()
                except Exception as e:
                    logger.error(f"Error fetching {sid}: {e}")
                    results[sid] = SeriesError(series_id=sid, status_code=None, message=str(e))

        failed = [sid for sid, data in results.items() if isinstance(data, SeriesError)]
        if failed:
            logger.warning(f"Failed to fetch {len(failed)} series: {failed}")

        return results
