"""Serialize refresh results as plain JSON for any front end."""

import json
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path
from typing import Any

from net_liquidity_monitor.models import RefreshState


def _jsonable(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


def state_to_dict(state: RefreshState) -> dict[str, Any]:
    """Snapshot, YTD deltas and history as JSON-ready primitives."""
    return {
        "snapshot": _jsonable(asdict(state.snapshot)) if state.snapshot else None,
        "ytd": [_jsonable(asdict(d)) for d in state.ytd_deltas],
        "history": {
            "dates": [p.date.isoformat() for p in state.history],
            "pct": [p.pct for p in state.history],
        },
        "last_updated": _jsonable(state.last_updated),
        "last_error": state.last_error,
        "history_error": state.history_error,
        "stale": state.is_stale,
    }


def write_json(state: RefreshState, path: Path) -> None:
    """Write the state to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(state_to_dict(state), f)
