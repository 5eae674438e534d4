from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any

from .config import DEFAULT_ANALYTICS_CONFIG, AnalyticsConfig

logger = logging.getLogger(__name__)

_events: list[dict[str, Any]] = []


def record_event(
    event_type: str,
    data: dict[str, Any],
    config: AnalyticsConfig = DEFAULT_ANALYTICS_CONFIG,
) -> None:
    _events.append({
        "type": event_type,
        "timestamp": time.time(),
        **data,
    })
    # Keep only the most recent events
    if len(_events) > config.max_events:
        del _events[: len(_events) - config.max_events]


def get_events() -> list[dict[str, Any]]:
    return _events


def clear_events() -> None:
    _events.clear()


def save_snapshot(path: Path, report: dict[str, Any] | None = None) -> Path:
    """Write the event log (and optionally the latest report) as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"saved_at": time.time(), "events": _events, "report": report}
    path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
    logger.info("Saved %d analytics events to %s", len(_events), path)
    return path


def load_snapshot(path: Path) -> int:
    """Replace the in-memory events with those from a snapshot file.

    Returns the number of events loaded; a missing file loads nothing.
    """
    if not path.is_file():
        return 0
    payload = json.loads(path.read_text(encoding="utf-8"))
    _events.clear()
    _events.extend(payload.get("events", []))
    logger.info("Loaded %d analytics events from %s", len(_events), path)
    return len(_events)
