from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_SNAPSHOT = Path(__file__).resolve().parent.parent / "data" / "analytics.json"


@dataclass(frozen=True)
class AnalyticsConfig:
    snapshot_path: Path = Path(os.getenv("NEIGHBORLY_ANALYTICS_SNAPSHOT", str(_DEFAULT_SNAPSHOT)))
    max_events: int = 1000
    algorithm_version: str = "2.0"


DEFAULT_ANALYTICS_CONFIG = AnalyticsConfig()
