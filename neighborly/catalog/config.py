"""
Configuration for loading and assessing the neighborhood catalog.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_BUNDLED_CATALOG = Path(__file__).resolve().parent.parent / "data" / "neighborhoods.json"


@dataclass(frozen=True)
class CatalogConfig:
    catalog_path: Path = Path(os.getenv("NEIGHBORLY_CATALOG_PATH", str(_BUNDLED_CATALOG)))
    # Rents outside this band count against the accuracy metric.
    rent_outlier_min: float = 500.0
    rent_outlier_max: float = 5000.0


DEFAULT_CATALOG_CONFIG = CatalogConfig()
