"""
Configuration module for the Assessment Criteria Engine.
Defines storage settings, scoring constants, and operational limits.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path


# ─── Document Store Layout ──────────────────────────────────────────────────

ASSESSMENT_CRITERIA_COLLECTION = "assessmentCriteria"
FRAMEWORKS_COLLECTION = "frameworks"
DOMAINS_SUBCOLLECTION = "domains"


def domains_path(framework_id: str) -> str:
    """Path of the domains sub-collection owned by a framework."""
    return f"{FRAMEWORKS_COLLECTION}/{framework_id}/{DOMAINS_SUBCOLLECTION}"


# ─── Scoring Constants ──────────────────────────────────────────────────────

WEIGHT_BUDGET = 100               # Domain weights must sum to this
LEVEL_VALUE_MIN = 0
LEVEL_VALUE_MAX = 100

CRITERIA_PERCENTAGE = "percentage"
CRITERIA_MATURITY = "maturity"
CRITERIA_COMPLIANCE = "compliance"
CRITERIA_TYPES = (CRITERIA_PERCENTAGE, CRITERIA_MATURITY, CRITERIA_COMPLIANCE)

SUPPORTED_LANGUAGES = ("en", "ar")
PRIMARY_LANGUAGE = "en"


# ─── I/O Settings ───────────────────────────────────────────────────────────

DEFAULT_IO_TIMEOUT_SECONDS = 30.0  # Applied per gateway call
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DEFAULT_SQLITE_PATH = os.path.join(
    str(Path.home()), ".criteria_engine", "criteria.db"
)


@dataclass
class StoreConfig:
    """Which document store backend to use and how to reach it."""
    backend: str = "sqlite"                 # "sqlite", "http" or "memory"
    sqlite_path: str = DEFAULT_SQLITE_PATH
    base_url: str = ""                      # Root URL of the document API
    api_token: str = ""                     # Bearer token for the document API
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS


# ─── Master Configuration ───────────────────────────────────────────────────

@dataclass
class EngineConfig:
    """Top-level configuration for the engine."""
    store: StoreConfig = field(default_factory=StoreConfig)
    io_timeout_seconds: float = DEFAULT_IO_TIMEOUT_SECONDS
    verbose: bool = False

    @classmethod
    def from_file(cls, path: str | Path) -> "EngineConfig":
        """Load configuration from a JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        config = cls()
        if "store" in data:
            for k, v in data["store"].items():
                if hasattr(config.store, k):
                    setattr(config.store, k, v)
        config.io_timeout_seconds = float(
            data.get("io_timeout_seconds", DEFAULT_IO_TIMEOUT_SECONDS)
        )
        config.verbose = data.get("verbose", False)
        return config
