"""
JSON exporter — Writes a criteria summary to disk for administrators.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from .. import __version__
from .summary import CriteriaSummary


def export_json(
    summary: CriteriaSummary,
    output_dir: Path,
    framework_id: str,
) -> Path:
    """
    Write the summary to a JSON file.

    Returns:
        Path to the created JSON file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    payload = {
        "metadata": {
            "engine": "Assessment Criteria Engine",
            "version": __version__,
            "framework_id": framework_id,
            "generated_utc": datetime.now(timezone.utc).isoformat(),
        },
        "criteria": summary.to_dict(),
    }

    filepath = output_dir / f"assessment_criteria_{framework_id}.json"
    with open(filepath, "w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, default=str, ensure_ascii=False)

    return filepath
