"""Reporting package — criteria summary view-model and JSON export."""

from .json_export import export_json
from .summary import CriteriaSummary, build_summary

__all__ = [
    "CriteriaSummary",
    "build_summary",
    "export_json",
]
