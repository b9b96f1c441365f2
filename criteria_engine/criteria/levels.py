"""
Level list editing for maturity and compliance scales.
All operations return a new list and leave the input untouched.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..config import CRITERIA_MATURITY
from .models import CriteriaLevel, LocalizedText


class IncompleteLevelError(ValueError):
    """Raised when a level is missing a label or description translation."""
    pass


def add_level(
    levels: list[CriteriaLevel],
    level: CriteriaLevel,
    criteria_type: str,
) -> list[CriteriaLevel]:
    """Append a level; maturity scales are kept sorted by value."""
    if not (level.label.is_complete() and level.description.is_complete()):
        raise IncompleteLevelError(
            "Level label and description are required in every language"
        )
    updated = [*levels, level]
    if criteria_type == CRITERIA_MATURITY:
        updated.sort(key=lambda lvl: lvl.value)
    return updated


def remove_level(levels: list[CriteriaLevel], index: int) -> list[CriteriaLevel]:
    _check_index(levels, index)
    return [lvl for i, lvl in enumerate(levels) if i != index]


def move_level_up(levels: list[CriteriaLevel], index: int) -> list[CriteriaLevel]:
    _check_index(levels, index)
    if index == 0:
        return list(levels)
    return _swap(levels, index - 1, index)


def move_level_down(levels: list[CriteriaLevel], index: int) -> list[CriteriaLevel]:
    _check_index(levels, index)
    if index == len(levels) - 1:
        return list(levels)
    return _swap(levels, index, index + 1)


def update_level(
    levels: list[CriteriaLevel],
    index: int,
    value: Optional[float] = None,
    label: Optional[dict[str, str]] = None,
    description: Optional[dict[str, str]] = None,
) -> list[CriteriaLevel]:
    """
    Replace fields of one level.
    `label` and `description` are partial per-language updates, e.g. {"ar": "..."}.
    """
    _check_index(levels, index)
    current = levels[index]
    changes: dict = {}
    if value is not None:
        changes["value"] = value
    if label:
        changes["label"] = LocalizedText.from_dict({**current.label.to_dict(), **label})
    if description:
        changes["description"] = LocalizedText.from_dict(
            {**current.description.to_dict(), **description}
        )
    updated = list(levels)
    updated[index] = replace(current, **changes)
    return updated


def _check_index(levels: list[CriteriaLevel], index: int):
    if not 0 <= index < len(levels):
        raise IndexError(f"Level index {index} out of range (0..{len(levels) - 1})")


def _swap(levels: list[CriteriaLevel], i: int, j: int) -> list[CriteriaLevel]:
    updated = list(levels)
    updated[i], updated[j] = updated[j], updated[i]
    return updated
