"""
Stage pipeline helpers.

A project's stage is a string from an ordered list. Moving a project is a
lookup of the current position followed by +1 or -1; nothing else is stored.
"""
from typing import List, Optional


def stage_index(stages: List[str], current: Optional[str]) -> int:
    """Position of ``current`` in ``stages`` ignoring case, or -1 when unknown."""
    if not current:
        return -1
    wanted = current.strip().lower()
    for idx, stage in enumerate(stages):
        if stage.lower() == wanted:
            return idx
    return -1


def can_advance(stages: List[str], current: Optional[str]) -> bool:
    idx = stage_index(stages, current)
    return 0 <= idx < len(stages) - 1


def can_regress(stages: List[str], current: Optional[str]) -> bool:
    return stage_index(stages, current) > 0


def next_stage(stages: List[str], current: Optional[str]) -> Optional[str]:
    """The stage after ``current``; None at the last stage or for an unknown stage."""
    if not can_advance(stages, current):
        return None
    return stages[stage_index(stages, current) + 1]


def previous_stage(stages: List[str], current: Optional[str]) -> Optional[str]:
    """The stage before ``current``; None at the first stage or for an unknown stage."""
    if not can_regress(stages, current):
        return None
    return stages[stage_index(stages, current) - 1]


def stage_progress(stages: List[str], current: Optional[str]) -> float:
    """Percent complete, counting the current stage as done; 0 for an unknown stage."""
    idx = stage_index(stages, current)
    if idx < 0 or not stages:
        return 0.0
    return (idx + 1) / len(stages) * 100
