"""
Signal scorers for the focus scheduler.

Each scorer maps a work item and the scoring context to a 0-100 sub-score.
Scorers are pure: the only notion of time they see is ``context.now``.
"""

from datetime import datetime
from typing import Dict, Optional, Tuple

from focus_planner.core.models import (
    EnergyLevel,
    Priority,
    ScoringContext,
    WorkItem,
)
from focus_planner.scheduler.energy import current_energy_level


# (current energy, required energy) -> score
TIME_ENERGY_TABLE: Dict[Tuple[EnergyLevel, EnergyLevel], float] = {
    (EnergyLevel.LOW, EnergyLevel.LOW): 85,
    (EnergyLevel.LOW, EnergyLevel.MEDIUM): 40,
    (EnergyLevel.LOW, EnergyLevel.HIGH): 20,
    (EnergyLevel.MEDIUM, EnergyLevel.LOW): 60,
    (EnergyLevel.MEDIUM, EnergyLevel.MEDIUM): 90,
    (EnergyLevel.MEDIUM, EnergyLevel.HIGH): 70,
    (EnergyLevel.HIGH, EnergyLevel.LOW): 50,
    (EnergyLevel.HIGH, EnergyLevel.MEDIUM): 70,
    (EnergyLevel.HIGH, EnergyLevel.HIGH): 100,
}

PRIORITY_SCORES: Dict[Priority, float] = {
    Priority.URGENT: 100,
    Priority.HIGH: 75,
    Priority.MEDIUM: 50,
    Priority.LOW: 25,
}


def hours_until_due(item: WorkItem, now: datetime) -> Optional[float]:
    """
    Hours between ``now`` and the item's deadline (negative when overdue).

    If only one of the two timestamps carries a timezone, the naive one is
    read in the other's timezone.

    Returns:
        Hours until due, or None if the item has no deadline
    """
    if item.due_at is None:
        return None

    due = item.due_at
    if due.tzinfo is None and now.tzinfo is not None:
        due = due.replace(tzinfo=now.tzinfo)
    elif due.tzinfo is not None and now.tzinfo is None:
        now = now.replace(tzinfo=due.tzinfo)

    return (due - now).total_seconds() / 3600


def score_time_energy(item: WorkItem, context: ScoringContext) -> float:
    """
    Score how well the item's required effort matches current energy.

    High-effort work during the morning peak scores 100, high-effort work
    in the post-lunch trough scores 20. Unlisted combinations score 50.
    """
    current = current_energy_level(context.current_hour)
    return TIME_ENERGY_TABLE.get((current, item.energy_level), 50)


def score_deadline_urgency(item: WorkItem, context: ScoringContext) -> float:
    """
    Score deadline proximity.

    Scoring:
        - No deadline: 30
        - Overdue: 100
        - Due within 2 hours: 95
        - Due within 4 hours: 85
        - Due within 8 hours: 75
        - Due within 24 hours: 60
        - Due within 48 hours: 45
        - Due later: 30
    """
    hours = hours_until_due(item, context.now)
    if hours is None:
        return 30

    if hours < 0:
        return 100
    elif hours < 2:
        return 95
    elif hours < 4:
        return 85
    elif hours < 8:
        return 75
    elif hours < 24:
        return 60
    elif hours < 48:
        return 45
    return 30


def score_momentum(item: WorkItem, context: Optional[ScoringContext] = None) -> float:
    """
    Score partial completion, favouring finishing over starting.

    Ranges overlap at their edges, so they are checked in this order:
    20-80% (100), 10-20% (70), 80-95% exclusive (90), under 10% (30),
    95% and up (60).
    """
    progress = item.progress_percent

    if 20 <= progress <= 80:
        return 100
    if 10 <= progress < 20:
        return 70
    if 80 < progress < 95:
        return 90
    if progress < 10:
        return 30
    return 60


def score_priority(item: WorkItem, context: Optional[ScoringContext] = None) -> float:
    """Map stated priority to a score (urgent=100, high=75, medium=50, low=25)."""
    return PRIORITY_SCORES[item.priority]


def score_dependency(item: WorkItem, context: Optional[ScoringContext] = None) -> float:
    """
    Score dependency pressure using unfinished sub-items as a proxy.

    Scoring:
        - More than 3 incomplete: 80
        - 2-3 incomplete: 60
        - All sub-items done: 40 (ready to finalize)
        - Otherwise: 30
    """
    incomplete = item.incomplete_sub_items()

    if incomplete > 3:
        return 80
    if incomplete > 1:
        return 60
    if item.sub_items and incomplete == 0:
        return 40
    return 30
