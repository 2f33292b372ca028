"""
Human-readable justification for a ranked work item.

Clauses are produced by an ordered list of generators. Each generator
returns a clause or None; the first triggered clauses (two by default) are
joined into the justification string.
"""

import math
from typing import Callable, List, Optional, Sequence

from focus_planner.core.models import Priority, ScoreBreakdown, ScoringContext, WorkItem
from focus_planner.scheduler.signals import hours_until_due


ClauseGenerator = Callable[[WorkItem, ScoringContext, ScoreBreakdown], Optional[str]]

DEFAULT_SEPARATOR = " • "
DEFAULT_MAX_CLAUSES = 2
FALLBACK_CLAUSE = "Best fit for current time and energy level"


def overdue_clause(item: WorkItem, context: ScoringContext, breakdown: ScoreBreakdown) -> Optional[str]:
    hours = hours_until_due(item, context.now)
    if hours is not None and hours < 0:
        return "Overdue - Needs immediate attention"
    return None


def time_sensitive_clause(item: WorkItem, context: ScoringContext, breakdown: ScoreBreakdown) -> Optional[str]:
    hours = hours_until_due(item, context.now)
    if hours is None or not 0 <= hours < 2:
        return None
    rounded = int(math.floor(hours + 0.5))
    unit = "hour" if rounded == 1 else "hours"
    return f"Due in {rounded} {unit} - Time-sensitive"


def due_window_clause(item: WorkItem, context: ScoringContext, breakdown: ScoreBreakdown) -> Optional[str]:
    hours = hours_until_due(item, context.now)
    if hours is None or hours < 2:
        return None
    if hours < 4:
        return "Due this afternoon - High priority"
    if hours < 8:
        return "Due today - Complete before end of day"
    return None


def momentum_clause(item: WorkItem, context: ScoringContext, breakdown: ScoreBreakdown) -> Optional[str]:
    if 50 <= item.progress_percent < 95:
        return f"{item.progress_percent}% complete - Finish strong to maintain momentum"
    return None


def priority_clause(item: WorkItem, context: ScoringContext, breakdown: ScoreBreakdown) -> Optional[str]:
    if item.priority == Priority.URGENT:
        return "Urgent priority - Immediate action required"
    if item.priority == Priority.HIGH:
        return "High priority - Critical for daily goals"
    return None


def collaboration_clause(item: WorkItem, context: ScoringContext, breakdown: ScoreBreakdown) -> Optional[str]:
    if item.collaborators:
        return f"Team task - {item.collaborators[0].name} is collaborating"
    return None


def blocking_clause(item: WorkItem, context: ScoringContext, breakdown: ScoreBreakdown) -> Optional[str]:
    incomplete = item.incomplete_sub_items()
    if incomplete > 2:
        return f"Blocking {incomplete} subtasks - Clear the path"
    return None


# Evaluated in this order; earlier clauses win
CLAUSE_GENERATORS: Sequence[ClauseGenerator] = (
    overdue_clause,
    time_sensitive_clause,
    due_window_clause,
    momentum_clause,
    priority_clause,
    collaboration_clause,
    blocking_clause,
)


def collect_clauses(item: WorkItem, context: ScoringContext, breakdown: ScoreBreakdown) -> List[str]:
    """Return every triggered clause, in precedence order."""
    clauses = []
    for generator in CLAUSE_GENERATORS:
        clause = generator(item, context, breakdown)
        if clause:
            clauses.append(clause)
    return clauses


def generate_justification(
    item: WorkItem,
    context: ScoringContext,
    breakdown: ScoreBreakdown,
    separator: str = DEFAULT_SEPARATOR,
    max_clauses: int = DEFAULT_MAX_CLAUSES,
) -> str:
    """
    Build the justification string for a ranked item.

    Args:
        item: Work item being explained
        context: Scoring context (the same one used to score the item)
        breakdown: Sub-scores of the item
        separator: Text placed between clauses
        max_clauses: Maximum number of clauses kept (clamped to 1..2)

    Returns:
        Non-empty justification string
    """
    clauses = collect_clauses(item, context, breakdown)
    if not clauses:
        return FALLBACK_CLAUSE
    return separator.join(clauses[:max(1, min(DEFAULT_MAX_CLAUSES, max_clauses))])
