"""
Scheduler module for Focus Planner.

Provides the energy curve, signal scorers, priority selection,
justification text and Rich formatting for focus suggestions.
"""

from .energy import current_energy_level
from .signals import (
    hours_until_due,
    score_time_energy,
    score_deadline_urgency,
    score_momentum,
    score_priority,
    score_dependency,
)
from .justification import generate_justification, CLAUSE_GENERATORS
from .prioritizer import (
    Prioritizer,
    WEIGHTS,
    score_breakdown,
    total_score,
    select_top,
)
from .formatter import FocusFormatter

__all__ = [
    # Energy
    'current_energy_level',
    # Signals
    'hours_until_due',
    'score_time_energy',
    'score_deadline_urgency',
    'score_momentum',
    'score_priority',
    'score_dependency',
    # Justification
    'generate_justification',
    'CLAUSE_GENERATORS',
    # Prioritizer
    'Prioritizer',
    'WEIGHTS',
    'score_breakdown',
    'total_score',
    'select_top',
    # Formatter
    'FocusFormatter',
]
