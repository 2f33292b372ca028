"""
Core module for Focus Planner
Contains configuration, model definitions and the snapshot loader
"""

from .config import Config, FallbackMode
from .models import (
    Priority,
    EnergyLevel,
    Collaborator,
    SubItem,
    WorkItem,
    ScoreBreakdown,
    ScoringContext,
    RankedEntry,
)
from .store import load_work_items

__all__ = [
    'Config', 'FallbackMode',
    'Priority', 'EnergyLevel', 'Collaborator', 'SubItem', 'WorkItem',
    'ScoreBreakdown', 'ScoringContext', 'RankedEntry',
    'load_work_items',
]
