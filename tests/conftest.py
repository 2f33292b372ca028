"""
Shared fixtures: a fixed clock and a work item factory.
"""

import pytest
from datetime import datetime, timedelta, timezone

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from focus_planner.core.models import (
    Collaborator,
    EnergyLevel,
    Priority,
    SubItem,
    WorkItem,
)


# Tuesday, 10:00 UTC (morning energy peak)
FIXED_NOW = datetime(2026, 3, 10, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed clock reading at the morning energy peak."""
    return FIXED_NOW


@pytest.fixture
def make_item():
    """Factory for work items with sensible defaults."""
    def _make(
        id="item",
        title=None,
        priority=Priority.MEDIUM,
        energy_level=EnergyLevel.MEDIUM,
        due_in_hours=None,
        progress=0,
        completed=False,
        collaborators=("Sam",),
        sub_items=(),
        now=FIXED_NOW,
    ):
        return WorkItem(
            id=id,
            title=title if title is not None else f"Task {id}",
            priority=priority,
            energy_level=energy_level,
            due_at=now + timedelta(hours=due_in_hours) if due_in_hours is not None else None,
            progress_percent=progress,
            completed=completed,
            collaborators=tuple(Collaborator(name=name) for name in collaborators),
            sub_items=tuple(SubItem(completed=done) for done in sub_items),
        )
    return _make
