"""
Data models for Focus Planner
Defines the work item snapshot consumed by the priority scheduler
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple, Union

from dateutil import parser as date_parser


class Priority(str, Enum):
    """Stated priority of a work item"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class EnergyLevel(str, Enum):
    """Effort tier, used both for required effort and current capacity"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Collaborator:
    """Person collaborating on a work item"""
    id: Optional[str] = None
    name: str = ""

    @classmethod
    def from_value(cls, value: Union[str, Dict[str, Any]]) -> 'Collaborator':
        """Create Collaborator from a plain name or a {id, name} mapping"""
        if isinstance(value, dict):
            name = value.get('name') or value.get('id') or ""
            ident = value.get('id')
            return cls(id=str(ident) if ident is not None else None, name=str(name))
        return cls(id=None, name=str(value))


@dataclass(frozen=True)
class SubItem:
    """Sub-item of a work item (only completion is used for scoring)"""
    completed: bool = False
    title: str = ""

    @classmethod
    def from_value(cls, value: Union[bool, Dict[str, Any]]) -> 'SubItem':
        """Create SubItem from a mapping or a bare completion flag"""
        if isinstance(value, dict):
            return cls(
                completed=bool(value.get('completed', False)),
                title=value.get('title', '') or ''
            )
        return cls(completed=bool(value))


@dataclass(frozen=True)
class WorkItem:
    """Work item snapshot (read-only for the duration of a scoring pass)"""
    id: Union[str, int]
    title: str = ""
    priority: Priority = Priority.MEDIUM
    energy_level: EnergyLevel = EnergyLevel.MEDIUM
    due_at: Optional[datetime] = None
    progress_percent: int = 0
    completed: bool = False
    collaborators: Tuple[Collaborator, ...] = field(default_factory=tuple)
    sub_items: Tuple[SubItem, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WorkItem':
        """
        Create WorkItem from a store record dictionary

        Accepts both camelCase keys (as served to the web client) and
        snake_case keys.

        Raises:
            ValueError: if the record is not a mapping, the id is missing
                or an enum value is unknown
        """
        if not isinstance(data, dict):
            raise ValueError(f"Work item must be an object, got {type(data).__name__}")
        if data.get('id') is None:
            raise ValueError("Work item is missing an 'id'")

        priority = cls._pick(data, 'priority', default='medium')
        energy = cls._pick(data, 'energy_level', 'energyLevel', default='medium')
        due = cls._pick(data, 'due_at', 'dueAt', 'due_date', 'dueDate')
        progress = cls._pick(data, 'progress_percent', 'progressPercent', 'progress', default=0)
        collaborators = cls._pick(data, 'collaborators', default=None) or []
        sub_items = cls._pick(data, 'sub_items', 'subItems', 'subtasks', default=None) or []

        # A single collaborator may be given as a bare name
        if isinstance(collaborators, (str, dict)):
            collaborators = [collaborators]
        if not isinstance(collaborators, (list, tuple)):
            raise ValueError(f"Collaborators of work item {data['id']} must be a list")
        if not isinstance(sub_items, (list, tuple)):
            raise ValueError(f"Sub-items of work item {data['id']} must be a list")

        return cls(
            id=data['id'],
            title=data.get('title', '') or '',
            priority=cls._parse_enum(Priority, priority, 'priority'),
            energy_level=cls._parse_enum(EnergyLevel, energy, 'energy level'),
            due_at=due if isinstance(due, datetime) else cls._parse_datetime(due),
            progress_percent=int(progress or 0),
            completed=bool(data.get('completed', False)),
            collaborators=tuple(Collaborator.from_value(c) for c in collaborators),
            sub_items=tuple(SubItem.from_value(s) for s in sub_items),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary (camelCase keys)"""
        return {
            'id': self.id,
            'title': self.title,
            'priority': self.priority.value,
            'energyLevel': self.energy_level.value,
            'dueAt': self.due_at.isoformat() if self.due_at else None,
            'progressPercent': self.progress_percent,
            'completed': self.completed,
            'collaborators': [{'id': c.id, 'name': c.name} for c in self.collaborators],
            'subItems': [{'completed': s.completed, 'title': s.title} for s in self.sub_items],
        }

    def incomplete_sub_items(self) -> int:
        """Count sub-items that are not yet completed"""
        return sum(1 for sub in self.sub_items if not sub.completed)

    def is_eligible(self) -> bool:
        """Check if item can be suggested (open and shared with a collaborator)"""
        return not self.completed and len(self.collaborators) > 0

    @staticmethod
    def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
        """Return the first present key's value"""
        for key in keys:
            if key in data:
                return data[key]
        return default

    @staticmethod
    def _parse_enum(enum_cls, value: Any, label: str):
        """Parse enum value case-insensitively"""
        if isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(str(value).lower())
        except ValueError:
            allowed = ", ".join(member.value for member in enum_cls)
            raise ValueError(f"Unknown {label} '{value}' (expected one of: {allowed})")

    @staticmethod
    def _parse_datetime(dt_str: Optional[str]) -> Optional[datetime]:
        """Parse ISO-8601 timestamp string"""
        if dt_str:
            try:
                return date_parser.isoparse(dt_str)
            except (ValueError, TypeError, OverflowError):
                return None
        return None


@dataclass(frozen=True)
class ScoreBreakdown:
    """Five named sub-scores, each between 0 and 100"""
    time_energy: float
    deadline_urgency: float
    momentum: float
    priority: float
    dependency: float

    def as_dict(self) -> Dict[str, float]:
        """Sub-scores keyed by signal name"""
        return {
            "time_energy": self.time_energy,
            "deadline_urgency": self.deadline_urgency,
            "momentum": self.momentum,
            "priority": self.priority,
            "dependency": self.dependency,
        }

    def weighted(self, weights: Dict[str, float]) -> Dict[str, float]:
        """Per-signal contribution to the total score"""
        return {name: score * weights[name] for name, score in self.as_dict().items()}


@dataclass(frozen=True)
class ScoringContext:
    """Moment in time a scoring pass is evaluated against"""
    now: datetime
    current_hour: int
    current_minute: int = 0
    day_of_week: int = 0  # 0 = Sunday

    @classmethod
    def from_datetime(cls, now: datetime) -> 'ScoringContext':
        """Derive context fields from the caller's clock reading"""
        return cls(
            now=now,
            current_hour=now.hour,
            current_minute=now.minute,
            day_of_week=(now.weekday() + 1) % 7,
        )


@dataclass
class RankedEntry:
    """Work item with computed total score, breakdown and justification"""
    item: WorkItem
    total_score: float
    breakdown: ScoreBreakdown
    justification: str
    is_fallback: bool = False

    def __lt__(self, other: 'RankedEntry') -> bool:
        """Enable sorting by score (descending)."""
        return self.total_score > other.total_score  # Reverse for descending order

    def as_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary"""
        return {
            "item": self.item.to_dict(),
            "total_score": self.total_score,
            "breakdown": self.breakdown.as_dict(),
            "justification": self.justification,
            "is_fallback": self.is_fallback,
        }


def work_items_from_records(records: List[Dict[str, Any]]) -> List[WorkItem]:
    """Convert store records into WorkItem snapshots, preserving order"""
    return [WorkItem.from_dict(record) for record in records]
