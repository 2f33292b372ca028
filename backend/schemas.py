"""
Pydantic schemas for API request/response validation.

Design note: field names mirror the web client's camelCase work item
records so snapshots can be posted unchanged.
"""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

from focus_planner.core.config import FallbackMode
from focus_planner.core.models import EnergyLevel, Priority


# =============================================================================
# Work Item Schemas
# =============================================================================

class CollaboratorSchema(BaseModel):
    """Collaborator reference."""
    id: Optional[str] = None
    name: str = ""


class SubItemSchema(BaseModel):
    """Sub-item completion state."""
    completed: bool = False
    title: str = ""


class WorkItemSchema(BaseModel):
    """Work item snapshot as supplied by the store."""
    id: Union[str, int]
    title: str = ""
    priority: Priority = Priority.MEDIUM
    energyLevel: EnergyLevel = EnergyLevel.MEDIUM
    dueAt: Optional[str] = None  # ISO format
    progressPercent: int = Field(default=0, ge=0, le=100)
    completed: bool = False
    collaborators: List[Union[CollaboratorSchema, str]] = []
    subItems: List[SubItemSchema] = []

    def to_record(self) -> Dict[str, Any]:
        """Convert to a store record understood by WorkItem.from_dict."""
        return self.model_dump(mode="json")


# =============================================================================
# Focus Schemas
# =============================================================================

class FocusRequest(BaseModel):
    """Request body for ranking a snapshot."""
    items: List[WorkItemSchema]
    now: Optional[str] = None  # ISO format, defaults to server time
    count: Optional[int] = Field(default=None, ge=0, le=50)
    fallback: Optional[FallbackMode] = None


class ScoreBreakdownSchema(BaseModel):
    """Per-signal sub-scores (0-100)."""
    time_energy: float
    deadline_urgency: float
    momentum: float
    priority: float
    dependency: float


class RankedEntrySchema(BaseModel):
    """One ranked suggestion."""
    item: Dict[str, Any]
    total_score: float
    breakdown: ScoreBreakdownSchema
    justification: str
    is_fallback: bool = False


class FocusResponse(BaseModel):
    """Ranked suggestions for the given moment."""
    generated_at: str
    energy_level: EnergyLevel
    entries: List[RankedEntrySchema]


class EnergyResponse(BaseModel):
    """Energy level for an hour of the day."""
    hour: int
    energy_level: EnergyLevel


class ErrorResponse(BaseModel):
    """Error response for API errors."""
    detail: str
    code: Optional[str] = None
