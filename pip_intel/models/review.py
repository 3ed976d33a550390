import enum
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class Rating(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class PlanType(str, enum.Enum):
    development = "development"
    performance_improvement = "performance_improvement"
    retention = "retention"
    succession = "succession"


class ActionItemPriority(str, enum.Enum):
    high = "high"
    medium = "medium"
    low = "low"


class ActionItemOwner(str, enum.Enum):
    employee = "Employee"
    manager = "Manager"
    hr = "HR"


class ActionItem(BaseModel):
    description: str
    due_offset_days: int = 30
    owner: ActionItemOwner = ActionItemOwner.employee
    priority: ActionItemPriority = ActionItemPriority.medium
    skill_area: Optional[str] = None
    completed: bool = False


class PlacementSuggestion(BaseModel):
    performance: Rating
    potential: Rating
    confidence: int = Field(ge=0, le=100)
    reasoning: str = ""


class DraftPlan(BaseModel):
    plan_type: PlanType
    title: str
    objectives: List[str] = Field(default_factory=list)
    action_items: List[ActionItem] = Field(default_factory=list)
    success_metrics: List[str] = Field(default_factory=list)
    timeline: str = "90 days"


class ReviewAnalysis(BaseModel):
    employee_name: str
    title: Optional[str] = None
    department: Optional[str] = None
    email: Optional[str] = None

    placement: PlacementSuggestion
    plan: DraftPlan
    key_insights: List[str] = Field(default_factory=list)

    strengths: List[str] = Field(default_factory=list)
    areas_for_improvement: List[str] = Field(default_factory=list)
    achievements: List[str] = Field(default_factory=list)
    challenges: List[str] = Field(default_factory=list)

    # "ai" or "keywords"; used_fallback is set when AI was requested but not used
    source: str = "keywords"
    used_fallback: bool = False
    fallback_reason: Optional[str] = None


class TrackedActionItem(ActionItem):
    due_date: date
    status: str


class PlanProgress(BaseModel):
    """Where a plan's action items stand on a given day."""
    plan_start: date
    as_of: date
    progress: int = Field(ge=0, le=100)
    total: int
    completed: int
    overdue: List[TrackedActionItem] = Field(default_factory=list)
    upcoming: List[TrackedActionItem] = Field(default_factory=list)
