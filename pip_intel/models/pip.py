"""
PIP records as handed over by the persistence layer.

These are plain snapshots: the engine reads them, it never mutates them.
Date consistency (start before end, milestones in order) is the caller's
responsibility and is not validated here.
"""
import enum
from datetime import date, timedelta
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PIPStatus(str, enum.Enum):
    active = "active"
    completed = "completed"
    terminated = "terminated"
    extended = "extended"


class PIPPhase(str, enum.Enum):
    day_30 = "30_day"
    day_60 = "60_day"
    day_90 = "90_day"


class ExpectationStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    partially_met = "partially_met"
    met = "met"
    not_met = "not_met"


class CheckInStatus(str, enum.Enum):
    on_track = "on_track"
    at_risk = "at_risk"
    off_track = "off_track"
    needs_attention = "needs_attention"


class CheckInType(str, enum.Enum):
    weekly = "weekly"
    ad_hoc = "ad_hoc"
    milestone = "milestone"


MILESTONE_OFFSETS = {
    PIPPhase.day_30: 30,
    PIPPhase.day_60: 60,
    PIPPhase.day_90: 90,
}

PIP_LENGTH_DAYS = 90


class PerformanceImprovementPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    employee_id: str
    manager_id: Optional[str] = None
    manager_name: Optional[str] = None
    status: PIPStatus = PIPStatus.active

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    day_30_review_date: Optional[date] = None
    day_60_review_date: Optional[date] = None
    day_90_review_date: Optional[date] = None

    reason_for_pip: str = ""
    consequences: str = ""
    support_provided: Optional[str] = None

    outcome: Optional[str] = None
    outcome_date: Optional[date] = None
    outcome_notes: Optional[str] = None

    created_at: Optional[date] = None
    employee_acknowledged: bool = False

    @model_validator(mode="before")
    @classmethod
    def derive_schedule(cls, data):
        """Fill end and milestone dates from start_date when they are not supplied."""
        if not isinstance(data, dict):
            return data
        start = data.get("start_date")
        if start is None:
            return data
        if isinstance(start, str):
            start = date.fromisoformat(start)
        data = dict(data)
        if data.get("end_date") is None:
            data["end_date"] = start + timedelta(days=PIP_LENGTH_DAYS)
        for offset in MILESTONE_OFFSETS.values():
            key = f"day_{offset}_review_date"
            if data.get(key) is None:
                data[key] = start + timedelta(days=offset)
        return data

    def milestone_date(self, phase: PIPPhase) -> Optional[date]:
        return getattr(self, f"day_{MILESTONE_OFFSETS[phase]}_review_date")


class PIPExpectation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    pip_id: str
    phase: PIPPhase
    category: str = ""
    expectation: str = ""
    success_criteria: str = ""
    status: ExpectationStatus = ExpectationStatus.pending
    progress_percentage: int = Field(default=0, ge=0, le=100)
    order_index: int = 0
    reviewed_date: Optional[date] = None
    review_notes: Optional[str] = None


class PIPCheckIn(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    pip_id: str
    check_in_date: date
    check_in_type: CheckInType = CheckInType.weekly
    overall_status: Optional[CheckInStatus] = None
    progress_summary: str = ""
    attendees: List[str] = Field(default_factory=list)


class PIPMilestoneReview(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    pip_id: str
    milestone: PIPPhase
    review_date: date
    overall_rating: Optional[str] = None
    decision: str = ""
    decision_rationale: str = ""
    attendees: List[str] = Field(default_factory=list)
