from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from pip_intel.models.insight import AuditEntry
from pip_intel.models.pip import (
    PerformanceImprovementPlan,
    PIPCheckIn,
    PIPExpectation,
    PIPMilestoneReview,
)


class PIPRecords(BaseModel):
    """A PIP and everything recorded against it, as loaded by the caller."""
    pip: PerformanceImprovementPlan
    expectations: List[PIPExpectation] = Field(default_factory=list)
    check_ins: List[PIPCheckIn] = Field(default_factory=list)
    milestone_reviews: List[PIPMilestoneReview] = Field(default_factory=list)
    # Evaluation date; the request date is used when omitted
    as_of: Optional[date] = None


class DocumentContextRequest(PIPRecords):
    employee_name: str
    date_format: Optional[str] = None


class DocumentContextResponse(BaseModel):
    pip_id: str
    context: Dict[str, str]


class AuditTrailRequest(PIPRecords):
    employee_name: str
    employee_title: Optional[str] = None
    date_format: Optional[str] = None


class AuditTrailResponse(BaseModel):
    pip_id: str
    entries: List[AuditEntry]
    document: str
