import enum
from typing import List, Optional

from pydantic import BaseModel, Field


class EmployeeRecord(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    title: Optional[str] = None
    department: Optional[str] = None


class IssueSeverity(str, enum.Enum):
    critical = "critical"
    high = "high"
    medium = "medium"
    low = "low"


class QualityIssueType(str, enum.Enum):
    duplicate_name = "duplicate_name"
    duplicate_email = "duplicate_email"


class QualityIssue(BaseModel):
    id: str
    type: QualityIssueType
    severity: IssueSeverity
    # The normalized name or email the records collide on
    key: str
    employee_ids: List[str] = Field(default_factory=list)
    employee_names: List[str] = Field(default_factory=list)
    description: str
    suggested_action: str
