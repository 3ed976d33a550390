from typing import List

from pydantic import BaseModel, Field

from pip_intel.models.employee import EmployeeRecord, QualityIssue


class DuplicateCheckRequest(BaseModel):
    employees: List[EmployeeRecord] = Field(default_factory=list)


class DuplicateCheckResponse(BaseModel):
    employee_count: int
    issue_count: int
    issues: List[QualityIssue]
