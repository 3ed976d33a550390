from fastapi import APIRouter

from pip_intel.schemas.data_quality import DuplicateCheckRequest, DuplicateCheckResponse
from pip_intel.services.data_quality import find_duplicates

router = APIRouter(prefix="/data-quality")


@router.post("/duplicates", response_model=DuplicateCheckResponse)
def duplicates(request: DuplicateCheckRequest):
    issues = find_duplicates(request.employees)
    return DuplicateCheckResponse(
        employee_count=len(request.employees),
        issue_count=len(issues),
        issues=issues,
    )
