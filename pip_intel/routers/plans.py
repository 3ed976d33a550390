from datetime import date

from fastapi import APIRouter

from pip_intel.models.review import PlanProgress
from pip_intel.schemas.plan import PlanProgressRequest
from pip_intel.services.action_items import track_plan

router = APIRouter(prefix="/plans")


@router.post("/progress", response_model=PlanProgress)
def progress(request: PlanProgressRequest):
    """Completion, overdue items and items falling due soon for a development plan."""
    return track_plan(
        request.action_items,
        request.plan_start,
        request.as_of or date.today(),
        request.within_days,
    )
