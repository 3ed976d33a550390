from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from pip_intel.models.review import ActionItem


class PlanProgressRequest(BaseModel):
    plan_start: date
    action_items: List[ActionItem] = Field(default_factory=list)
    # Evaluation date; the request date is used when omitted
    as_of: Optional[date] = None
    within_days: int = Field(default=7, ge=0)
