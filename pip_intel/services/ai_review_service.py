"""
AI-assisted review analysis with a deterministic fallback.

The external model call is the only blocking operation in the engine. It runs
in a worker thread under `asyncio.wait_for`, so callers can cancel it and it
can never hold a request open past `settings.ai.timeout_seconds`. Any failure
falls back to keyword analysis and is reported through `used_fallback`.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pip_intel.core.config import settings
from pip_intel.core.exceptions import AppException
from pip_intel.core.prompts import REVIEW_ANALYSIS_SYSTEM, REVIEW_ANALYSIS_USER_TEMPLATE, get_prompt
from pip_intel.models.review import (
    ActionItem,
    ActionItemOwner,
    ActionItemPriority,
    DraftPlan,
    PlacementSuggestion,
    Rating,
    ReviewAnalysis,
)
from pip_intel.services.ai_orchestrator import AIOrchestrator
from pip_intel.services.review_analyzer import (
    MAX_ACTION_ITEMS,
    MAX_OBJECTIVES,
    MAX_SUCCESS_METRICS,
    PLAN_TIMELINES,
    PLAN_TITLES,
    UNKNOWN_EMPLOYEE,
    ReviewAnalyzer,
    determine_plan_type,
)

logger = logging.getLogger(__name__)


def _rating(value: Any) -> Rating:
    try:
        return Rating(str(value).strip().lower())
    except ValueError:
        return Rating.medium


class AIActionItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    description: str
    days_to_complete: int = Field(default=30, alias="daysToComplete")
    priority: str = "medium"
    owner: str = "Employee"


class AIReviewResponse(BaseModel):
    """Shape of the JSON object the model is asked to return."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    employee_name: Optional[str] = Field(default=None, alias="employeeName")
    title: Optional[str] = None
    department: Optional[str] = None
    email: Optional[str] = None
    suggested_performance: Rating = Field(default=Rating.medium, alias="suggestedPerformance")
    suggested_potential: Rating = Field(default=Rating.medium, alias="suggestedPotential")
    confidence: int = 70
    reasoning: str = ""
    key_strengths: List[str] = Field(default_factory=list, alias="keyStrengths")
    development_areas: List[str] = Field(default_factory=list, alias="developmentAreas")
    achievements: List[str] = Field(default_factory=list)
    objectives: List[str] = Field(default_factory=list)
    action_items: List[AIActionItem] = Field(default_factory=list, alias="actionItems")
    success_metrics: List[str] = Field(default_factory=list, alias="successMetrics")
    recommended_timeline: Optional[str] = Field(default=None, alias="recommendedTimeline")

    @field_validator("suggested_performance", "suggested_potential", mode="before")
    @classmethod
    def coerce_rating(cls, value):
        return _rating(value)

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, value):
        try:
            return max(0, min(100, int(value)))
        except (TypeError, ValueError):
            return 70


_OWNERS = {owner.value.lower(): owner for owner in ActionItemOwner}


def _action_item(item: AIActionItem) -> ActionItem:
    try:
        priority = ActionItemPriority(item.priority.lower())
    except ValueError:
        priority = ActionItemPriority.medium
    owner = _OWNERS.get(item.owner.strip().lower(), ActionItemOwner.employee)
    return ActionItem(
        description=item.description,
        due_offset_days=max(1, item.days_to_complete),
        priority=priority,
        owner=owner,
    )


def analysis_from_ai(raw: Dict[str, Any]) -> ReviewAnalysis:
    """Map the model's JSON onto a ReviewAnalysis. Raises ValidationError on unusable payloads."""
    parsed = AIReviewResponse.model_validate(raw)
    employee_name = (parsed.employee_name or "").strip() or UNKNOWN_EMPLOYEE
    plan_type = determine_plan_type(parsed.suggested_performance, parsed.suggested_potential)

    insights = [parsed.reasoning] if parsed.reasoning else []
    insights.extend(f"Key strength: {s}" for s in parsed.key_strengths[:1])
    insights.extend(f"Priority development: {a}" for a in parsed.development_areas[:1])

    return ReviewAnalysis(
        employee_name=employee_name,
        title=parsed.title or None,
        department=parsed.department or None,
        email=parsed.email or None,
        placement=PlacementSuggestion(
            performance=parsed.suggested_performance,
            potential=parsed.suggested_potential,
            confidence=parsed.confidence,
            reasoning=parsed.reasoning,
        ),
        plan=DraftPlan(
            plan_type=plan_type,
            title=f"{PLAN_TITLES[plan_type]} for {employee_name}",
            objectives=parsed.objectives[:MAX_OBJECTIVES],
            action_items=[_action_item(i) for i in parsed.action_items[:MAX_ACTION_ITEMS]],
            success_metrics=parsed.success_metrics[:MAX_SUCCESS_METRICS],
            timeline=parsed.recommended_timeline or PLAN_TIMELINES[plan_type],
        ),
        key_insights=insights,
        strengths=parsed.key_strengths,
        areas_for_improvement=parsed.development_areas,
        achievements=parsed.achievements,
        source="ai",
    )


async def analyze_review(
    review_text: str,
    use_ai: bool = False,
    timeout: Optional[float] = None,
    analyzer: Optional[ReviewAnalyzer] = None,
) -> ReviewAnalysis:
    analyzer = analyzer or ReviewAnalyzer()
    if not use_ai:
        return analyzer.analyze(review_text)

    timeout = settings.ai.timeout_seconds if timeout is None else timeout
    user_content = get_prompt(REVIEW_ANALYSIS_USER_TEMPLATE, review_text=review_text or "")

    try:
        raw = await asyncio.wait_for(
            asyncio.to_thread(AIOrchestrator.analyze_text, REVIEW_ANALYSIS_SYSTEM, user_content),
            timeout=timeout,
        )
        return analysis_from_ai(raw)
    except asyncio.TimeoutError:
        reason = "timeout"
        logger.warning(f"AI review analysis timed out after {timeout}s; using keyword analysis.")
    except AppException as e:
        reason = e.error_code
        logger.warning(f"AI review analysis unavailable ({e.error_code}: {e.message}); using keyword analysis.")
    except ValidationError as e:
        reason = "INVALID_AI_RESPONSE"
        logger.warning(f"AI review analysis returned an unusable payload: {e.error_count()} errors; using keyword analysis.")
    except Exception as e:
        # The review flow must always answer
        reason = "UNEXPECTED_AI_ERROR"
        logger.error(f"AI review analysis failed unexpectedly: {e}; using keyword analysis.")

    fallback = analyzer.analyze(review_text)
    return fallback.model_copy(update={"used_fallback": True, "fallback_reason": reason})
