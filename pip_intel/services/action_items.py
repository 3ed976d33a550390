"""
Action item templates keyed by 9-box position, and plan progress helpers.
"""
import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from pip_intel.models.review import (
    ActionItem,
    ActionItemOwner,
    ActionItemPriority,
    PlanProgress,
    Rating,
    TrackedActionItem,
)

logger = logging.getLogger(__name__)

_H, _M, _L = ActionItemPriority.high, ActionItemPriority.medium, ActionItemPriority.low
_EMP, _MGR, _HR = ActionItemOwner.employee, ActionItemOwner.manager, ActionItemOwner.hr

# (potential, performance) -> [(description, skill_area, priority, due_offset_days, owner)]
_TEMPLATES: Dict[Tuple[Rating, Rating], List[tuple]] = {
    (Rating.high, Rating.low): [
        ("Complete performance gap analysis with manager", "Performance Management", _H, 7, _MGR),
        ("Establish weekly coaching sessions with manager", "Coaching", _H, 7, _MGR),
        ("Set 3 measurable 30-day performance goals", "Goal Setting", _H, 7, _EMP),
        ("Enroll in relevant skill-building training program", "Technical Skills", _H, 14, _EMP),
        ("Identify and remove key obstacles to success", "Problem Solving", _H, 14, _MGR),
    ],
    (Rating.high, Rating.medium): [
        ("Take on stretch assignment or cross-functional project", "Leadership", _H, 30, _EMP),
        ("Complete leadership development assessment (360 feedback)", "Self-Awareness", _H, 21, _HR),
        ("Shadow senior leader for one week", "Executive Presence", _M, 45, _MGR),
        ("Present to executive team or lead strategic initiative", "Strategic Thinking", _M, 60, _EMP),
        ("Attend leadership training or executive education program", "Leadership", _M, 90, _EMP),
    ],
    (Rating.high, Rating.high): [
        ("Create individualized succession plan and career roadmap", "Career Planning", _H, 30, _HR),
        ("Assign to high-visibility, high-impact strategic project", "Strategic Leadership", _H, 30, _MGR),
        ("Conduct stay interview and address retention concerns", "Retention", _H, 14, _MGR),
        ("Begin executive coaching program with external coach", "Executive Presence", _M, 60, _HR),
        ("Present promotion case to leadership team", "Career Advancement", _M, 90, _MGR),
    ],
    (Rating.medium, Rating.low): [
        ("Document specific performance issues and expectations", "Performance Management", _H, 7, _MGR),
        ("Schedule weekly check-ins to review progress", "Coaching", _H, 7, _MGR),
        ("Complete required training on performance gaps", "Technical Skills", _H, 30, _EMP),
        ("Demonstrate measurable improvement in 2 key areas", "Performance", _H, 60, _EMP),
    ],
    (Rating.medium, Rating.medium): [
        ("Set clear goals for continued steady contribution", "Goal Setting", _M, 14, _EMP),
        ("Identify one skill area for professional development", "Development", _M, 30, _EMP),
        ("Take on mentorship role for junior team member", "Mentoring", _L, 60, _EMP),
        ("Attend relevant conference or training program", "Learning", _L, 90, _EMP),
    ],
    (Rating.medium, Rating.high): [
        ("Conduct compensation review and market adjustment", "Retention", _H, 30, _HR),
        ("Provide high-visibility project leadership opportunity", "Leadership", _M, 45, _MGR),
        ("Discuss career aspirations and lateral move opportunities", "Career Planning", _M, 30, _MGR),
        ("Invest in specialized training to deepen expertise", "Expertise", _L, 90, _EMP),
    ],
    (Rating.low, Rating.low): [
        ("Document performance issues with specific examples", "Performance Management", _H, 7, _MGR),
        ("Consult with HR on formal PIP or transition plan", "HR Process", _H, 7, _MGR),
        ("Deliver clear feedback on performance expectations", "Feedback", _H, 14, _MGR),
        ("Set 30/60/90 day performance milestones", "Goal Setting", _H, 14, _MGR),
    ],
    (Rating.low, Rating.medium): [
        ("Clarify role expectations and success criteria", "Role Clarity", _M, 14, _MGR),
        ("Recognize consistent contributions to team", "Recognition", _L, 30, _MGR),
        ("Provide training to enhance current role effectiveness", "Skills", _M, 60, _EMP),
    ],
    (Rating.low, Rating.high): [
        ("Ensure competitive compensation for current role", "Retention", _H, 30, _HR),
        ("Provide clear recognition for expertise and reliability", "Recognition", _M, 14, _MGR),
        ("Create expert/mentor role leveraging specialized knowledge", "Mentoring", _M, 60, _MGR),
    ],
}


def template_action_items(performance: Rating, potential: Rating) -> List[ActionItem]:
    return [
        ActionItem(
            description=description,
            skill_area=skill_area,
            priority=priority,
            due_offset_days=due,
            owner=owner,
        )
        for description, skill_area, priority, due, owner in _TEMPLATES[(potential, performance)]
    ]


def action_item_status(item: ActionItem, plan_start: date, as_of: date) -> str:
    if item.completed:
        return "completed"
    if as_of > due_date(item, plan_start):
        return "overdue"
    return "not_started"


def plan_progress(items: List[ActionItem]) -> int:
    """Share of completed items, whole percent."""
    if not items:
        return 0
    done = sum(1 for item in items if item.completed)
    return round(done * 100 / len(items))


def overdue_items(items: List[ActionItem], plan_start: date, as_of: date) -> List[ActionItem]:
    return [i for i in items if action_item_status(i, plan_start, as_of) == "overdue"]


def upcoming_items(
    items: List[ActionItem],
    plan_start: date,
    as_of: date,
    within_days: int = 7,
) -> List[ActionItem]:
    """Open items falling due in the next `within_days` days, soonest first."""
    horizon = as_of + timedelta(days=within_days)
    upcoming = [
        i for i in items
        if not i.completed and as_of <= due_date(i, plan_start) <= horizon
    ]
    return sorted(upcoming, key=lambda i: i.due_offset_days)


def due_date(item: ActionItem, plan_start: date) -> date:
    return plan_start + timedelta(days=item.due_offset_days)


def _tracked(item: ActionItem, plan_start: date, as_of: date) -> TrackedActionItem:
    return TrackedActionItem(
        **item.model_dump(),
        due_date=due_date(item, plan_start),
        status=action_item_status(item, plan_start, as_of),
    )


def track_plan(
    items: List[ActionItem],
    plan_start: date,
    as_of: date,
    within_days: int = 7,
) -> PlanProgress:
    overdue = overdue_items(items, plan_start, as_of)
    upcoming = upcoming_items(items, plan_start, as_of, within_days)
    progress = plan_progress(items)
    logger.info(
        f"Plan started {plan_start}: {progress}% complete, "
        f"{len(overdue)} overdue, {len(upcoming)} due within {within_days} days"
    )
    return PlanProgress(
        plan_start=plan_start,
        as_of=as_of,
        progress=progress,
        total=len(items),
        completed=sum(1 for i in items if i.completed),
        overdue=[_tracked(i, plan_start, as_of) for i in overdue],
        upcoming=[_tracked(i, plan_start, as_of) for i in upcoming],
    )


def item_from_text(
    description: str,
    index: int,
    performance: Optional[Rating] = None,
) -> ActionItem:
    """Action item for a sentence lifted from the review; earlier items are due sooner."""
    urgent = performance == Rating.low or index < 2
    return ActionItem(
        description=description,
        due_offset_days=min(90, 30 * (index // 2 + 1)),
        owner=ActionItemOwner.employee,
        priority=ActionItemPriority.high if urgent else ActionItemPriority.medium,
    )
