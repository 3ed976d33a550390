"""
Coaching actions for the manager running a PIP.

Several conditions overlap with the alert rules: alerts speak to
compliance, these speak to what the manager should do next.
"""
from datetime import date
from typing import List, Optional, Sequence

from pip_intel.core.config import EnginePolicy, settings
from pip_intel.models.insight import PRIORITY_ORDER, Recommendation, RecommendationPriority, TrajectoryVerdict
from pip_intel.models.pip import (
    MILESTONE_OFFSETS,
    PerformanceImprovementPlan,
    PIPCheckIn,
    PIPExpectation,
    PIPMilestoneReview,
    PIPPhase,
)
from pip_intel.services.pip_signals import PIPSignals, build_signals


def recommendations_from_signals(
    signals: PIPSignals,
    policy: Optional[EnginePolicy] = None,
) -> List[Recommendation]:
    policy = policy or settings.engine
    recs: List[Recommendation] = []

    if signals.cadence.days_since_last > policy.check_in_overdue_days:
        recs.append(Recommendation(
            id="urgent-checkin",
            priority=RecommendationPriority.urgent,
            action="Schedule check-in meeting immediately",
            why="Long gaps between check-ins signal lack of support and weaken documentation",
        ))

    if signals.trajectory in (TrajectoryVerdict.at_risk, TrajectoryVerdict.failing):
        recs.append(Recommendation(
            id="hr-consultation",
            priority=RecommendationPriority.urgent,
            action="Consult with HR today",
            why="Current trajectory suggests PIP may not succeed. HR needs to be involved in decision-making.",
        ))

    not_met = signals.expectations.not_met
    if not_met > 0 and signals.days_in_pip > policy.clarify_after_day:
        recs.append(Recommendation(
            id="clarify-expectations",
            priority=RecommendationPriority.high,
            action=f"Re-clarify expectations for {not_met} underperforming areas",
            why="If employee claims expectations were unclear, that weakens termination case",
        ))

    if signals.stagnant_count > 0:
        recs.append(Recommendation(
            id="additional-resources",
            priority=RecommendationPriority.medium,
            action="Provide additional training or resources",
            why="Shows good faith effort to support employee success",
        ))

    for value in policy.milestone_alerts:
        offset = MILESTONE_OFFSETS[PIPPhase(value)]
        if offset - policy.approaching_lead_days <= signals.days_in_pip < offset:
            recs.append(Recommendation(
                id=f"prepare-{offset}day",
                priority=RecommendationPriority.high,
                action=f"Prepare formal {offset}-day review with HR",
                why=f"{offset}-day milestone is critical decision point. Document thoroughly.",
            ))

    return sorted(recs, key=lambda r: PRIORITY_ORDER[r.priority])


def recommend(
    pip: PerformanceImprovementPlan,
    expectations: Sequence[PIPExpectation],
    check_ins: Sequence[PIPCheckIn],
    milestone_reviews: Sequence[PIPMilestoneReview],
    as_of: date,
    policy: Optional[EnginePolicy] = None,
) -> List[Recommendation]:
    signals = build_signals(pip, expectations, check_ins, milestone_reviews, as_of, policy)
    return recommendations_from_signals(signals, policy)
