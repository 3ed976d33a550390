import logging
from datetime import date
from typing import Optional, Sequence

from pip_intel.core.config import EnginePolicy, settings
from pip_intel.models.insight import AlertSeverity, PIPEvaluation
from pip_intel.models.pip import (
    PerformanceImprovementPlan,
    PIPCheckIn,
    PIPExpectation,
    PIPMilestoneReview,
)
from pip_intel.services import pip_clock
from pip_intel.services.alert_engine import alerts_from_signals
from pip_intel.services.pip_signals import build_signals
from pip_intel.services.recommendation_engine import recommendations_from_signals
from pip_intel.services.trajectory import TRAJECTORY_MESSAGES

logger = logging.getLogger(__name__)


def evaluate_pip(
    pip: PerformanceImprovementPlan,
    expectations: Sequence[PIPExpectation],
    check_ins: Sequence[PIPCheckIn],
    milestone_reviews: Sequence[PIPMilestoneReview],
    as_of: date,
    policy: Optional[EnginePolicy] = None,
) -> PIPEvaluation:
    """
    Full snapshot of an in-flight PIP: where it stands on the clock, how it is
    trending, and what compliance and coaching follow-ups are due.
    Signals are built once and handed to both rule sets.
    """
    policy = policy or settings.engine
    signals = build_signals(pip, expectations, check_ins, milestone_reviews, as_of, policy)
    alerts = alerts_from_signals(signals, policy)
    recommendations = recommendations_from_signals(signals, policy)

    critical = sum(1 for a in alerts if a.severity == AlertSeverity.critical)
    milestone = signals.next_milestone
    logger.info(
        f"PIP {pip.id} evaluated at day {signals.days_in_pip}: "
        f"{signals.trajectory.value}, {len(alerts)} alert(s) ({critical} critical), "
        f"{len(recommendations)} recommendation(s)"
    )

    return PIPEvaluation(
        pip_id=pip.id,
        as_of=as_of,
        days_in_pip=signals.days_in_pip,
        days_remaining=signals.days_remaining,
        stage=signals.stage,
        next_milestone=milestone.value if milestone else None,
        next_milestone_date=pip_clock.milestone_due_date(pip, milestone) if milestone else None,
        trajectory=signals.trajectory,
        trajectory_message=TRAJECTORY_MESSAGES[signals.trajectory],
        expectations=signals.expectations,
        cadence=signals.cadence,
        alerts=alerts,
        recommendations=recommendations,
        critical_alert_count=critical,
    )
