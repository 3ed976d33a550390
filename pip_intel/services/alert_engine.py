"""
Compliance alerts for an in-flight PIP.

Rules are evaluated independently and any number may fire. Output is sorted
critical, warning, info; ties keep rule order. Only milestones listed in
`EnginePolicy.milestone_alerts` get the approaching/overdue pair (30-day by
default).
"""
import logging
from datetime import date
from typing import List, Optional, Sequence

from pip_intel.core.config import EnginePolicy, settings
from pip_intel.models.insight import SEVERITY_ORDER, Alert, AlertSeverity
from pip_intel.models.pip import (
    MILESTONE_OFFSETS,
    PerformanceImprovementPlan,
    PIPCheckIn,
    PIPExpectation,
    PIPMilestoneReview,
    PIPPhase,
)
from pip_intel.services.cadence_auditor import NO_CHECK_IN_SENTINEL
from pip_intel.services.pip_signals import PIPSignals, build_signals

logger = logging.getLogger(__name__)


def milestone_label(phase: PIPPhase) -> str:
    return f"{MILESTONE_OFFSETS[phase]}-Day"


def _check_in_alerts(signals: PIPSignals, policy: EnginePolicy) -> List[Alert]:
    alerts: List[Alert] = []
    cadence = signals.cadence

    if cadence.days_since_last > policy.check_in_overdue_days:
        if cadence.days_since_last == NO_CHECK_IN_SENTINEL:
            description = "No check-ins have been recorded. Weekly check-ins are required."
        else:
            description = f"Last check-in was {cadence.days_since_last} days ago. Weekly check-ins are required."
        alerts.append(Alert(
            id="overdue-checkin",
            severity=AlertSeverity.critical,
            title="Check-In Overdue",
            description=description,
            recommendation="Schedule and conduct check-in today. Document the conversation within 24 hours.",
        ))

    if cadence.is_behind_cadence:
        alerts.append(Alert(
            id="insufficient-checkins",
            severity=AlertSeverity.warning,
            title="Below Required Check-In Frequency",
            description=(
                f"{cadence.actual} check-ins for {signals.days_in_pip} days "
                f"(expected {cadence.expected} minimum)"
            ),
            recommendation="Increase check-in frequency to weekly. Gaps weaken legal defensibility.",
        ))

    return alerts


def _milestone_alerts(signals: PIPSignals, policy: EnginePolicy) -> List[Alert]:
    alerts: List[Alert] = []
    day = signals.days_in_pip

    for value in policy.milestone_alerts:
        phase = PIPPhase(value)
        if signals.has_review(phase):
            continue
        offset = MILESTONE_OFFSETS[phase]
        label = milestone_label(phase)

        if offset - policy.approaching_lead_days <= day < offset:
            alerts.append(Alert(
                id=f"approaching-{offset}day",
                severity=AlertSeverity.warning,
                title=f"{label} Review Approaching",
                description=f"{label} milestone review due in {offset - day} days",
                recommendation=f"Schedule {label.lower()} review meeting with HR present. Prepare formal assessment.",
            ))
        elif day > offset:
            alerts.append(Alert(
                id=f"missed-{offset}day",
                severity=AlertSeverity.critical,
                title=f"{label} Review Overdue",
                description=f"{label} milestone review was not completed",
                recommendation=f"Complete {label.lower()} review immediately with HR. This is legally required.",
            ))

    return alerts


def alerts_from_signals(signals: PIPSignals, policy: Optional[EnginePolicy] = None) -> List[Alert]:
    policy = policy or settings.engine
    summary = signals.expectations

    alerts = _check_in_alerts(signals, policy)

    if summary.not_met > summary.total / 2 and signals.days_in_pip > policy.majority_failing_after_day:
        alerts.append(Alert(
            id="majority-failing",
            severity=AlertSeverity.critical,
            title="Majority of Expectations Not Being Met",
            description=f"{summary.not_met} of {summary.total} expectations not met at day {signals.days_in_pip}",
            recommendation="Escalate to HR immediately. Begin preparing for potential termination.",
        ))

    alerts.extend(_milestone_alerts(signals, policy))

    if signals.stagnant_count > 0:
        alerts.append(Alert(
            id="stagnant-expectations",
            severity=AlertSeverity.warning,
            title="No Progress on Some Expectations",
            description=(
                f"{signals.stagnant_count} expectation(s) showing zero progress "
                f"after {signals.days_in_pip} days"
            ),
            recommendation=(
                "Re-clarify these expectations with employee. Consider if they need different "
                "resources or if termination is appropriate."
            ),
        ))

    return sorted(alerts, key=lambda a: SEVERITY_ORDER[a.severity])


def evaluate_alerts(
    pip: PerformanceImprovementPlan,
    expectations: Sequence[PIPExpectation],
    check_ins: Sequence[PIPCheckIn],
    milestone_reviews: Sequence[PIPMilestoneReview],
    as_of: date,
    policy: Optional[EnginePolicy] = None,
) -> List[Alert]:
    signals = build_signals(pip, expectations, check_ins, milestone_reviews, as_of, policy)
    alerts = alerts_from_signals(signals, policy)
    logger.info(f"PIP {pip.id}: {len(alerts)} alert(s) at day {signals.days_in_pip}")
    return alerts
