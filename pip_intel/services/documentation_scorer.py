"""
Documentation completeness score for a PIP.

A 100-point legal-defensibility heuristic: each documentation gap found
subtracts a fixed penalty and the result is clamped to [0, 100]. The
thresholds are independent of the alert rules; this scorer
answers "would the file hold up", not "what is overdue today".
"""
import logging
from datetime import date
from typing import List, Optional, Sequence

from pip_intel.models.insight import SEVERITY_ORDER, AlertSeverity, DocumentationGap, DocumentationScore
from pip_intel.models.pip import (
    PerformanceImprovementPlan,
    PIPCheckIn,
    PIPExpectation,
    PIPMilestoneReview,
    PIPPhase,
)
from pip_intel.services.cadence_auditor import latest_check_in

logger = logging.getLogger(__name__)

MIN_REASON_LENGTH = 50
CHECK_IN_GRACE_DAYS = 7
STALE_CHECK_IN_DAYS = 10
ACKNOWLEDGMENT_DAYS = 3
# Milestone reviews get a short grace period past their due day
MILESTONE_GRACE = {PIPPhase.day_30: 32, PIPPhase.day_60: 62}

SCORE_LABELS = [(90, "Strong"), (75, "Good"), (60, "Fair")]


def score_label(score: int) -> str:
    for threshold, label in SCORE_LABELS:
        if score >= threshold:
            return label
    return "Weak"


def _gap(id: str, severity: AlertSeverity, category: str, description: str, how_to_fix: str, penalty: int) -> DocumentationGap:
    return DocumentationGap(
        id=id,
        severity=severity,
        category=category,
        description=description,
        how_to_fix=how_to_fix,
        penalty=penalty,
    )


def _record_gaps(pip: PerformanceImprovementPlan, expectations: Sequence[PIPExpectation]) -> List[DocumentationGap]:
    gaps: List[DocumentationGap] = []

    if pip.start_date is None:
        gaps.append(_gap(
            "no-start-date", AlertSeverity.critical, "PIP Letter",
            "No start date documented",
            "Set the PIP start date and document delivery to employee", 15,
        ))

    if len((pip.reason_for_pip or "").strip()) < MIN_REASON_LENGTH:
        gaps.append(_gap(
            "weak-reason", AlertSeverity.critical, "Justification",
            "Reason for PIP is missing or too brief",
            "Document specific performance issues with dates, examples, and metrics", 15,
        ))

    if not (pip.consequences or "").strip():
        gaps.append(_gap(
            "no-consequences", AlertSeverity.critical, "Legal Language",
            "Consequences not documented",
            "Add standard consequence language to PIP letter", 15,
        ))

    if not expectations:
        gaps.append(_gap(
            "no-expectations", AlertSeverity.critical, "Expectations",
            "No expectations defined",
            "Add at least 3-5 specific, measurable expectations", 20,
        ))

    return gaps


def _window_passed(days_in_pip: Optional[int], threshold: int) -> bool:
    return days_in_pip is None or days_in_pip > threshold


def _timeline_gaps(
    check_ins: Sequence[PIPCheckIn],
    milestone_reviews: Sequence[PIPMilestoneReview],
    days_in_pip: Optional[int],
    as_of: date,
) -> List[DocumentationGap]:
    """
    Cadence, staleness and milestone gaps. When the plan has no date at all
    every window counts as elapsed, so recording a date can only clear gaps.
    """
    gaps: List[DocumentationGap] = []

    if _window_passed(days_in_pip, CHECK_IN_GRACE_DAYS):
        actual = len(check_ins)
        if days_in_pip is None:
            gaps.append(_gap(
                "insufficient-checkins", AlertSeverity.warning, "Check-Ins",
                f"Only {actual} check-ins and no start date to measure cadence against",
                "Record the PIP start date and document weekly check-ins.", 10,
            ))
        elif actual < days_in_pip // 7:
            gaps.append(_gap(
                "insufficient-checkins", AlertSeverity.warning, "Check-Ins",
                f"Only {actual} check-ins for {days_in_pip} days (expected {days_in_pip // 7})",
                "Schedule and document weekly check-ins. Gaps in documentation weaken legal position.", 10,
            ))

        latest = latest_check_in(check_ins)
        if latest is None:
            gaps.append(_gap(
                "no-checkins", AlertSeverity.critical, "Check-Ins",
                "No check-ins documented",
                "Begin weekly check-ins immediately and document all conversations", 20,
            ))
        else:
            days_since = (as_of - latest.check_in_date).days
            if days_since > STALE_CHECK_IN_DAYS:
                gaps.append(_gap(
                    "overdue-checkin", AlertSeverity.critical, "Check-Ins",
                    f"Last check-in was {days_since} days ago (OVERDUE)",
                    "Schedule urgent check-in today. Long gaps look like abandonment to courts.", 15,
                ))

    reviewed = {r.milestone for r in milestone_reviews}
    for phase, grace_day in MILESTONE_GRACE.items():
        if _window_passed(days_in_pip, grace_day) and phase not in reviewed:
            label = phase.value.replace("_day", "")
            gaps.append(_gap(
                f"missing-{label}day", AlertSeverity.critical, "Milestone Reviews",
                f"{label}-day review not completed (overdue)",
                f"Complete formal {label}-day review immediately with HR present", 15,
            ))

    return gaps


def _acknowledgment_gap(pip: PerformanceImprovementPlan, as_of: date) -> Optional[DocumentationGap]:
    if pip.employee_acknowledged:
        return None
    created = pip.created_at or pip.start_date
    if created is not None and (as_of - created).days <= ACKNOWLEDGMENT_DAYS:
        return None
    return _gap(
        "no-signature", AlertSeverity.warning, "Employee Signature",
        "Employee signature/acknowledgment not documented",
        "Ensure employee signs PIP letter. If they refuse, document the refusal with witness.", 5,
    )


def score_documentation(
    pip: PerformanceImprovementPlan,
    expectations: Sequence[PIPExpectation],
    check_ins: Sequence[PIPCheckIn],
    milestone_reviews: Sequence[PIPMilestoneReview],
    as_of: date,
) -> DocumentationScore:
    gaps = _record_gaps(pip, expectations)
    # Without a start date the plan is timed from its creation; the missing
    # start date is penalised on its own above. With no date at all every
    # timed check is charged.
    anchor = pip.start_date or pip.created_at
    days_in_pip = (as_of - anchor).days if anchor is not None else None
    gaps.extend(_timeline_gaps(check_ins, milestone_reviews, days_in_pip, as_of))
    ack = _acknowledgment_gap(pip, as_of)
    if ack:
        gaps.append(ack)

    score = max(0, min(100, 100 - sum(g.penalty for g in gaps)))
    gaps.sort(key=lambda g: SEVERITY_ORDER[g.severity])

    logger.info(f"PIP {pip.id}: documentation score {score} with {len(gaps)} gap(s)")
    return DocumentationScore(
        score=score,
        label=score_label(score),
        gaps=gaps,
        critical_count=sum(1 for g in gaps if g.severity == AlertSeverity.critical),
        warning_count=sum(1 for g in gaps if g.severity == AlertSeverity.warning),
    )
