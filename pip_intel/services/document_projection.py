"""
Projections of a PIP for the letter and audit-trail templates.

The document templates only do string substitution, so everything handed to
them is already formatted: dates are rendered with the configured format and
lists arrive sorted oldest first.
"""
import logging
from datetime import date
from typing import Dict, List, Optional, Sequence

from pip_intel.core.config import settings
from pip_intel.models.insight import AuditEntry
from pip_intel.models.pip import (
    MILESTONE_OFFSETS,
    PerformanceImprovementPlan,
    PIPCheckIn,
    PIPExpectation,
    PIPMilestoneReview,
    PIPPhase,
)

logger = logging.getLogger(__name__)

DEFAULT_SUPPORT = (
    "You will receive weekly coaching sessions with your manager, access to relevant "
    "training resources, and clear feedback on your progress."
)
RULE = "─" * 60


def format_date(value: Optional[date], date_format: Optional[str] = None) -> str:
    if value is None:
        return ""
    return value.strftime(date_format or settings.document_date_format)


def _truncate(text: str, limit: int) -> str:
    text = text or ""
    return text if len(text) <= limit else f"{text[:limit]}..."


def _manager(pip: PerformanceImprovementPlan) -> str:
    return pip.manager_name or "Manager"


def _phase_label(phase: PIPPhase) -> str:
    return f"{MILESTONE_OFFSETS[phase]}-Day Review"


def build_document_context(
    pip: PerformanceImprovementPlan,
    employee_name: str,
    expectations: Sequence[PIPExpectation],
    check_ins: Sequence[PIPCheckIn],
    milestone_reviews: Sequence[PIPMilestoneReview],
    as_of: date,
    date_format: Optional[str] = None,
) -> Dict[str, str]:
    """
    Flatten a PIP and its records into string keys.

    List records are numbered from 1 (`expectation_1_category`,
    `check_in_2_date`, ...) with a matching `*_count` key. Expectations are
    ordered by milestone then `order_index`; check-ins and reviews by date.
    """
    fmt = date_format or settings.document_date_format
    context: Dict[str, str] = {
        "pip_id": pip.id,
        "employee_id": pip.employee_id,
        "employee_name": employee_name,
        "employee_first_name": employee_name.split(" ")[0] if employee_name else "",
        "manager_name": _manager(pip),
        "status": pip.status.value,
        "document_date": format_date(as_of, fmt),
        "start_date": format_date(pip.start_date, fmt),
        "end_date": format_date(pip.end_date, fmt),
        "day_30_review_date": format_date(pip.day_30_review_date, fmt),
        "day_60_review_date": format_date(pip.day_60_review_date, fmt),
        "day_90_review_date": format_date(pip.day_90_review_date, fmt),
        "reason_for_pip": pip.reason_for_pip,
        "consequences": pip.consequences,
        "support_provided": pip.support_provided or DEFAULT_SUPPORT,
        "outcome": pip.outcome or "",
        "outcome_date": format_date(pip.outcome_date, fmt),
        "outcome_notes": pip.outcome_notes or "",
        "employee_acknowledged": "yes" if pip.employee_acknowledged else "no",
    }
    if pip.start_date and pip.end_date:
        context["duration_days"] = str((pip.end_date - pip.start_date).days)
    else:
        context["duration_days"] = ""

    ordered = sorted(expectations, key=lambda e: (MILESTONE_OFFSETS[e.phase], e.order_index))
    context["expectation_count"] = str(len(ordered))
    for n, exp in enumerate(ordered, start=1):
        context[f"expectation_{n}_category"] = exp.category
        context[f"expectation_{n}_text"] = exp.expectation
        context[f"expectation_{n}_success_criteria"] = exp.success_criteria
        context[f"expectation_{n}_target"] = _phase_label(exp.phase)
        context[f"expectation_{n}_status"] = exp.status.value
        context[f"expectation_{n}_progress"] = f"{exp.progress_percentage}%"

    visits = sorted(check_ins, key=lambda c: c.check_in_date)
    context["check_in_count"] = str(len(visits))
    for n, check_in in enumerate(visits, start=1):
        context[f"check_in_{n}_date"] = format_date(check_in.check_in_date, fmt)
        context[f"check_in_{n}_type"] = check_in.check_in_type.value
        context[f"check_in_{n}_status"] = (
            check_in.overall_status.value if check_in.overall_status else "Not assessed"
        )
        context[f"check_in_{n}_summary"] = check_in.progress_summary
        context[f"check_in_{n}_attendees"] = ", ".join(check_in.attendees or [_manager(pip)])

    reviews = sorted(milestone_reviews, key=lambda r: r.review_date)
    context["milestone_review_count"] = str(len(reviews))
    for n, review in enumerate(reviews, start=1):
        context[f"milestone_review_{n}_milestone"] = _phase_label(review.milestone)
        context[f"milestone_review_{n}_date"] = format_date(review.review_date, fmt)
        context[f"milestone_review_{n}_rating"] = review.overall_rating or "Not rated"
        context[f"milestone_review_{n}_decision"] = review.decision
        context[f"milestone_review_{n}_rationale"] = review.decision_rationale

    return context


def build_audit_trail(
    pip: PerformanceImprovementPlan,
    expectations: Sequence[PIPExpectation],
    check_ins: Sequence[PIPCheckIn],
    milestone_reviews: Sequence[PIPMilestoneReview],
) -> List[AuditEntry]:
    """Every documented interaction on the PIP, oldest first."""
    manager = _manager(pip)
    entries: List[AuditEntry] = []

    created = pip.created_at or pip.start_date
    if created is not None:
        entries.append(AuditEntry(
            entry_date=created,
            type="pip_created",
            description=f"PIP initiated for performance issues: {_truncate(pip.reason_for_pip, 100)}",
            participants=[manager, "HR"],
            documentation="PIP letter delivered to employee",
        ))

    for check_in in check_ins:
        status = check_in.overall_status.value if check_in.overall_status else "Not assessed"
        entries.append(AuditEntry(
            entry_date=check_in.check_in_date,
            type="check_in",
            description=f"{check_in.check_in_type.value} check-in - Status: {status}",
            participants=list(check_in.attendees) or [manager],
            documentation=check_in.progress_summary or "Check-in completed",
        ))

    for review in milestone_reviews:
        label = review.milestone.value.replace("_", "-").upper()
        entries.append(AuditEntry(
            entry_date=review.review_date,
            type="milestone_review",
            description=f"{label} Milestone Review - Rating: {review.overall_rating or 'Not rated'}",
            participants=list(review.attendees) or [manager, "HR"],
            documentation=f"Decision: {review.decision}. {_truncate(review.decision_rationale, 150)}",
        ))

    for exp in expectations:
        if exp.reviewed_date is None:
            continue
        entries.append(AuditEntry(
            entry_date=exp.reviewed_date,
            type="expectation_update",
            description=f'Expectation "{exp.category}" updated to {exp.status.value}',
            participants=[manager],
            documentation=exp.review_notes or "Status updated",
        ))

    if pip.outcome_date is not None:
        entries.append(AuditEntry(
            entry_date=pip.outcome_date,
            type="outcome",
            description=f"PIP Outcome: {pip.outcome or 'Not recorded'}",
            participants=[manager, "HR"],
            documentation=pip.outcome_notes or "",
        ))

    # Stable: same-day entries keep the order above
    entries.sort(key=lambda e: e.entry_date)
    return entries


def format_audit_trail(
    entries: Sequence[AuditEntry],
    pip: PerformanceImprovementPlan,
    employee_name: str,
    as_of: date,
    employee_title: Optional[str] = None,
    date_format: Optional[str] = None,
) -> str:
    """
    Plain-text audit trail. `date_format` applies to every date in the document;
    without it the header uses the document format and the timeline the audit format.
    """
    manager = _manager(pip)
    entry_format = date_format or settings.audit_date_format
    lines = [
        "PERFORMANCE IMPROVEMENT PLAN - COMPLETE AUDIT TRAIL",
        "",
        f"Employee: {employee_name}",
        f"Position: {employee_title or 'Employee'}",
        f"PIP Start Date: {format_date(pip.start_date, date_format)}",
        f"PIP End Date: {format_date(pip.end_date, date_format)}",
        f"Manager: {manager}",
        "",
        "This document provides a complete timeline of all documented interactions during the "
        "Performance Improvement Plan period. This serves as legal documentation of the process followed.",
        "",
        RULE,
        "",
        "TIMELINE OF INTERACTIONS",
    ]

    for n, entry in enumerate(entries, start=1):
        lines.extend([
            "",
            f"{n}. {format_date(entry.entry_date, entry_format)} - {entry.type.upper().replace('_', ' ')}",
            f"   {entry.description}",
            f"   Participants: {', '.join(entry.participants)}",
            f"   Documentation: {entry.documentation}",
        ])

    duration = ""
    if pip.start_date and pip.end_date:
        duration = f"{(pip.end_date - pip.start_date).days} days"

    lines.extend([
        "",
        RULE,
        "",
        "SUMMARY",
        "",
        f"Total Interactions: {len(entries)}",
        f"Check-Ins Conducted: {sum(1 for e in entries if e.type == 'check_in')}",
        f"Milestone Reviews: {sum(1 for e in entries if e.type == 'milestone_review')}",
        f"Duration: {duration}",
        "",
        "This audit trail demonstrates that the employee was:",
        "1. Given clear, specific performance expectations",
        "2. Provided regular feedback and coaching",
        "3. Offered support and resources to improve",
        "4. Given adequate time to demonstrate improvement (90 days)",
        "5. Treated fairly and consistently throughout the process",
        "",
        f"Document prepared: {format_date(as_of, date_format)}",
        f"Prepared by: {manager}",
        "",
        "This document should be retained in the employee personnel file for legal compliance purposes.",
    ])

    logger.info(f"PIP {pip.id}: audit trail rendered with {len(entries)} entries")
    return "\n".join(lines)
