"""
Derived signals shared by the alert and recommendation rules.

Both rule sets read the same snapshot of a PIP but serve different audiences
(compliance vs. coaching), so each consumes these signals independently
rather than calling the other.
"""
from datetime import date
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from pip_intel.core.config import EnginePolicy, settings
from pip_intel.models.insight import CadenceAudit, ExpectationSummary, PIPStage, TrajectoryVerdict
from pip_intel.models.pip import (
    PerformanceImprovementPlan,
    PIPCheckIn,
    PIPExpectation,
    PIPMilestoneReview,
    PIPPhase,
)
from pip_intel.services import cadence_auditor, expectation_tracker, pip_clock, trajectory


class PIPSignals(BaseModel):
    pip_id: str
    as_of: date
    days_in_pip: int
    days_remaining: int
    stage: PIPStage
    next_milestone: Optional[PIPPhase] = None
    expectations: ExpectationSummary
    stagnant_count: int = 0
    cadence: CadenceAudit
    recent_check_ins: List[PIPCheckIn] = Field(default_factory=list)
    trajectory: TrajectoryVerdict
    reviewed_milestones: List[PIPPhase] = Field(default_factory=list)

    def has_review(self, phase: PIPPhase) -> bool:
        return phase in self.reviewed_milestones


def build_signals(
    pip: PerformanceImprovementPlan,
    expectations: Sequence[PIPExpectation],
    check_ins: Sequence[PIPCheckIn],
    milestone_reviews: Sequence[PIPMilestoneReview],
    as_of: date,
    policy: Optional[EnginePolicy] = None,
) -> PIPSignals:
    policy = policy or settings.engine
    days_in_pip = pip_clock.days_elapsed(pip, as_of)

    summary = expectation_tracker.summarize(expectations)
    stalled = expectation_tracker.stagnant(expectations, days_in_pip, policy.stagnant_after_day)
    cadence = cadence_auditor.audit(check_ins, days_in_pip, as_of)
    recent = cadence_auditor.recent_check_ins(check_ins, as_of, policy.recent_window_days)

    # Duplicate reviews for one milestone collapse to "reviewed"
    reviewed = sorted({r.milestone for r in milestone_reviews}, key=lambda p: p.value)

    return PIPSignals(
        pip_id=pip.id,
        as_of=as_of,
        days_in_pip=days_in_pip,
        days_remaining=pip_clock.days_remaining(pip, as_of),
        stage=pip_clock.stage(pip, as_of, policy.approaching_lead_days),
        next_milestone=pip_clock.next_milestone(pip, as_of),
        expectations=summary,
        stagnant_count=len(stalled),
        cadence=cadence,
        recent_check_ins=recent,
        trajectory=trajectory.classify(summary.completion_rate / 100, recent),
        reviewed_milestones=reviewed,
    )
