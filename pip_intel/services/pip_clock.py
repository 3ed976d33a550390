"""
Day arithmetic for a PIP. Every function takes an explicit `as_of` date;
nothing here reads the wall clock.

Stages run from the approach of one milestone to the approach of the next:

    pre_30     day < 25
    window_30  25 <= day < 55
    window_60  55 <= day < 85
    window_90  85 <= day <= 90
    post_90    day > 90

Evaluating before `start_date` yields negative day counts; that is a caller
error and is not guarded against.
"""
from datetime import date
from typing import Optional

from pip_intel.core.exceptions import PIPDateError
from pip_intel.models.insight import PIPStage
from pip_intel.models.pip import MILESTONE_OFFSETS, PIP_LENGTH_DAYS, PerformanceImprovementPlan, PIPPhase

APPROACH_LEAD_DAYS = 5

_STAGES = [
    (MILESTONE_OFFSETS[PIPPhase.day_30], PIPStage.pre_30),
    (MILESTONE_OFFSETS[PIPPhase.day_60], PIPStage.window_30),
    (MILESTONE_OFFSETS[PIPPhase.day_90], PIPStage.window_60),
]


def days_between(earlier: date, later: date) -> int:
    return (later - earlier).days


def days_elapsed(pip: PerformanceImprovementPlan, as_of: date) -> int:
    if pip.start_date is None:
        raise PIPDateError(pip.id)
    return days_between(pip.start_date, as_of)


def days_remaining(pip: PerformanceImprovementPlan, as_of: date) -> int:
    if pip.end_date is None:
        return PIP_LENGTH_DAYS - days_elapsed(pip, as_of)
    return days_between(as_of, pip.end_date)


def stage(pip: PerformanceImprovementPlan, as_of: date, lead_days: int = APPROACH_LEAD_DAYS) -> PIPStage:
    day = days_elapsed(pip, as_of)
    for milestone_day, current in _STAGES:
        if day < milestone_day - lead_days:
            return current
    if day <= PIP_LENGTH_DAYS:
        return PIPStage.window_90
    return PIPStage.post_90


def next_milestone(pip: PerformanceImprovementPlan, as_of: date) -> Optional[PIPPhase]:
    day = days_elapsed(pip, as_of)
    for phase, offset in MILESTONE_OFFSETS.items():
        if day <= offset:
            return phase
    return None


def milestone_due_date(pip: PerformanceImprovementPlan, phase: PIPPhase) -> Optional[date]:
    return pip.milestone_date(phase)
