import math
from typing import List, Sequence

from pip_intel.models.insight import ExpectationSummary
from pip_intel.models.pip import ExpectationStatus, PIPExpectation

PARTIAL_CREDIT = 0.5


def summarize(expectations: Sequence[PIPExpectation]) -> ExpectationSummary:
    """
    Count expectations by status. Completion gives full credit for `met` and
    half credit for `partially_met`, rounded half-up to a whole percent.
    """
    counts = {status: 0 for status in ExpectationStatus}
    for exp in expectations:
        counts[exp.status] += 1

    total = len(expectations)
    met = counts[ExpectationStatus.met]
    partial = counts[ExpectationStatus.partially_met]
    rate = 0
    if total:
        rate = int(math.floor((met + PARTIAL_CREDIT * partial) * 100 / total + 0.5))

    return ExpectationSummary(
        met=met,
        partially_met=partial,
        not_met=counts[ExpectationStatus.not_met],
        in_progress=counts[ExpectationStatus.in_progress],
        pending=counts[ExpectationStatus.pending],
        total=total,
        completion_rate=rate,
    )


def stagnant(
    expectations: Sequence[PIPExpectation],
    days_in_pip: int,
    after_day: int = 14,
) -> List[PIPExpectation]:
    """Not-met expectations with no recorded progress once the PIP is past `after_day`."""
    if days_in_pip <= after_day:
        return []
    return [
        exp for exp in expectations
        if exp.status == ExpectationStatus.not_met and exp.progress_percentage == 0
    ]
