from datetime import date
from typing import List, Optional, Sequence

from pip_intel.models.insight import CadenceAudit
from pip_intel.models.pip import PIPCheckIn

# Stands in for "no check-in on record". Not a day count: never display it.
NO_CHECK_IN_SENTINEL = 999

DAYS_PER_CHECK_IN = 7


def sorted_newest_first(check_ins: Sequence[PIPCheckIn]) -> List[PIPCheckIn]:
    return sorted(check_ins, key=lambda c: c.check_in_date, reverse=True)


def latest_check_in(check_ins: Sequence[PIPCheckIn]) -> Optional[PIPCheckIn]:
    if not check_ins:
        return None
    return max(check_ins, key=lambda c: c.check_in_date)


def expected_check_ins(days_in_pip: int) -> int:
    return max(1, days_in_pip // DAYS_PER_CHECK_IN)


def audit(check_ins: Sequence[PIPCheckIn], days_in_pip: int, as_of: date) -> CadenceAudit:
    expected = expected_check_ins(days_in_pip)
    actual = len(check_ins)

    latest = latest_check_in(check_ins)
    days_since_last = NO_CHECK_IN_SENTINEL if latest is None else (as_of - latest.check_in_date).days

    return CadenceAudit(
        expected=expected,
        actual=actual,
        days_since_last=days_since_last,
        is_behind_cadence=actual < expected,
        compliance_percent=round(actual * 100 / expected),
    )


def recent_check_ins(
    check_ins: Sequence[PIPCheckIn],
    as_of: date,
    window_days: int = 14,
) -> List[PIPCheckIn]:
    """Check-ins from the last `window_days` days, newest first."""
    recent = [c for c in check_ins if (as_of - c.check_in_date).days <= window_days]
    return sorted_newest_first(recent)
