from pip_intel.models.pip import CheckInStatus
from pip_intel.services.cadence_auditor import (
    NO_CHECK_IN_SENTINEL,
    audit,
    expected_check_ins,
    recent_check_ins,
)


def test_no_check_ins_at_day_40(as_of):
    result = audit([], days_in_pip=40, as_of=as_of)
    assert result.expected == 5
    assert result.actual == 0
    assert result.is_behind_cadence is True
    assert result.days_since_last == NO_CHECK_IN_SENTINEL == 999
    assert result.compliance_percent == 0


def test_at_least_one_check_in_expected():
    assert expected_check_ins(0) == 1
    assert expected_check_ins(6) == 1
    assert expected_check_ins(14) == 2


def test_days_since_latest_check_in(make_check_in, as_of):
    check_ins = [make_check_in(20), make_check_in(3), make_check_in(10)]
    result = audit(check_ins, days_in_pip=21, as_of=as_of)
    assert result.days_since_last == 3
    assert result.expected == 3
    assert result.is_behind_cadence is False
    assert result.compliance_percent == 100


def test_recent_window_is_inclusive_and_newest_first(make_check_in, as_of):
    old = make_check_in(15)
    edge = make_check_in(14, CheckInStatus.at_risk)
    newest = make_check_in(1, CheckInStatus.off_track)
    assert recent_check_ins([edge, old, newest], as_of) == [newest, edge]
    assert recent_check_ins([edge, old, newest], as_of, window_days=7) == [newest]
