import os
from datetime import date, timedelta

import pytest

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ.pop("MILESTONE_ALERTS", None)
os.environ.pop("LEXICON_DIR", None)

from fastapi.testclient import TestClient

from pip_intel.main import app
from pip_intel.models.pip import (
    CheckInStatus,
    ExpectationStatus,
    PerformanceImprovementPlan,
    PIPCheckIn,
    PIPExpectation,
    PIPMilestoneReview,
    PIPPhase,
)

AS_OF = date(2026, 3, 2)

LONG_REASON = (
    "Missed three consecutive sprint deadlines in Q4 and shipped two releases "
    "with regressions that reached customers."
)
CONSEQUENCES = "Failure to meet these expectations may result in termination of employment."


@pytest.fixture
def as_of():
    return AS_OF


@pytest.fixture
def make_pip():
    """Build a PIP that started `day` days before AS_OF."""
    def _make_pip(day=40, **overrides):
        fields = {
            "id": "pip-1",
            "employee_id": "emp-1",
            "manager_id": "mgr-1",
            "manager_name": "Dana Lee",
            "start_date": AS_OF - timedelta(days=day),
            "created_at": AS_OF - timedelta(days=day),
            "reason_for_pip": LONG_REASON,
            "consequences": CONSEQUENCES,
            "employee_acknowledged": True,
        }
        fields.update(overrides)
        return PerformanceImprovementPlan(**fields)
    return _make_pip


@pytest.fixture
def make_expectation():
    counter = {"n": 0}

    def _make_expectation(status=ExpectationStatus.pending, progress=0, phase=PIPPhase.day_30, **overrides):
        counter["n"] += 1
        fields = {
            "id": f"exp-{counter['n']}",
            "pip_id": "pip-1",
            "phase": phase,
            "category": f"Area {counter['n']}",
            "expectation": "Deliver assigned tickets within the sprint",
            "success_criteria": "90% of tickets closed on time",
            "status": status,
            "progress_percentage": progress,
            "order_index": counter["n"],
        }
        fields.update(overrides)
        return PIPExpectation(**fields)
    return _make_expectation


@pytest.fixture
def make_check_in():
    """Build a check-in held `days_ago` days before AS_OF."""
    counter = {"n": 0}

    def _make_check_in(days_ago, status=CheckInStatus.on_track, **overrides):
        counter["n"] += 1
        fields = {
            "id": f"ci-{counter['n']}",
            "pip_id": "pip-1",
            "check_in_date": AS_OF - timedelta(days=days_ago),
            "overall_status": status,
            "progress_summary": "Reviewed open tickets",
        }
        fields.update(overrides)
        return PIPCheckIn(**fields)
    return _make_check_in


@pytest.fixture
def make_review():
    def _make_review(milestone=PIPPhase.day_30, days_ago=5, **overrides):
        fields = {
            "id": f"rev-{milestone.value}",
            "pip_id": "pip-1",
            "milestone": milestone,
            "review_date": AS_OF - timedelta(days=days_ago),
            "overall_rating": "partially_meets",
            "decision": "continue",
            "decision_rationale": "Some progress on delivery, quality still below the bar.",
        }
        fields.update(overrides)
        return PIPMilestoneReview(**fields)
    return _make_review


@pytest.fixture(scope="function")
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
