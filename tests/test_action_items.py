from datetime import date

import pytest

from pip_intel.models.review import ActionItem, ActionItemOwner, ActionItemPriority, Rating
from pip_intel.services.action_items import (
    action_item_status,
    due_date,
    item_from_text,
    overdue_items,
    plan_progress,
    template_action_items,
    track_plan,
    upcoming_items,
)

START = date(2026, 1, 5)


@pytest.mark.parametrize("performance", list(Rating))
@pytest.mark.parametrize("potential", list(Rating))
def test_every_box_has_templates(performance, potential):
    items = template_action_items(performance, potential)
    assert items
    assert all(isinstance(i, ActionItem) for i in items)


def test_low_performer_templates_are_urgent_and_manager_led():
    items = template_action_items(Rating.low, Rating.low)
    assert all(i.priority == ActionItemPriority.high for i in items)
    assert items[0].owner == ActionItemOwner.manager
    assert items[0].due_offset_days == 7


def test_status_and_progress():
    items = [
        ActionItem(description="Finish onboarding checklist", due_offset_days=7, completed=True),
        ActionItem(description="Shadow the on-call rotation", due_offset_days=14),
        ActionItem(description="Present the migration plan", due_offset_days=60),
    ]
    as_of = date(2026, 1, 25)

    assert action_item_status(items[0], START, as_of) == "completed"
    assert action_item_status(items[1], START, as_of) == "overdue"
    assert action_item_status(items[2], START, as_of) == "not_started"
    assert overdue_items(items, START, as_of) == [items[1]]
    assert plan_progress(items) == 33
    assert plan_progress([]) == 0


def test_item_due_on_its_day_is_not_overdue():
    item = ActionItem(description="Submit weekly summary", due_offset_days=14)
    assert due_date(item, START) == date(2026, 1, 19)
    assert action_item_status(item, START, date(2026, 1, 19)) == "not_started"
    assert action_item_status(item, START, date(2026, 1, 20)) == "overdue"


def test_upcoming_items_are_sorted_and_bounded():
    items = [
        ActionItem(description="Later item outside window", due_offset_days=40),
        ActionItem(description="Due in five days", due_offset_days=25),
        ActionItem(description="Due in two days", due_offset_days=22),
        ActionItem(description="Already done item", due_offset_days=21, completed=True),
    ]
    as_of = date(2026, 1, 25)
    assert [i.description for i in upcoming_items(items, START, as_of)] == [
        "Due in two days",
        "Due in five days",
    ]


def test_items_from_review_sentences_are_staggered():
    first = item_from_text("Improve ticket triage", 0, Rating.medium)
    third = item_from_text("Develop a runbook", 2, Rating.medium)
    late = item_from_text("Refine macros", 9, Rating.medium)
    assert first.due_offset_days == 30
    assert first.priority == ActionItemPriority.high
    assert third.due_offset_days == 60
    assert third.priority == ActionItemPriority.medium
    assert late.due_offset_days == 90
    assert item_from_text("Refine macros", 5, Rating.low).priority == ActionItemPriority.high


def test_track_plan_reports_due_dates_and_status():
    items = [
        ActionItem(description="Finish onboarding checklist", due_offset_days=7, completed=True),
        ActionItem(description="Shadow the on-call rotation", due_offset_days=14),
        ActionItem(description="Pair on the billing refactor", due_offset_days=24),
        ActionItem(description="Present the migration plan", due_offset_days=60),
    ]
    result = track_plan(items, START, date(2026, 1, 25))

    assert result.total == 4
    assert result.completed == 1
    assert result.progress == 25
    assert [i.description for i in result.overdue] == ["Shadow the on-call rotation"]
    assert result.overdue[0].due_date == date(2026, 1, 19)
    assert result.overdue[0].status == "overdue"
    assert [i.due_date for i in result.upcoming] == [date(2026, 1, 29)]
    assert result.upcoming[0].status == "not_started"
