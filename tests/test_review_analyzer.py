import pytest

from pip_intel.models.review import PlanType, Rating
from pip_intel.services.lexicon import Lexicon, WeightedPhrase
from pip_intel.services.review_analyzer import (
    ReviewAnalyzer,
    determine_plan_type,
    extract_bullet_points,
    extract_employee_name,
    extract_field,
)

STRUCTURED_REVIEW = """Name: Jordan Alvarez
Title: Senior Support Engineer
Department: Customer Success
Email: jordan.alvarez@example.com

Jordan is struggling with ticket backlog and delivery is below expectations.
Jordan needs to improve response times for priority customers.

Strengths:
- Deep product knowledge across billing
- Patient with difficult customers
- ok

Areas for Improvement:
- Response time on priority tickets
- Written escalation summaries
Manager: Dana Lee
- Not part of any section
"""

SARAH = "Sarah exceeded expectations and shows strong leadership qualities and takes initiative."


@pytest.fixture
def analyzer():
    return ReviewAnalyzer()


def test_sarah_is_high_high_succession(analyzer):
    result = analyzer.analyze(SARAH)
    assert result.placement.performance == Rating.high
    assert result.placement.potential == Rating.high
    assert result.plan.plan_type == PlanType.succession
    assert result.plan.timeline == "12 months"


@pytest.mark.parametrize("performance,potential,expected", [
    (Rating.high, Rating.high, PlanType.succession),
    (Rating.medium, Rating.high, PlanType.development),
    (Rating.low, Rating.high, PlanType.performance_improvement),
    (Rating.low, Rating.medium, PlanType.performance_improvement),
    (Rating.low, Rating.low, PlanType.performance_improvement),
    (Rating.high, Rating.medium, PlanType.retention),
    (Rating.medium, Rating.medium, PlanType.retention),
    (Rating.medium, Rating.low, PlanType.retention),
    (Rating.high, Rating.low, PlanType.retention),
])
def test_plan_type_table(performance, potential, expected):
    assert determine_plan_type(performance, potential) == expected


def test_labeled_fields_are_extracted(analyzer):
    result = analyzer.analyze(STRUCTURED_REVIEW)
    assert result.employee_name == "Jordan Alvarez"
    assert result.title == "Senior Support Engineer"
    assert result.department == "Customer Success"
    assert result.email == "jordan.alvarez@example.com"


def test_low_performance_review_gets_improvement_plan(analyzer):
    result = analyzer.analyze(STRUCTURED_REVIEW)
    assert result.placement.performance == Rating.low
    assert result.plan.plan_type == PlanType.performance_improvement
    assert result.plan.title == "Performance Improvement Plan for Jordan Alvarez"
    assert result.plan.timeline == "90 days"


def test_sections_end_at_next_header_and_short_bullets_are_dropped(analyzer):
    result = analyzer.analyze(STRUCTURED_REVIEW)
    assert result.strengths == [
        "Deep product knowledge across billing",
        "Patient with difficult customers",
    ]
    assert result.areas_for_improvement == [
        "Response time on priority tickets",
        "Written escalation summaries",
    ]


def test_bullet_markers_are_stripped():
    text = "Achievements:\n1. Closed the Q3 migration\n* Mentored two new hires\n• Rebuilt the on-call runbook"
    assert extract_bullet_points(text, ["achievements"]) == [
        "Closed the Q3 migration",
        "Mentored two new hires",
        "Rebuilt the on-call runbook",
    ]


def test_name_heuristic_uses_first_lines():
    assert extract_employee_name("Priya Raman\nQ3 review\nSolid quarter.") == "Priya Raman"


def test_name_falls_back_to_unknown():
    assert extract_employee_name("this review has no name in it\nat all") == "Unknown Employee"


def test_extract_field_prefers_first_label():
    text = "Position: Analyst\nRole: Reporting"
    assert extract_field(text, ["title:", "position:", "role:"]) == "Analyst"
    assert extract_field(text, ["department:"]) is None


def test_list_caps(analyzer):
    text = STRUCTURED_REVIEW + "\n".join([
        "Improve the escalation process for tier two.",
        "Develop a runbook for billing incidents.",
        "Strengthen handoffs with the platform team.",
        "Build a dashboard for backlog age.",
        "Address the long tail of stale tickets.",
        "Refine the macro library for common issues.",
    ])
    result = analyzer.analyze(text)
    assert len(result.plan.objectives) <= 5
    assert len(result.plan.action_items) == 6
    assert len(result.plan.success_metrics) <= 5


def test_action_items_are_typed(analyzer):
    result = analyzer.analyze(STRUCTURED_REVIEW)
    for item in result.plan.action_items:
        assert item.description
        assert item.due_offset_days > 0
        assert item.completed is False


@pytest.mark.parametrize("text", ["", "   ", None, "\n\n- \n:::"])
def test_degenerate_input_never_raises(analyzer, text):
    result = analyzer.analyze(text)
    assert result.employee_name == "Unknown Employee"
    assert result.placement.performance == Rating.medium
    assert result.placement.potential == Rating.medium
    assert result.placement.confidence == 70
    assert result.plan.plan_type == PlanType.retention
    assert result.source == "keywords"
    assert result.used_fallback is False


def test_key_insights_lead_with_ratings(analyzer):
    result = analyzer.analyze(SARAH)
    assert result.key_insights[0] == "Performance assessed as high (70% confidence)"
    assert result.key_insights[1] == "Potential assessed as high (80% confidence)"


def test_fractional_confidence_is_rounded_only_in_placement():
    performance = Lexicon(
        name="acme-performance",
        high=[WeightedPhrase(phrase="raised the bar", weight=2)],
        hedges=[WeightedPhrase(phrase="some gaps", weight=1)],
    )
    analyzer = ReviewAnalyzer(performance, Lexicon(name="acme-potential"))
    result = analyzer.analyze("Raised the bar on delivery, with some gaps in planning.")

    assert result.key_insights[0] == "Performance assessed as high (67.5% confidence)"
    assert result.key_insights[1] == "Potential assessed as medium (70% confidence)"
    # (67.5 + 70) / 2 = 68.75
    assert result.placement.confidence == 69
