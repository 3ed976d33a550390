"""
Deterministic performance review analysis.

Turns free review text into a 9-box placement suggestion and a draft plan
using the lexicon scorer and line-oriented section extraction. This path
never raises: degenerate input yields a medium/medium placement at the
scorer's default confidence.
"""
import logging
import math
import re
from typing import List, Optional

from pip_intel.models.review import (
    ActionItem,
    DraftPlan,
    PlacementSuggestion,
    PlanType,
    Rating,
    ReviewAnalysis,
)
from pip_intel.services.action_items import item_from_text, template_action_items
from pip_intel.services.lexicon import (
    Lexicon,
    LexiconScore,
    LexiconScorer,
    default_performance_lexicon,
    default_potential_lexicon,
)

logger = logging.getLogger(__name__)

UNKNOWN_EMPLOYEE = "Unknown Employee"

MAX_OBJECTIVES = 5
MAX_ACTION_ITEMS = 6
MAX_SUCCESS_METRICS = 5
MIN_BULLET_LENGTH = 10

_CAPITALISED_NAME = r"([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)+)"
NAME_PATTERNS = [
    re.compile(r"(?i:name):\s*" + _CAPITALISED_NAME),
    re.compile(r"(?i:employee):\s*" + _CAPITALISED_NAME),
    re.compile(r"^" + _CAPITALISED_NAME + r"\s*-"),
]
EMAIL_PATTERN = re.compile(r"[\w.-]+@[\w.-]+\.\w+")
NAME_WORD = re.compile(r"^[A-Z][a-z]+$")
BULLET_PREFIX = re.compile(r"^([-•*]|\d+\.)")
BULLET_MARKER = re.compile(r"^(?:[-•*]\s*|\d+\.\s*)")
SECTION_HEADER = re.compile(r"^[A-Z][^:]*:")
SENTENCE_SPLIT = re.compile(r"[.!?]+")

TITLE_LABELS = ["title:", "position:", "role:"]
DEPARTMENT_LABELS = ["department:", "dept:", "team:"]

STRENGTH_HEADERS = ["strengths", "achievements", "accomplishments", "successes"]
IMPROVEMENT_HEADERS = ["areas for improvement", "development areas", "growth opportunities", "weaknesses", "challenges"]
ACHIEVEMENT_HEADERS = ["achievements", "accomplishments", "successes", "highlights", "key wins"]
CHALLENGE_HEADERS = ["challenges", "difficulties", "obstacles", "issues", "concerns"]

ACTION_VERBS = [
    "improve", "develop", "enhance", "strengthen", "build", "increase",
    "expand", "refine", "focus on", "work on", "address", "resolve",
]

PLAN_TIMELINES = {
    PlanType.performance_improvement: "90 days",
    PlanType.development: "6 months",
    PlanType.retention: "6 months",
    PlanType.succession: "12 months",
}

PLAN_TITLES = {
    PlanType.performance_improvement: "Performance Improvement Plan",
    PlanType.development: "Development Plan",
    PlanType.retention: "Retention Plan",
    PlanType.succession: "Succession Plan",
}


def determine_plan_type(performance: Rating, potential: Rating) -> PlanType:
    if performance == Rating.high and potential == Rating.high:
        return PlanType.succession
    if potential == Rating.high and performance in (Rating.medium, Rating.high):
        return PlanType.development
    if performance == Rating.low:
        return PlanType.performance_improvement
    return PlanType.retention


def extract_employee_name(text: str) -> str:
    for pattern in NAME_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1).strip()

    lines = [line for line in text.split("\n") if line.strip()]
    for line in lines[:3]:
        words = line.split()
        if 2 <= len(words) <= 4 and all(NAME_WORD.match(w) for w in words):
            return " ".join(words)

    return UNKNOWN_EMPLOYEE


def extract_field(text: str, labels: List[str]) -> Optional[str]:
    for label in labels:
        match = re.search(r"\b" + re.escape(label) + r"\s*([^\n]+)", text, re.IGNORECASE)
        if match:
            return match.group(1).strip()
    return None


def extract_email(text: str) -> Optional[str]:
    match = EMAIL_PATTERN.search(text)
    return match.group(0) if match else None


def extract_bullet_points(text: str, section_headers: List[str]) -> List[str]:
    """Collect bullets under any of `section_headers` until the next `Header:` line."""
    bullets: List[str] = []
    in_section = False

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        is_bullet = bool(BULLET_PREFIX.match(line))

        if not is_bullet and any(header in line.lower() for header in section_headers):
            in_section = True
            continue

        if in_section and SECTION_HEADER.match(line):
            in_section = False

        if in_section and is_bullet:
            cleaned = BULLET_MARKER.sub("", line).strip()
            if len(cleaned) >= MIN_BULLET_LENGTH:
                bullets.append(cleaned)

    return bullets


def generate_objectives(
    performance: Rating,
    potential: Rating,
    improvements: List[str],
    strengths: List[str],
) -> List[str]:
    objectives: List[str] = []

    if performance == Rating.low:
        objectives.append("Address immediate performance gaps within 30-60 days")
        objectives.append("Establish clear performance standards and metrics")
        if improvements:
            objectives.append(f"Focus on: {improvements[0]}")
    elif potential == Rating.high:
        objectives.append("Develop leadership and strategic capabilities")
        objectives.append("Expand scope of impact and influence")
        if strengths:
            objectives.append(f"Leverage strength in {strengths[0].lower()} for team benefit")
    elif performance == Rating.high:
        objectives.append("Maintain exceptional performance levels")
        objectives.append("Take on challenging stretch assignments")
        objectives.append("Mentor and develop junior team members")
    else:
        objectives.append("Sustain reliable contribution in current role")
        objectives.append("Build one new capability aligned with team priorities")

    for area in improvements[:2]:
        objectives.append(f"Improve {area.lower()}")

    return objectives[:MAX_OBJECTIVES]


def extract_action_sentences(text: str, improvements: List[str]) -> List[str]:
    actions: List[str] = []
    for sentence in SENTENCE_SPLIT.split(text):
        cleaned = sentence.strip()
        lowered = cleaned.lower()
        if any(verb in lowered for verb in ACTION_VERBS) and 15 < len(cleaned) < 200:
            actions.append(cleaned)

    for improvement in improvements:
        prefix = improvement.lower()[:20]
        if not any(prefix in a.lower() for a in actions):
            actions.append(f"Develop plan to improve: {improvement}")

    return actions


def generate_action_items(
    text: str,
    performance: Rating,
    potential: Rating,
    improvements: List[str],
) -> List[ActionItem]:
    items = [
        item_from_text(sentence, index, performance)
        for index, sentence in enumerate(extract_action_sentences(text, improvements))
    ]
    items.extend(template_action_items(performance, potential))
    return items[:MAX_ACTION_ITEMS]


def generate_success_metrics(performance: Rating, potential: Rating, achievements: List[str]) -> List[str]:
    if performance == Rating.low:
        metrics = [
            'Performance improvement to "Medium" level within 90 days',
            "Meeting all key performance indicators consistently",
            "Positive feedback from manager in weekly check-ins",
        ]
    elif potential == Rating.high:
        metrics = [
            "Successful completion of 2+ stretch assignments",
            "Positive 360-degree feedback showing growth",
            "Ready for promotion within 12-18 months",
        ]
    else:
        metrics = [
            "Sustained performance at current level or higher",
            "Achievement of quarterly goals and objectives",
            "Positive peer and stakeholder feedback",
        ]

    if achievements:
        metrics.append(f"Build on success of: {achievements[0][:60]}...")

    return metrics[:MAX_SUCCESS_METRICS]


def generate_key_insights(
    performance: LexiconScore,
    potential: LexiconScore,
    strengths: List[str],
    improvements: List[str],
) -> List[str]:
    insights = [
        f"Performance assessed as {performance.rating.value} ({performance.confidence:g}% confidence)",
        f"Potential assessed as {potential.rating.value} ({potential.confidence:g}% confidence)",
    ]
    if strengths:
        insights.append(f"Key strength: {strengths[0]}")
    if improvements:
        insights.append(f"Priority development: {improvements[0]}")
    reasons = performance.reasons()
    if reasons:
        insights.append(reasons[0])
    return insights


class ReviewAnalyzer:
    def __init__(
        self,
        performance_lexicon: Optional[Lexicon] = None,
        potential_lexicon: Optional[Lexicon] = None,
    ):
        self.performance_scorer = LexiconScorer(performance_lexicon or default_performance_lexicon())
        self.potential_scorer = LexiconScorer(potential_lexicon or default_potential_lexicon())

    def analyze(self, review_text: Optional[str]) -> ReviewAnalysis:
        text = review_text or ""

        employee_name = extract_employee_name(text)
        performance = self.performance_scorer.score(text)
        potential = self.potential_scorer.score(text)

        strengths = extract_bullet_points(text, STRENGTH_HEADERS)
        improvements = extract_bullet_points(text, IMPROVEMENT_HEADERS)
        achievements = extract_bullet_points(text, ACHIEVEMENT_HEADERS)
        challenges = extract_bullet_points(text, CHALLENGE_HEADERS)

        plan_type = determine_plan_type(performance.rating, potential.rating)
        plan = DraftPlan(
            plan_type=plan_type,
            title=f"{PLAN_TITLES[plan_type]} for {employee_name}",
            objectives=generate_objectives(performance.rating, potential.rating, improvements, strengths),
            action_items=generate_action_items(text, performance.rating, potential.rating, improvements),
            success_metrics=generate_success_metrics(performance.rating, potential.rating, achievements),
            timeline=PLAN_TIMELINES[plan_type],
        )

        placement = PlacementSuggestion(
            performance=performance.rating,
            potential=potential.rating,
            confidence=int(math.floor((performance.confidence + potential.confidence) / 2 + 0.5)),
            reasoning="Based on keyword analysis of the performance review.",
        )

        logger.info(
            f"Review analyzed for {employee_name}: performance={performance.rating.value}, "
            f"potential={potential.rating.value}, plan={plan_type.value}"
        )

        return ReviewAnalysis(
            employee_name=employee_name,
            title=extract_field(text, TITLE_LABELS),
            department=extract_field(text, DEPARTMENT_LABELS),
            email=extract_email(text),
            placement=placement,
            plan=plan,
            key_insights=generate_key_insights(performance, potential, strengths, improvements),
            strengths=strengths,
            areas_for_improvement=improvements,
            achievements=achievements,
            challenges=challenges,
            source="keywords",
        )
