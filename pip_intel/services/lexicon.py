"""
Weighted phrase lexicons and the scorer that classifies text against them.

Scoring is a case-insensitive substring scan over an unordered phrase set.
Overlapping phrases count independently, so "exceptional" and
"exceptional quality" both contribute when the latter is present.
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pip_intel.core.exceptions import LexiconLoadError
from pip_intel.models.review import Rating

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 70
MIN_CONFIDENCE = 60
MAX_CONFIDENCE = 95


class WeightedPhrase(BaseModel):
    model_config = ConfigDict(frozen=True)

    phrase: str
    weight: float = 1.0


class Lexicon(BaseModel):
    """
    Phrase tables for one ordinal dimension.

    `hedges` are medium-leaning qualifiers ("room for improvement"). Each one
    found adds its weight to `medium` and takes `hedge_penalty` off `high`.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    high: List[WeightedPhrase] = Field(default_factory=list)
    medium: List[WeightedPhrase] = Field(default_factory=list)
    low: List[WeightedPhrase] = Field(default_factory=list)
    hedges: List[WeightedPhrase] = Field(default_factory=list)
    hedge_penalty: float = 0.5


class LexiconMatch(BaseModel):
    phrase: str
    bucket: str
    weight: float


class LexiconScore(BaseModel):
    rating: Rating
    # Unrounded; the placement average is what gets rounded
    confidence: float
    scores: Dict[str, float]
    matches: List[LexiconMatch] = Field(default_factory=list)

    def reasons(self) -> List[str]:
        """Human readable evidence, positive findings first."""
        found = [f'Found: "{m.phrase}"' for m in self.matches if m.bucket == "high"]
        concerns = [f'Concern: "{m.phrase}"' for m in self.matches if m.bucket == "low"]
        return found + concerns


class LexiconScorer:
    def __init__(self, lexicon: Lexicon):
        self.lexicon = lexicon

    def score(self, text: Optional[str]) -> LexiconScore:
        lowered = (text or "").lower()
        scores = {"high": 0.0, "medium": 0.0, "low": 0.0}
        matches: List[LexiconMatch] = []

        for bucket in ("high", "medium", "low"):
            for entry in getattr(self.lexicon, bucket):
                if entry.phrase.lower() in lowered:
                    scores[bucket] += entry.weight
                    matches.append(LexiconMatch(phrase=entry.phrase, bucket=bucket, weight=entry.weight))

        for entry in self.lexicon.hedges:
            if entry.phrase.lower() in lowered:
                scores["medium"] += entry.weight
                scores["high"] -= self.lexicon.hedge_penalty
                matches.append(LexiconMatch(phrase=entry.phrase, bucket="hedge", weight=entry.weight))

        high, medium, low = scores["high"], scores["medium"], scores["low"]
        if high > medium and high > low:
            rating, confidence = Rating.high, _confidence(high)
        elif low > medium and low > high:
            rating, confidence = Rating.low, _confidence(low)
        else:
            # Medium wins outright, or no single bucket leads
            rating, confidence = Rating.medium, DEFAULT_CONFIDENCE

        return LexiconScore(rating=rating, confidence=confidence, scores=scores, matches=matches)


def _confidence(winning_score: float) -> float:
    return min(MAX_CONFIDENCE, MIN_CONFIDENCE + winning_score * 5)


def _phrases(phrases: List[str], weight: float) -> List[WeightedPhrase]:
    return [WeightedPhrase(phrase=p, weight=weight) for p in phrases]


def default_performance_lexicon() -> Lexicon:
    return Lexicon(
        name="performance",
        high=_phrases([
            "exceeded expectations", "exceptional", "outstanding", "consistently delivers",
            "top performer", "exemplary", "significantly above", "remarkable results",
            "best in class", "exceeds goals", "far surpasses", "stellar performance",
            "consistently exceeds", "exceptional quality", "highest standards",
            "delivered exceptional", "achieved all goals", "surpassed targets",
        ], 2.0),
        medium=_phrases([
            "meets expectations", "solid performance", "reliable", "consistent",
            "good work", "satisfactory", "competent", "adequate", "meets goals",
            "fulfills requirements", "steady performer", "dependable",
            "meets standards", "acceptable performance", "on track",
        ], 1.5),
        low=_phrases([
            "below expectations", "underperforming", "struggling", "inconsistent",
            "fails to meet", "poor performance", "does not meet", "falling short",
            "needs significant improvement", "performance issues", "not meeting standards",
            "unacceptable", "substandard", "major concerns", "critical gaps",
        ], 2.0),
        hedges=_phrases(["room for improvement", "could improve", "needs development"], 1.0),
        hedge_penalty=0.5,
    )


def default_potential_lexicon() -> Lexicon:
    return Lexicon(
        name="potential",
        high=_phrases([
            "high potential", "ready for promotion", "leadership qualities", "quick learner",
            "takes initiative", "strategic thinking", "innovative", "adapts quickly",
            "future leader", "growth mindset", "seeks challenges", "learns rapidly",
            "strong potential", "promotion ready", "executive presence", "drives change",
            "visionary", "builds relationships", "influences others", "self-aware",
            "resilient", "embraces feedback", "learning agility", "scalable",
        ], 2.0),
        medium=_phrases([
            "capable", "solid contributor", "room to grow", "developing skills",
            "shows promise", "potential to develop", "could advance", "trainable",
            "willing to learn", "shows interest", "moderate potential", "steady growth",
        ], 1.0),
        low=_phrases([
            "limited growth", "at capacity", "comfortable in current role", "plateaued",
            "resistant to change", "minimal potential", "limited interest in growth",
            "not interested in advancement", "reached ceiling", "low adaptability",
            "rigid thinking", "struggles with change", "narrow focus",
        ], 2.0),
    )


def load_lexicon(path: str) -> Lexicon:
    """Load a lexicon from a JSON file shaped like the `Lexicon` model."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        lexicon = Lexicon.model_validate(raw)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read lexicon file {path}: {e}")
        raise LexiconLoadError(f"Could not read lexicon file: {path}", details={"error": str(e)})
    except ValidationError as e:
        logger.error(f"Lexicon file {path} failed validation: {e}")
        raise LexiconLoadError(f"Lexicon file is malformed: {path}", details={"errors": e.errors()})
    logger.info(f"Loaded lexicon '{lexicon.name}' from {path}")
    return lexicon


def resolve_lexicons(lexicon_dir: Optional[str] = None) -> Dict[str, Lexicon]:
    """
    Lexicons for a deployment: built-in defaults, replaced per dimension by
    `performance.json` / `potential.json` when present in `lexicon_dir`.
    """
    lexicons = {
        "performance": default_performance_lexicon(),
        "potential": default_potential_lexicon(),
    }
    if not lexicon_dir:
        return lexicons
    for name in lexicons:
        candidate = Path(lexicon_dir) / f"{name}.json"
        if candidate.exists():
            lexicons[name] = load_lexicon(str(candidate))
    return lexicons
