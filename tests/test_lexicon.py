import json

import pytest

from pip_intel.core.exceptions import LexiconLoadError
from pip_intel.models.review import Rating
from pip_intel.services.lexicon import (
    Lexicon,
    LexiconScorer,
    WeightedPhrase,
    default_performance_lexicon,
    default_potential_lexicon,
    load_lexicon,
    resolve_lexicons,
)


@pytest.fixture
def performance():
    return LexiconScorer(default_performance_lexicon())


@pytest.fixture
def potential():
    return LexiconScorer(default_potential_lexicon())


@pytest.mark.parametrize("text", [
    "An outstanding year.",
    "She exceeded expectations on every project.",
    "Exemplary, a top performer who consistently exceeds targets.",
])
def test_high_phrases_only_rate_high(performance, text):
    result = performance.score(text)
    assert result.rating == Rating.high
    assert result.confidence >= 60


@pytest.mark.parametrize("text", ["", "The quarterly report was filed.", None])
def test_no_matches_rate_medium_at_default_confidence(performance, text):
    result = performance.score(text)
    assert result.rating == Rating.medium
    assert result.confidence == 70
    assert result.matches == []


def test_matching_is_case_insensitive(performance):
    assert performance.score("OUTSTANDING delivery").rating == Rating.high


def test_confidence_grows_with_score_and_caps_at_95(performance):
    one = performance.score("outstanding")
    many = performance.score(
        "outstanding, exceptional, exemplary, top performer, stellar performance, remarkable results"
    )
    assert one.confidence == 70
    assert many.confidence == 95


def test_tie_between_high_and_low_is_medium(performance):
    result = performance.score("Outstanding ideas but underperforming on delivery.")
    assert result.scores["high"] == result.scores["low"]
    assert result.rating == Rating.medium
    assert result.confidence == 70


def test_hedge_adds_to_medium_and_penalises_high(performance):
    result = performance.score("Outstanding work, though there is room for improvement.")
    assert result.scores["high"] == 1.5
    assert result.scores["medium"] == 1.0
    assert result.rating == Rating.high
    assert result.confidence == 67.5
    assert any(m.bucket == "hedge" for m in result.matches)


def test_low_phrases_rate_low(performance):
    result = performance.score("Consistently below expectations and struggling with ownership.")
    assert result.rating == Rating.low
    assert result.confidence == 80


def test_potential_lexicon(potential):
    result = potential.score("Shows leadership qualities and takes initiative.")
    assert result.rating == Rating.high
    assert result.confidence == 80


def test_reasons_list_positive_findings_first(performance):
    result = performance.score("Struggling at times but outstanding with customers.")
    reasons = result.reasons()
    assert reasons[0] == 'Found: "outstanding"'
    assert reasons[-1] == 'Concern: "struggling"'


def test_injected_lexicon_replaces_defaults():
    lexicon = Lexicon(
        name="custom",
        high=[WeightedPhrase(phrase="crushed it", weight=3)],
        low=[WeightedPhrase(phrase="dropped the ball", weight=1)],
    )
    result = LexiconScorer(lexicon).score("Crushed it this quarter.")
    assert result.rating == Rating.high
    assert result.confidence == 75
    # Defaults are not consulted
    assert LexiconScorer(lexicon).score("outstanding").rating == Rating.medium


def test_load_lexicon_from_json(tmp_path):
    path = tmp_path / "performance.json"
    path.write_text(json.dumps({
        "name": "acme-performance",
        "high": [{"phrase": "raised the bar", "weight": 2}],
        "low": [{"phrase": "missed the mark", "weight": 2}],
    }))
    lexicon = load_lexicon(str(path))
    assert lexicon.name == "acme-performance"
    assert LexiconScorer(lexicon).score("Raised the bar again").rating == Rating.high


def test_load_lexicon_rejects_malformed_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(LexiconLoadError):
        load_lexicon(str(path))

    path.write_text(json.dumps({"high": "not a list"}))
    with pytest.raises(LexiconLoadError):
        load_lexicon(str(path))


def test_load_lexicon_missing_file(tmp_path):
    with pytest.raises(LexiconLoadError):
        load_lexicon(str(tmp_path / "nope.json"))


def test_resolve_lexicons_overrides_only_present_files(tmp_path):
    (tmp_path / "potential.json").write_text(json.dumps({
        "name": "acme-potential",
        "high": [{"phrase": "rising star", "weight": 2}],
    }))
    lexicons = resolve_lexicons(str(tmp_path))
    assert lexicons["potential"].name == "acme-potential"
    assert lexicons["performance"].name == "performance"


def test_resolve_lexicons_without_directory():
    lexicons = resolve_lexicons(None)
    assert set(lexicons) == {"performance", "potential"}
