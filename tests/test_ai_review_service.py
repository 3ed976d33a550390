import asyncio
import json
import time
from unittest.mock import MagicMock, patch

import pytest
import requests

from pip_intel.core.config import settings
from pip_intel.core.exceptions import AIError
from pip_intel.models.review import ActionItemOwner, ActionItemPriority, PlanType, Rating
from pip_intel.services.ai_orchestrator import AIOrchestrator
from pip_intel.services.ai_review_service import analysis_from_ai, analyze_review

REVIEW = "Morgan Chen - exceeded expectations, ready for promotion and shows leadership qualities."

AI_PAYLOAD = {
    "employeeName": "Morgan Chen",
    "title": "Staff Engineer",
    "suggestedPerformance": "High",
    "suggestedPotential": "high",
    "confidence": 88,
    "reasoning": "Consistently ships ahead of plan and leads cross-team work.",
    "keyStrengths": ["System design", "Mentoring"],
    "developmentAreas": ["Delegation"],
    "objectives": ["Lead the platform roadmap", "a", "b", "c", "d", "e"],
    "actionItems": [
        {"description": "Own the Q3 architecture review", "daysToComplete": 45, "priority": "High", "owner": "manager"},
        {"description": "Mentor two senior engineers", "priority": "urgent", "owner": "someone"},
    ],
    "successMetrics": ["Roadmap approved by leadership"],
}


def run(coro):
    return asyncio.run(coro)


def test_keyword_path_when_ai_not_requested():
    with patch.object(AIOrchestrator, "analyze_text") as ai:
        result = run(analyze_review(REVIEW))
    ai.assert_not_called()
    assert result.source == "keywords"
    assert result.used_fallback is False


def test_ai_response_is_mapped_onto_analysis():
    with patch.object(AIOrchestrator, "analyze_text", return_value=AI_PAYLOAD):
        result = run(analyze_review(REVIEW, use_ai=True))
    assert result.source == "ai"
    assert result.used_fallback is False
    assert result.employee_name == "Morgan Chen"
    assert result.placement.performance == Rating.high
    assert result.placement.confidence == 88
    assert result.plan.plan_type == PlanType.succession
    assert result.plan.timeline == "12 months"
    assert len(result.plan.objectives) == 5


def test_ai_action_items_are_normalised():
    result = analysis_from_ai(AI_PAYLOAD)
    first, second = result.plan.action_items
    assert first.owner == ActionItemOwner.manager
    assert first.priority == ActionItemPriority.high
    assert first.due_offset_days == 45
    assert second.owner == ActionItemOwner.employee
    assert second.priority == ActionItemPriority.medium
    assert second.due_offset_days == 30


def test_unknown_ratings_and_bad_confidence_are_coerced():
    result = analysis_from_ai({"suggestedPerformance": "stellar", "confidence": "lots"})
    assert result.placement.performance == Rating.medium
    assert result.placement.confidence == 70
    assert result.employee_name == "Unknown Employee"


def test_timeout_falls_back_to_keywords():
    def slow(*args, **kwargs):
        time.sleep(0.3)
        return AI_PAYLOAD

    with patch.object(AIOrchestrator, "analyze_text", side_effect=slow):
        result = run(analyze_review(REVIEW, use_ai=True, timeout=0.01))
    assert result.used_fallback is True
    assert result.fallback_reason == "timeout"
    assert result.source == "keywords"
    assert result.placement.performance == Rating.high


def test_service_error_falls_back_with_error_code():
    with patch.object(AIOrchestrator, "analyze_text", side_effect=AIError("boom")):
        result = run(analyze_review(REVIEW, use_ai=True))
    assert result.used_fallback is True
    assert result.fallback_reason == "AI_SERVICE_UNAVAILABLE"


def test_bare_string_action_items_are_rejected():
    payload = dict(AI_PAYLOAD, actionItems=["just a string"])
    with patch.object(AIOrchestrator, "analyze_text", return_value=payload):
        result = run(analyze_review(REVIEW, use_ai=True))
    assert result.used_fallback is True
    assert result.fallback_reason == "INVALID_AI_RESPONSE"


def test_kill_switch_falls_back(monkeypatch):
    monkeypatch.setattr(settings.ai, "kill_switch", True)
    result = run(analyze_review(REVIEW, use_ai=True))
    assert result.used_fallback is True
    assert result.fallback_reason == "AI_KILL_SWITCH_ACTIVE"


def test_missing_api_key_falls_back(monkeypatch):
    monkeypatch.setattr(settings.ai, "kill_switch", False)
    monkeypatch.setattr(settings.ai, "openrouter_api_key", None)
    result = run(analyze_review(REVIEW, use_ai=True))
    assert result.used_fallback is True
    assert result.fallback_reason == "AI_SERVICE_UNAVAILABLE"


def _response(content):
    response = MagicMock()
    response.json.return_value = {"choices": [{"message": {"content": content}}]}
    response.raise_for_status.return_value = None
    return response


def test_orchestrator_extracts_json_from_prose(monkeypatch):
    monkeypatch.setattr(settings.ai, "kill_switch", False)
    monkeypatch.setattr(settings.ai, "openrouter_api_key", "test-key")
    reply = 'Here you go:\n```json\n{"employeeName": "Morgan Chen"}\n```'
    with patch("pip_intel.services.ai_orchestrator.requests.post", return_value=_response(reply)) as post:
        result = AIOrchestrator.analyze_text("system", "user")
    assert result == {"employeeName": "Morgan Chen"}
    assert post.call_count == 1


def test_orchestrator_tries_fallback_model(monkeypatch):
    monkeypatch.setattr(settings.ai, "kill_switch", False)
    monkeypatch.setattr(settings.ai, "openrouter_api_key", "test-key")

    failed = MagicMock()
    failed.raise_for_status.side_effect = requests.exceptions.HTTPError(response=MagicMock(status_code=502))

    with patch(
        "pip_intel.services.ai_orchestrator.requests.post",
        side_effect=[failed, _response('{"ok": true}')],
    ) as post:
        result = AIOrchestrator.analyze_text("system", "user")

    assert result == {"ok": True}
    models = [json.loads(c.kwargs["data"])["model"] for c in post.call_args_list]
    assert models == [settings.ai.model_name, settings.ai_fallback_model]


def test_orchestrator_raises_when_both_models_fail(monkeypatch):
    monkeypatch.setattr(settings.ai, "kill_switch", False)
    monkeypatch.setattr(settings.ai, "openrouter_api_key", "test-key")

    failed = MagicMock()
    failed.raise_for_status.side_effect = requests.exceptions.HTTPError(response=MagicMock(status_code=500))

    with patch("pip_intel.services.ai_orchestrator.requests.post", return_value=failed):
        with pytest.raises(AIError) as exc:
            AIOrchestrator.analyze_text("system", "user")
    assert exc.value.details["primary"] == "AI service returned error: 500"
