"""Tests for AI intent classification and the rule fallback."""

import json
from unittest.mock import MagicMock

import pytest

from talent_matcher.core.errors import ClassificationError
from talent_matcher.core.models import Intent, IntentAction, ScoringMode
from talent_matcher.integrations.base import LanguageModelError
from talent_matcher.integrations.classification import AIIntentClassifier
from talent_matcher.intent.classifier import IntentResolver


class TestAIIntentClassifier:
    """Parsing classifier replies into intents."""

    def test_parses_fenced_reply(self, mock_client, catalog):
        mock_client.complete.return_value = (
            "```json\n"
            + json.dumps({
                "action": "find_talents",
                "filters": {"skills": ["react"], "role": "null", "experience_min": 3},
                "confidence": 0.9,
                "response": "Here are React developers",
            })
            + "\n```"
        )
        classifier = AIIntentClassifier(mock_client)

        intent = classifier.classify("find react developers", catalog)

        assert intent.action is IntentAction.FIND_TALENTS
        assert intent.filters.skills == ["react"]
        assert intent.filters.role is None
        assert intent.filters.experience_min == 3
        assert intent.confidence == pytest.approx(0.9)
        assert intent.source == "ai"

    def test_salvages_object_from_prose(self, mock_client, catalog):
        mock_client.complete.return_value = (
            'Sure! {"action": "show_talent_profile", "filters": {"talentName": "Fijula Rao"}} Hope that helps.'
        )
        intent = AIIntentClassifier(mock_client).classify("show fibula", catalog)

        assert intent.action is IntentAction.SHOW_TALENT_PROFILE
        assert intent.filters.talent_name == "Fijula Rao"

    def test_sampling_parameters(self, mock_client, catalog):
        mock_client.complete.return_value = '{"action": "show_stats"}'
        AIIntentClassifier(mock_client).classify("stats please", catalog)

        _, kwargs = mock_client.complete.call_args
        assert kwargs["max_tokens"] == 300
        assert kwargs["temperature"] == pytest.approx(0.3)

    def test_prompt_lists_catalog(self, catalog):
        prompt = AIIntentClassifier(MagicMock()).build_prompt("hello", catalog)

        assert '"hello"' in prompt
        assert "fijula rao" in prompt
        assert "senior backend engineer" in prompt
        assert "keyword_search" not in prompt

    @pytest.mark.parametrize("reply", [
        "not json at all",
        "",
        '{"action": "launch_rockets"}',
        '{"action": "keyword_search"}',
        '{"action": "find_talents", "filters": ["react"]}',
        '["find_talents"]',
    ])
    def test_unusable_replies(self, mock_client, catalog, reply):
        mock_client.complete.return_value = reply
        with pytest.raises(ClassificationError):
            AIIntentClassifier(mock_client).classify("anything", catalog)

    def test_transport_failure(self, mock_client, catalog):
        mock_client.complete.side_effect = LanguageModelError("boom", 500)
        with pytest.raises(ClassificationError):
            AIIntentClassifier(mock_client).classify("anything", catalog)


class TestIntentResolver:
    """Strategy selection and fallback."""

    def test_rule_mode_skips_ai(self, catalog):
        ai_classifier = MagicMock()
        resolver = IntentResolver(ai_classifier=ai_classifier, mode=ScoringMode.RULE_BASED)

        intent = resolver.resolve("find qa opportunities", catalog)

        ai_classifier.classify.assert_not_called()
        assert intent.source == "opportunity_request"

    def test_ai_mode_uses_ai(self, catalog):
        ai_classifier = MagicMock()
        ai_classifier.classify.return_value = Intent(action=IntentAction.SHOW_STATS, source="ai")
        resolver = IntentResolver(ai_classifier=ai_classifier, mode=ScoringMode.AI_ASSISTED)

        intent = resolver.resolve("how are we doing", catalog)

        assert intent.action is IntentAction.SHOW_STATS
        assert not intent.from_rules

    def test_falls_back_to_rules(self, catalog):
        ai_classifier = MagicMock()
        ai_classifier.classify.side_effect = ClassificationError("unreachable")
        resolver = IntentResolver(ai_classifier=ai_classifier, mode=ScoringMode.AI_ASSISTED)

        intent = resolver.resolve("show fibula's profile", catalog)

        assert intent.action is IntentAction.SHOW_TALENT_PROFILE
        assert intent.filters.talent_name == "Fijula Rao"
        assert intent.from_rules

    def test_ai_mode_without_classifier(self, catalog):
        resolver = IntentResolver(mode=ScoringMode.AI_ASSISTED)
        assert not resolver.uses_ai
        assert resolver.resolve("list", catalog).source == "generic_action"
