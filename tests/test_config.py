"""Tests for configuration management and pipeline wiring."""

import json

import pytest

from talent_matcher.core.models import ScoringMode
from talent_matcher.integrations.anthropic_client import AnthropicClient
from talent_matcher.integrations.openrouter import OpenRouterClient
from talent_matcher.utils.config import Config


@pytest.fixture(autouse=True)
def no_env_keys(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.json"


class TestConfig:
    """Loading, merging and dot-path access."""

    def test_defaults_without_file(self, config_path):
        config = Config(str(config_path))

        assert config.get("matching.mode") == "rule_based"
        assert config.get("matching.timeout_seconds") == 30
        assert config.get("matching.max_workers") == 8
        assert config.get("ai.provider") == "anthropic"
        assert config.get("missing.key", "fallback") == "fallback"

    def test_file_is_deep_merged(self, config_path):
        config_path.write_text(json.dumps({"matching": {"timeout_seconds": 5}}))
        config = Config(str(config_path))

        assert config.get_timeout() == 5.0
        assert config.get_max_workers() == 8

    def test_defaults_are_not_shared(self, config_path):
        config = Config(str(config_path))
        config.set("matching.max_workers", 2)

        assert Config.DEFAULT_CONFIG["matching"]["max_workers"] == 8

    def test_set_creates_sections(self, config_path):
        config = Config(str(config_path))
        config.set("extra.nested.value", 1)
        assert config.get("extra.nested.value") == 1

    def test_save_and_reload(self, config_path):
        config = Config(str(config_path))
        config.set("ai.provider", "openrouter")
        config.save()

        assert Config(str(config_path)).get("ai.provider") == "openrouter"

    def test_environment_key_wins(self, config_path, monkeypatch):
        config = Config(str(config_path))
        config.set("api_keys.anthropic", "from-file")
        assert config.get_api_key("anthropic") == "from-file"

        monkeypatch.setenv("ANTHROPIC_API_KEY", "from-env")
        assert config.get_api_key("anthropic") == "from-env"

    def test_api_keys_are_masked(self, config_path):
        config = Config(str(config_path))
        config.set("api_keys.anthropic", "sk-ant-1234567890")

        masked = config.masked()

        assert masked["api_keys"]["anthropic"] == "sk-a...7890"
        assert masked["api_keys"]["openrouter"] == "(not set)"
        assert masked["matching"]["mode"] == "rule_based"

    def test_unknown_mode(self, config_path):
        config = Config(str(config_path))
        config.set("matching.mode", "psychic")
        assert config.get_scoring_mode() is ScoringMode.RULE_BASED


class TestBuildPipeline:
    """Wiring clients, classifier, scorer and pipeline."""

    def test_rule_based_by_default(self, config_path):
        pipeline = Config(str(config_path)).build_pipeline()

        assert pipeline.mode is ScoringMode.RULE_BASED
        assert not pipeline.resolver.uses_ai
        assert pipeline.executor.scorer.ai_scorer is None
        assert pipeline.timeout == 30.0

    def test_ai_without_key_degrades(self, config_path):
        config = Config(str(config_path))
        pipeline = config.build_pipeline(ScoringMode.AI_ASSISTED)

        assert pipeline.mode is ScoringMode.RULE_BASED
        assert config.build_client() is None

    def test_ai_with_anthropic_key(self, config_path, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        config = Config(str(config_path))
        config.set("matching.mode", "ai_assisted")

        pipeline = config.build_pipeline()

        assert pipeline.mode is ScoringMode.AI_ASSISTED
        assert pipeline.resolver.uses_ai
        assert isinstance(pipeline.resolver.ai_classifier.client, AnthropicClient)
        assert pipeline.executor.scorer.ai_scorer is not None

    def test_openrouter_client(self, config_path):
        config = Config(str(config_path))
        config.set("ai.provider", "openrouter")
        config.set("api_keys.openrouter", "sk-or-test")
        config.set("ai.base_url", "http://localhost:9000/v1")

        client = config.build_client()

        assert isinstance(client, OpenRouterClient)
        assert client.model == "openrouter/auto"
        assert client.base_url == "http://localhost:9000/v1"

    def test_unknown_provider(self, config_path):
        config = Config(str(config_path))
        config.set("ai.provider", "carrier-pigeon")
        assert config.build_client() is None
