"""
Configuration management for Talent Matcher.
"""

from pathlib import Path
from typing import Optional
import copy
import json
import logging
import os

from talent_matcher.core.matcher import MatchScorer
from talent_matcher.core.models import ScoringMode
from talent_matcher.integrations.anthropic_client import AnthropicClient
from talent_matcher.integrations.base import LanguageModelClient
from talent_matcher.integrations.classification import AIIntentClassifier
from talent_matcher.integrations.openrouter import OpenRouterClient
from talent_matcher.integrations.scoring import AIMatchScorer
from talent_matcher.intent.classifier import IntentResolver
from talent_matcher.pipeline.command_pipeline import CommandPipeline


class Config:
    """Manages engine configuration and API keys."""

    DEFAULT_CONFIG = {
        "api_keys": {
            "anthropic": "",
            "openrouter": "",
        },
        "matching": {
            "mode": ScoringMode.RULE_BASED.value,
            "timeout_seconds": 30,
            "max_workers": 8,
        },
        "ai": {
            "provider": "anthropic",
            "model": "",
            "base_url": "",
            "request_timeout": 30,
        },
    }

    CLIENTS = {
        "anthropic": AnthropicClient,
        "openrouter": OpenRouterClient,
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to config file (default: ~/.talent_matcher/config.json)
        """
        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path.home() / ".talent_matcher" / "config.json"

        self.logger = logging.getLogger(self.__class__.__name__)
        self.config = self._load_config()

    def _load_config(self) -> dict:
        """Load configuration from file or fall back to defaults."""
        defaults = copy.deepcopy(self.DEFAULT_CONFIG)
        if self.config_path.exists():
            with open(self.config_path, 'r') as f:
                user_config = json.load(f)
            return self._deep_merge(defaults, user_config)

        return defaults

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def save(self) -> None:
        """Save current configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default=None):
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "matching.mode")
            default: Default value if key not found
        """
        value = self.config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value) -> None:
        """Set a configuration value using dot notation."""
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_api_key(self, provider: str) -> str:
        """
        Get API key for a provider.

        Environment variables (e.g. ANTHROPIC_API_KEY) take precedence over
        the config file.
        """
        env_value = os.environ.get(f"{provider.upper()}_API_KEY")
        if env_value:
            return env_value
        return self.get(f"api_keys.{provider}", "")

    def set_api_key(self, provider: str, key: str) -> None:
        """Set API key for a provider."""
        self.set(f"api_keys.{provider}", key)
        self.save()

    def get_scoring_mode(self) -> ScoringMode:
        value = self.get("matching.mode", ScoringMode.RULE_BASED.value)
        try:
            return ScoringMode(value)
        except ValueError:
            self.logger.warning(f"Unknown matching mode '{value}', using rule-based matching")
            return ScoringMode.RULE_BASED

    def get_timeout(self) -> float:
        return float(self.get("matching.timeout_seconds", CommandPipeline.DEFAULT_TIMEOUT))

    def get_max_workers(self) -> int:
        return int(self.get("matching.max_workers", CommandPipeline.DEFAULT_MAX_WORKERS))

    def build_client(self) -> Optional[LanguageModelClient]:
        """
        Create the configured language-model client.

        Returns:
            The client, or None when the provider is unknown or has no API key
        """
        provider = (self.get("ai.provider") or "anthropic").lower()
        client_class = self.CLIENTS.get(provider)
        if client_class is None:
            self.logger.warning(f"Unknown AI provider '{provider}'")
            return None

        api_key = self.get_api_key(provider)
        if not api_key:
            return None

        kwargs = {
            "api_key": api_key,
            "model": self.get("ai.model") or None,
            "request_timeout": float(self.get("ai.request_timeout", 30)),
        }
        if provider == "openrouter":
            kwargs["base_url"] = self.get("ai.base_url") or None
        return client_class(**kwargs)

    def build_pipeline(self, mode: Optional[ScoringMode] = None) -> CommandPipeline:
        """
        Wire the client, classifier, scorer and pipeline from configuration.

        Args:
            mode: Overrides ``matching.mode`` when given

        Without a usable client the pipeline runs rule-based.
        """
        mode = mode or self.get_scoring_mode()
        client = self.build_client() if mode is ScoringMode.AI_ASSISTED else None

        if mode is ScoringMode.AI_ASSISTED and client is None:
            self.logger.warning("No AI client configured, using rule-based matching")
            mode = ScoringMode.RULE_BASED

        if client is not None:
            resolver = IntentResolver(ai_classifier=AIIntentClassifier(client), mode=mode)
            scorer = MatchScorer(ai_scorer=AIMatchScorer(client))
        else:
            resolver = IntentResolver(mode=mode)
            scorer = MatchScorer()

        return CommandPipeline(
            resolver=resolver,
            scorer=scorer,
            mode=mode,
            timeout=self.get_timeout(),
            max_workers=self.get_max_workers(),
        )

    def print_config(self) -> None:
        """Print current configuration (with API keys masked)."""
        print(json.dumps(self.masked(), indent=2))

    def masked(self) -> dict:
        return self._mask_sensitive(self.config)

    def _mask_sensitive(self, data: dict, sensitive_keys: set = None, inside_sensitive: bool = False) -> dict:
        """Mask sensitive values in configuration."""
        if sensitive_keys is None:
            sensitive_keys = {"api_key", "api_keys", "key", "secret", "password", "token"}

        result = {}
        for key, value in data.items():
            sensitive = inside_sensitive or any(s in key.lower() for s in sensitive_keys)
            if isinstance(value, dict):
                result[key] = self._mask_sensitive(value, sensitive_keys, sensitive)
            elif sensitive:
                if value:
                    value = str(value)
                    result[key] = f"{value[:4]}...{value[-4:]}" if len(value) > 8 else "****"
                else:
                    result[key] = "(not set)"
            else:
                result[key] = value
        return result
