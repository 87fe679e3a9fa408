"""
Language-model integrations used for AI-assisted classification and scoring.
"""

from .base import LanguageModelClient, LanguageModelError
from .anthropic_client import AnthropicClient
from .openrouter import OpenRouterClient
from .classification import AIIntentClassifier
from .scoring import AIMatchScorer

__all__ = [
    "LanguageModelClient",
    "LanguageModelError",
    "AnthropicClient",
    "OpenRouterClient",
    "AIIntentClassifier",
    "AIMatchScorer",
]
