"""Turning command transcripts into intents."""

from .classifier import IntentResolver
from .rules import DEFAULT_RULES, IntentRule, RuleBasedClassifier
from .vocabulary import Vocabulary

__all__ = [
    "IntentResolver",
    "DEFAULT_RULES",
    "IntentRule",
    "RuleBasedClassifier",
    "Vocabulary",
]
