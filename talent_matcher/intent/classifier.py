"""
Intent Resolver - Chooses between AI classification and the rule cascade.
"""

from typing import Optional
import logging

from talent_matcher.core.errors import ClassificationError
from talent_matcher.core.models import Catalog, Intent, ScoringMode

from .rules import RuleBasedClassifier


class IntentResolver:
    """Resolves a transcript into an Intent, falling back to rules on AI failure."""

    def __init__(
        self,
        ai_classifier=None,
        mode: ScoringMode = ScoringMode.RULE_BASED,
        rule_classifier: Optional[RuleBasedClassifier] = None,
    ):
        """
        Args:
            ai_classifier: Optional classifier with a
                ``classify(transcript, catalog) -> Intent`` method
            mode: AI_ASSISTED to try the AI classifier first
            rule_classifier: Rule cascade used directly or as the fallback
        """
        self.ai_classifier = ai_classifier
        self.mode = mode
        self.rule_classifier = rule_classifier or RuleBasedClassifier()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def uses_ai(self) -> bool:
        return self.mode is ScoringMode.AI_ASSISTED and self.ai_classifier is not None

    def resolve(self, transcript: str, catalog: Catalog) -> Intent:
        if self.uses_ai:
            try:
                intent = self.ai_classifier.classify(transcript, catalog)
                self.logger.info(f"AI classified command as {intent.action.value}")
                return intent
            except ClassificationError as e:
                self.logger.warning(f"AI classification failed, using rules: {e}")

        intent = self.rule_classifier.classify(transcript, catalog)
        self.logger.info(f"Rule '{intent.source}' classified command as {intent.action.value}")
        return intent
