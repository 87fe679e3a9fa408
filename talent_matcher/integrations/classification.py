"""
AI-assisted command classification.

The model sees the transcript plus a condensed summary of the catalog
(vocabulary of roles and skills, a sample of names and titles) and replies
with ``{action, filters, response, confidence}``.
"""

import logging

from talent_matcher.core.errors import ClassificationError
from talent_matcher.core.models import (
    CLASSIFIER_ACTIONS,
    Catalog,
    Intent,
    IntentAction,
    IntentFilters,
)

from .base import LanguageModelClient, LanguageModelError
from .replies import parse_json_object

SYSTEM_PROMPT = (
    "You are a voice assistant for talent matching. Analyze voice commands and "
    "return ONLY valid JSON. Do not include markdown formatting, backticks, or "
    "any other text."
)

MAX_SKILLS_IN_SUMMARY = 20
MAX_NAMES_IN_SUMMARY = 10


def _sample(values: list[str], limit: int) -> str:
    text = ", ".join(values[:limit])
    return text + ("..." if len(values) > limit else "")


class AIIntentClassifier:
    """Turns a transcript into an Intent with a language model."""

    MAX_TOKENS = 300
    TEMPERATURE = 0.3

    def __init__(self, client: LanguageModelClient):
        self.client = client
        self.logger = logging.getLogger(self.__class__.__name__)

    def classify(self, transcript: str, catalog: Catalog) -> Intent:
        """
        Classify a command against the current catalog.

        Raises:
            ClassificationError: On transport failure, an unparsable reply or
                an action outside the supported set
        """
        prompt = self.build_prompt(transcript, catalog)
        try:
            content = self.client.complete(
                SYSTEM_PROMPT,
                prompt,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
            )
        except LanguageModelError as e:
            raise ClassificationError(f"AI classifier unavailable: {e}") from e

        try:
            command = parse_json_object(content)
        except ValueError as e:
            self.logger.debug(f"Unusable classifier reply: {content!r}")
            raise ClassificationError(f"AI classifier reply could not be parsed: {e}") from e

        return self._to_intent(command)

    def _to_intent(self, command: dict) -> Intent:
        try:
            action = IntentAction(command.get("action"))
        except ValueError as e:
            raise ClassificationError(f"Unknown action: {command.get('action')!r}") from e
        if action not in CLASSIFIER_ACTIONS:
            raise ClassificationError(f"Unsupported action: {action.value}")

        filters = command.get("filters") or {}
        if not isinstance(filters, dict):
            raise ClassificationError("Filters must be a JSON object")

        try:
            confidence = float(command.get("confidence") or 0.0)
            parsed_filters = IntentFilters.from_dict(filters)
        except (TypeError, ValueError) as e:
            raise ClassificationError(f"Malformed classifier fields: {e}") from e

        return Intent(
            action=action,
            filters=parsed_filters,
            confidence=max(0.0, min(1.0, confidence)),
            response=str(command.get("response") or ""),
            source="ai",
        )

    def build_prompt(self, transcript: str, catalog: Catalog) -> str:
        talent_names = [name.lower() for name in catalog.talent_names]
        titles = [title.lower() for title in catalog.opportunity_titles]
        actions = "|".join(a.value for a in IntentAction if a in CLASSIFIER_ACTIONS)

        return f"""You are an intelligent voice assistant for a talent matching system. Understand the natural language command and choose the most appropriate action.

VOICE COMMAND: "{transcript}"

SYSTEM CAPABILITIES:
- Find and display talent profiles
- Find and display job opportunities
- Show a specific person's profile
- Match specific people to opportunities
- Match specific opportunities to people
- Filter by skills, roles, experience, location
- Show system statistics

AVAILABLE DATA:
- {len(catalog.talents)} talent profiles
- {len(catalog.opportunities)} job opportunities
- Skills: {_sample(catalog.skills, MAX_SKILLS_IN_SUMMARY)}
- Roles: {', '.join(catalog.roles)}
- Talent Names: {_sample(talent_names, MAX_NAMES_IN_SUMMARY)}
- Opportunity Titles: {_sample(titles, MAX_NAMES_IN_SUMMARY)}

INTERPRETATION RULES:
- Handle misspelled or misheard names ("fibula" means "Fijula")
- "files" usually means "profiles"
- "show [name]'s profile" or "show [name]" = show_talent_profile
- "find [name] opportunities" or "find opportunities for [name]" = match_talent_to_opportunity
- "find react developers" = find_talents with skills ["react"]
- "show me python jobs" = find_opportunities with skills ["python"]
- "show all profiles" = find_talents with no filters
- If no name is a close match, use null for talent_name

Respond with ONLY this JSON object:
{{
  "action": "{actions}",
  "filters": {{
    "skills": ["skill1"],
    "role": "role",
    "experience_min": 0,
    "talent_name": "closest name or null",
    "opportunity_title": "closest title or null",
    "location": "location or null"
  }},
  "response": "One sentence saying what you are doing",
  "confidence": 0.95
}}"""
