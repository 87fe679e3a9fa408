"""
AI-assisted match scoring.
"""

import logging
import math

from talent_matcher.core.errors import ScoringError
from talent_matcher.core.models import MatchResult, Opportunity, ScoringMode, TalentProfile

from .base import LanguageModelClient, LanguageModelError
from .replies import parse_json_object

SYSTEM_PROMPT = (
    "You are an expert talent acquisition AI. Analyze talent-opportunity matches "
    "with precision. CRITICAL: Return ONLY valid JSON with score (0-100) and a "
    "detailed explanation. Do not include markdown formatting, backticks, or any "
    "other text."
)


class AIMatchScorer:
    """Scores a talent/opportunity pair with a language model."""

    MAX_TOKENS = 500
    TEMPERATURE = 0.3

    def __init__(self, client: LanguageModelClient):
        self.client = client
        self.logger = logging.getLogger(self.__class__.__name__)

    def score(self, talent: TalentProfile, opportunity: Opportunity) -> MatchResult:
        """
        Ask the model for a ``{score, explanation}`` verdict.

        Raises:
            ScoringError: On transport failure or an unusable reply
        """
        prompt = self._build_prompt(talent, opportunity)
        try:
            content = self.client.complete(
                SYSTEM_PROMPT,
                prompt,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
            )
        except LanguageModelError as e:
            raise ScoringError(f"AI scorer unavailable: {e}") from e

        try:
            verdict = parse_json_object(content)
            raw_score = float(verdict["score"])
            explanation = str(verdict.get("explanation") or "")
        except (ValueError, KeyError, TypeError) as e:
            self.logger.debug(f"Unusable scorer reply: {content!r}")
            raise ScoringError(f"AI scorer reply could not be parsed: {e}") from e

        if not math.isfinite(raw_score):
            raise ScoringError(f"AI scorer returned an unusable score: {raw_score}")

        return MatchResult(
            score=max(0, min(100, math.floor(raw_score + 0.5))),
            explanation=explanation,
            talent=talent,
            opportunity=opportunity,
            scored_by=ScoringMode.AI_ASSISTED,
        )

    def _build_prompt(self, talent: TalentProfile, opportunity: Opportunity) -> str:
        status = talent.prospect_status.value if talent.prospect_status else "Not specified"
        start = opportunity.start_date.isoformat() if opportunity.start_date else "Not specified"

        return f"""Analyze the compatibility between this talent profile and job opportunity. Provide a match score (0-100) and a detailed explanation.

TALENT PROFILE:
- Name: {talent.full_name}
- Role: {talent.role}
- Experience: {talent.years_experience} years
- Skills: {', '.join(talent.skills)}
- Bio: {talent.bio or 'Not provided'}
- Work Experience: {talent.work_experience or 'Not provided'}
- Education: {talent.education or 'Not provided'}
- Certifications: {talent.certifications or 'Not provided'}
- Location: {talent.location or 'Not specified'}
- Type: {talent.talent_type.value}
- Status: {status}
- Utilization: {talent.total_utilization}%

JOB OPPORTUNITY:
- Title: {opportunity.title}
- Required Role: {opportunity.required_role}
- Description: {opportunity.description}
- Location: {opportunity.location}
- Start Date: {start}
- Status: {opportunity.status.value}

Consider these factors:
1. Skills alignment (40% weight)
2. Role compatibility (25% weight) - look for the role in the title, description and required role
3. Experience level match (15% weight)
4. Location compatibility (10% weight)
5. Availability and timing (10% weight)

Be flexible with role variations and synonyms: a "backend_engineer" talent is a strong fit
for a "Senior Backend Engineer" opportunity whose required role is "engineer".

Return ONLY a JSON object with this exact format:
{{"score": 85, "explanation": "Strong match due to ..."}}"""
