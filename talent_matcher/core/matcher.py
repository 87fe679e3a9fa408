"""
Match Scorer - Scores how well a talent fits an opportunity.

Rule-based points (clamped to 0-100 and rounded):
- Skill overlap: up to 50, over a fixed technology taxonomy
- Role compatibility: up to 25, or -5 on a mismatch
- Experience: up to 15, saturating at 8 years
- Location: up to 5
- Bio/description word overlap: up to 5
- Availability: +5 for available prospects, +3/-5/-20 for employees by utilization

AI-assisted scoring is delegated to an external scorer; any failure for a
pair falls back to the rule-based score for that pair only.
"""

from typing import Iterable, Optional
import logging
import math

from .errors import ScoringError
from .models import (
    MatchResult,
    Opportunity,
    ProspectStatus,
    ScoringMode,
    TalentProfile,
    TalentType,
    MAX_UTILIZATION,
)


class MatchScorer:
    """Computes explainable talent/opportunity compatibility scores."""

    MAX_POINTS = {
        "skills": 50,
        "role": 25,
        "experience": 15,
        "location": 5,
        "semantic": 5,
    }

    ROLE_POINTS = {
        "exact": 25,
        "partial": 20,
        "in_text": 15,
        "synonym": 12,
        "related": 10,
        "mismatch": -5,
    }

    AVAILABILITY_POINTS = {
        "available_prospect": 5,
        "available_existing": 3,
        "highly_utilized": -5,
        "fully_utilized": -20,
    }

    # Years of experience that earn the full experience weight
    EXPERIENCE_SATURATION_YEARS = 8
    HIGH_UTILIZATION = 80

    TECH_KEYWORDS = [
        # Frontend
        "react", "angular", "vue", "javascript", "typescript", "html", "css",
        "sass", "less", "webpack", "babel",
        # Backend
        "node", "python", "java", "c#", "php", "ruby", "go", "rust", "spring",
        "hibernate",
        # Databases
        "sql", "mongodb", "postgresql", "mysql", "redis", "elasticsearch", "oracle",
        # Cloud & DevOps
        "aws", "azure", "gcp", "docker", "kubernetes", "jenkins", "ci/cd",
        "devops", "terraform",
        # Testing
        "jest", "cypress", "selenium", "junit", "pytest", "testng",
        # Methodologies
        "agile", "scrum", "kanban", "tdd", "bdd",
        # Other
        "api", "rest", "graphql", "microservices", "machine learning", "ai",
        "data science", "analytics", "blockchain", "mobile", "ios", "android",
    ]

    RELATED_ROLES = {
        "engineer": ["developer", "programmer", "software engineer"],
        "developer": ["engineer", "programmer", "software engineer"],
        "designer": ["ui designer", "ux designer", "graphic designer"],
        "qa": ["quality assurance", "tester", "test engineer"],
        "pm": ["product manager", "project manager", "program manager"],
        "data": ["data scientist", "data analyst", "data engineer"],
    }

    ROLE_SYNONYMS = ["engineer", "developer", "backend", "frontend"]

    def __init__(self, ai_scorer=None):
        """
        Args:
            ai_scorer: Optional external scorer with a
                ``score(talent, opportunity) -> MatchResult`` method
        """
        self.ai_scorer = ai_scorer
        self.logger = logging.getLogger(self.__class__.__name__)

    def score(
        self,
        talent: TalentProfile,
        opportunity: Opportunity,
        mode: ScoringMode = ScoringMode.RULE_BASED,
    ) -> MatchResult:
        """Score one pair with the requested mode."""
        if mode is ScoringMode.AI_ASSISTED and self.ai_scorer is not None:
            try:
                return self.ai_scorer.score(talent, opportunity)
            except ScoringError as e:
                self.logger.warning(
                    f"AI scoring failed for {talent.full_name} / {opportunity.title}, "
                    f"using rule-based score: {e}"
                )
        return self.rule_based_score(talent, opportunity)

    def rule_based_score(self, talent: TalentProfile, opportunity: Opportunity) -> MatchResult:
        """Calculate the weighted rule-based score and its explanation."""
        factors = []
        total = 0.0

        for calculate in (
            self._calculate_skill_match,
            self._calculate_role_match,
            self._calculate_experience_match,
            self._calculate_location_match,
            self._calculate_semantic_match,
            self._calculate_availability_adjustment,
        ):
            points, factor = calculate(talent, opportunity)
            total += points
            if factor:
                factors.append(factor)

        return MatchResult(
            score=max(0, min(100, math.floor(total + 0.5))),
            explanation="; ".join(factors),
            talent=talent,
            opportunity=opportunity,
            scored_by=ScoringMode.RULE_BASED,
        )

    def _calculate_skill_match(self, talent: TalentProfile, opportunity: Opportunity) -> tuple[float, str]:
        """Share of taxonomy keywords in the description that the talent covers."""
        opportunity_text = opportunity.description.lower()
        talent_skills = [s.lower() for s in talent.skills]
        talent_text = " ".join([
            talent.bio,
            talent.work_experience,
            talent.education,
            talent.certifications,
            " ".join(talent.skills),
        ]).lower()

        relevant = [kw for kw in self.TECH_KEYWORDS if kw in opportunity_text]
        if not relevant:
            return 0, "No specific skills mentioned in opportunity"

        matched = [
            kw for kw in relevant
            if kw in talent_text or any(kw in skill for skill in talent_skills)
        ]
        points = len(matched) / len(relevant) * self.MAX_POINTS["skills"]
        return points, f"{len(matched)}/{len(relevant)} relevant skills matched"

    def _calculate_role_match(self, talent: TalentProfile, opportunity: Opportunity) -> tuple[float, str]:
        talent_role = talent.role.lower().strip()
        opp_role = opportunity.required_role.lower().strip()
        opp_title = opportunity.title.lower()
        opp_description = opportunity.description.lower()

        if talent_role and talent_role == opp_role:
            return self.ROLE_POINTS["exact"], "Perfect role match"
        if talent_role and opp_role and (talent_role in opp_role or opp_role in talent_role):
            return self.ROLE_POINTS["partial"], "Partial role match"
        if self.is_related_role(talent_role, opp_role):
            return self.ROLE_POINTS["related"], "Related role match"
        if talent_role and (talent_role in opp_title or talent_role in opp_description):
            return self.ROLE_POINTS["in_text"], "Role found in opportunity text"

        for synonym in self.ROLE_SYNONYMS:
            if synonym in talent_role and (synonym in opp_title or synonym in opp_description):
                return self.ROLE_POINTS["synonym"], f"{synonym.title()} role match"

        return self.ROLE_POINTS["mismatch"], "Role mismatch"

    def is_related_role(self, first: str, second: str) -> bool:
        """Check the related-role table in both directions."""
        if not first or not second:
            return False
        for key, related in self.RELATED_ROLES.items():
            if key in first and any(r in second for r in related):
                return True
            if key in second and any(r in first for r in related):
                return True
        return False

    def _calculate_experience_match(self, talent: TalentProfile, opportunity: Opportunity) -> tuple[float, str]:
        years = max(0, talent.years_experience)
        max_points = self.MAX_POINTS["experience"]
        points = min(max_points, years / self.EXPERIENCE_SATURATION_YEARS * max_points)
        return points, f"{talent.years_experience} years experience"

    def _calculate_location_match(self, talent: TalentProfile, opportunity: Opportunity) -> tuple[float, str]:
        if not talent.location or not opportunity.location:
            return 0, ""

        talent_loc = talent.location.lower().strip()
        opp_loc = opportunity.location.lower().strip()

        if talent_loc == opp_loc:
            return self.MAX_POINTS["location"], "Location match"
        if talent_loc in opp_loc or opp_loc in talent_loc:
            return 3, "Similar location"
        return 0, "Location mismatch"

    def _calculate_semantic_match(self, talent: TalentProfile, opportunity: Opportunity) -> tuple[float, str]:
        """Overlap of longer words between the bio and the description."""
        if not talent.bio or not opportunity.description:
            return 0, ""

        bio_words = talent.bio.lower().split()
        opp_words = opportunity.description.lower().split()
        opp_vocabulary = set(opp_words)
        common = [w for w in bio_words if len(w) > 3 and w in opp_vocabulary]
        if not common:
            return 0, ""

        max_points = self.MAX_POINTS["semantic"]
        points = min(max_points, len(common) / max(len(bio_words), len(opp_words)) * max_points)
        return points, f"{len(common)} semantic matches in bio"

    def _calculate_availability_adjustment(self, talent: TalentProfile, opportunity: Opportunity) -> tuple[float, str]:
        if talent.talent_type is TalentType.PROSPECT:
            if talent.prospect_status is ProspectStatus.AVAILABLE:
                return self.AVAILABILITY_POINTS["available_prospect"], "Available prospect"
            return 0, ""

        utilization = talent.total_utilization
        if utilization >= MAX_UTILIZATION:
            return self.AVAILABILITY_POINTS["fully_utilized"], "Fully utilized"
        if utilization >= self.HIGH_UTILIZATION:
            return self.AVAILABILITY_POINTS["highly_utilized"], "Highly utilized"
        return self.AVAILABILITY_POINTS["available_existing"], "Available existing talent"


def rank_results(results: Iterable[MatchResult], limit: Optional[int] = None) -> list[MatchResult]:
    """Sort by score, highest first; equal scores keep their input order."""
    ranked = sorted(results, key=lambda r: r.score, reverse=True)
    return ranked[:limit] if limit is not None else ranked
