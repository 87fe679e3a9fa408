"""
Action Executor - Turns a resolved Intent into ranked results.

Every action reads one immutable catalog snapshot. Queries that match
nothing are widened instead of failing: an unresolved name or title falls
back to the listing action, and an empty filtered listing falls back to the
whole pool with a "no specific matches found" note.
"""

from typing import Callable, Optional, Sequence
import logging

from talent_matcher.core.availability import available_talents, count_available
from talent_matcher.core.errors import NoMatchError, UnrecognizedCommandError
from talent_matcher.core.matcher import MatchScorer, rank_results
from talent_matcher.core.models import (
    Catalog,
    Intent,
    IntentAction,
    IntentFilters,
    MatchResult,
    Opportunity,
    ScoringMode,
    TalentProfile,
)
from talent_matcher.core.resolver import require_opportunity, require_talent
from talent_matcher.intent.vocabulary import role_matches

from .results import CommandResult, ResultKind

Pair = tuple[TalentProfile, Opportunity]
PairScorer = Callable[[Sequence[Pair]], list[MatchResult]]

NO_SPECIFIC_MATCHES = "no specific matches found"
KEYWORD_RESULT_LIMIT = 10


class ActionExecutor:
    """Executes intents against a catalog snapshot."""

    SCORES = {
        "ai_listing": 100,
        "rule_talent": 85,
        "rule_opportunity": 100,
        "keyword_opportunity": 90,
        "profile": 100,
        "keyword_base": 60,
        "keyword_per_hit": 10,
        "keyword_fallback": 50,
    }

    def __init__(
        self,
        scorer: Optional[MatchScorer] = None,
        mode: ScoringMode = ScoringMode.RULE_BASED,
        score_pairs: Optional[PairScorer] = None,
    ):
        """
        Args:
            scorer: Scorer used for the two matching actions
            mode: Scoring mode passed through to the scorer
            score_pairs: Scores a batch of pairs and returns results in
                input order; defaults to scoring sequentially
        """
        self.scorer = scorer or MatchScorer()
        self.mode = mode
        self.score_pairs = score_pairs or self._score_sequentially
        self.logger = logging.getLogger(self.__class__.__name__)

        self._handlers = {
            IntentAction.FIND_TALENTS: self.find_talents,
            IntentAction.FIND_OPPORTUNITIES: self.find_opportunities,
            IntentAction.SHOW_TALENT_PROFILE: self.show_talent_profile,
            IntentAction.MATCH_TALENT_TO_OPPORTUNITY: self.match_talent_to_opportunity,
            IntentAction.MATCH_OPPORTUNITY_TO_TALENTS: self.match_opportunity_to_talents,
            IntentAction.SHOW_STATS: self.show_stats,
            IntentAction.KEYWORD_SEARCH: self.keyword_search,
        }

    def execute(self, intent: Intent, catalog: Catalog) -> CommandResult:
        handler = self._handlers[intent.action]
        result = handler(intent, catalog)
        result.intent = intent
        return result

    def _score_sequentially(self, pairs: Sequence[Pair]) -> list[MatchResult]:
        return [self.scorer.score(talent, opp, self.mode) for talent, opp in pairs]

    # Listings

    def find_talents(self, intent: Intent, catalog: Catalog) -> CommandResult:
        pool = available_talents(catalog.talents)
        if not pool:
            return CommandResult(kind=ResultKind.TALENTS, message="No available talents found")

        filters = intent.filters
        if intent.from_rules:
            matches = [t for t in pool if self._matches_keywords(t.searchable_text, filters.keywords)]
            score = self.SCORES["rule_talent"]
        else:
            matches = [t for t in pool if self._talent_matches_filters(t, filters)]
            score = self.SCORES["ai_listing"]

        if matches:
            results = [
                MatchResult(score=score, explanation=self._describe_talent(t, intent), talent=t)
                for t in matches
            ]
            return CommandResult(
                kind=ResultKind.TALENTS,
                ranked=results,
                message=f"Found {len(results)} matching talents",
            )

        self.logger.info("No talents matched the filters, showing all available talents")
        results = [
            MatchResult(
                score=score,
                explanation=f"{self._describe_talent(t, intent)} ({NO_SPECIFIC_MATCHES})",
                talent=t,
            )
            for t in pool
        ]
        return CommandResult(
            kind=ResultKind.TALENTS,
            ranked=results,
            message=f"Showing {len(results)} available talents ({NO_SPECIFIC_MATCHES})",
        )

    def find_opportunities(self, intent: Intent, catalog: Catalog) -> CommandResult:
        pool = catalog.open_opportunities
        if not pool:
            return CommandResult(kind=ResultKind.OPPORTUNITIES, message="No open opportunities found")

        filters = intent.filters
        if intent.from_rules:
            matches = [o for o in pool if self._matches_keywords(o.searchable_text, filters.keywords)]
        else:
            matches = [o for o in pool if self._opportunity_matches_filters(o, filters)]

        if matches:
            results = [
                MatchResult(
                    score=self._opportunity_score(intent),
                    explanation=self._describe_opportunity(o, intent),
                    opportunity=o,
                )
                for o in matches
            ]
            return CommandResult(
                kind=ResultKind.OPPORTUNITIES,
                ranked=results,
                message=f"Found {len(results)} matching opportunities",
            )

        self.logger.info("No opportunities matched the filters, showing all open opportunities")
        results = [
            MatchResult(
                score=self._opportunity_score(intent),
                explanation=f"Active opportunity ({NO_SPECIFIC_MATCHES})",
                opportunity=o,
            )
            for o in pool
        ]
        return CommandResult(
            kind=ResultKind.OPPORTUNITIES,
            ranked=results,
            message=f"Showing {len(results)} open opportunities ({NO_SPECIFIC_MATCHES})",
        )

    def show_talent_profile(self, intent: Intent, catalog: Catalog) -> CommandResult:
        name = intent.filters.talent_name
        if name:
            try:
                talent = require_talent(name, catalog.talents)
            except NoMatchError as e:
                self.logger.info(f"{e}, showing talents instead")
            else:
                result = MatchResult(
                    score=self.SCORES["profile"],
                    explanation=f"Talent Profile: {talent.full_name} - {talent.describe()}",
                    talent=talent,
                )
                return CommandResult(
                    kind=ResultKind.TALENTS,
                    ranked=[result],
                    message=f"Showing profile for {talent.full_name}",
                )
        return self.find_talents(intent, catalog)

    # Matching

    def match_talent_to_opportunity(self, intent: Intent, catalog: Catalog) -> CommandResult:
        name = intent.filters.talent_name
        try:
            talent = require_talent(name or "", catalog.talents)
        except NoMatchError as e:
            self.logger.info(f"{e}, showing available talents instead")
            return self.find_talents(self._widened(intent), catalog)

        pairs = [(talent, opp) for opp in catalog.open_opportunities]
        ranked = rank_results(self.score_pairs(pairs))
        return CommandResult(
            kind=ResultKind.OPPORTUNITIES,
            ranked=ranked,
            message=f"Found {len(ranked)} opportunities for {talent.full_name}",
        )

    def match_opportunity_to_talents(self, intent: Intent, catalog: Catalog) -> CommandResult:
        title = intent.filters.opportunity_title
        try:
            opportunity = require_opportunity(title or "", catalog.open_opportunities)
        except NoMatchError as e:
            self.logger.info(f"{e}, showing open opportunities instead")
            return self.find_opportunities(self._widened(intent), catalog)

        pairs = [(talent, opportunity) for talent in available_talents(catalog.talents)]
        ranked = rank_results(self.score_pairs(pairs))
        return CommandResult(
            kind=ResultKind.TALENTS,
            ranked=ranked,
            message=f"Found {len(ranked)} talents for {opportunity.title}",
        )

    # Statistics and keyword search

    def show_stats(self, intent: Intent, catalog: Catalog) -> CommandResult:
        available = count_available(catalog.talents)
        open_count = len(catalog.open_opportunities)
        stats = {
            "available_talents": available,
            "open_opportunities": open_count,
            "potential_matches": available * open_count,
        }
        return CommandResult(
            kind=ResultKind.STATS,
            stats=stats,
            message=(
                f"{available} available talents, {open_count} open opportunities, "
                f"{stats['potential_matches']} potential matches"
            ),
        )

    def keyword_search(self, intent: Intent, catalog: Catalog) -> CommandResult:
        """
        Rank anything sharing literal words with the command.

        Raises:
            UnrecognizedCommandError: nothing matched and no talent is available
        """
        keywords = [k.lower() for k in intent.filters.keywords if k]
        results = []

        for opp in catalog.opportunities:
            hits = self._count_hits(opp.searchable_text, keywords)
            if hits:
                results.append(MatchResult(
                    score=self._keyword_score(hits),
                    explanation=self._hits_explanation(hits),
                    opportunity=opp,
                ))

        for talent in catalog.talents:
            hits = self._count_hits(talent.searchable_text, keywords)
            if hits:
                results.append(MatchResult(
                    score=self._keyword_score(hits),
                    explanation=self._hits_explanation(hits),
                    talent=talent,
                ))

        if results:
            ranked = rank_results(results, limit=KEYWORD_RESULT_LIMIT)
            return CommandResult(
                kind=ResultKind.MIXED,
                ranked=ranked,
                message=f"Found {len(ranked)} results matching your words",
            )

        pool = available_talents(catalog.talents)
        if not pool:
            raise UnrecognizedCommandError()

        self.logger.info("No keyword hits, showing available talents")
        ranked = [
            MatchResult(
                score=self.SCORES["keyword_fallback"],
                explanation="Available talent (fallback)",
                talent=t,
            )
            for t in pool
        ]
        return CommandResult(
            kind=ResultKind.TALENTS,
            ranked=ranked,
            message=f"Showing {len(ranked)} available talents",
        )

    # Helpers

    @staticmethod
    def _widened(intent: Intent) -> Intent:
        """Copy of the intent without filters, keeping its source."""
        return Intent(
            action=intent.action,
            filters=IntentFilters(),
            confidence=intent.confidence,
            response=intent.response,
            source=intent.source,
        )

    @staticmethod
    def _matches_keywords(text: str, keywords: Sequence[str]) -> bool:
        if not keywords:
            return True
        return any(role_matches(text, k) for k in keywords)

    @staticmethod
    def _talent_matches_filters(talent: TalentProfile, filters: IntentFilters) -> bool:
        """All present filters must hold."""
        skills = [s.lower() for s in talent.skills]
        if filters.skills:
            wanted = [s.lower() for s in filters.skills]
            if not any(w in skill for w in wanted for skill in skills):
                return False

        if filters.role:
            role = filters.role.lower()
            talent_role = talent.role.lower()
            in_role = talent_role and (role in talent_role or talent_role in role)
            in_text = role in " ".join([talent.bio, talent.work_experience, " ".join(skills)]).lower()
            if not (in_role or in_text):
                return False

        if filters.experience_min and talent.years_experience < filters.experience_min:
            return False

        if filters.location:
            wanted = filters.location.lower()
            location = talent.location.lower()
            if not location or not (wanted in location or location in wanted):
                return False

        return True

    @staticmethod
    def _opportunity_matches_filters(opportunity: Opportunity, filters: IntentFilters) -> bool:
        description = opportunity.description.lower()
        if filters.skills and not any(s.lower() in description for s in filters.skills):
            return False

        if filters.role:
            required = opportunity.required_role.lower()
            if not (
                role_matches(required, filters.role)
                or role_matches(opportunity.title.lower(), filters.role)
                or role_matches(description, filters.role)
            ):
                return False

        if filters.location:
            wanted = filters.location.lower()
            location = opportunity.location.lower()
            if not location or not (wanted in location or location in wanted):
                return False

        return True

    def _opportunity_score(self, intent: Intent) -> int:
        if intent.source == "keyword_search_both":
            return self.SCORES["keyword_opportunity"]
        if intent.from_rules:
            return self.SCORES["rule_opportunity"]
        return self.SCORES["ai_listing"]

    @staticmethod
    def _describe_talent(talent: TalentProfile, intent: Intent) -> str:
        if intent.from_rules:
            return f"Available {talent.role or 'unspecified role'} talent"
        return f"Available {talent.describe()}"

    @staticmethod
    def _describe_opportunity(opportunity: Opportunity, intent: Intent) -> str:
        if intent.source == "keyword_search_both":
            return "Technology/role match"
        if intent.from_rules:
            return "Matching opportunity" if intent.filters.keywords else "Active opportunity"
        return opportunity.describe()

    @staticmethod
    def _count_hits(text: str, keywords: Sequence[str]) -> int:
        return sum(1 for k in keywords if k in text)

    def _keyword_score(self, hits: int) -> int:
        return min(100, self.SCORES["keyword_base"] + self.SCORES["keyword_per_hit"] * hits)

    @staticmethod
    def _hits_explanation(hits: int) -> str:
        return f"{hits} keyword match{'es' if hits != 1 else ''}"
