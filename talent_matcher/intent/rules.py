"""
Rule-based intent resolution.

Rules form an ordered list; the first rule whose predicate holds builds the
intent. Each rule can be exercised on its own, and the order is the single
place that decides precedence:

0. profile              "profile" anywhere wins over every other cue
1. opportunity_request  opportunity words without talent words
2. talent_request       talent words without opportunity words
3. name_spotting        a word resolves to a talent's name
4. keyword_search_both  technology/role terms that match catalog entries
5. generic_action       a bare action verb ("show", "list", ...)
6. keyword_fallback     literal keyword overlap, resolved at execution time
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Optional
import logging

from talent_matcher.core.availability import available_talents
from talent_matcher.core.models import (
    Catalog,
    Intent,
    IntentAction,
    IntentFilters,
    Opportunity,
    TalentProfile,
)
from talent_matcher.core.resolver import resolve_talent

from .vocabulary import CommandAnalysis, Vocabulary, text_matches_terms

MIN_NAME_LENGTH = 3
MIN_KEYWORD_LENGTH = 3


class RuleContext:
    """Transcript analysis plus lazily computed catalog lookups for one command."""

    def __init__(self, transcript: str, catalog: Catalog, vocabulary: Optional[Vocabulary] = None):
        self.transcript = transcript or ""
        self.catalog = catalog
        self.vocabulary = vocabulary or Vocabulary.from_catalog(catalog)
        self.analysis: CommandAnalysis = self.vocabulary.analyze(self.transcript)

    @cached_property
    def spotted_talent(self) -> Optional[TalentProfile]:
        """First transcript word that resolves to a talent, if any."""
        reserved = self.vocabulary.reserved_words | set(self.analysis.terms)
        for word in self.analysis.words:
            if len(word) < MIN_NAME_LENGTH or word in reserved:
                continue
            talent = resolve_talent(word, self.catalog.talents)
            if talent is not None:
                return talent
        return None

    @cached_property
    def keyword_opportunities(self) -> list[Opportunity]:
        analysis = self.analysis
        return [
            opp for opp in self.catalog.open_opportunities
            if text_matches_terms(opp.searchable_text, analysis.tech, analysis.roles)
        ]

    @cached_property
    def keyword_talents(self) -> list[TalentProfile]:
        analysis = self.analysis
        return [
            talent for talent in available_talents(self.catalog.talents)
            if text_matches_terms(talent.searchable_text, analysis.tech, analysis.roles)
        ]

    def filters(self, **extra) -> IntentFilters:
        """Filters carrying the technology and role terms of the transcript."""
        analysis = self.analysis
        filters = IntentFilters(
            skills=list(analysis.tech),
            role=analysis.roles[0] if analysis.roles else None,
            keywords=analysis.terms,
        )
        for key, value in extra.items():
            setattr(filters, key, value)
        return filters


@dataclass(frozen=True)
class IntentRule:
    """A named predicate/builder pair in the cascade."""
    name: str
    applies: Callable[[RuleContext], bool]
    build: Callable[[RuleContext], Intent]
    confidence: float = 0.5

    def evaluate(self, context: RuleContext) -> Optional[Intent]:
        if not self.applies(context):
            return None
        intent = self.build(context)
        intent.source = self.name
        intent.confidence = self.confidence
        return intent


def _build_profile(ctx: RuleContext) -> Intent:
    talent = ctx.spotted_talent
    if talent is not None:
        return Intent(
            action=IntentAction.SHOW_TALENT_PROFILE,
            filters=ctx.filters(talent_name=talent.full_name),
            response=f"Showing profile for {talent.full_name}",
        )
    return Intent(
        action=IntentAction.SHOW_TALENT_PROFILE,
        filters=ctx.filters(),
        response="Showing available talent profiles",
    )


def _build_opportunity_request(ctx: RuleContext) -> Intent:
    return Intent(
        action=IntentAction.FIND_OPPORTUNITIES,
        filters=ctx.filters(),
        response="Showing open opportunities",
    )


def _build_talent_request(ctx: RuleContext) -> Intent:
    return Intent(
        action=IntentAction.FIND_TALENTS,
        filters=ctx.filters(),
        response="Showing available talents",
    )


def _build_name_spotting(ctx: RuleContext) -> Intent:
    talent = ctx.spotted_talent
    return Intent(
        action=IntentAction.MATCH_TALENT_TO_OPPORTUNITY,
        filters=IntentFilters(talent_name=talent.full_name),
        response=f"Finding opportunities for {talent.full_name}",
    )


def _applies_keyword_search_both(ctx: RuleContext) -> bool:
    analysis = ctx.analysis
    if not (analysis.has_tech or analysis.has_roles):
        return False
    return bool(ctx.keyword_opportunities or ctx.keyword_talents)


def _build_keyword_search_both(ctx: RuleContext) -> Intent:
    if ctx.keyword_opportunities:
        return Intent(
            action=IntentAction.FIND_OPPORTUNITIES,
            filters=ctx.filters(),
            response="Showing opportunities matching the mentioned technologies and roles",
        )
    return Intent(
        action=IntentAction.FIND_TALENTS,
        filters=ctx.filters(),
        response="Showing talents matching the mentioned technologies and roles",
    )


def _applies_generic_action(ctx: RuleContext) -> bool:
    a = ctx.analysis
    return a.has_action and not (
        a.has_opportunity_words or a.has_talent_words or a.has_tech or a.has_roles
    )


def _build_generic_action(ctx: RuleContext) -> Intent:
    return Intent(
        action=IntentAction.FIND_OPPORTUNITIES,
        filters=IntentFilters(),
        response="Showing all open opportunities",
    )


def _build_keyword_fallback(ctx: RuleContext) -> Intent:
    keywords = [w for w in ctx.analysis.words if len(w) >= MIN_KEYWORD_LENGTH]
    return Intent(
        action=IntentAction.KEYWORD_SEARCH,
        filters=IntentFilters(keywords=keywords),
        response="Searching for anything that matches your words",
    )


DEFAULT_RULES = (
    IntentRule(
        name="profile",
        applies=lambda ctx: ctx.analysis.mentions_profile,
        build=_build_profile,
        confidence=0.8,
    ),
    IntentRule(
        name="opportunity_request",
        applies=lambda ctx: ctx.analysis.has_opportunity_words and not ctx.analysis.has_talent_words,
        build=_build_opportunity_request,
        confidence=0.7,
    ),
    IntentRule(
        name="talent_request",
        applies=lambda ctx: ctx.analysis.has_talent_words and not ctx.analysis.has_opportunity_words,
        build=_build_talent_request,
        confidence=0.7,
    ),
    IntentRule(
        name="name_spotting",
        applies=lambda ctx: ctx.spotted_talent is not None,
        build=_build_name_spotting,
        confidence=0.6,
    ),
    IntentRule(
        name="keyword_search_both",
        applies=_applies_keyword_search_both,
        build=_build_keyword_search_both,
        confidence=0.5,
    ),
    IntentRule(
        name="generic_action",
        applies=_applies_generic_action,
        build=_build_generic_action,
        confidence=0.4,
    ),
    IntentRule(
        name="keyword_fallback",
        applies=lambda ctx: True,
        build=_build_keyword_fallback,
        confidence=0.2,
    ),
)


class RuleBasedClassifier:
    """Resolves intents with the ordered rule cascade, no network needed."""

    def __init__(self, rules=DEFAULT_RULES):
        self.rules = tuple(rules)
        self.logger = logging.getLogger(self.__class__.__name__)

    def classify(self, transcript: str, catalog: Catalog) -> Intent:
        context = RuleContext(transcript, catalog)
        for rule in self.rules:
            intent = rule.evaluate(context)
            if intent is not None:
                self.logger.debug(f"Rule '{rule.name}' matched: {intent.action.value}")
                return intent

        # Only reachable with a custom rule list lacking a catch-all
        intent = _build_keyword_fallback(context)
        intent.source = "keyword_fallback"
        return intent
