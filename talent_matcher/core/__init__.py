"""Core models, availability rules, fuzzy resolution and scoring."""

from .models import (
    Catalog,
    Intent,
    IntentAction,
    IntentFilters,
    MatchResult,
    Opportunity,
    OpportunityStatus,
    ProjectAssignment,
    ProspectStatus,
    ScoringMode,
    TalentProfile,
    TalentType,
)
from .errors import (
    ClassificationError,
    MatchingError,
    NoMatchError,
    PipelineTimeoutError,
    ScoringError,
    UnrecognizedCommandError,
)
from .availability import is_available
from .resolver import resolve, resolve_opportunity, resolve_talent
from .matcher import MatchScorer, rank_results

__all__ = [
    "Catalog",
    "Intent",
    "IntentAction",
    "IntentFilters",
    "MatchResult",
    "Opportunity",
    "OpportunityStatus",
    "ProjectAssignment",
    "ProspectStatus",
    "ScoringMode",
    "TalentProfile",
    "TalentType",
    "ClassificationError",
    "MatchingError",
    "NoMatchError",
    "PipelineTimeoutError",
    "ScoringError",
    "UnrecognizedCommandError",
    "is_available",
    "resolve",
    "resolve_opportunity",
    "resolve_talent",
    "MatchScorer",
    "rank_results",
]
