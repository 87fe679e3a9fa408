"""
Fuzzy Entity Resolver - Maps noisy name and title fragments to catalog entries.

Transcripts coming from speech recognition misspell proper nouns
("fibula" for "Fijula"), so lookups go through three stages, first hit wins:

1. Case-insensitive exact match
2. Unique substring match (either direction)
3. Levenshtein distance with a similarity floor of 0.7

Bare first and last names skip the substring stage; short names would
otherwise turn up inside ordinary words ("ed" in "experienced").
"""

from typing import Iterable, Optional, Sequence
import logging
import re

from rapidfuzz.distance import Levenshtein

from .errors import NoMatchError
from .models import Opportunity, TalentProfile

SIMILARITY_THRESHOLD = 0.7

logger = logging.getLogger(__name__)

_POSSESSIVE = re.compile(r"['’]s$")
_EDGE_PUNCTUATION = re.compile(r"^[^\w]+|[^\w]+$")


def similarity(first: str, second: str) -> float:
    """1 - edit distance / length of the longer string."""
    longest = max(len(first), len(second))
    if longest == 0:
        return 1.0
    return 1 - Levenshtein.distance(first, second) / longest


def resolve(query: str, candidates: Sequence[str], partial: bool = True) -> Optional[str]:
    """
    Return the candidate that best matches ``query``, or None.

    ``partial=False`` skips the substring stage. Ties in edit distance go
    to the earliest candidate so results are reproducible for a given
    catalog order.
    """
    if not query or not candidates:
        return None

    query_lower = query.lower().strip()
    if not query_lower:
        return None
    names = [c for c in candidates if c and c.strip()]

    # Exact match
    for name in names:
        if name.lower() == query_lower:
            return name

    # Partial match, only when it is unambiguous
    if partial:
        contained = [
            name for name in names
            if query_lower in name.lower() or name.lower() in query_lower
        ]
        if len(contained) == 1:
            return contained[0]

    # Edit distance
    best_match = None
    best_distance = None
    for name in names:
        name_lower = name.lower()
        distance = Levenshtein.distance(query_lower, name_lower)
        score = 1 - distance / max(len(query_lower), len(name_lower))
        if score > SIMILARITY_THRESHOLD and (best_distance is None or distance < best_distance):
            best_distance = distance
            best_match = name

    return best_match


def normalize_fragment(fragment: str) -> str:
    """Lower-case a spoken word and drop possessives and edge punctuation."""
    cleaned = _EDGE_PUNCTUATION.sub("", fragment.lower().strip())
    cleaned = _POSSESSIVE.sub("", cleaned)
    return _EDGE_PUNCTUATION.sub("", cleaned)


def resolve_talent(query: str, talents: Iterable[TalentProfile]) -> Optional[TalentProfile]:
    """
    Resolve a name fragment to a talent.

    Full names are tried first. A single spoken word rarely clears the
    similarity floor against a two-word name, so first and then last names
    are tried next and a hit is mapped back to its talent.
    """
    fragment = normalize_fragment(query or "")
    if not fragment:
        return None

    talents = [t for t in talents if t.full_name]
    lookups = (
        (lambda t: t.full_name, True),
        (lambda t: t.first_name, False),
        (lambda t: t.last_name, False),
    )
    for key, partial in lookups:
        names = [key(t) for t in talents]
        match = resolve(fragment, names, partial=partial)
        if match:
            talent = talents[names.index(match)]
            logger.debug(f"Resolved '{query}' to talent '{talent.full_name}'")
            return talent
    return None


def require_talent(query: str, talents: Iterable[TalentProfile]) -> TalentProfile:
    talent = resolve_talent(query, talents)
    if talent is None:
        raise NoMatchError(f"No talent found for '{query}'")
    return talent


def resolve_opportunity(query: str, opportunities: Iterable[Opportunity]) -> Optional[Opportunity]:
    """
    Resolve a title fragment to an opportunity.

    Falls back to containment in titles and descriptions, which is how
    spoken titles like "backend" find "Senior Backend Engineer".
    """
    if not query or not query.strip():
        return None

    opportunities = [o for o in opportunities if o.title]
    titles = [o.title for o in opportunities]
    match = resolve(query, titles)
    if match:
        return opportunities[titles.index(match)]

    search = query.lower().strip()
    for opp in opportunities:
        if search in opp.title.lower() or search in opp.description.lower():
            return opp
    return None


def require_opportunity(query: str, opportunities: Iterable[Opportunity]) -> Opportunity:
    opportunity = resolve_opportunity(query, opportunities)
    if opportunity is None:
        raise NoMatchError(f"No opportunity found for '{query}'")
    return opportunity
