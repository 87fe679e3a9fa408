"""
Keyword vocabularies used by the rule-based intent cascade.

Action, object and role words are closed sets. Technology words come from
the live catalog: every talent skill plus any term of a fixed technology
dictionary that appears in catalog text.
"""

from dataclasses import dataclass, field
from typing import Iterable
import re

from talent_matcher.core.models import Catalog

ACTION_WORDS = frozenset([
    "show", "display", "list", "view", "see", "find", "search", "get",
    "bring", "give", "present",
])

OPPORTUNITY_WORDS = frozenset([
    "opportunities", "opportunity", "jobs", "job", "positions", "position",
    "projects", "openings", "vacancies", "work", "employment",
])

# "files" is a common mis-transcription of "profiles"
TALENT_WORDS = frozenset([
    "talents", "talent", "developers", "engineers", "designers", "profiles",
    "profile", "people", "candidates", "team", "staff", "employees", "files",
])

ROLE_WORDS = (
    "qa", "quality assurance", "engineer", "designer", "pm", "product manager",
    "manager", "data", "analyst", "senior", "junior", "lead", "architect",
    "consultant", "developer", "programmer", "coder",
)

AVAILABILITY_WORDS = frozenset(["available", "open", "active", "current", "existing"])

# Words that never name a person
FILLER_WORDS = frozenset([
    "the", "and", "for", "all", "any", "with", "who", "what", "which", "that",
    "this", "those", "these", "from", "have", "has", "are", "our", "your",
    "their", "please", "can", "could", "would", "about", "some", "more",
    "now", "me", "do", "we",
])

TECH_DICTIONARY = (
    "react native", "react", "angular", "vue", "javascript", "typescript", "php",
    "python", "java", "node", "mysql", "postgresql", "mongodb", "aws", "azure",
    "docker", "kubernetes", "html", "css", "git", "github", "gitlab", "jenkins",
    "terraform", "redis", "elasticsearch", "graphql", "rest", "api",
    "microservices", "devops", "cloud", "mobile", "ios", "android", "flutter",
    "swift", "kotlin", "laravel", "django", "flask", "express", "spring", "ruby",
    "go", "rust", "c++", "c#", ".net", "dotnet", "jquery", "bootstrap",
    "tailwind", "redux", "mobx", "prisma", "sequelize", "mongoose", "firebase",
    "supabase", "websocket", "socket.io", "vite", "webpack", "next", "nuxt",
    "svelte", "sass", "scss", "oracle", "sql server", "cassandra", "gcp",
    "xamarin", "material-ui", "antd", "chakra", "zustand", "rxjs",
)

# Role phrases that also match these neighbouring words in free text
ROLE_VARIATIONS = {
    "engineer": ("engineer", "backend", "frontend"),
    "developer": ("developer", "backend", "frontend"),
    "backend": ("backend", "engineer"),
    "frontend": ("frontend", "engineer"),
}

_TECH_PATTERN = re.compile(
    r"(?<![\w.+#])(" + "|".join(re.escape(t) for t in TECH_DICTIONARY) + r")(?![\w+#])"
)
_SKILL_SPLIT = re.compile(r"[,\s&]+")
_EDGE_CHARS = ".,!?;:\"'()[]{}"
_POSSESSIVE = re.compile(r"['’]s$")


def tokenize(text: str) -> list[str]:
    """Split a transcript into lower-case words without edge punctuation or possessives."""
    words = []
    for raw in (text or "").lower().split():
        word = _POSSESSIVE.sub("", raw.strip(_EDGE_CHARS)).strip(_EDGE_CHARS)
        if word:
            words.append(word)
    return words


def find_terms(text: str, terms: Iterable[str]) -> list[str]:
    """Terms present in ``text`` as whole words or phrases, in text order."""
    padded = f" {' '.join(tokenize(text))} "
    found = []
    for term in terms:
        position = padded.find(f" {term} ")
        if position >= 0 and term not in [t for _, t in found]:
            found.append((position, term))
    return [term for _, term in sorted(found, key=lambda item: item[0])]


def role_matches(text: str, role: str) -> bool:
    """Check a role term against free text, allowing common variations."""
    role = role.lower()
    if role in text:
        return True
    for key, variations in ROLE_VARIATIONS.items():
        if key in role and any(v in text for v in variations):
            return True
    return False


def text_matches_terms(text: str, tech: Iterable[str], roles: Iterable[str]) -> bool:
    """Any technology term or role term found in an entity's text."""
    text = text.lower()
    return any(t in text for t in tech) or any(role_matches(text, r) for r in roles)


@dataclass
class CommandAnalysis:
    """Keyword signals found in one transcript."""
    transcript: str
    words: list[str] = field(default_factory=list)
    has_action: bool = False
    has_opportunity_words: bool = False
    has_talent_words: bool = False
    tech: list[str] = field(default_factory=list)
    roles: list[str] = field(default_factory=list)

    @property
    def mentions_profile(self) -> bool:
        return "profile" in self.transcript.lower()

    @property
    def has_tech(self) -> bool:
        return bool(self.tech)

    @property
    def has_roles(self) -> bool:
        return bool(self.roles)

    @property
    def terms(self) -> list[str]:
        return self.tech + [r for r in self.roles if r not in self.tech]


class Vocabulary:
    """Keyword sets for one catalog snapshot."""

    def __init__(self, tech_words: Iterable[str]):
        self.tech_words = frozenset(w for w in tech_words if w)

    @classmethod
    def from_catalog(cls, catalog: Catalog) -> "Vocabulary":
        tech = set()

        for talent in catalog.talents:
            for skill in talent.skills:
                skill_lower = skill.lower().strip()
                tech.add(skill_lower)
                tech.update(part for part in _SKILL_SPLIT.split(skill_lower) if len(part) > 1)
            for text in (talent.bio, talent.work_experience, talent.education):
                tech.update(_TECH_PATTERN.findall(text.lower()))

        for opp in catalog.opportunities:
            for text in (opp.title, opp.description, opp.required_role):
                tech.update(_TECH_PATTERN.findall(text.lower()))

        return cls(tech)

    @property
    def reserved_words(self) -> frozenset:
        """Words that carry command meaning and are never spotted as names."""
        return ACTION_WORDS | OPPORTUNITY_WORDS | TALENT_WORDS | AVAILABILITY_WORDS | FILLER_WORDS

    def analyze(self, transcript: str) -> CommandAnalysis:
        words = tokenize(transcript)
        word_set = set(words)
        return CommandAnalysis(
            transcript=transcript or "",
            words=words,
            has_action=bool(word_set & ACTION_WORDS),
            has_opportunity_words=bool(word_set & OPPORTUNITY_WORDS),
            has_talent_words=bool(word_set & TALENT_WORDS),
            tech=find_terms(transcript, self.tech_words),
            roles=find_terms(transcript, ROLE_WORDS),
        )
