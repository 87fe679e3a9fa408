"""
Core data models for the talent matching engine.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional
import uuid


class TalentType(Enum):
    """Whether a talent is already on staff or being recruited."""
    EXISTING = "existing"
    PROSPECT = "prospect"


class ProspectStatus(Enum):
    """Recruiting status of a prospect."""
    AVAILABLE = "available"
    INTERVIEWING = "interviewing"
    REJECTED = "rejected"
    INACTIVE = "inactive"


class OpportunityStatus(Enum):
    """Lifecycle status of an opportunity."""
    OPEN = "open"
    FILLED = "filled"
    CANCELLED = "cancelled"
    ON_HOLD = "on_hold"


class ScoringMode(Enum):
    """How a match score is computed."""
    RULE_BASED = "rule_based"
    AI_ASSISTED = "ai_assisted"


class IntentAction(Enum):
    """Action an interpreted command asks for."""
    FIND_TALENTS = "find_talents"
    FIND_OPPORTUNITIES = "find_opportunities"
    SHOW_TALENT_PROFILE = "show_talent_profile"
    MATCH_TALENT_TO_OPPORTUNITY = "match_talent_to_opportunity"
    MATCH_OPPORTUNITY_TO_TALENTS = "match_opportunity_to_talents"
    SHOW_STATS = "show_stats"
    KEYWORD_SEARCH = "keyword_search"  # rule cascade only


# Actions an external classifier may return
CLASSIFIER_ACTIONS = frozenset(
    action for action in IntentAction if action is not IntentAction.KEYWORD_SEARCH
)

MAX_UTILIZATION = 100


def _optional_text(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() in ("null", "none"):
        return None
    return text


def _parse_date(value) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(frozen=True)
class ProjectAssignment:
    """A project an existing employee is allocated to."""
    project_name: str = ""
    utilization_percentage: int = 0

    def to_dict(self) -> dict:
        return {
            "project_name": self.project_name,
            "utilization_percentage": self.utilization_percentage,
        }


@dataclass(frozen=True)
class TalentProfile:
    """Read-only snapshot of a talent record."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    role: str = ""
    years_experience: int = 0
    skills: tuple[str, ...] = ()
    bio: str = ""
    work_experience: str = ""
    education: str = ""
    certifications: str = ""
    location: str = ""
    talent_type: TalentType = TalentType.PROSPECT
    prospect_status: Optional[ProspectStatus] = None
    assignments: tuple[ProjectAssignment, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "skills", tuple(self.skills))
        object.__setattr__(self, "assignments", tuple(self.assignments))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def total_utilization(self) -> int:
        """Summed utilization across assignments, capped at 100."""
        raw = sum(a.utilization_percentage or 0 for a in self.assignments)
        return min(raw, MAX_UTILIZATION)

    @property
    def searchable_text(self) -> str:
        """Role, bio, skills and background joined and lower-cased."""
        return " ".join([
            self.role,
            self.bio,
            " ".join(self.skills),
            self.work_experience,
            self.education,
        ]).lower()

    def describe(self) -> str:
        skills = ", ".join(self.skills) or "Not specified"
        return f"{self.role} with {self.years_experience} years experience. Skills: {skills}."

    @classmethod
    def from_dict(cls, data: dict) -> "TalentProfile":
        """Build a profile from a record, accepting the storage column names."""
        assignments = data.get("assignments", data.get("employee_projects")) or []
        status = data.get("prospect_status")
        return cls(
            id=str(data.get("id") or uuid.uuid4()),
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            email=data.get("email") or "",
            role=data.get("role", data.get("talent_role")) or "",
            years_experience=int(data.get("years_experience") or 0),
            skills=tuple(s for s in (data.get("skills") or []) if s),
            bio=data.get("bio") or "",
            work_experience=data.get("work_experience") or "",
            education=data.get("education") or "",
            certifications=data.get("certifications") or "",
            location=data.get("location") or "",
            talent_type=TalentType(data.get("talent_type") or TalentType.PROSPECT.value),
            prospect_status=ProspectStatus(status) if status else None,
            assignments=tuple(
                ProjectAssignment(
                    project_name=a.get("project_name") or "",
                    utilization_percentage=int(a.get("utilization_percentage") or 0),
                )
                for a in assignments
            ),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role,
            "years_experience": self.years_experience,
            "skills": list(self.skills),
            "bio": self.bio,
            "work_experience": self.work_experience,
            "education": self.education,
            "certifications": self.certifications,
            "location": self.location,
            "talent_type": self.talent_type.value,
            "prospect_status": self.prospect_status.value if self.prospect_status else None,
            "assignments": [a.to_dict() for a in self.assignments],
            "total_utilization": self.total_utilization,
        }


@dataclass(frozen=True)
class Opportunity:
    """Read-only snapshot of an opportunity record."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    title: str = ""
    description: str = ""
    required_role: str = ""
    location: str = ""
    status: OpportunityStatus = OpportunityStatus.OPEN
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def is_open(self) -> bool:
        return self.status is OpportunityStatus.OPEN

    @property
    def searchable_text(self) -> str:
        return f"{self.title} {self.description} {self.required_role}".lower()

    def describe(self, limit: int = 150) -> str:
        description = self.description[:limit]
        if len(self.description) > limit:
            description += "..."
        return f"Open {self.required_role} position at {self.location}. Description: {description}"

    @classmethod
    def from_dict(cls, data: dict) -> "Opportunity":
        return cls(
            id=str(data.get("id") or uuid.uuid4()),
            title=data.get("title") or "",
            description=data.get("description") or "",
            required_role=data.get("required_role") or "",
            location=data.get("location") or "",
            status=OpportunityStatus(data.get("status") or OpportunityStatus.OPEN.value),
            start_date=_parse_date(data.get("start_date")),
            end_date=_parse_date(data.get("end_date")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "required_role": self.required_role,
            "location": self.location,
            "status": self.status.value,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
        }


@dataclass
class MatchResult:
    """A ranked talent or opportunity with its score and explanation."""
    score: int = 0  # 0-100
    explanation: str = ""
    talent: Optional[TalentProfile] = None
    opportunity: Optional[Opportunity] = None
    scored_by: ScoringMode = ScoringMode.RULE_BASED

    @property
    def label(self) -> str:
        if self.talent is not None:
            return self.talent.full_name
        if self.opportunity is not None:
            return self.opportunity.title
        return ""

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "explanation": self.explanation,
            "talent": self.talent.to_dict() if self.talent else None,
            "opportunity": self.opportunity.to_dict() if self.opportunity else None,
            "scored_by": self.scored_by.value,
        }


@dataclass
class IntentFilters:
    """Filters extracted from a command."""
    skills: list[str] = field(default_factory=list)
    role: Optional[str] = None
    experience_min: Optional[int] = None
    talent_name: Optional[str] = None
    opportunity_title: Optional[str] = None
    location: Optional[str] = None
    keywords: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.skills or self.role or self.experience_min
            or self.talent_name or self.opportunity_title
            or self.location or self.keywords
        )

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "IntentFilters":
        data = data or {}
        skills = data.get("skills") or []
        if isinstance(skills, str):
            skills = [skills]
        experience = data.get("experience_min", data.get("experienceMin"))
        return cls(
            skills=[str(s) for s in skills if s],
            role=_optional_text(data.get("role")),
            experience_min=int(experience) if experience else None,
            talent_name=_optional_text(data.get("talent_name", data.get("talentName"))),
            opportunity_title=_optional_text(data.get("opportunity_title", data.get("opportunityTitle"))),
            location=_optional_text(data.get("location")),
        )

    def to_dict(self) -> dict:
        return {
            "skills": self.skills,
            "role": self.role,
            "experience_min": self.experience_min,
            "talent_name": self.talent_name,
            "opportunity_title": self.opportunity_title,
            "location": self.location,
            "keywords": self.keywords,
        }


@dataclass
class Intent:
    """Structured interpretation of a single command."""
    action: IntentAction
    filters: IntentFilters = field(default_factory=IntentFilters)
    confidence: float = 0.0
    response: str = ""
    source: str = "ai"  # "ai" or the name of the rule that fired

    @property
    def from_rules(self) -> bool:
        return self.source != "ai"

    def to_dict(self) -> dict:
        return {
            "action": self.action.value,
            "filters": self.filters.to_dict(),
            "confidence": self.confidence,
            "response": self.response,
            "source": self.source,
        }


@dataclass(frozen=True)
class Catalog:
    """
    Immutable snapshot of the talents and opportunities visible to one command.

    The persistence layer owns the records; the engine only reads a snapshot
    taken once per pipeline run.
    """
    talents: tuple[TalentProfile, ...] = ()
    opportunities: tuple[Opportunity, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "talents", tuple(self.talents))
        object.__setattr__(self, "opportunities", tuple(self.opportunities))

    @classmethod
    def snapshot(cls, talents, opportunities) -> "Catalog":
        return cls(talents=tuple(talents), opportunities=tuple(opportunities))

    @property
    def open_opportunities(self) -> list[Opportunity]:
        return [opp for opp in self.opportunities if opp.is_open]

    @property
    def talent_names(self) -> list[str]:
        return [t.full_name for t in self.talents if t.full_name]

    @property
    def opportunity_titles(self) -> list[str]:
        return [o.title for o in self.opportunities if o.title]

    @property
    def roles(self) -> list[str]:
        seen = []
        for talent in self.talents:
            if talent.role and talent.role not in seen:
                seen.append(talent.role)
        return seen

    @property
    def skills(self) -> list[str]:
        seen = []
        for talent in self.talents:
            for skill in talent.skills:
                if skill not in seen:
                    seen.append(skill)
        return seen

    @classmethod
    def from_dict(cls, data: dict) -> "Catalog":
        return cls.snapshot(
            [TalentProfile.from_dict(t) for t in data.get("talents", [])],
            [Opportunity.from_dict(o) for o in data.get("opportunities", [])],
        )

    def to_dict(self) -> dict:
        return {
            "talents": [t.to_dict() for t in self.talents],
            "opportunities": [o.to_dict() for o in self.opportunities],
        }
