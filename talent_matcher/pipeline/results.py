"""
Result types returned by the command pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from talent_matcher.core.errors import MatchingError
from talent_matcher.core.models import Intent, MatchResult


class PipelineState(Enum):
    """Lifecycle of one command run."""
    IDLE = "idle"
    RESOLVING = "resolving"
    EXECUTING = "executing"
    DONE = "done"
    FAILED = "failed"


class ResultKind(Enum):
    """What the ranked list contains."""
    TALENTS = "talents"
    OPPORTUNITIES = "opportunities"
    MIXED = "mixed"  # keyword fallback ranks both together
    STATS = "stats"
    NONE = "none"


@dataclass
class CommandResult:
    """Outcome of one command, successful or not."""
    kind: ResultKind = ResultKind.NONE
    ranked: list[MatchResult] = field(default_factory=list)
    intent: Optional[Intent] = None
    message: str = ""
    stats: dict = field(default_factory=dict)
    status: PipelineState = PipelineState.DONE
    error: Optional[MatchingError] = None
    transcript: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is PipelineState.DONE

    @classmethod
    def failure(cls, error: MatchingError, transcript: str = "", intent: Optional[Intent] = None) -> "CommandResult":
        return cls(
            kind=ResultKind.NONE,
            intent=intent,
            message=error.message,
            status=PipelineState.FAILED,
            error=error,
            transcript=transcript,
        )

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "status": self.status.value,
            "message": self.message,
            "transcript": self.transcript,
            "intent": self.intent.to_dict() if self.intent else None,
            "stats": self.stats,
            "error": type(self.error).__name__ if self.error else None,
            "ranked": [r.to_dict() for r in self.ranked],
        }
