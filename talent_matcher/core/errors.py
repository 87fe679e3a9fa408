"""
Error taxonomy for the matching engine.

None of these are fatal to the host application: the pipeline recovers the
first three locally and turns the last two into a failed command result.
"""


class MatchingError(Exception):
    """Base class for engine errors. The message is safe to show to users."""

    default_message = "Matching failed"

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ClassificationError(MatchingError):
    """The AI classifier was unreachable or returned unparsable content."""
    default_message = "Could not classify the command with AI"


class ScoringError(MatchingError):
    """The AI scorer failed for one talent/opportunity pair."""
    default_message = "Could not score the match with AI"


class NoMatchError(MatchingError):
    """Fuzzy resolution found no candidate above the similarity floor."""
    default_message = "No matching entity found"


class PipelineTimeoutError(MatchingError):
    """A command exceeded its wall-clock budget."""
    default_message = "Command processing took too long. Please try again."


class UnrecognizedCommandError(MatchingError):
    """No rule, keyword or fallback produced a result."""
    default_message = (
        "I couldn't understand your request. "
        "Try being more specific about what you're looking for."
    )
