"""
Command execution: action handlers and the time-boxed pipeline.
"""

from .results import CommandResult, PipelineState, ResultKind
from .executor import ActionExecutor
from .command_pipeline import CommandPipeline

__all__ = [
    "CommandResult",
    "PipelineState",
    "ResultKind",
    "ActionExecutor",
    "CommandPipeline",
]
