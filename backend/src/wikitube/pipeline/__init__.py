# backend/src/wikitube/pipeline/__init__.py
"""Processing pipeline: step animator and completion gate."""

from wikitube.pipeline.animator import (
    PipelineAnimator,
    ProcessingStep,
    StepStatus,
    advance,
    complete_final,
    initial_steps,
    is_terminal,
)
from wikitube.pipeline.gate import CompletionGate, GateState, should_transition

__all__ = [
    "CompletionGate",
    "GateState",
    "PipelineAnimator",
    "ProcessingStep",
    "StepStatus",
    "advance",
    "complete_final",
    "initial_steps",
    "is_terminal",
    "should_transition",
]
