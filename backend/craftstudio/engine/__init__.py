"""Craft Studio multi-angle generation engine."""

from craftstudio.errors import (
    GenerationFailure,
    InvalidImageFailure,
    InvalidRequest,
    ModelCallError,
    PipelineError,
)
from craftstudio.engine.model_scene import ModelSceneGenerator
from craftstudio.engine.orchestrator import AngleOrchestrator, PipelineState

__all__ = [
    "GenerationFailure",
    "InvalidImageFailure",
    "InvalidRequest",
    "ModelCallError",
    "PipelineError",
    "AngleOrchestrator",
    "ModelSceneGenerator",
    "PipelineState",
]
