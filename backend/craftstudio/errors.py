"""Pipeline exception hierarchy."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for generation pipeline errors."""


class ModelCallError(PipelineError):
    """An upstream model call failed, timed out, or returned nothing usable."""

    def __init__(self, task: str, message: str) -> None:
        super().__init__(f"{task} call failed: {message}")
        self.task = task
        self.upstream = message


class GenerationFailure(PipelineError):
    """No image could be produced for an angle."""

    def __init__(self, message: str, angle: str = "") -> None:
        super().__init__(message)
        self.angle = angle


class InvalidImageFailure(GenerationFailure):
    """The image model rejected an uploaded image as invalid input."""


class InvalidRequest(PipelineError, ValueError):
    """The input bundle violates a pipeline precondition."""
