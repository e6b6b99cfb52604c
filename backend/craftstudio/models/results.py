"""Pipeline outputs."""

from __future__ import annotations

from dataclasses import dataclass, field

from craftstudio.models.images import ImagePayload
from craftstudio.models.spec import SpecModel


@dataclass(frozen=True)
class OptimizedPrompts:
    image_prompt: str
    scene_prompt: str
    debug_notes: str = ""


@dataclass(frozen=True)
class AngleResult:
    """One angle: either an image or the reason it could not be generated."""

    angle: str
    label: str
    image: ImagePayload | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.image is not None and self.error is None

    @classmethod
    def success(cls, angle: str, label: str, image: ImagePayload) -> AngleResult:
        return cls(angle=angle, label=label, image=image)

    @classmethod
    def failed(cls, angle: str, label: str, reason: str) -> AngleResult:
        return cls(angle=angle, label=label, error=reason)


@dataclass
class PipelineResult:
    """Ordered per-angle results, or a single top-level failure."""

    results: list[AngleResult] = field(default_factory=list)
    failure: AngleResult | None = None
    # canonical failure caused by a rejected upload rather than the model
    invalid_input: bool = False
    debug_notes: str = ""
    scene_prompt: str = ""
    spec: SpecModel = field(default_factory=SpecModel.empty)
    notes: list[str] = field(default_factory=list)
    trace: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.failure is not None

    @property
    def succeeded(self) -> list[AngleResult]:
        return [r for r in self.results if r.ok]

    @property
    def partial(self) -> bool:
        return not self.failed and any(not r.ok for r in self.results)


@dataclass(frozen=True)
class SceneResult:
    """A model-scene image and the prompt that produced it."""

    image: ImagePayload
    prompt: str
    debug_notes: str = ""
