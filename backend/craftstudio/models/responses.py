"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from craftstudio.models.results import AngleResult, PipelineResult, SceneResult


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    client_configured: bool = False
    models: dict[str, str] = Field(default_factory=dict)


class OptimizePromptResponse(BaseModel):
    image_prompt: str
    scene_prompt: str
    debug_notes: str = ""


class AngleImage(BaseModel):
    angle: str
    label: str
    image: str | None = None
    error: str | None = None

    @classmethod
    def from_result(cls, result: AngleResult) -> AngleImage:
        return cls(
            angle=result.angle,
            label=result.label,
            image=result.image.to_data_url() if result.image is not None else None,
            error=result.error,
        )


class GenerateDesignResponse(BaseModel):
    angles: list[AngleImage] = Field(default_factory=list)
    debug_notes: str = ""
    spec: dict = Field(default_factory=dict)
    scene_prompt: str = ""
    notes: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: PipelineResult) -> GenerateDesignResponse:
        return cls(
            angles=[AngleImage.from_result(r) for r in result.results],
            debug_notes=result.debug_notes,
            spec=result.spec.to_wire(),
            scene_prompt=result.scene_prompt,
            notes=list(result.notes),
        )


class GenerateSceneResponse(BaseModel):
    image: str
    prompt: str
    debug_notes: str = ""

    @classmethod
    def from_result(cls, result: SceneResult) -> GenerateSceneResponse:
        return cls(image=result.image.to_data_url(), prompt=result.prompt, debug_notes=result.debug_notes)
