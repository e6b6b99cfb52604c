"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from craftstudio.models.design import DesignInputs, SceneInputs


class DesignFields(BaseModel):
    category: str = Field(default="slippers", description="Product category (shoes, slippers, clothes, bags, custom)")
    custom_category: str = Field(default="", description="Product name when category is custom")
    theme: str = Field(default="", description="Theme preset or 'custom:<text>'")
    style: str = Field(default="", description="Style preset or 'custom:<text>'")
    color: str = Field(default="", description="Color preset or 'custom:<text>'")
    material: str = Field(default="", description="Material preset or 'custom:<text>'")
    description: str = Field(default="", description="Free-text design notes")

    def to_design(self, has_reference: bool = False, has_logo: bool = False) -> DesignInputs:
        return DesignInputs(
            category=self.category,
            custom_category=self.custom_category,
            theme=self.theme,
            style=self.style,
            color=self.color,
            material=self.material,
            description=self.description,
            has_reference_image=has_reference,
            has_brand_logo=has_logo,
        )


class OptimizePromptRequest(DesignFields):
    has_reference_image: bool = False
    has_brand_logo: bool = False
    scene: SceneInputs | None = None


class GenerateDesignRequest(DesignFields):
    angles: list[str] = Field(default_factory=lambda: ["top", "45-degree"], description="2-4 angle ids, canonical first")
    template: str = Field(..., description="Template image as data URL or base64")
    reference_image: str | None = Field(default=None, description="Optional style reference image")
    brand_logo: str | None = Field(default=None, description="Optional brand logo image")
    angle_templates: dict[str, str] = Field(
        default_factory=dict,
        description="Optional per-angle template images keyed by angle id",
    )
    scene: SceneInputs | None = None


class GenerateSceneRequest(DesignFields):
    product_image: str = Field(..., description="Generated design image as data URL or base64")
    view_angle: str = Field(default="", description="Optional camera view (front, back, side, 45-degree, or free text)")
    scene_prompt: str = Field(default="", description="Scene prompt returned by /designs/generate; optimized anew when empty")
    scene: SceneInputs | None = None
