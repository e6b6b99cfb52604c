"""Per-request inputs to the generation pipeline."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, field_validator

from craftstudio.errors import InvalidRequest
from craftstudio.models.images import ImagePayload
from craftstudio.utils.text import normalize_key

CUSTOM_PREFIX = "custom:"

MIN_ANGLES = 2
MAX_ANGLES = 4

# smaller uploads cannot be a usable image
MIN_IMAGE_BYTES = 100


def resolve_choice(value: str) -> str:
    """'custom:burgundy+gold' -> 'burgundy+gold'; preset tokens pass through."""
    value = value.strip()
    if value.lower().startswith(CUSTOM_PREFIX):
        return value[len(CUSTOM_PREFIX):].strip()
    return value


def check_image_size(image: ImagePayload, name: str) -> None:
    if len(image.data) < MIN_IMAGE_BYTES:
        raise InvalidRequest(
            f"{name} image is too small or invalid ({len(image.data)} bytes); "
            "please upload a valid product image"
        )


class DesignInputs(BaseModel):
    """Structured design choices for one request."""

    model_config = ConfigDict(frozen=True)

    category: str = "custom"
    custom_category: str = ""
    theme: str = ""
    style: str = ""
    color: str = ""
    material: str = ""
    description: str = ""
    has_reference_image: bool = False
    has_brand_logo: bool = False

    @field_validator("theme", "style", "color", "material", "custom_category")
    @classmethod
    def _resolve_custom(cls, v: str) -> str:
        return resolve_choice(v)

    @field_validator("description")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()


class SceneInputs(BaseModel):
    """Model-scene options; product-design runs use the studio placeholder."""

    model_config = ConfigDict(frozen=True)

    product_design_summary: str = ""
    nationality: str = "International"
    family_combination: str = "Adult"
    scenario: str = "Casual wear"
    location: str = "Studio"
    presentation_style: str = "Product mockup"

    @classmethod
    def placeholder(cls, design: DesignInputs, product_name: str) -> SceneInputs:
        summary = (
            f"{design.style} style {design.theme} themed {product_name.lower()} "
            f"in {design.color} colors with {design.material} materials"
        )
        return cls(product_design_summary=" ".join(summary.split()))


class AngleRequest(BaseModel):
    """Ordered angle ids; the first one is the canonical angle."""

    model_config = ConfigDict(frozen=True)

    angles: tuple[str, ...] = Field(default=("top", "45-degree"))

    @field_validator("angles")
    @classmethod
    def _check_angles(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(a.strip() for a in v)
        if not MIN_ANGLES <= len(cleaned) <= MAX_ANGLES:
            raise ValueError(f"between {MIN_ANGLES} and {MAX_ANGLES} angles required, got {len(cleaned)}")
        if any(not a for a in cleaned):
            raise ValueError("angle ids must be non-empty")
        if len({normalize_key(a) for a in cleaned}) != len(cleaned):
            raise ValueError("angle ids must be unique")
        return cleaned

    @property
    def canonical(self) -> str:
        return self.angles[0]

    @property
    def remaining(self) -> tuple[str, ...]:
        return self.angles[1:]


@dataclass(frozen=True)
class InputImages:
    """Uploaded images. Per-angle templates override the shared template."""

    template: ImagePayload
    reference: ImagePayload | None = None
    logo: ImagePayload | None = None
    angle_templates: dict[str, ImagePayload] = field(default_factory=dict)

    def template_for(self, angle: str) -> ImagePayload:
        key = normalize_key(angle)
        for known, image in self.angle_templates.items():
            if normalize_key(known) == key and image:
                return image
        return self.template

    def ordered_for(self, angle: str) -> list[ImagePayload]:
        """Template, reference, logo, in that order, skipping absent ones."""
        return list(self._iter(angle))

    def _iter(self, angle: str) -> Iterator[ImagePayload]:
        yield self.template_for(angle)
        if self.reference:
            yield self.reference
        if self.logo:
            yield self.logo


@dataclass(frozen=True)
class GenerationRequest:
    """Everything the pipeline needs for one multi-angle design."""

    design: DesignInputs
    images: InputImages
    angles: AngleRequest
    scene: SceneInputs | None = None

    @classmethod
    def build(
        cls,
        design: DesignInputs,
        images: InputImages,
        angles: list[str] | tuple[str, ...],
        scene: SceneInputs | None = None,
    ) -> GenerationRequest:
        """Validate the angle list, raising InvalidRequest on bad input."""
        try:
            angle_request = AngleRequest(angles=tuple(angles))
        except ValueError as e:
            raise InvalidRequest(str(e)) from e
        if not images.template:
            raise InvalidRequest("template image is empty")
        for name, image in [("template", images.template), *images.angle_templates.items()]:
            check_image_size(image, name)
        return cls(design=design, images=images, angles=angle_request, scene=scene)
