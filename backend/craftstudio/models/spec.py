"""Design specification extracted from a canonical image."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

UNEXTRACTED_STYLE = "Unable to extract design specification"


class SpecModel(BaseModel):
    """Nine visual attributes of one design. Every field is always present."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    primary_colors: list[str] = Field(default_factory=list, alias="primaryColors")
    secondary_colors: list[str] = Field(default_factory=list, alias="secondaryColors")
    patterns: list[str] = Field(default_factory=list)
    textures: list[str] = Field(default_factory=list)
    materials: list[str] = Field(default_factory=list)
    branding_elements: list[str] = Field(default_factory=list, alias="brandingElements")
    decorative_elements: list[str] = Field(default_factory=list, alias="decorativeElements")
    structural_features: list[str] = Field(default_factory=list, alias="structuralFeatures")
    overall_style: str = Field(default="", alias="overallStyle")

    @classmethod
    def empty(cls) -> SpecModel:
        """The fallback used whenever extraction cannot produce a spec."""
        return cls(overall_style=UNEXTRACTED_STYLE)

    @property
    def colors(self) -> list[str]:
        return [*self.primary_colors, *self.secondary_colors]

    @property
    def has_style(self) -> bool:
        style = self.overall_style.strip()
        return bool(style) and style != UNEXTRACTED_STYLE

    def is_empty(self) -> bool:
        lists = (
            self.primary_colors,
            self.secondary_colors,
            self.patterns,
            self.textures,
            self.materials,
            self.branding_elements,
            self.decorative_elements,
            self.structural_features,
        )
        return not any(lists) and not self.has_style

    def to_wire(self) -> dict:
        """camelCase dict, the shape the vision model is asked to return."""
        return self.model_dump(by_alias=True)
