"""Product catalog — per-category angles, designer expertise and shape rules.

Category and angle ids are matched loosely: case, spaces, '-' and '_' are
ignored, and singular forms resolve to the plural category ("slipper" ->
"slippers"). Unknown categories fall back to the generic custom profile with
the caller's name as the display name.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from craftstudio.utils.text import normalize_key


@dataclass(frozen=True)
class CategoryProfile:
    key: str
    display_name: str
    angles: tuple[str, ...]
    angle_labels: dict[str, str]
    designer_expertise: str
    shape_preservation_rules: str
    design_focus_areas: tuple[str, ...] = field(default_factory=tuple)
    model_scene_context: str = ""

    def angle_label(self, angle: str) -> str:
        key = normalize_key(angle)
        for known, label in self.angle_labels.items():
            if normalize_key(known) == key:
                return label
        return _GENERIC_ANGLE_LABELS.get(key, angle)


_FOOTWEAR_LABELS = {
    "top": "Top View",
    "45-degree": "45° View",
    "side": "Side View",
    "bottom": "Bottom View",
}

_GENERIC_ANGLE_LABELS = {
    "top": "Top View",
    "45degree": "45° View",
    "side": "Side View",
    "bottom": "Bottom View",
    "front": "Front View",
    "back": "Back View",
    "detail": "Detail View",
}

CATEGORIES: dict[str, CategoryProfile] = {
    "shoes": CategoryProfile(
        key="shoes",
        display_name="Shoes",
        angles=("top", "45-degree", "side", "bottom"),
        angle_labels=_FOOTWEAR_LABELS,
        designer_expertise="footwear & athletic shoe design",
        shape_preservation_rules=(
            "Keep the exact shoe last, sole thickness, upper construction, heel height, "
            "and toe box shape from the template. Only modify surface colors, patterns, "
            "materials, textures, and branding."
        ),
        design_focus_areas=(
            "Upper material and texture",
            "Midsole and outsole design",
            "Lacing system styling",
            "Brand logos and badges",
            "Color blocking and patterns",
            "Performance or lifestyle positioning",
        ),
        model_scene_context="Model wearing the shoes on their feet, standing or in action",
    ),
    "slippers": CategoryProfile(
        key="slippers",
        display_name="Slippers",
        angles=("top", "45-degree", "side", "bottom"),
        angle_labels=_FOOTWEAR_LABELS,
        designer_expertise="casual footwear & slipper design",
        shape_preservation_rules=(
            "Keep the exact slipper silhouette, sole thickness, strap position, and overall "
            "construction from the template. Only modify surface graphics, colors, materials, "
            "patterns, and decorative details."
        ),
        design_focus_areas=(
            "Upper material and comfort feel",
            "Strap or slide design",
            "Footbed texture and support",
            "Outsole pattern and grip",
            "Decorative elements and branding",
            "Seasonal and lifestyle themes",
        ),
        model_scene_context="Model wearing the slippers casually, at home or resort setting",
    ),
    "clothes": CategoryProfile(
        key="clothes",
        display_name="Clothes",
        angles=("front", "back", "side", "detail"),
        angle_labels={
            "front": "Front View",
            "back": "Back View",
            "side": "Side View",
            "detail": "Detail View",
        },
        designer_expertise="fashion apparel & garment design",
        shape_preservation_rules=(
            "Maintain the exact garment silhouette, cut, seam lines, collar/neckline shape, "
            "sleeve length, and overall fit from the template. Only modify fabric patterns, "
            "colors, textures, prints, embellishments, and branding details."
        ),
        design_focus_areas=(
            "Fabric selection and texture",
            "Print and pattern design",
            "Color palette and blocking",
            "Trim and embellishment details",
            "Brand logos and labels",
            "Seasonal collection themes",
        ),
        model_scene_context="Model wearing the garment naturally in appropriate setting",
    ),
    "bags": CategoryProfile(
        key="bags",
        display_name="Bags",
        angles=("front", "side", "top", "detail"),
        angle_labels={
            "front": "Front View",
            "side": "Side View",
            "top": "Top View",
            "detail": "Detail View",
        },
        designer_expertise="leather goods & accessory design",
        shape_preservation_rules=(
            "Preserve the exact bag structure, dimensions, proportions, handle/strap placement, "
            "closure system, and 3D form from the template. Only modify surface materials, "
            "colors, textures, hardware finishes, logos, and decorative accents."
        ),
        design_focus_areas=(
            "Material selection (leather, canvas, synthetic)",
            "Hardware and metal finishes",
            "Color and texture combinations",
            "Logo placement and branding",
            "Stitching and edge details",
            "Functional design elements",
        ),
        model_scene_context="Model holding or carrying the bag in a lifestyle setting",
    ),
    "custom": CategoryProfile(
        key="custom",
        display_name="Custom Product",
        angles=("view1", "view2", "view3", "view4"),
        angle_labels={
            "view1": "View 1",
            "view2": "View 2",
            "view3": "View 3",
            "view4": "View 4",
        },
        designer_expertise="product & industrial design",
        shape_preservation_rules=(
            "Maintain the exact product shape, structure, proportions, and fundamental form "
            "from the template. Only modify surface colors, patterns, materials, textures, "
            "logos, and decorative elements."
        ),
        design_focus_areas=(
            "Material and finish selection",
            "Color palette and combinations",
            "Pattern and graphic design",
            "Brand identity integration",
            "Texture and tactile qualities",
            "User-specified design requirements",
        ),
        model_scene_context="Model or user interacting with the product in relevant context",
    ),
}


def get_category(name: str, custom_name: str = "") -> CategoryProfile:
    """Resolve a category id; unknown ids get the custom profile under their own name."""
    key = normalize_key(name)
    profile = CATEGORIES.get(key) or CATEGORIES.get(key + "s")
    if profile is None:
        profile = replace(CATEGORIES["custom"], display_name=name.strip() or "Custom Product")
    if profile.key == "custom" and custom_name.strip():
        profile = replace(profile, display_name=custom_name.strip())
    return profile


def camera_instruction(angle: str, product_name: str) -> str:
    """Camera placement for one angle id or free-form label."""
    key = normalize_key(angle)
    product = product_name.lower()
    if key == "top" or "topdown" in key:
        return f"CAMERA ANGLE: Top-down view showing the upper surface of the {product}."
    if "45" in key or "threequarter" in key or "3/4" in key:
        return (
            f"CAMERA ANGLE: 45-degree angled view showing both the top and side profile "
            f"of the {product}, with visible depth."
        )
    if key.startswith("side") or "profile" in key:
        return f"CAMERA ANGLE: Side profile view from exactly 90 degrees, showing the full side of the {product}."
    if key.startswith("bottom") or "sole" in key:
        return f"CAMERA ANGLE: Bottom view showing the underside of the {product}."
    if key.startswith("front"):
        return f"CAMERA ANGLE: Front-facing view from directly in front of the {product}."
    if key.startswith("back") or "rear" in key:
        return f"CAMERA ANGLE: Back view from directly behind the {product}."
    if key.startswith("detail") or "closeup" in key:
        return f"CAMERA ANGLE: Close-up detail view of the most distinctive design area of the {product}."
    return f"CAMERA ANGLE: {angle}. Position the camera to capture this specific viewing angle of the {product}."


def model_camera_instruction(view_angle: str) -> str:
    """Camera placement for a model-scene shot; empty when no angle is requested."""
    if not view_angle.strip():
        return ""
    key = normalize_key(view_angle)
    if "front" in key:
        return (
            "CAMERA ANGLE: Front-facing view. The model is photographed from directly in front, "
            "face and front of the body clearly visible."
        )
    if "back" in key or "rear" in key:
        return (
            "CAMERA ANGLE: Back view. The model is photographed from directly behind; "
            "the face must NOT be visible."
        )
    if "side" in key or "profile" in key:
        return (
            "CAMERA ANGLE: Side profile view from exactly 90 degrees. "
            "Only one side of the face and body is visible."
        )
    if "45" in key or "threequarter" in key or "3/4" in key:
        return (
            "CAMERA ANGLE: Three-quarter view (45-degree angle), showing the front "
            "and one side of the model partially."
        )
    return f"CAMERA ANGLE: {view_angle.strip()}. Position the camera to capture this specific viewing angle."


def catalog_summary() -> list[dict]:
    """Serializable view of the catalog for the categories endpoint."""
    return [
        {
            "key": p.key,
            "display_name": p.display_name,
            "angles": [{"id": a, "label": p.angle_label(a)} for a in p.angles],
            "design_focus_areas": list(p.design_focus_areas),
        }
        for p in CATEGORIES.values()
    ]
