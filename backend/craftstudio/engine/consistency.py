"""Consistency prompt — renders a SpecModel into strict per-angle constraints.

Pure and deterministic: the same (spec, angle) pair always renders the same
text. Empty spec fields are left out entirely; the framing, forbidden and
checklist sections are always present.
"""

from __future__ import annotations

from craftstudio.models.spec import SpecModel

_RULE = "=" * 64

# (heading, SpecModel attribute), in render order
_MUST_USE_FIELDS = (
    ("Primary colors", "primary_colors"),
    ("Secondary colors", "secondary_colors"),
    ("Patterns (replicate)", "patterns"),
    ("Textures (match)", "textures"),
    ("Materials (use)", "materials"),
    ("Branding (include)", "branding_elements"),
    ("Decorative elements (preserve)", "decorative_elements"),
    ("Structural features (preserve)", "structural_features"),
)

_FORBIDDEN = (
    "Changing, substituting, or recoloring any color from the canonical design",
    "Adjusting color saturation, brightness, or tone",
    "Adding patterns that are not in the canonical design",
    "Removing or relocating patterns that are in the canonical design",
    "Altering textures or materials",
    "Changing, adding, or dropping decorative elements or branding",
    "Altering the style or aesthetic, or creating variations or alternatives",
    "Reproducing watermarks, text overlays, phone numbers, URLs, or platform branding from reference images",
)

_CHECKLIST = (
    "Do all colors match the canonical design exactly?",
    "Are all patterns present and placed as in the canonical design?",
    "Are all materials, textures, and decorative elements unchanged?",
    "Is all branding present and unchanged?",
    "Does it look like the same physical product photographed from a different angle?",
)


def _framing(angle: str) -> list[str]:
    return [
        _RULE,
        f"ABSOLUTE DESIGN CONSISTENCY REQUIRED: {angle} VIEW OF THE SAME PRODUCT",
        _RULE,
        "",
        f"You are generating the {angle} view of the exact product shown in the canonical design image.",
        "1. This is NOT a new product. It is the SAME physical object seen from a different angle.",
        "2. The object has already been manufactured. Its design is fixed and cannot change.",
        "3. ONLY the camera position and viewing angle change.",
        "4. Use the canonical design image as the absolute visual reference for every detail.",
    ]


def _must_use(spec: SpecModel) -> list[str]:
    sections: list[str] = []
    for heading, attr in _MUST_USE_FIELDS:
        values = [v for v in getattr(spec, attr) if v and v.strip()]
        if not values:
            continue
        sections.append(f"{heading}:")
        sections.extend(f"   {i}. {v}" for i, v in enumerate(values, 1))
    if spec.has_style:
        sections.append("Overall style:")
        sections.append(f"   {spec.overall_style}")
    if not sections:
        return []
    return ["", _RULE, "MUST USE (replicate exactly, verbatim):", _RULE, *sections]


def _forbidden() -> list[str]:
    return ["", _RULE, "FORBIDDEN:", _RULE, *(f"   - NEVER: {item}" for item in _FORBIDDEN)]


def _checklist(angle: str) -> list[str]:
    return [
        "",
        _RULE,
        "VERIFICATION CHECKLIST (self-check before returning the image):",
        _RULE,
        *(f"   [ ] {item}" for item in _CHECKLIST),
        "If the answer to any question is NO, regenerate before returning.",
        "",
        f"REMEMBER: you are photographing ONE product from the {angle} angle. The product cannot change between photos.",
    ]


def build(spec: SpecModel, angle_label: str) -> str:
    """Render the consistency instruction block for one non-canonical angle."""
    lines = [*_framing(angle_label), *_must_use(spec), *_forbidden(), *_checklist(angle_label)]
    return "\n".join(lines)


class ConsistencyPromptBuilder:
    """Object form of :func:`build` for injection into the orchestrator."""

    def build(self, spec: SpecModel, angle_label: str) -> str:
        return build(spec, angle_label)
