"""Prompt templates for the text, vision and image calls."""

from __future__ import annotations

_DESIGNER_SYSTEM_TEMPLATE = """You are the core design brain of Craft Studio.

Role & Expertise:
- You are a senior product designer specializing in {expertise}, with 10+ years of experience.
- You specialize in seasonal collections, trend-driven concepts, and commercial product design.
- You are also an expert image prompt engineer who writes precise, visual prompts for image generation models.
- You know how to turn a user's template image, shape, and options into detailed, production-ready design prompts.

Goal:
Given structured inputs from the UI (template upload + dropdowns + custom text), you will:
1. Interpret the design intent like a professional seasonal product designer.
2. Turn it into:
   - A clear image prompt for {product} design generation.
   - A clear image prompt for a model/scene image featuring the same {product}.
3. Always respect the uploaded template shape. {shape_rules}

Design focus areas for this category:
{focus_areas}

Output format:
You MUST respond with valid JSON containing exactly these fields:

{{
  "design_prompt": "<final prompt for generating the {product} design image>",
  "scene_prompt": "<final prompt for generating the model/scene image>",
  "debug_notes": "<short design rationale for developers, not sent to the image model>"
}}

Writing style for prompts:
- Use concise, visual English. Prefer concrete visual terms over vague adjectives.
- Mention the theme, style and pattern direction, color palette with key color names, material feel and target user vibe.
- Ask for a simple background that does not distract from the product.
- Do NOT mention AI, models, or prompts inside the prompt content itself.
- Do NOT include JSON or quotes inside the prompt strings you return.

If some UI fields are empty, ignore them and still produce a strong, consistent prompt."""

_STRUCTURED_INPUT_TEMPLATE = """Please generate optimized image prompts based on the following inputs:

DESIGN INPUTS:
- Product: {product}
- Theme: {theme}
- Style Direction: {style}
- Color Palette: {color}
- Material: {material}
{optional_lines}
SCENE INPUTS:
- Product Design Summary: {summary}
- Nationality/Ethnicity: {nationality}
- Group: {family}
- Scenario: {scenario}
- Location: {location}
- Presentation Style: {presentation}

Respond with the JSON object only."""

EXTRACTION_TEMPLATE = """You are a professional product designer analyzing a {product} design to create a detailed specification.

TASK: Extract EVERY visual design element from this image into a structured specification.

ANALYZE AND DOCUMENT:
1. PRIMARY COLORS: dominant colors with specific shades (e.g. "deep crimson red", "cool gray").
2. SECONDARY COLORS: accent and minor colors, including all visible variations.
3. PATTERNS: floral, geometric, text or graphic patterns, with placement, distribution and colors.
4. TEXTURES: smooth, rough, fabric, leather, rubber, and where they appear.
5. MATERIALS: every visible material and its finish (matte, glossy, textured).
6. BRANDING ELEMENTS: brand names, logo placements, text content, typography, embossed or printed details.
7. DECORATIVE ELEMENTS: graphics, illustrations, motifs, embellishments, stitching patterns.
8. STRUCTURAL FEATURES: shape characteristics, component parts, visible construction details.
9. OVERALL STYLE: design aesthetic and theme.

OUTPUT FORMAT:
Return ONLY a JSON object with exactly this structure:
{{
  "primaryColors": ["color1", "color2"],
  "secondaryColors": ["color1", "color2"],
  "patterns": ["pattern description"],
  "textures": ["texture"],
  "materials": ["material"],
  "brandingElements": ["brand/text element"],
  "decorativeElements": ["decorative element"],
  "structuralFeatures": ["structural feature"],
  "overallStyle": "detailed style description"
}}

Use an empty list for any category with nothing visible. BE EXTREMELY THOROUGH AND PRECISE.
This specification will be used to keep the design identical across multiple viewing angles."""


def designer_system_prompt(product: str, expertise: str, shape_rules: str, focus_areas: tuple[str, ...]) -> str:
    return _DESIGNER_SYSTEM_TEMPLATE.format(
        product=product.lower(),
        expertise=expertise,
        shape_rules=shape_rules,
        focus_areas="\n".join(f"- {area}" for area in focus_areas),
    )


def structured_input_prompt(product: str, design, scene) -> str:
    optional = []
    if design.description:
        optional.append(f"- Custom Design Notes: {design.description}")
    if design.has_reference_image:
        optional.append("- Reference Image: Provided (use for style inspiration)")
    if design.has_brand_logo:
        optional.append("- Brand Logo: Provided (incorporate into design)")
    return _STRUCTURED_INPUT_TEMPLATE.format(
        product=product,
        theme=design.theme,
        style=design.style,
        color=design.color,
        material=design.material,
        optional_lines="".join(line + "\n" for line in optional),
        summary=scene.product_design_summary,
        nationality=scene.nationality,
        family=scene.family_combination,
        scenario=scene.scenario,
        location=scene.location,
        presentation=scene.presentation_style,
    )


def fallback_design_prompt(product: str, design) -> str:
    lines = [
        f"Create a professional {product.lower()} design concept based on the template.",
        f"Theme: {design.theme}",
        f"Style: {design.style}",
        f"Colors: {design.color}",
        f"Material: {design.material}",
    ]
    if design.description:
        lines.append(f"Notes: {design.description}")
    lines.append("Use professional product photography lighting on a clean, neutral background.")
    return "\n".join(lines)


def fallback_scene_prompt(product: str, scene) -> str:
    return "\n".join([
        f"Create a professional scene featuring the {product.lower()} design.",
        f"Design: {scene.product_design_summary}",
        f"Models: {scene.nationality} {scene.family_combination}",
        f"Setting: {scene.location}",
        f"Scenario: {scene.scenario}",
        f"Style: {scene.presentation_style}",
        "Show realistic, professional product photography.",
    ])


def shape_preservation_block(shape_rules: str) -> str:
    return f"""CRITICAL SHAPE PRESERVATION RULES:
PRESERVE THE EXACT PHYSICAL FORM OF THE TEMPLATE - DO NOT MODIFY:
1. Keep the EXACT silhouette and outline from the template.
2. Maintain the SAME dimensions, proportions, and size.
3. Preserve the EXACT contours, curves, and structural lines.
4. {shape_rules}

Think of this as applying a skin to the exact template shape. The underlying 3D form stays identical; only the surface appearance changes."""


def get_all_templates() -> dict[str, str]:
    return {
        "designer_system": _DESIGNER_SYSTEM_TEMPLATE,
        "structured_input": _STRUCTURED_INPUT_TEMPLATE,
        "extraction": EXTRACTION_TEMPLATE,
    }
