"""Stage 1 — structured design choices to an optimized image prompt.

A senior-designer text call writes the prompts. Any failure of that call, or
output that does not carry both prompts, switches to a local template that
cannot fail. Both paths return the same type; only ``debug_notes`` tells
them apart.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from craftstudio.engine.catalog import get_category
from craftstudio.llm.prompts import (
    designer_system_prompt,
    fallback_design_prompt,
    fallback_scene_prompt,
    structured_input_prompt,
)
from craftstudio.models.design import DesignInputs, SceneInputs
from craftstudio.models.results import OptimizedPrompts
from craftstudio.utils.json_extract import find_json_object

if TYPE_CHECKING:
    from craftstudio.llm.client import GeminiClient

logger = logging.getLogger(__name__)

FALLBACK_NOTE = "Fallback prompts used due to LLM error"


class PromptParseError(ValueError):
    pass


def parse_optimized(text: str) -> OptimizedPrompts:
    """Parse the designer response; raise PromptParseError if either prompt is missing."""
    raw = find_json_object(text)
    if raw is None:
        raise PromptParseError("no JSON object in response")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PromptParseError(f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise PromptParseError("response JSON is not an object")

    image_prompt = data.get("design_prompt")
    scene_prompt = data.get("scene_prompt")
    if not isinstance(image_prompt, str) or not image_prompt.strip():
        raise PromptParseError("response missing design_prompt")
    if not isinstance(scene_prompt, str) or not scene_prompt.strip():
        raise PromptParseError("response missing scene_prompt")

    notes = data.get("debug_notes") or ""
    return OptimizedPrompts(
        image_prompt=image_prompt.strip(),
        scene_prompt=scene_prompt.strip(),
        debug_notes=str(notes),
    )


def fallback_prompts(design: DesignInputs, scene: SceneInputs, reason: str) -> OptimizedPrompts:
    """Deterministic template prompts; no I/O, no parsing."""
    product = get_category(design.category, design.custom_category).display_name
    return OptimizedPrompts(
        image_prompt=fallback_design_prompt(product, design),
        scene_prompt=fallback_scene_prompt(product, scene),
        debug_notes=f"{FALLBACK_NOTE}: {reason}",
    )


class PromptOptimizer:
    def __init__(self, client: GeminiClient) -> None:
        self.client = client

    async def optimize(self, design: DesignInputs, scene: SceneInputs | None = None) -> OptimizedPrompts:
        profile = get_category(design.category, design.custom_category)
        scene = scene or SceneInputs.placeholder(design, profile.display_name)

        system = designer_system_prompt(
            profile.display_name,
            profile.designer_expertise,
            profile.shape_preservation_rules,
            profile.design_focus_areas,
        )
        prompt = structured_input_prompt(profile.display_name, design, scene)

        try:
            text = await self.client.generate_text(system, prompt)
            prompts = parse_optimized(text)
        except Exception as e:
            logger.warning("Prompt optimization failed, using template: %s", e)
            return fallback_prompts(design, scene, str(e))

        logger.info("Prompt optimization complete for %s", profile.display_name)
        logger.debug("Debug notes: %s", prompts.debug_notes)
        return prompts
