"""Model-scene stage — a generated product design shown worn or used by a model.

Runs after the multi-angle pipeline: the caller passes one generated design
image and either the scene prompt the pipeline returned or nothing, in which
case the prompt optimizer writes one for a "design as shown" brief.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from craftstudio.engine.canonical import CanonicalGenerator
from craftstudio.engine.catalog import get_category, model_camera_instruction
from craftstudio.engine.prompt_optimizer import PromptOptimizer
from craftstudio.models.design import DesignInputs, SceneInputs, check_image_size
from craftstudio.models.images import ImagePayload
from craftstudio.models.results import SceneResult

if TYPE_CHECKING:
    from craftstudio.llm.client import GeminiClient

logger = logging.getLogger(__name__)

AS_SHOWN = "As shown in design"


def scene_brief(design: DesignInputs) -> DesignInputs:
    """The optimizer brief for a finished design: colors and materials come from the image."""
    return design.model_copy(update={
        "theme": design.theme or "Seasonal",
        "style": design.style or "Professional",
        "color": AS_SHOWN,
        "material": AS_SHOWN,
    })


def scene_prompt_for(base_prompt: str, scene_context: str, view_angle: str = "") -> str:
    sections = [
        base_prompt.strip(),
        f"SCENE CONTEXT: {scene_context}",
        "The product must match the provided design image exactly: same colors, patterns, materials and shape.",
    ]
    camera = model_camera_instruction(view_angle)
    if camera:
        sections.append(camera)
    return "\n\n".join(sections)


class ModelSceneGenerator:
    def __init__(
        self,
        client: GeminiClient | None = None,
        optimizer: PromptOptimizer | None = None,
        generator: CanonicalGenerator | None = None,
    ) -> None:
        self.optimizer = optimizer or PromptOptimizer(client)
        self.generator = generator or CanonicalGenerator(client)

    async def generate(
        self,
        product_image: ImagePayload,
        design: DesignInputs,
        scene: SceneInputs | None = None,
        view_angle: str = "",
        scene_prompt: str = "",
    ) -> SceneResult:
        """Raises InvalidRequest for an unusable image and GenerationFailure if no scene is produced."""
        check_image_size(product_image, "product")
        profile = get_category(design.category, design.custom_category)
        scene = scene or SceneInputs()
        if not scene.product_design_summary:
            scene = scene.model_copy(update={
                "product_design_summary": (
                    f"The provided {profile.display_name.lower()} design "
                    "with its exact colors, patterns, and materials"
                ),
            })

        debug_notes = ""
        if not scene_prompt.strip():
            prompts = await self.optimizer.optimize(scene_brief(design), scene)
            scene_prompt = prompts.scene_prompt
            debug_notes = prompts.debug_notes

        prompt = scene_prompt_for(scene_prompt, profile.model_scene_context, view_angle)
        logger.info("Model scene: product=%s view=%s", profile.display_name, view_angle or "default")
        image = await self.generator.generate(prompt, [product_image], task="scene", angle=view_angle)
        return SceneResult(image=image, prompt=prompt, debug_notes=debug_notes)
