"""Angle orchestrator — canonical generation, spec extraction, constrained regeneration.

State flow for one request:

    IDLE -> OPTIMIZING_PROMPT -> GENERATING_CANONICAL -> EXTRACTING_SPEC
         -> GENERATING_ANGLE (x N-1) -> DONE

A canonical failure ends the run in FAILED with a single top-level failure.
Per-angle failures are traced as FAILED:<angle>, recorded in the result list,
and the run continues.
All state lives in locals of ``run()``; the orchestrator itself only holds
the shared, read-only client and settings.
"""

from __future__ import annotations

import enum
import json
import logging
import time
from typing import TYPE_CHECKING

from craftstudio.config import Settings, settings as default_settings
from craftstudio.errors import GenerationFailure, InvalidImageFailure
from craftstudio.engine.canonical import CanonicalGenerator
from craftstudio.engine.catalog import CategoryProfile, camera_instruction, get_category
from craftstudio.engine.consistency import ConsistencyPromptBuilder
from craftstudio.engine.prompt_optimizer import PromptOptimizer
from craftstudio.engine.spec_extractor import SpecExtractor
from craftstudio.llm.prompts import shape_preservation_block
from craftstudio.models.design import DesignInputs, GenerationRequest, SceneInputs
from craftstudio.models.images import ImagePayload
from craftstudio.models.results import AngleResult, PipelineResult
from craftstudio.models.spec import SpecModel

if TYPE_CHECKING:
    from craftstudio.llm.client import GeminiClient

logger = logging.getLogger(__name__)


class PipelineState(str, enum.Enum):
    IDLE = "idle"
    OPTIMIZING_PROMPT = "optimizing_prompt"
    GENERATING_CANONICAL = "generating_canonical"
    EXTRACTING_SPEC = "extracting_spec"
    GENERATING_ANGLE = "generating_angle"
    DONE = "done"
    FAILED = "failed"


def _design_parameters(product: str, design: DesignInputs) -> str:
    lines = [
        "DESIGN PARAMETERS (reference only):",
        f"- Product: {product}",
        f"- Theme: {design.theme}",
        f"- Style: {design.style}",
        f"- Base Colors: {design.color}",
        f"- Material: {design.material}",
    ]
    if design.description:
        lines.append(f"- Design Notes: {design.description}")
    return "\n".join(lines)


def canonical_prompt(optimized: str, profile: CategoryProfile, angle: str) -> str:
    """Optimized prompt + shape rules + camera placement for the first angle."""
    return "\n\n".join([
        optimized,
        shape_preservation_block(profile.shape_preservation_rules),
        camera_instruction(angle, profile.display_name),
    ])


def angle_prompt(consistency: str, profile: CategoryProfile, design: DesignInputs, angle: str) -> str:
    label = profile.angle_label(angle)
    return "\n\n".join([
        consistency,
        _design_parameters(profile.display_name, design),
        camera_instruction(angle, profile.display_name),
        (
            "FINAL INSTRUCTION:\n"
            f"Generate the {label} of this {profile.display_name.lower()} so that it PERFECTLY matches "
            "the design specification above.\n"
            "The first image is the canonical design: use it as your visual reference.\n"
            "The template image gives the correct product shape and structure."
        ),
    ])


def spec_context(spec: SpecModel) -> list[str]:
    """Raw spec JSON as an extra text part; nothing when the spec is empty."""
    if spec.is_empty():
        return []
    return ["DESIGN SPECIFICATION (JSON):\n" + json.dumps(spec.to_wire(), ensure_ascii=False, indent=2)]


class AngleOrchestrator:
    """Runs the multi-angle pipeline for one request at a time per ``run()`` call."""

    def __init__(
        self,
        client: GeminiClient | None = None,
        settings: Settings | None = None,
        optimizer: PromptOptimizer | None = None,
        generator: CanonicalGenerator | None = None,
        extractor: SpecExtractor | None = None,
        builder: ConsistencyPromptBuilder | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.optimizer = optimizer or PromptOptimizer(client)
        self.generator = generator or CanonicalGenerator(client)
        self.extractor = extractor or SpecExtractor(client)
        self.builder = builder or ConsistencyPromptBuilder()

    async def run(self, request: GenerationRequest) -> PipelineResult:
        start = time.perf_counter()
        design = request.design
        profile = get_category(design.category, design.custom_category)
        scene = request.scene or SceneInputs.placeholder(design, profile.display_name)
        result = PipelineResult()

        def enter(state: PipelineState, detail: str = "") -> None:
            result.trace.append(f"{state.value}:{detail}" if detail else state.value)

        enter(PipelineState.IDLE)
        logger.info(
            "Multi-angle generation: product=%s angles=%s",
            profile.display_name,
            ", ".join(request.angles.angles),
        )

        # Stage 1: prompt (fallback absorbs every failure)
        enter(PipelineState.OPTIMIZING_PROMPT)
        prompts = await self.optimizer.optimize(design, scene)
        result.debug_notes = prompts.debug_notes
        result.scene_prompt = prompts.scene_prompt

        # Stage 2: canonical image
        first = request.angles.canonical
        first_label = profile.angle_label(first)
        enter(PipelineState.GENERATING_CANONICAL, first)
        try:
            canonical = await self.generator.generate(
                canonical_prompt(prompts.image_prompt, profile, first),
                request.images.ordered_for(first),
                task="canonical",
                angle=first,
            )
        except GenerationFailure as e:
            logger.error("Canonical angle %s failed: %s", first, e)
            enter(PipelineState.FAILED, first)
            result.invalid_input = isinstance(e, InvalidImageFailure)
            result.failure = AngleResult.failed(
                first, first_label, f"Failed to generate canonical design ({first}): {e}"
            )
            return result

        # Stage 3: design specification
        enter(PipelineState.EXTRACTING_SPEC)
        spec = await self._extract(canonical, profile, result)
        result.spec = spec

        # Stage 4: remaining angles
        results = [AngleResult.success(first, first_label, canonical)]
        for i, angle in enumerate(request.angles.remaining, start=2):
            enter(PipelineState.GENERATING_ANGLE, angle)
            outcome = await self._generate_angle(i, angle, canonical, spec, profile, request)
            if not outcome.ok:
                enter(PipelineState.FAILED, angle)
            results.append(outcome)

        result.results = results
        enter(PipelineState.DONE)
        logger.info(
            "Multi-angle generation complete: %d/%d angles in %.0fms",
            len(result.succeeded),
            len(results),
            (time.perf_counter() - start) * 1000,
        )
        return result

    async def _extract(self, canonical: ImagePayload, profile: CategoryProfile, result: PipelineResult) -> SpecModel:
        if not self.settings.spec_extraction_enabled:
            result.notes.append("Spec extraction disabled; using canonical image as the only anchor")
            return SpecModel.empty()
        if not canonical:
            logger.warning("Canonical image is empty; skipping spec extraction")
            result.notes.append("Canonical image unusable; spec extraction skipped")
            return SpecModel.empty()

        spec = await self.extractor.extract(canonical, profile.display_name)
        if spec.is_empty():
            logger.warning("Empty design specification; falling back to visual-only consistency")
            result.notes.append("Spec extraction returned nothing; using canonical image as the only anchor")
        return spec

    async def _generate_angle(
        self,
        index: int,
        angle: str,
        canonical: ImagePayload,
        spec: SpecModel,
        profile: CategoryProfile,
        request: GenerationRequest,
    ) -> AngleResult:
        label = profile.angle_label(angle)
        prompt = angle_prompt(self.builder.build(spec, label), profile, request.design, angle)
        images = [canonical, *request.images.ordered_for(angle)]
        context = spec_context(spec)
        total = len(request.angles.angles)

        attempts = 1 + max(0, self.settings.angle_retries)
        last_error = ""
        for attempt in range(1, attempts + 1):
            try:
                image = await self.generator.generate(prompt, images, context=context, task="angle", angle=angle)
            except GenerationFailure as e:
                last_error = str(e)
                logger.warning(
                    "Angle %d/%d (%s) attempt %d/%d failed: %s",
                    index, total, angle, attempt, attempts, e,
                )
                continue
            logger.info("Angle %d/%d (%s) generated", index, total, angle)
            return AngleResult.success(angle, label, image)

        return AngleResult.failed(angle, label, f"Failed to generate angle {index}/{total} ({angle}): {last_error}")
