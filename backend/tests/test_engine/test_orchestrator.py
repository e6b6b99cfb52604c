"""Tests for the angle orchestrator state machine."""

from __future__ import annotations

import asyncio
import json

from craftstudio.config import Settings
from craftstudio.engine.orchestrator import AngleOrchestrator, PipelineState, spec_context
from craftstudio.engine.prompt_optimizer import FALLBACK_NOTE
from craftstudio.errors import GenerationFailure, ModelCallError
from craftstudio.models.design import DesignInputs, InputImages
from craftstudio.models.images import ImagePayload
from craftstudio.models.spec import UNEXTRACTED_STYLE, SpecModel
from tests.conftest import HOLIDAY_SPEC, LOGO, REFERENCE, TEMPLATE, FakeClient, image_response, make_request


def _run(client, request, **settings_overrides):
    settings = Settings(gemini_api_key="test", **settings_overrides)
    return asyncio.run(AngleOrchestrator(client, settings).run(request))


def _must_use(text: str) -> str:
    return text[text.index("MUST USE"):text.index("FORBIDDEN")]


class TestHappyPath:
    def test_holiday_slipper_two_angles(self, holiday_design):
        client = FakeClient()
        result = _run(client, make_request(holiday_design, ["top", "45-degree"]))

        assert not result.failed
        assert [r.angle for r in result.results] == ["top", "45-degree"]
        assert all(r.ok for r in result.results)
        # angle 1 is the canonical image itself
        assert result.results[0].image.data == b"image-1"
        assert result.results[1].label == "45° View"
        assert result.scene_prompt.startswith("A cozy living room")

        angle_call = client.image_calls[1]
        block = _must_use(angle_call["texts"][0])
        assert "burgundy" in block
        assert "gold" in block
        assert angle_call["task"] == "angle"

    def test_stage_order_and_trace(self, holiday_design):
        client = FakeClient()
        result = _run(client, make_request(holiday_design, ["top", "45-degree", "side"]))
        assert result.trace == [
            PipelineState.IDLE.value,
            PipelineState.OPTIMIZING_PROMPT.value,
            f"{PipelineState.GENERATING_CANONICAL.value}:top",
            PipelineState.EXTRACTING_SPEC.value,
            f"{PipelineState.GENERATING_ANGLE.value}:45-degree",
            f"{PipelineState.GENERATING_ANGLE.value}:side",
            PipelineState.DONE.value,
        ]
        assert len(client.text_calls) == 1
        assert len(client.vision_calls) == 1
        assert len(client.image_calls) == 3

    def test_angle_call_gets_canonical_first_then_inputs(self, holiday_design):
        client = FakeClient()
        images = InputImages(template=TEMPLATE, reference=REFERENCE, logo=LOGO)
        _run(client, make_request(holiday_design, ["top", "side"], images))

        canonical_call, angle_call = client.image_calls
        assert canonical_call["images"] == [TEMPLATE, REFERENCE, LOGO]
        assert angle_call["images"][0].data == b"image-1"
        assert angle_call["images"][1:] == [TEMPLATE, REFERENCE, LOGO]
        # spec JSON travels as a second text part
        assert angle_call["texts"][1].startswith("DESIGN SPECIFICATION (JSON):")

    def test_per_angle_template_override(self, holiday_design):
        side_template = ImagePayload(b"side-template" * 10)
        images = InputImages(template=TEMPLATE, angle_templates={"side": side_template})
        client = FakeClient()
        _run(client, make_request(holiday_design, ["top", "side"], images))
        assert client.image_calls[0]["images"] == [TEMPLATE]
        assert client.image_calls[1]["images"][1] == side_template

    def test_canonical_prompt_has_shape_rules_and_camera(self, holiday_design):
        client = FakeClient()
        _run(client, make_request(holiday_design, ["top", "45-degree"]))
        prompt = client.image_calls[0]["texts"][0]
        assert prompt.startswith("A burgundy and gold canvas slipper")
        assert "CRITICAL SHAPE PRESERVATION RULES" in prompt
        assert "Top-down view" in prompt


class TestCanonicalFailure:
    def test_fatal_and_no_further_calls(self, holiday_design):
        client = FakeClient(images=[ModelCallError("canonical", "network unreachable")])
        result = _run(client, make_request(holiday_design, ["top", "45-degree", "side", "bottom"]))

        assert result.failed
        assert result.results == []
        assert result.failure.angle == "top"
        assert "network unreachable" in result.failure.error
        assert client.vision_calls == []
        assert len(client.image_calls) == 1
        assert result.trace[-1] == f"{PipelineState.FAILED.value}:top"
        assert not result.invalid_input

    def test_rejected_upload_marked_invalid_input(self, holiday_design):
        client = FakeClient(images=[ModelCallError("canonical", "400 INVALID_ARGUMENT: image not decodable")])
        result = _run(client, make_request(holiday_design, ["top", "side"]))
        assert result.failed
        assert result.invalid_input
        assert "not valid or supported" in result.failure.error


class TestPartialSuccess:
    def test_angle_three_of_four_fails(self, holiday_design):
        client = FakeClient(images=[
            image_response(b"top"),
            image_response(b"45"),
            GenerationFailure("model overloaded"),
            image_response(b"bottom"),
        ])
        result = _run(client, make_request(holiday_design, ["top", "45-degree", "side", "bottom"]))

        assert not result.failed
        assert result.partial
        assert [r.angle for r in result.results] == ["top", "45-degree", "side", "bottom"]
        assert [r.ok for r in result.results] == [True, True, False, True]
        assert result.results[2].image is None
        assert "3/4" in result.results[2].error
        assert "model overloaded" in result.results[2].error
        assert result.results[3].image.data == b"bottom"
        assert f"{PipelineState.FAILED.value}:side" in result.trace
        assert result.trace[-1] == PipelineState.DONE.value

    def test_retries_recover_angle(self, holiday_design):
        client = FakeClient()
        client.images = [image_response(b"top"), ModelCallError("angle", "timed out after 180s"), image_response(b"45")]
        result = _run(client, make_request(holiday_design, ["top", "45-degree"]), angle_retries=1)
        assert all(r.ok for r in result.results)
        assert result.results[1].image.data == b"45"
        assert len(client.image_calls) == 3


class TestDegradedSpec:
    def test_unparseable_spec_still_generates_angles(self, holiday_design):
        client = FakeClient(vision="The image shows a slipper. No structured data available.")
        result = _run(client, make_request(holiday_design, ["top", "45-degree", "side"]))

        assert result.spec.overall_style == UNEXTRACTED_STYLE
        assert result.spec.is_empty()
        assert all(r.ok for r in result.results)
        assert any("only anchor" in note for note in result.notes)
        angle_call = client.image_calls[1]
        assert "MUST USE" not in angle_call["texts"][0]
        assert len(angle_call["texts"]) == 1
        assert angle_call["images"][0].data == b"image-1"

    def test_empty_canonical_skips_extraction(self, holiday_design):
        class EmptyCanonical:
            def __init__(self):
                self.calls = 0

            async def generate(self, prompt, images, context=(), task="canonical", angle=""):
                self.calls += 1
                if task == "canonical":
                    return ImagePayload(b"")
                return ImagePayload(b"angle")

        client = FakeClient()
        generator = EmptyCanonical()
        settings = Settings(gemini_api_key="test")
        orchestrator = AngleOrchestrator(client, settings, generator=generator)
        result = asyncio.run(orchestrator.run(make_request(holiday_design, ["top", "side"])))

        assert client.vision_calls == []
        assert result.spec == SpecModel.empty()
        assert result.results[1].ok
        assert generator.calls == 2

    def test_extraction_disabled(self, holiday_design):
        client = FakeClient()
        result = _run(client, make_request(holiday_design, ["top", "side"]), spec_extraction_enabled=False)
        assert client.vision_calls == []
        assert result.spec.is_empty()
        assert len(result.results) == 2


class TestPromptFallback:
    def test_optimizer_failure_never_surfaces(self, holiday_design):
        client = FakeClient(text=ModelCallError("optimize", "500 internal"))
        result = _run(client, make_request(holiday_design, ["top", "45-degree"]))
        assert not result.failed
        assert result.debug_notes.startswith(FALLBACK_NOTE)
        assert client.image_calls[0]["texts"][0].startswith("Create a professional slippers design concept")
        assert result.scene_prompt.startswith("Create a professional scene featuring the slippers design")


class TestIsolation:
    def test_concurrent_runs_do_not_share_state(self):
        client_a = FakeClient()
        client_b = FakeClient(vision=json.dumps(dict(HOLIDAY_SPEC, primaryColors=["teal"], secondaryColors=[])))
        settings = Settings(gemini_api_key="test")
        design = DesignInputs(category="shoes", color="teal")

        async def both():
            return await asyncio.gather(
                AngleOrchestrator(client_a, settings).run(make_request(design, ["top", "side"])),
                AngleOrchestrator(client_b, settings).run(make_request(design, ["front", "back", "detail"])),
            )

        a, b = asyncio.run(both())
        assert [r.angle for r in a.results] == ["top", "side"]
        assert [r.angle for r in b.results] == ["front", "back", "detail"]
        assert b.spec.primary_colors == ["teal"]
        assert a.spec.primary_colors == ["burgundy", "gold"]


def test_spec_context_empty_for_empty_spec():
    assert spec_context(SpecModel.empty()) == []
    assert spec_context(SpecModel(primary_colors=["red"]))[0].endswith("}")
