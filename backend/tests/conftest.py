"""Shared test fixtures and a scripted stand-in for the Gemini client."""

from __future__ import annotations

import base64
import json
from types import SimpleNamespace

import pytest

from craftstudio.models.design import DesignInputs, GenerationRequest, InputImages
from craftstudio.models.images import ImagePayload

# 1x1 transparent PNG
PNG_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
PNG_BYTES = base64.b64decode(PNG_B64)
# the same PNG padded past the minimum upload size; decoders ignore trailing bytes
TEMPLATE_B64 = base64.b64encode(PNG_BYTES + b"\0" * 128).decode("ascii")

TEMPLATE = ImagePayload(b"template-bytes" * 10, "image/png")
REFERENCE = ImagePayload(b"reference-bytes", "image/jpeg")
LOGO = ImagePayload(b"logo-bytes", "image/png")

HOLIDAY_SPEC = {
    "primaryColors": ["burgundy", "gold"],
    "secondaryColors": ["cream white"],
    "patterns": ["snowflake motif across the strap"],
    "textures": ["soft brushed canvas"],
    "materials": ["Canvas", "EVA foam sole"],
    "brandingElements": [],
    "decorativeElements": ["gold piping along the edge"],
    "structuralFeatures": ["wide single strap"],
    "overallStyle": "festive, cozy holiday aesthetic",
}

OPTIMIZED_JSON = json.dumps({
    "design_prompt": "A burgundy and gold canvas slipper with snowflake motifs.",
    "scene_prompt": "A cozy living room with a model wearing the slippers.",
    "debug_notes": "Leaned into holiday palette",
})


def image_response(data: bytes = b"generated-image", mime_type: str = "image/png") -> SimpleNamespace:
    """Minimal stand-in for a google-genai response carrying one image part."""
    part = SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)
    return SimpleNamespace(parts=[part], candidates=[])


def text_response(text: str = "I cannot render that.") -> SimpleNamespace:
    part = SimpleNamespace(inline_data=None, text=text)
    candidate = SimpleNamespace(content=SimpleNamespace(parts=[part]), finish_reason="STOP")
    return SimpleNamespace(parts=None, candidates=[candidate])


class FakeClient:
    """Records every call and replays scripted outcomes.

    ``images`` is consumed one entry per generate_image call; an Exception
    entry is raised instead of returned. When it runs out, a default image
    response is returned.
    """

    def __init__(
        self,
        text: str | Exception = OPTIMIZED_JSON,
        vision: str | Exception | None = None,
        images: list | None = None,
    ) -> None:
        self.text = text
        self.vision = vision if vision is not None else json.dumps(HOLIDAY_SPEC)
        self.images = list(images or [])
        self.text_calls: list[tuple[str, str]] = []
        self.vision_calls: list[tuple[str, ImagePayload]] = []
        self.image_calls: list[dict] = []

    async def generate_text(self, system: str, prompt: str) -> str:
        self.text_calls.append((system, prompt))
        if isinstance(self.text, Exception):
            raise self.text
        return self.text

    async def analyze_image(self, instruction: str, image: ImagePayload) -> str:
        self.vision_calls.append((instruction, image))
        if isinstance(self.vision, Exception):
            raise self.vision
        return self.vision

    async def generate_image(self, texts: list[str], images: list[ImagePayload], task: str = "canonical"):
        self.image_calls.append({"texts": list(texts), "images": list(images), "task": task})
        n = len(self.image_calls)
        outcome = self.images.pop(0) if self.images else image_response(f"image-{n}".encode())
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def holiday_design() -> DesignInputs:
    return DesignInputs(
        category="slipper",
        theme="Holiday Season",
        style="Festive",
        color="custom:burgundy+gold",
        material="Canvas",
    )


@pytest.fixture
def input_images() -> InputImages:
    return InputImages(template=TEMPLATE, reference=REFERENCE, logo=LOGO)


def make_request(design: DesignInputs, angles: list[str], images: InputImages | None = None) -> GenerationRequest:
    return GenerationRequest.build(design, images or InputImages(template=TEMPLATE), angles)
