"""Stage 3 — extract a structured design spec from the canonical image.

This is the only stage that reads model output as structured data, so it
never raises: every failure collapses to ``SpecModel.empty()`` and the
remaining angles lean on the canonical image alone.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from pydantic import ValidationError

from craftstudio.llm.prompts import EXTRACTION_TEMPLATE
from craftstudio.models.images import ImagePayload
from craftstudio.models.spec import SpecModel
from craftstudio.utils.json_extract import find_json_object

if TYPE_CHECKING:
    from craftstudio.llm.client import GeminiClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Parsed:
    spec: SpecModel


@dataclass(frozen=True)
class Unparseable:
    reason: str


ParseOutcome = Union[Parsed, Unparseable]


def parse_spec(text: str | None) -> ParseOutcome:
    """Isolate the first balanced JSON object in *text* and validate it as a SpecModel."""
    if not text or not text.strip():
        return Unparseable("empty response")
    raw = find_json_object(text)
    if raw is None:
        return Unparseable("no JSON object in response")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        return Unparseable(f"invalid JSON: {e}")
    if not isinstance(data, dict):
        return Unparseable("JSON is not an object")
    try:
        return Parsed(SpecModel.model_validate(data))
    except ValidationError as e:
        return Unparseable(f"schema mismatch: {e.error_count()} error(s)")


def coerce_spec(outcome: ParseOutcome) -> SpecModel:
    if isinstance(outcome, Parsed):
        return outcome.spec
    return SpecModel.empty()


class SpecExtractor:
    def __init__(self, client: GeminiClient) -> None:
        self.client = client

    async def extract(self, canonical: ImagePayload, category_label: str) -> SpecModel:
        instruction = EXTRACTION_TEMPLATE.format(product=category_label.lower())
        try:
            text = await self.client.analyze_image(instruction, canonical)
        except Exception as e:
            logger.warning("Spec extraction call failed: %s", e)
            return SpecModel.empty()

        logger.debug("Spec extraction raw response: %s...", (text or "")[:200])
        outcome = parse_spec(text)
        if isinstance(outcome, Unparseable):
            logger.warning("Spec extraction unparseable: %s", outcome.reason)
        else:
            spec = outcome.spec
            logger.info(
                "Spec extracted: %d colors, %d patterns, %d branding elements",
                len(spec.colors),
                len(spec.patterns),
                len(spec.branding_elements),
            )
        return coerce_spec(outcome)
