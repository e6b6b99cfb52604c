"""Image generation primitive shared by the canonical and per-angle stages."""

from __future__ import annotations

import base64
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from craftstudio.errors import GenerationFailure, InvalidImageFailure, ModelCallError
from craftstudio.models.images import ImagePayload

if TYPE_CHECKING:
    from craftstudio.llm.client import GeminiClient

logger = logging.getLogger(__name__)

_INVALID_INPUT_MARKERS = ("INVALID_ARGUMENT", "not valid")


def _normalize_inline_data(data: Any) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return base64.b64decode(data)
    raise TypeError(f"Unsupported inline data type: {type(data)}")


def _iter_parts(response: Any):
    parts = getattr(response, "parts", None)
    if parts:
        yield from parts
        return
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        if content is None:
            continue
        yield from getattr(content, "parts", None) or []


def extract_image_part(response: Any) -> ImagePayload | None:
    """First inline image in a generate_content response, or None."""
    for part in _iter_parts(response):
        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            mime = getattr(inline, "mime_type", None) or "image/png"
            return ImagePayload(data=_normalize_inline_data(inline.data), mime_type=mime)
    return None


def summarize_response(response: Any) -> str:
    """Short description of a response that carried no image, for error text."""
    kinds = []
    texts = []
    for part in _iter_parts(response):
        if getattr(part, "inline_data", None):
            kinds.append("inline_data")
        elif getattr(part, "text", None):
            kinds.append("text")
            texts.append(part.text.strip())
        else:
            kinds.append(type(part).__name__)
    summary = f"parts={','.join(kinds) or 'none'}"
    reasons = [
        str(getattr(c, "finish_reason", None))
        for c in getattr(response, "candidates", None) or []
        if getattr(c, "finish_reason", None)
    ]
    if reasons:
        summary += f", finish_reason={','.join(reasons)}"
    if texts:
        summary += f", text={' '.join(texts)[:200]!r}"
    return summary


class CanonicalGenerator:
    def __init__(self, client: GeminiClient) -> None:
        self.client = client

    async def generate(
        self,
        prompt: str,
        images: Sequence[ImagePayload],
        context: Sequence[str] = (),
        task: str = "canonical",
        angle: str = "",
    ) -> ImagePayload:
        """Prompt first, then context texts, then images. Raises GenerationFailure."""
        try:
            response = await self.client.generate_image([prompt, *context], list(images), task=task)
        except Exception as e:
            upstream = e.upstream if isinstance(e, ModelCallError) else str(e)
            if any(marker in upstream for marker in _INVALID_INPUT_MARKERS):
                raise InvalidImageFailure(
                    "The uploaded image is not valid or supported. "
                    f"Please upload a clear PNG or JPG template image. ({upstream})",
                    angle=angle,
                ) from e
            raise GenerationFailure(upstream, angle=angle) from e

        try:
            image = extract_image_part(response)
        except (TypeError, ValueError) as e:
            raise GenerationFailure(f"Unreadable image data in model response: {e}", angle=angle) from e
        if image is None:
            raise GenerationFailure(
                f"No image data in model response ({summarize_response(response)})", angle=angle
            )
        logger.debug("Image generated: %s, %d bytes", image.mime_type, len(image.data))
        return image
