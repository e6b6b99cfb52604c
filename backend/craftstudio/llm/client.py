"""Gemini client — LangChain chat models for text/vision, google-genai for image generation.

One ``GeminiClient`` is built at process start and shared by every request.
It holds configuration and SDK handles only, so concurrent use is safe.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from google import genai
from google.genai import types
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from craftstudio.config import Settings
from craftstudio.errors import ModelCallError
from craftstudio.llm.model_router import get_model_for_task, get_timeout_for_task
from craftstudio.models.images import ImagePayload

logger = logging.getLogger(__name__)


def message_text(content: Any) -> str:
    """Flatten a chat message content (str or list of blocks) into text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        chunks = []
        for block in content:
            if isinstance(block, str):
                chunks.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                chunks.append(block.get("text", ""))
        return "".join(chunks)
    return str(content or "")


class GeminiClient:
    """Explicitly constructed handle on the three model calls the pipeline makes."""

    def __init__(self, settings: Settings) -> None:
        if not settings.gemini_api_key:
            raise ValueError("GEMINI_API_KEY is not set")
        self.settings = settings
        http_options = types.HttpOptions(base_url=settings.gemini_base_url) if settings.gemini_base_url else None
        self._genai = genai.Client(api_key=settings.gemini_api_key, http_options=http_options)

    def _chat_model(self, task: str, temperature: float | None = None, max_tokens: int | None = None):
        kwargs: dict[str, Any] = {
            "model": get_model_for_task(task, self.settings),
            "google_api_key": self.settings.gemini_api_key,
        }
        if self.settings.gemini_base_url:
            kwargs["base_url"] = self.settings.gemini_base_url
        if temperature is not None:
            kwargs["temperature"] = temperature
        if max_tokens is not None:
            kwargs["max_output_tokens"] = max_tokens
        return ChatGoogleGenerativeAI(**kwargs)

    async def _bounded(self, task: str, coro):
        timeout = get_timeout_for_task(task, self.settings)
        try:
            return await asyncio.wait_for(coro, timeout=timeout)
        except asyncio.TimeoutError as e:
            raise ModelCallError(task, f"timed out after {timeout:.0f}s") from e
        except ModelCallError:
            raise
        except Exception as e:
            raise ModelCallError(task, str(e)) from e

    async def generate_text(self, system: str, prompt: str) -> str:
        """One text-generation call; returns the raw response text."""
        llm = self._chat_model("optimize")
        messages = [SystemMessage(content=system), HumanMessage(content=prompt)]
        response = await self._bounded("optimize", llm.ainvoke(messages))
        text = message_text(response.content)
        if not text.strip():
            raise ModelCallError("optimize", "empty text response")
        return text

    async def analyze_image(self, instruction: str, image: ImagePayload) -> str:
        """One low-temperature vision call over a single image."""
        llm = self._chat_model(
            "extract",
            temperature=self.settings.extraction_temperature,
            max_tokens=self.settings.extraction_max_tokens,
        )
        message = HumanMessage(
            content=[
                {"type": "text", "text": instruction},
                {"type": "image_url", "image_url": image.to_data_url()},
            ]
        )
        response = await self._bounded("extract", llm.ainvoke([message]))
        text = message_text(response.content)
        if not text.strip():
            raise ModelCallError("extract", "empty text response")
        return text

    async def generate_image(self, texts: list[str], images: list[ImagePayload], task: str = "canonical"):
        """One multimodal image-generation call; returns the raw SDK response.

        Parts are sent in order: every text block, then every image.
        """
        parts = [types.Part.from_text(text=t) for t in texts]
        parts.extend(types.Part.from_bytes(data=img.data, mime_type=img.mime_type) for img in images)
        logger.debug("Image call (%s): %d text parts, %d image parts", task, len(texts), len(images))
        return await self._bounded(
            task,
            self._genai.aio.models.generate_content(
                model=get_model_for_task(task, self.settings),
                contents=[types.Content(role="user", parts=parts)],
                config=types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"]),
            ),
        )
