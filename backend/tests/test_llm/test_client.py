"""Tests for model routing and the Gemini client wrapper (no network)."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from craftstudio.config import Settings
from craftstudio.errors import ModelCallError
from craftstudio.llm.client import GeminiClient, message_text
from craftstudio.llm.model_router import get_model_for_task, get_timeout_for_task
from craftstudio.models.images import ImagePayload


def _settings(**overrides) -> Settings:
    return Settings(gemini_api_key="test-key", **overrides)


class TestModelRouter:
    def test_tasks_map_to_tiers(self):
        cfg = _settings(model_text="t", model_vision="v", model_image="i")
        assert get_model_for_task("optimize", cfg) == "t"
        assert get_model_for_task("extract", cfg) == "v"
        assert get_model_for_task("canonical", cfg) == "i"
        assert get_model_for_task("angle", cfg) == "i"
        assert get_model_for_task("scene", cfg) == "i"

    def test_unknown_task_uses_text_model(self):
        cfg = _settings(model_text="t")
        assert get_model_for_task("something-else", cfg) == "t"

    def test_timeouts(self):
        cfg = _settings(text_timeout_s=1, vision_timeout_s=2, image_timeout_s=3)
        assert get_timeout_for_task("optimize", cfg) == 1
        assert get_timeout_for_task("extract", cfg) == 2
        assert get_timeout_for_task("angle", cfg) == 3


class TestMessageText:
    def test_string(self):
        assert message_text("hello") == "hello"

    def test_blocks(self):
        content = [{"type": "text", "text": "a"}, {"type": "image_url", "image_url": "x"}, "b"]
        assert message_text(content) == "ab"

    def test_none(self):
        assert message_text(None) == ""


class TestGeminiClient:
    def test_requires_key(self):
        with pytest.raises(ValueError):
            GeminiClient(Settings(gemini_api_key=""))

    def test_timeout_maps_to_model_call_error(self):
        client = GeminiClient(_settings(text_timeout_s=0.01))

        async def slow():
            await asyncio.sleep(1)

        with pytest.raises(ModelCallError, match="timed out"):
            asyncio.run(client._bounded("optimize", slow()))

    def test_sdk_error_wrapped(self):
        client = GeminiClient(_settings())

        async def boom():
            raise RuntimeError("503 UNAVAILABLE")

        with pytest.raises(ModelCallError) as exc_info:
            asyncio.run(client._bounded("canonical", boom()))
        assert exc_info.value.task == "canonical"
        assert exc_info.value.upstream == "503 UNAVAILABLE"


class _RecordingChat:
    def __init__(self, content):
        self.content = content
        self.messages = None

    async def ainvoke(self, messages):
        self.messages = messages
        return SimpleNamespace(content=self.content)


class TestCallLayout:
    def test_image_call_parts_and_config(self):
        client = GeminiClient(_settings(model_image="img-model"))
        calls = []

        async def generate_content(**kwargs):
            calls.append(kwargs)
            return "raw-response"

        client._genai = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content)))
        template = ImagePayload(b"template", "image/png")
        logo = ImagePayload(b"logo", "image/jpeg")

        response = asyncio.run(client.generate_image(["PROMPT", "CONTEXT"], [template, logo], task="angle"))

        assert response == "raw-response"
        call = calls[0]
        assert call["model"] == "img-model"
        assert call["config"].response_modalities == ["TEXT", "IMAGE"]
        (content,) = call["contents"]
        assert content.role == "user"
        parts = content.parts
        assert [p.text for p in parts[:2]] == ["PROMPT", "CONTEXT"]
        assert [(p.inline_data.data, p.inline_data.mime_type) for p in parts[2:]] == [
            (b"template", "image/png"),
            (b"logo", "image/jpeg"),
        ]

    def test_vision_call_message_layout(self):
        client = GeminiClient(_settings())
        chat = _RecordingChat('{"primaryColors": []}')
        built = []

        def chat_model(task, temperature=None, max_tokens=None):
            built.append((task, temperature, max_tokens))
            return chat

        client._chat_model = chat_model
        image = ImagePayload(b"\x89PNG", "image/png")
        text = asyncio.run(client.analyze_image("EXTRACT", image))

        assert text == '{"primaryColors": []}'
        assert built == [("extract", 0.1, 2048)]
        (message,) = chat.messages
        assert isinstance(message, HumanMessage)
        assert message.content == [
            {"type": "text", "text": "EXTRACT"},
            {"type": "image_url", "image_url": image.to_data_url()},
        ]

    def test_text_call_messages(self):
        client = GeminiClient(_settings())
        chat = _RecordingChat([{"type": "text", "text": "done"}])
        client._chat_model = lambda task, temperature=None, max_tokens=None: chat

        assert asyncio.run(client.generate_text("SYSTEM", "USER")) == "done"
        system, human = chat.messages
        assert isinstance(system, SystemMessage) and system.content == "SYSTEM"
        assert isinstance(human, HumanMessage) and human.content == "USER"

    def test_empty_text_response_raises(self):
        client = GeminiClient(_settings())
        client._chat_model = lambda task, temperature=None, max_tokens=None: _RecordingChat("   ")
        with pytest.raises(ModelCallError, match="empty text response"):
            asyncio.run(client.generate_text("SYSTEM", "USER"))

    def test_extraction_chat_model_settings(self):
        client = GeminiClient(_settings(model_vision="vision-model"))
        llm = client._chat_model("extract", temperature=0.1, max_tokens=2048)
        assert llm.model.endswith("vision-model")
        assert llm.temperature == 0.1
        assert llm.max_output_tokens == 2048
