"""Task → model selection. Text model for prompt writing, vision model for spec extraction, image model for renders and scenes."""

from __future__ import annotations

from craftstudio.config import Settings, settings as default_settings

_TASK_MODEL_MAP = {
    "optimize": "text",
    "extract": "vision",
    "canonical": "image",
    "angle": "image",
    "scene": "image",
}


def get_model_for_task(task: str, settings: Settings | None = None) -> str:
    cfg = settings or default_settings
    tier = _TASK_MODEL_MAP.get(task, "text")
    if tier == "vision":
        return cfg.model_vision
    elif tier == "image":
        return cfg.model_image
    else:
        return cfg.model_text


def get_timeout_for_task(task: str, settings: Settings | None = None) -> float:
    cfg = settings or default_settings
    tier = _TASK_MODEL_MAP.get(task, "text")
    if tier == "vision":
        return cfg.vision_timeout_s
    elif tier == "image":
        return cfg.image_timeout_s
    else:
        return cfg.text_timeout_s
