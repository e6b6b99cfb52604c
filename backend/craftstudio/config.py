"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_base_url: str = ""
    craftstudio_env: str = "development"
    craftstudio_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Model routing
    model_text: str = "gemini-2.0-flash"
    model_vision: str = "gemini-3-pro-preview"
    model_image: str = "gemini-2.5-flash-image"

    # Per-call timeouts (seconds)
    text_timeout_s: float = 60.0
    vision_timeout_s: float = 90.0
    image_timeout_s: float = 180.0

    # Spec extraction
    spec_extraction_enabled: bool = True
    extraction_temperature: float = 0.1
    extraction_max_tokens: int = 2048

    # Extra attempts per non-canonical angle (0 = single attempt)
    angle_retries: int = 0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ()}


settings = Settings()
