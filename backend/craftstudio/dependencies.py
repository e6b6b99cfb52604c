"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import HTTPException, Request

from craftstudio.config import settings


def get_settings():
    return settings


def get_client(request: Request):
    """The process-wide Gemini client built in the app lifespan."""
    client = getattr(request.app.state, "client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="LLM not configured — set GEMINI_API_KEY in .env")
    return client
