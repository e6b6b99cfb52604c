"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

from craftstudio.config import settings
from craftstudio.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        client_configured=getattr(request.app.state, "client", None) is not None,
        models={
            "text": settings.model_text,
            "vision": settings.model_vision,
            "image": settings.model_image,
        },
    )


@router.get("/categories")
async def categories() -> list[dict]:
    from craftstudio.engine.catalog import catalog_summary

    return catalog_summary()


@router.get("/prompts")
async def prompts() -> dict[str, str]:
    from craftstudio.llm.prompts import get_all_templates

    return get_all_templates()
