"""FastAPI app factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from craftstudio.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.craftstudio_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared Gemini client once; it is read-only afterwards."""
    app.state.client = None
    if settings.gemini_api_key:
        from craftstudio.llm.client import GeminiClient

        app.state.client = GeminiClient(settings)
        logger.info("Gemini client ready (image model %s)", settings.model_image)
    else:
        logger.warning("GEMINI_API_KEY not set — generation endpoints will return 503")
    yield
    app.state.client = None


def create_app() -> FastAPI:
    app = FastAPI(
        title="Craft Studio",
        description="Multi-angle product design generation with cross-angle consistency",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from craftstudio.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("craftstudio.main:app", host="0.0.0.0", port=8000)
