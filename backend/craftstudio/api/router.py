"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from craftstudio.api import designs, health, prompts, scenes

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(prompts.router)
api_router.include_router(designs.router)
api_router.include_router(scenes.router)
