"""POST /api/scenes/generate — model-scene image for a generated design."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from craftstudio.dependencies import get_client
from craftstudio.engine.model_scene import ModelSceneGenerator
from craftstudio.errors import GenerationFailure, InvalidImageFailure, InvalidRequest
from craftstudio.models.requests import GenerateSceneRequest
from craftstudio.models.responses import GenerateSceneResponse
from craftstudio.utils.images import decode_image

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/scenes/generate", response_model=GenerateSceneResponse)
async def generate_scene(req: GenerateSceneRequest, client=Depends(get_client)) -> GenerateSceneResponse:
    try:
        product_image = decode_image(req.product_image)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    try:
        result = await ModelSceneGenerator(client).generate(
            product_image,
            req.to_design(),
            scene=req.scene,
            view_angle=req.view_angle,
            scene_prompt=req.scene_prompt,
        )
    except (InvalidRequest, InvalidImageFailure) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except GenerationFailure as e:
        logger.error("Model scene failed: %s", e)
        raise HTTPException(status_code=502, detail=f"Failed to generate model scene: {e}") from e
    return GenerateSceneResponse.from_result(result)
