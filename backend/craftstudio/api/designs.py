"""POST /api/designs/generate — multi-angle design generation."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from craftstudio.dependencies import get_client, get_settings
from craftstudio.engine.orchestrator import AngleOrchestrator
from craftstudio.errors import InvalidRequest
from craftstudio.models.design import GenerationRequest, InputImages
from craftstudio.models.requests import GenerateDesignRequest
from craftstudio.models.responses import GenerateDesignResponse
from craftstudio.utils.images import decode_image

router = APIRouter()
logger = logging.getLogger(__name__)


def _build_request(req: GenerateDesignRequest) -> GenerationRequest:
    try:
        images = InputImages(
            template=decode_image(req.template),
            reference=decode_image(req.reference_image) if req.reference_image else None,
            logo=decode_image(req.brand_logo) if req.brand_logo else None,
            angle_templates={angle: decode_image(v) for angle, v in req.angle_templates.items()},
        )
    except ValueError as e:
        raise InvalidRequest(str(e)) from e
    design = req.to_design(has_reference=images.reference is not None, has_logo=images.logo is not None)
    return GenerationRequest.build(design, images, req.angles, scene=req.scene)


@router.post("/designs/generate", response_model=GenerateDesignResponse)
async def generate(
    req: GenerateDesignRequest,
    client=Depends(get_client),
    settings=Depends(get_settings),
) -> GenerateDesignResponse:
    try:
        request = _build_request(req)
    except InvalidRequest as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    result = await AngleOrchestrator(client, settings).run(request)
    if result.failed and result.invalid_input:
        raise HTTPException(status_code=422, detail=result.failure.error)
    if result.failed:
        raise HTTPException(status_code=502, detail=result.failure.error)

    if result.partial:
        logger.warning(
            "Partial result: %d/%d angles generated",
            len(result.succeeded),
            len(result.results),
        )
    return GenerateDesignResponse.from_result(result)
