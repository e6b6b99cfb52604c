"""POST /api/prompts/optimize — run only the prompt-optimization stage."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from craftstudio.dependencies import get_client
from craftstudio.engine.prompt_optimizer import PromptOptimizer
from craftstudio.models.requests import OptimizePromptRequest
from craftstudio.models.responses import OptimizePromptResponse

router = APIRouter()


@router.post("/prompts/optimize", response_model=OptimizePromptResponse)
async def optimize(req: OptimizePromptRequest, client=Depends(get_client)) -> OptimizePromptResponse:
    design = req.to_design(req.has_reference_image, req.has_brand_logo)
    prompts = await PromptOptimizer(client).optimize(design, req.scene)
    return OptimizePromptResponse(
        image_prompt=prompts.image_prompt,
        scene_prompt=prompts.scene_prompt,
        debug_notes=prompts.debug_notes,
    )
