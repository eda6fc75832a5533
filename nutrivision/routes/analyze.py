from __future__ import annotations

import base64
import binascii
import logging
from typing import Tuple

from fastapi import APIRouter, Depends, HTTPException

from ..application.nutrition import AnalyzeFoodImageUseCase
from ..models.nutrition import FoodAnalysisRequest, FoodAnalysisResponse
from ..platform.wiring import get_analyze_food_image_use_case
from ..services.vision import VisionServiceError
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)

router: APIRouter = APIRouter()


def decode_image_or_400(request: FoodAnalysisRequest, max_bytes: int) -> Tuple[bytes, str]:
    """Return the image bytes and MIME type, accepting bare base64 or a data URL."""

    payload = request.image_base64.strip()
    content_type = request.content_type
    if payload.startswith("data:"):
        header, _, payload = payload.partition(",")
        content_type = header[len("data:"):].split(";", 1)[0] or content_type

    if not content_type.startswith("image/"):
        raise HTTPException(
            status_code=400, detail={"error": f"Unsupported content type: {content_type}"}
        )
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(
            status_code=400, detail={"error": f"Invalid base64 image: {exc}"}
        ) from exc
    if not data:
        raise HTTPException(status_code=400, detail={"error": "Empty image"})
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail={"error": f"Image too large: {len(data)} bytes > {max_bytes}"},
        )
    return data, content_type


@router.post("/food-analysis", response_model=FoodAnalysisResponse)
async def analyze_food(
    request: FoodAnalysisRequest,
    settings: Settings = Depends(get_settings),
    use_case: AnalyzeFoodImageUseCase = Depends(get_analyze_food_image_use_case),
) -> FoodAnalysisResponse:
    image, content_type = decode_image_or_400(request, settings.max_image_bytes)
    try:
        return await use_case(image, content_type)
    except VisionServiceError as exc:
        logger.exception("Food analysis failed")
        raise HTTPException(status_code=502, detail={"error": str(exc)}) from exc
