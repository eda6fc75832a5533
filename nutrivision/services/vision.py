from __future__ import annotations

import base64
import logging
from typing import Any, AsyncIterator, Dict

import httpx
from fastapi import Depends

from ..settings import Settings, get_settings
from .interfaces import HTTPClient, VisionAPI

logger = logging.getLogger(__name__)

FOOD_ANALYSIS_PROMPT = """Ты диетолог, тебе нужно точно определять калории.
Проанализируй изображение еды и ответь на вопросы:
1. Что за блюдо на картинке? Перечисли все ингредиенты.
2. Оцени массу порции в граммах без текста в граммах.
3. Подсчитай примерную калорийность и БЖУ.
4. Добавь полезный совет по питанию.
Формат вывода:
- Название блюда:
- Ингредиенты:
- Масса:
- Калории:
- Белки:
- Жиры:
- Углеводы:
- Совет:"""


class VisionServiceError(RuntimeError):
    """Raised when the vision model cannot be reached or rejects the request."""


def to_data_url(image: bytes, content_type: str) -> str:
    encoded = base64.b64encode(image).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


class OpenRouterVisionClient(VisionAPI):
    """Vision-language model client using OpenRouter's chat completions API."""

    def __init__(self, http_client: HTTPClient, settings: Settings) -> None:
        self._http_client = http_client
        self._settings = settings

    def _build_payload(self, image: bytes, content_type: str) -> Dict[str, Any]:
        return {
            "model": self._settings.vision_model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": FOOD_ANALYSIS_PROMPT},
                        {
                            "type": "image_url",
                            "image_url": {"url": to_data_url(image, content_type)},
                        },
                    ],
                }
            ],
            "max_tokens": self._settings.vision_max_tokens,
        }

    async def describe_food(self, image: bytes, content_type: str) -> str:
        """Send the photo with the dietitian prompt and return the answer text."""

        headers = {
            "Authorization": f"Bearer {self._settings.openrouter_api_key}",
            "HTTP-Referer": self._settings.app_url,
            "X-Title": "NutriVision",
            "Content-Type": "application/json",
        }
        try:
            response = await self._http_client.post(
                f"{self._settings.openrouter_base_url.rstrip('/')}/chat/completions",
                headers=headers,
                json=self._build_payload(image, content_type),
            )
        except httpx.HTTPError as exc:
            logger.exception("Vision request failed")
            raise VisionServiceError(f"Vision service unavailable: {exc}") from exc

        if response.status_code >= 400:
            logger.error(
                "Vision service returned %s: %s", response.status_code, response.text
            )
            raise VisionServiceError(
                f"Vision service error {response.status_code}: {response.text}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise VisionServiceError("Vision service returned invalid JSON") from exc

        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return ""
        message = choices[0].get("message")
        content = message.get("content") if isinstance(message, dict) else None
        return content if isinstance(content, str) else ""


async def get_vision_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[VisionAPI]:
    """Dependency yielding a vision client with its own HTTP session."""

    async with httpx.AsyncClient(timeout=60.0) as http_client:
        yield OpenRouterVisionClient(http_client, settings)
