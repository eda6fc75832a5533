"""Factories and assertion helpers for API tests."""

from __future__ import annotations

import base64
from typing import Any, Dict

ANALYSIS_TEXT = "\n".join(
    [
        "- Название блюда: Греческий салат",
        "- Ингредиенты: огурцы, помидоры, фета, оливки",
        "- Масса: 300 грамм",
        "- Калории: 350 ккал",
        "- Белки: 12 г",
        "- Жиры: 25 г",
        "- Углеводы: 15 г",
        "- Совет: Заправляйте салат лимонным соком.",
    ]
)


def make_entry_payload(**overrides: Any) -> Dict[str, Any]:
    """Return a canonical food entry request payload with optional overrides."""

    payload: Dict[str, Any] = {
        "description": "Греческий салат",
        "ingredients": ["огурцы", "помидоры", "фета"],
        "portion_size": "300 г",
        "calories": 350,
        "protein": 12,
        "carbs": 15,
        "fat": 25,
        "advice": "Заправляйте салат лимонным соком.",
    }
    payload.update(overrides)
    return payload


def make_image_payload(image: bytes = b"\xff\xd8\xff\xe0fake-jpeg", **overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "image_base64": base64.b64encode(image).decode("ascii"),
        "content_type": "image/jpeg",
    }
    payload.update(overrides)
    return payload


def assert_entry(entry: Dict[str, Any], **expected: Any) -> None:
    """Assert the API response entry matches the provided expectations."""

    for key, value in expected.items():
        assert entry.get(key) == value, f"Expected entry {key}={value!r}, saw {entry.get(key)!r}"
