from __future__ import annotations

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Hosting providers expose upper-case variable names (``FIREBASE_API_KEY``),
    # so matching is case-insensitive.
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    firebase_api_key: str
    firebase_project_id: str
    openrouter_api_key: str
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    vision_model: str = "qwen/qwen2.5-vl-72b-instruct:free"
    vision_max_tokens: int = 500
    app_url: str = "http://localhost:3000"
    upstash_redis_rest_url: str
    upstash_redis_rest_token: str
    reference_utc_offset_hours: float = 3.0
    token_cache_seconds: int = 300
    default_daily_goal: int = 2000
    max_image_bytes: int = 10 * 1024 * 1024


@lru_cache()
def get_settings() -> Settings:
    return Settings()
