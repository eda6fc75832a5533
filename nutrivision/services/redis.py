"""Upstash Redis access used for caching verified Firebase identities."""

from __future__ import annotations

from typing import Optional, Protocol

from fastapi import Depends
from upstash_redis import Redis

from ..settings import Settings, get_settings


class RedisClient(Protocol):
    """The two Redis commands the identity cache relies on."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str, ex: Optional[int] = None) -> None:
        ...


def get_redis(settings: Settings = Depends(get_settings)) -> RedisClient:
    return Redis(
        url=settings.upstash_redis_rest_url,
        token=settings.upstash_redis_rest_token,
    )
