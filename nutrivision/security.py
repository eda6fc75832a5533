from __future__ import annotations

import hashlib
import json
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .services.firebase_auth import (
    AuthenticationError,
    get_firebase_auth_client,
)
from .services.interfaces import FirebaseAuthAPI
from .services.redis import RedisClient, get_redis
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

bearer_scheme: HTTPBearer = HTTPBearer(
    scheme_name="FirebaseIdToken", auto_error=False
)


class AuthenticatedUser(BaseModel):
    """Firebase account behind the current request."""

    uid: str
    email: Optional[str] = None
    id_token: str


def token_cache_key(id_token: str) -> str:
    digest = hashlib.sha256(id_token.encode()).hexdigest()
    return f"firebase_uid:{digest}"


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    settings: Settings = Depends(get_settings),
    redis: RedisClient = Depends(get_redis),
    auth_client: FirebaseAuthAPI = Depends(get_firebase_auth_client),
) -> AuthenticatedUser:
    """Verify the Firebase ID token and return the account it belongs to.

    Verified tokens are cached in Redis for ``token_cache_seconds`` so that
    a burst of requests costs one identity lookup.
    """

    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail={"error": "Unauthorized"})
    id_token = credentials.credentials
    cache_key = token_cache_key(id_token)

    cached = redis.get(cache_key)
    if cached:
        try:
            account = json.loads(cached)
            return AuthenticatedUser(
                uid=account["uid"], email=account.get("email"), id_token=id_token
            )
        except (ValueError, KeyError, TypeError):
            logger.warning("Ignoring malformed cached account for %s", cache_key)

    try:
        account = await auth_client.lookup(id_token)
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail={"error": str(exc)}) from exc

    user = AuthenticatedUser(
        uid=account["localId"], email=account.get("email"), id_token=id_token
    )
    redis.set(
        cache_key,
        json.dumps({"uid": user.uid, "email": user.email}),
        ex=settings.token_cache_seconds,
    )
    return user


__all__ = ["AuthenticatedUser", "bearer_scheme", "get_current_user", "token_cache_key"]
