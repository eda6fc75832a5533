from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict

import httpx
from fastapi import Depends

from ..settings import Settings, get_settings
from .interfaces import FirebaseAuthAPI, HTTPClient

logger = logging.getLogger(__name__)

LOOKUP_URL = "https://identitytoolkit.googleapis.com/v1/accounts:lookup"


class AuthenticationError(RuntimeError):
    """Raised when a Firebase ID token cannot be verified."""


class FirebaseAuthClient(FirebaseAuthAPI):
    """Resolve Firebase ID tokens through the Identity Toolkit REST API."""

    def __init__(self, http_client: HTTPClient, settings: Settings) -> None:
        self._http_client = http_client
        self._settings = settings

    async def lookup(self, id_token: str) -> Dict[str, Any]:
        try:
            response = await self._http_client.post(
                LOOKUP_URL,
                params={"key": self._settings.firebase_api_key},
                json={"idToken": id_token},
            )
        except httpx.HTTPError as exc:
            logger.exception("Firebase account lookup failed")
            raise AuthenticationError("Identity service unavailable") from exc

        if response.status_code != 200:
            raise AuthenticationError("Invalid or expired ID token")

        users = response.json().get("users") or []
        if not users or not users[0].get("localId"):
            raise AuthenticationError("ID token does not belong to an account")
        return users[0]


async def get_firebase_auth_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[FirebaseAuthAPI]:
    async with httpx.AsyncClient(timeout=10.0) as http_client:
        yield FirebaseAuthClient(http_client, settings)
