"""Shared test fixtures and doubles."""

from __future__ import annotations

import sys
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from nutrivision import main
from nutrivision.services.feed import EntryFeed, get_entry_feed
from nutrivision.services.firebase_auth import AuthenticationError, get_firebase_auth_client
from nutrivision.services.firestore import get_firestore_client
from nutrivision.services.interfaces import FirebaseAuthAPI, VisionAPI
from nutrivision.services.redis import RedisClient, get_redis
from nutrivision.services.vision import get_vision_client
from nutrivision.settings import Settings, get_settings

from tests.fakes import FirestoreFake


_MISSING = object()

USER_TOKEN = "token-anna"
USER_ID = "user-1"
USER_EMAIL = "anna@example.com"


class RedisFake(RedisClient):
    """In-memory Redis double that records interactions."""

    def __init__(self) -> None:
        self.store: Dict[str, str] = {}
        self._expected_sets: list[tuple[str | None, Optional[str], object]] = []
        self._last_get: str | None = None
        self._last_set: tuple[str, str, Optional[int]] | None = None
        self.expirations: Dict[str, Optional[int]] = {}

    def expect_set(
        self,
        key: str | None = None,
        value: Optional[str] = None,
        *,
        ex: object = _MISSING,
    ) -> "RedisFake":
        """Queue an expected ``set`` call."""

        self._expected_sets.append((key, value, ex))
        return self

    def assert_last_get(self, key: str) -> None:
        """Assert the most recent ``get`` call was for ``key``."""

        assert self._last_get == key, f"Expected last get for {key!r}, saw {self._last_get!r}"

    def assert_last_set(
        self, key: str, value: Optional[str] = None, *, ex: Optional[int] = None
    ) -> None:
        """Assert the most recent ``set`` call matched the provided values."""

        assert self._last_set is not None, "No set() call was recorded"
        last_key, last_value, last_ex = self._last_set
        assert last_key == key, f"Expected last set for {key!r}, saw {last_key!r}"
        if value is not None:
            assert (
                last_value == value
            ), f"Expected last set value {value!r}, saw {last_value!r}"
        if ex is not None:
            assert last_ex == ex, f"Expected last set ex {ex!r}, saw {last_ex!r}"

    def get(self, key: str) -> Optional[str]:
        self._last_get = key
        return self.store.get(key)

    def set(self, key: str, value: str, ex: Optional[int] = None) -> None:
        self._last_set = (key, value, ex)
        if self._expected_sets:
            expected_key, expected_value, expected_ex = self._expected_sets.pop(0)
            if expected_key is not None and expected_key != key:
                raise AssertionError(
                    f"Expected set({expected_key!r}, …) but received set({key!r}, …)"
                )
            if expected_value is not None and expected_value != value:
                raise AssertionError(
                    f"Expected set value {expected_value!r}, saw {value!r}"
                )
            if expected_ex is not _MISSING and expected_ex != ex:
                raise AssertionError(
                    f"Expected set expiration {expected_ex!r}, saw {ex!r}"
                )
        self.store[key] = value
        self.expirations[key] = ex


@dataclass
class _Expectation:
    expected: Dict[str, Any]
    returns: Any = None
    raises: Exception | None = None


class FirebaseAuthStub(FirebaseAuthAPI):
    """Identity double resolving a fixed set of tokens."""

    def __init__(self) -> None:
        self.accounts: Dict[str, Dict[str, Any]] = {
            USER_TOKEN: {"localId": USER_ID, "email": USER_EMAIL},
        }
        self.lookups: list[str] = []

    def with_account(self, token: str, uid: str, email: str | None = None) -> "FirebaseAuthStub":
        self.accounts[token] = {"localId": uid, "email": email}
        return self

    async def lookup(self, id_token: str) -> Dict[str, Any]:
        self.lookups.append(id_token)
        account = self.accounts.get(id_token)
        if account is None:
            raise AuthenticationError("Invalid or expired ID token")
        return account


class VisionStub(VisionAPI):
    """Vision double replaying queued answers."""

    def __init__(self) -> None:
        self._expectations: list[_Expectation] = []
        self.calls: list[tuple[bytes, str]] = []

    def expect_describe(
        self,
        content_type: str | None = None,
        *,
        returns: str = "",
        raises: Exception | None = None,
    ) -> "VisionStub":
        self._expectations.append(
            _Expectation({"content_type": content_type}, returns, raises)
        )
        return self

    def assert_last_call(self, image: bytes | None = None, content_type: str | None = None) -> None:
        assert self.calls, "describe_food() was not called"
        last_image, last_type = self.calls[-1]
        if image is not None:
            assert last_image == image, "Unexpected image bytes"
        if content_type is not None:
            assert last_type == content_type, f"Expected {content_type!r}, saw {last_type!r}"

    async def describe_food(self, image: bytes, content_type: str) -> str:
        self.calls.append((image, content_type))
        if not self._expectations:
            return ""
        expectation = self._expectations.pop(0)
        expected_type = expectation.expected.get("content_type")
        if expected_type is not None and expected_type != content_type:
            raise AssertionError(
                f"Expected describe_food(..., {expected_type!r}) but got {content_type!r}"
            )
        if expectation.raises:
            raise expectation.raises
        return expectation.returns


@pytest.fixture
def settings() -> Settings:
    """Canonical settings instance reused across tests."""

    return Settings(
        firebase_api_key="firebase-key",
        firebase_project_id="test-project",
        openrouter_api_key="openrouter-key",
        upstash_redis_rest_url="https://redis.example.com",
        upstash_redis_rest_token="redis-token",
        max_image_bytes=1024,
    )


@pytest.fixture
def redis_fake() -> RedisFake:
    return RedisFake()


@pytest.fixture
def firestore_fake() -> FirestoreFake:
    return FirestoreFake()


@pytest.fixture
def firebase_auth_stub() -> FirebaseAuthStub:
    return FirebaseAuthStub()


@pytest.fixture
def vision_stub() -> VisionStub:
    return VisionStub()


@pytest.fixture
def entry_feed() -> EntryFeed:
    return EntryFeed()


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {USER_TOKEN}"}


@pytest.fixture
def app(
    settings: Settings,
    redis_fake: RedisFake,
    firestore_fake: FirestoreFake,
    firebase_auth_stub: FirebaseAuthStub,
    vision_stub: VisionStub,
    entry_feed: EntryFeed,
) -> Iterator[FastAPI]:
    """Configured FastAPI application instance for integration tests."""

    app = main.app
    overrides = {
        get_settings: lambda: settings,
        get_redis: lambda: redis_fake,
        get_firestore_client: lambda: firestore_fake,
        get_firebase_auth_client: lambda: firebase_auth_stub,
        get_vision_client: lambda: vision_stub,
        get_entry_feed: lambda: entry_feed,
    }
    app.dependency_overrides.update(overrides)
    try:
        yield app
    finally:
        for dependency in overrides:
            app.dependency_overrides.pop(dependency, None)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    """Async HTTP client bound to the FastAPI app."""

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as api_client:
        yield api_client
