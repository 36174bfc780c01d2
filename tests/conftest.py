"""Pytest configuration and shared fixtures."""
from typing import Callable, List

import httpx
import pytest

from loreal_chat.errors import PersistenceError
from loreal_chat.storage import InMemoryStorage, KeyValueStorage


class FailingStorage(KeyValueStorage):
    """Storage whose writes always fail, like a full browser quota."""

    def __init__(self, initial=None):
        self._items = dict(initial or {})

    def get_item(self, key):
        return self._items.get(key)

    def set_item(self, key, value):
        raise PersistenceError("quota exceeded")

    def remove_item(self, key):
        raise PersistenceError("storage unavailable")

    @property
    def backend_type(self):
        return "failing"


@pytest.fixture
def storage():
    """Empty in-memory storage."""
    return InMemoryStorage()


@pytest.fixture
def failing_storage():
    return FailingStorage()


@pytest.fixture
def completion_body():
    """Build an upstream chat-completion response body."""
    def _build(content: str) -> dict:
        return {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "choices": [
                {"index": 0, "message": {"role": "assistant", "content": content}}
            ],
        }
    return _build


@pytest.fixture
def recorded_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def mock_http(recorded_requests):
    """Create an AsyncClient that answers with ``handler`` and records requests."""
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        def _recording(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)
        return httpx.AsyncClient(transport=httpx.MockTransport(_recording))
    return _make
