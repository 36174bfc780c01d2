"""Tests for the submission boundary."""
import json
from itertools import count

import httpx
import pytest

from loreal_chat.config import HISTORY_KEY
from loreal_chat.relay_client import RelayClient
from loreal_chat.services.chat_session import CONFIG_MISSING_MESSAGE, ChatSession
from loreal_chat.services.conversation import GREETING, ConversationStore

RELAY_URL = "https://relay.test/"


def make_session(storage, client: RelayClient) -> ChatSession:
    ticks = count(1_700_000_000_000, 1000)
    return ChatSession(ConversationStore(storage), client, clock=lambda: next(ticks))


class TestStart:
    def test_fresh_start_shows_greeting(self, storage):
        session = make_session(storage, RelayClient(endpoint=RELAY_URL))

        state = session.start()

        assert state.messages == []
        assert state.greeting == GREETING
        assert state.latest_question is None

    def test_restored_start_has_no_greeting(self, storage):
        storage.set_item(HISTORY_KEY, json.dumps([
            {"role": "user", "content": "Best mascara?", "timestamp": 1},
            {"role": "assistant", "content": "Lash Paradise.", "timestamp": 2},
        ]))
        session = make_session(storage, RelayClient(endpoint=RELAY_URL))

        state = session.start()

        assert [m.content for m in state.messages] == ["Best mascara?", "Lash Paradise."]
        assert state.greeting is None
        assert state.latest_question == "Best mascara?"


class TestSubmit:
    """Tests for ChatSession.submit."""

    @pytest.mark.asyncio
    async def test_successful_round_trip(self, storage, mock_http, recorded_requests, completion_body):
        http = mock_http(lambda request: httpx.Response(200, json=completion_body("Try Elvive.")))
        session = make_session(storage, RelayClient(endpoint=RELAY_URL, http_client=http))
        session.start()

        result = await session.submit("  Shampoo for dry hair?  ")

        assert result.ok
        assert result.user_message.content == "Shampoo for dry hair?"
        assert result.reply.content == "Try Elvive."
        assert result.reply.timestamp > result.user_message.timestamp
        assert result.direct_fallback is False

        sent = json.loads(recorded_requests[0].content)
        assert [m["role"] for m in sent["messages"]] == ["system", "user"]
        assert all(set(m) == {"role", "content"} for m in sent["messages"])

        saved = json.loads(storage.get_item(HISTORY_KEY))
        assert [m["role"] for m in saved] == ["user", "assistant"]

    @pytest.mark.asyncio
    async def test_blank_input_is_ignored(self, storage):
        session = make_session(storage, RelayClient(endpoint=RELAY_URL))
        session.start()

        assert await session.submit("   ") is None
        assert len(session.store) == 1

    @pytest.mark.asyncio
    async def test_relay_error_is_inline_and_not_appended(self, storage, mock_http):
        http = mock_http(lambda request: httpx.Response(500, json={"error": "boom"}))
        session = make_session(storage, RelayClient(endpoint=RELAY_URL, http_client=http))
        session.start()

        result = await session.submit("Hi")

        assert not result.ok
        assert result.error.startswith("Error: ")
        assert "500" in result.error
        assert [m.role for m in session.store.messages] == ["system", "user"]

    @pytest.mark.asyncio
    async def test_missing_configuration_is_inline(self, storage):
        session = make_session(storage, RelayClient())
        session.start()

        result = await session.submit("Hi")

        assert result.error == CONFIG_MISSING_MESSAGE
        assert [m.role for m in session.store.messages] == ["system", "user"]

    @pytest.mark.asyncio
    async def test_later_submit_works_after_failure(self, storage, mock_http, completion_body):
        responses = iter([
            httpx.Response(502, json={}),
            httpx.Response(200, json=completion_body("Here you go.")),
        ])
        http = mock_http(lambda request: next(responses))
        session = make_session(storage, RelayClient(endpoint=RELAY_URL, http_client=http))
        session.start()

        first = await session.submit("Hi")
        second = await session.submit("Hi again")

        assert not first.ok
        assert second.ok
        assert [m.role for m in session.store.messages] == ["system", "user", "user", "assistant"]

    @pytest.mark.asyncio
    async def test_direct_fallback_is_flagged(self, storage, mock_http, completion_body):
        http = mock_http(lambda request: httpx.Response(200, json=completion_body("ok")))
        session = make_session(storage, RelayClient(api_key="sk-test", http_client=http))
        session.start()

        result = await session.submit("Hi")

        assert result.direct_fallback is True


class TestClear:
    @pytest.mark.asyncio
    async def test_clear_returns_greeting_and_empties_storage(self, storage, mock_http, completion_body):
        http = mock_http(lambda request: httpx.Response(200, json=completion_body("ok")))
        session = make_session(storage, RelayClient(endpoint=RELAY_URL, http_client=http))
        session.start()
        await session.submit("Hi")

        greeting = session.clear()

        assert greeting == GREETING
        assert storage.get_item(HISTORY_KEY) is None
        assert [m.role for m in session.store.messages] == ["system"]
