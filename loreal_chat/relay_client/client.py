"""Client for the chat relay (and the direct development fallback)."""

import json
from typing import Any, Dict, Iterable, Optional

import httpx

from ..config import DEFAULT_MODEL, OPENAI_CHAT_COMPLETIONS_URL, Settings
from ..errors import ConfigurationError, RelayError
from ..logging_config import get_logger
from ..models.chat import ChatMessage, PayloadMessage, RelayPayload

logger = get_logger(__name__)

FALLBACK_REPLY = "Sorry, I could not get an answer."

MODE_RELAY = "relay"
MODE_DIRECT = "direct"


def build_payload(transcript: Iterable[ChatMessage]) -> Dict[str, Any]:
    """Strip everything but role and content, preserving order."""
    payload = RelayPayload(
        messages=[PayloadMessage(role=m.role, content=m.content) for m in transcript]
    )
    return payload.model_dump()


def extract_reply(data: Any) -> str:
    """Pull ``choices[0].message.content`` out of a completion response."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return FALLBACK_REPLY

    if not isinstance(content, str) or not content:
        return FALLBACK_REPLY
    return content


class RelayClient:
    """Sends transcripts to the relay and returns the assistant's reply.

    When no relay endpoint is configured but an API key is, requests go
    straight to the upstream completion API. That path exposes the key to
    the client and exists for local development only; ``mode`` reports
    which path is active so callers can flag it.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        api_url: str = OPENAI_CHAT_COMPLETIONS_URL,
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.endpoint = endpoint or None
        self.api_key = api_key or None
        self.model = model
        self.api_url = api_url
        self.timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        endpoint: Optional[str],
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "RelayClient":
        return cls(
            endpoint=endpoint,
            api_key=settings.direct_api_key,
            model=settings.model,
            api_url=settings.openai_api_url,
            timeout=settings.request_timeout,
            http_client=http_client,
        )

    @property
    def mode(self) -> Optional[str]:
        """``"relay"``, ``"direct"``, or None when unconfigured."""
        if self.endpoint:
            return MODE_RELAY
        if self.api_key:
            return MODE_DIRECT
        return None

    @property
    def is_configured(self) -> bool:
        return self.mode is not None

    def build_payload(self, transcript: Iterable[ChatMessage]) -> Dict[str, Any]:
        return build_payload(transcript)

    async def send(self, payload: Dict[str, Any]) -> str:
        """POST the payload and return the reply text.

        Raises:
            ConfigurationError: No endpoint and no API key (before any request)
            RelayError: Transport failure, non-success status, or a body that
                is not JSON
        """
        mode = self.mode
        if mode is None:
            raise ConfigurationError(
                "No relay endpoint or API key configured"
            )

        headers = {"Content-Type": "application/json"}

        if mode == MODE_RELAY:
            url = self.endpoint
            body = payload
            label = "Worker"
        else:
            url = self.api_url
            body = {"model": self.model, **payload}
            headers["Authorization"] = f"Bearer {self.api_key}"
            label = "OpenAI"
            logger.warning("Sending directly to the completion API (development only)")

        logger.debug(f"Sending {len(payload.get('messages', []))} messages via {mode}")

        response = await self._post(url, body, headers, label)

        if not response.is_success:
            raise RelayError(
                f"{label} error: {response.status_code} {response.reason_phrase}".rstrip(),
                status=response.status_code,
            )

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RelayError(
                f"{label} returned a response that is not JSON",
                status=response.status_code,
            ) from e

        logger.debug(f"{label} response received")
        return extract_reply(data)

    async def _post(
        self,
        url: str,
        body: Dict[str, Any],
        headers: Dict[str, str],
        label: str,
    ) -> httpx.Response:
        try:
            if self._http_client is not None:
                return await self._http_client.post(url, headers=headers, json=body)

            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.post(url, headers=headers, json=body)

        except httpx.HTTPError as e:
            logger.error(f"{label} request failed: {type(e).__name__}")
            raise RelayError(f"{label} request failed: {e}") from e
