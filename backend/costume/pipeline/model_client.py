"""Chat-completion client for the costume breakdown call.

One POST per invocation: no retry, no streaming, no response cache, and a
fresh HTTP client each time. The bearer credential is injected at
construction and never logged.
"""

from __future__ import annotations

import time
from typing import Any

import httpx
import structlog

from costume.config import Settings, settings
from costume.errors import ConfigurationError, UpstreamError, UpstreamTransportError

log = structlog.get_logger("costume.model_client")


class ChatCompletionClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        url: str,
        *,
        temperature: float | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self.model = model
        self.url = url
        self.temperature = temperature
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> ChatCompletionClient:
        config = config or settings
        return cls(
            api_key=config.openai_api_key,
            model=config.model_name,
            url=config.chat_completions_url,
            temperature=config.model_temperature,
            timeout=config.model_timeout_seconds,
        )

    def _payload(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        payload: dict[str, Any] = {"model": self.model, "messages": messages}
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        return payload

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """Send ``messages`` and return the first choice's text.

        Raises:
            ConfigurationError: no API credential; raised before any network call.
            UpstreamError: non-2xx reply, carrying its status and raw body.
            UpstreamTransportError: the API could not be reached.
        """
        if not self._api_key:
            raise ConfigurationError("Missing model API key in environment variables")

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        start = time.perf_counter()
        log.info("costume_model_request", model=self.model, num_messages=len(messages))

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                resp = await client.post(self.url, headers=headers, json=self._payload(messages))
            except httpx.TimeoutException as exc:
                log.warning("costume_model_timeout", model=self.model)
                raise UpstreamTransportError("Timed out waiting for the model API") from exc
            except httpx.RequestError as exc:
                log.warning("costume_model_unreachable", model=self.model, error_type=type(exc).__name__)
                raise UpstreamTransportError(
                    f"Network error reaching the model API: {type(exc).__name__}"
                ) from exc

        latency_ms = int((time.perf_counter() - start) * 1000)
        if not resp.is_success:
            log.error("costume_model_error", status=resp.status_code, latency_ms=latency_ms)
            raise UpstreamError(resp.status_code, resp.text)

        content = _first_choice_text(resp)
        usage = _usage(resp)
        log.info(
            "costume_model_response",
            model=self.model,
            latency_ms=latency_ms,
            chars=len(content),
            **usage,
        )
        return content


def _first_choice_text(resp: httpx.Response) -> str:
    """Return ``choices[0].message.content`` or an empty string."""
    try:
        content = resp.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""


def _usage(resp: httpx.Response) -> dict[str, int]:
    try:
        usage = resp.json().get("usage") or {}
    except (ValueError, AttributeError):
        return {}
    return {
        "tokens_in": int(usage.get("prompt_tokens", 0) or 0),
        "tokens_out": int(usage.get("completion_tokens", 0) or 0),
    }


def get_model_client() -> ChatCompletionClient:
    """FastAPI dependency: a client built from the process-wide settings."""
    return ChatCompletionClient.from_settings()
