from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ...config import Settings
from ..errors import ListingServiceError

logger = logging.getLogger("listing-ai")
UPSTREAM_BODY_MAX_CHARS = 1000


def _truncate_text(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


def build_payload(settings: Settings, messages: list[dict[str, str]]) -> dict[str, Any]:
    return {
        "model": settings.OPENAI_MODEL,
        "messages": messages,
        "temperature": settings.LLM_TEMPERATURE,
        "max_tokens": settings.LLM_MAX_TOKENS,
    }


def extract_output_text(resp_json: Any) -> str:
    choices = resp_json.get("choices") if isinstance(resp_json, dict) else None
    if not isinstance(choices, list) or not choices:
        raise ListingServiceError(
            code="UPSTREAM_INVALID_RESPONSE",
            message="Completion API returned no choices.",
            details={"response": _truncate_text(str(resp_json), UPSTREAM_BODY_MAX_CHARS)},
        )
    first = choices[0] if isinstance(choices[0], dict) else {}
    message = first.get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise ListingServiceError(
            code="UPSTREAM_INVALID_RESPONSE",
            message="Completion API choice has no text content.",
            details={"choice": _truncate_text(str(first), UPSTREAM_BODY_MAX_CHARS)},
        )
    return content


class CompletionClient:
    """Single-shot client for an OpenAI compatible chat completions endpoint.

    Every call opens its own ``httpx.AsyncClient`` so a broken connection never
    leaks into another request. Failures are not retried.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.settings.OPENAI_BASE_URL.rstrip('/')}/chat/completions"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.OPENAI_API_KEY}",
            "Content-Type": "application/json",
        }

    async def complete(self, messages: list[dict[str, str]]) -> str:
        if not self.settings.OPENAI_API_KEY:
            raise ListingServiceError(
                code="UPSTREAM_NOT_CONFIGURED",
                message="Completion API credential is not configured (set OPENAI_API_KEY).",
            )

        payload = build_payload(self.settings, messages)
        timeout = httpx.Timeout(self.settings.REQUEST_TIMEOUT_SEC)
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.post(self.url, headers=self._headers(), json=payload)
        except httpx.HTTPError as exc:
            raise ListingServiceError(
                code="UPSTREAM_UNAVAILABLE",
                message=f"Completion API request failed: {exc.__class__.__name__}",
                details={"error": str(exc)},
            ) from exc

        logger.info("completion API status=%s model=%s", response.status_code, payload["model"])
        if not response.is_success:
            raise ListingServiceError(
                code="UPSTREAM_ERROR",
                message=f"Completion API error: HTTP {response.status_code}",
                details={
                    "status": response.status_code,
                    "body": _truncate_text(response.text, UPSTREAM_BODY_MAX_CHARS),
                },
            )
        try:
            resp_json = response.json()
        except ValueError as exc:
            raise ListingServiceError(
                code="UPSTREAM_INVALID_RESPONSE",
                message="Completion API returned a non-JSON body.",
                details={"body": _truncate_text(response.text, UPSTREAM_BODY_MAX_CHARS)},
            ) from exc
        return extract_output_text(resp_json)
