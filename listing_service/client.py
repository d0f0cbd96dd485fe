"""Client side of the text-input flow.

Collects the raw fields of the product form, validates them into a
``ProductInput`` and submits them to the enrichment endpoint in a single
request. A non-success answer is always raised, never turned into a partial
result.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from .contracts_models import ProductInput, ProductResult, split_keywords

logger = logging.getLogger("listing-ai")

FORM_FIELDS = (
    "title",
    "description",
    "price",
    "currency",
    "company_name",
    "manufacturing_country",
)


class ListingClientError(Exception):
    def __init__(self, status_code: Optional[int], message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def build_product_input(form: Mapping[str, str]) -> ProductInput:
    """Build a validated ``ProductInput`` from raw form values.

    ``keywords`` is the comma-separated text of the keywords field. Raises
    ``pydantic.ValidationError`` for missing or malformed fields.
    """
    data: dict[str, object] = {name: form.get(name, "") for name in FORM_FIELDS}
    data["currency"] = form.get("currency") or "USD"
    data["keywords"] = split_keywords(form.get("keywords") or "")
    return ProductInput.model_validate(data)


class ListingClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def generate_from_text(self, product: ProductInput) -> ProductResult:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post("/generate-from-text", json=product.model_dump())
        except httpx.HTTPError as exc:
            logger.error("Error processing text input: %s", exc)
            raise ListingClientError(None, f"Request failed: {exc}") from exc

        if not response.is_success:
            raise ListingClientError(response.status_code, _error_message(response))
        try:
            return ProductResult.model_validate(response.json())
        except ValueError as exc:
            # covers JSON decode errors and pydantic.ValidationError
            raise ListingClientError(
                response.status_code,
                "Server returned an invalid product result.",
            ) from exc


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"HTTP {response.status_code}"
