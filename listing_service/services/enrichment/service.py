from __future__ import annotations

import logging
from typing import Optional, Protocol

from ...config import Settings
from ...contracts_models import Pricing, ProductInfo, ProductInput, ProductResult
from .llm_client import CompletionClient
from .parsing import DEFAULT_CATEGORY, Enrichment, EnrichmentOutcome, parse_enrichment
from .prompts import build_messages

logger = logging.getLogger("listing-ai")
LLM_LOG_MAX_CHARS = 2000


class Completer(Protocol):
    async def complete(self, messages: list[dict[str, str]]) -> str:
        ...


def build_result(product: ProductInput, outcome: EnrichmentOutcome) -> ProductResult:
    if isinstance(outcome, Enrichment):
        description = outcome.description
        category = outcome.category
    else:
        description = product.description
        category = DEFAULT_CATEGORY

    return ProductResult(
        product_info=ProductInfo(
            title=product.title,
            description=description,
            pricing=Pricing(amount=product.price_amount, currency=product.currency),
            category=category,
            company_name=product.company_name,
            manufacturing_country=product.manufacturing_country,
        ),
        keyword_timestamps=[],
        keywords=list(product.keywords),
    )


class ProductEnricher:
    def __init__(self, settings: Settings, completer: Optional[Completer] = None) -> None:
        self.settings = settings
        self.completer = completer or CompletionClient(settings)

    async def enrich(self, product: ProductInput) -> ProductResult:
        raw = await self.completer.complete(build_messages(product))
        if self.settings.DEBUG:
            logger.info("LLM raw output (truncated): %s", raw[:LLM_LOG_MAX_CHARS])

        outcome = parse_enrichment(raw)
        if not isinstance(outcome, Enrichment):
            logger.warning("Enrichment unavailable, using fallback: %s", outcome.reason)
        return build_result(product, outcome)
