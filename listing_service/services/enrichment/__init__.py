from __future__ import annotations

from .llm_client import CompletionClient
from .parsing import DEFAULT_CATEGORY, Enrichment, EnrichmentFallback, parse_enrichment
from .service import ProductEnricher, build_result

__all__ = [
    "CompletionClient",
    "DEFAULT_CATEGORY",
    "Enrichment",
    "EnrichmentFallback",
    "ProductEnricher",
    "build_result",
    "parse_enrichment",
]
