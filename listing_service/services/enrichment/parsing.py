"""Parsing of the model's enrichment reply.

The reply is expected to be a JSON object with the string fields
``enhanced_description`` and ``category``. Anything else yields an
``EnrichmentFallback`` so the request keeps the submitted description and the
default category instead of failing the request.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Union

DEFAULT_CATEGORY = "General"


@dataclass(frozen=True)
class Enrichment:
    description: str
    category: str


@dataclass(frozen=True)
class EnrichmentFallback:
    reason: str


EnrichmentOutcome = Union[Enrichment, EnrichmentFallback]


def _extract_json_fenced_block(text: str) -> str | None:
    match = re.search(r"```(?:json)?\s*(.*?)```", text, flags=re.DOTALL | re.IGNORECASE)
    if not match:
        return None
    return match.group(1).strip()


def _extract_first_json_block(text: str) -> str | None:
    start_idx = text.find("{")
    if start_idx < 0:
        return None
    in_string = False
    escape = False
    depth = 0
    for idx in range(start_idx, len(text)):
        char = text[idx]
        if escape:
            escape = False
            continue
        if char == "\\" and in_string:
            escape = True
            continue
        if char == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start_idx : idx + 1]
    return None


def _extract_json_candidate(text: str) -> str | None:
    fenced = _extract_json_fenced_block(text)
    if fenced:
        return fenced
    return _extract_first_json_block(text)


def _field(parsed: dict, key: str) -> str | None:
    value = parsed.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def parse_enrichment(raw: str) -> EnrichmentOutcome:
    candidate = _extract_json_candidate(raw)
    if candidate is None:
        return EnrichmentFallback("No JSON object found.")
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        return EnrichmentFallback(f"Invalid JSON: {exc}")
    if not isinstance(parsed, dict):
        return EnrichmentFallback("Parsed JSON must be an object.")

    description = _field(parsed, "enhanced_description")
    category = _field(parsed, "category")
    if description is None or category is None:
        missing = [
            key
            for key, value in (("enhanced_description", description), ("category", category))
            if value is None
        ]
        return EnrichmentFallback(f"Missing or empty fields: {', '.join(missing)}.")
    return Enrichment(description=description, category=category)
