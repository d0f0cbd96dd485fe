import asyncio

from listing_service.config import Settings
from listing_service.contracts_models import ProductInput
from listing_service.services.enrichment import (
    EnrichmentFallback,
    ProductEnricher,
    build_result,
)
from listing_service.services.enrichment.prompts import ENRICHMENT_SYSTEM, build_messages


class DummyCompleter:
    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.calls = []

    async def complete(self, messages):
        self.calls.append(messages)
        return self.reply


def _product(**overrides) -> ProductInput:
    data = {
        "title": "SmartSpeaker 5",
        "description": "Portable Bluetooth speaker",
        "price": "99.99",
        "currency": "USD",
        "company_name": "SoundWave Inc.",
        "manufacturing_country": "India",
        "keywords": ["bluetooth", "speaker"],
    }
    data.update(overrides)
    return ProductInput.model_validate(data)


def test_build_messages_embeds_product_fields():
    messages = build_messages(_product())

    assert messages[0] == {"role": "system", "content": ENRICHMENT_SYSTEM}
    assert "enhanced_description" in messages[0]["content"]
    user = messages[1]["content"]
    assert messages[1]["role"] == "user"
    assert "Product: SmartSpeaker 5" in user
    assert "Price: 99.99 USD" in user
    assert "Company: SoundWave Inc." in user
    assert "Manufacturing Country: India" in user


def test_enrich_example_scenario():
    completer = DummyCompleter(
        '{"enhanced_description":"Immersive portable sound...","category":"Audio Electronics"}'
    )
    enricher = ProductEnricher(Settings(OPENAI_API_KEY="test-key"), completer)

    result = asyncio.run(enricher.enrich(_product()))

    assert len(completer.calls) == 1
    info = result.product_info
    assert info.title == "SmartSpeaker 5"
    assert info.description == "Immersive portable sound..."
    assert info.category == "Audio Electronics"
    assert info.pricing.amount == 99.99
    assert info.pricing.currency == "USD"
    assert info.company_name == "SoundWave Inc."
    assert info.manufacturing_country == "India"
    assert result.keywords == ["bluetooth", "speaker"]
    assert result.keyword_timestamps == []


def test_enrich_falls_back_when_reply_is_not_json():
    enricher = ProductEnricher(Settings(OPENAI_API_KEY="test-key"), DummyCompleter("Sorry, I can't."))

    result = asyncio.run(enricher.enrich(_product(keywords=[])))

    assert result.product_info.description == "Portable Bluetooth speaker"
    assert result.product_info.category == "General"
    assert result.keywords == []
    assert result.keyword_timestamps == []


def test_build_result_fallback_keeps_caller_values():
    product = _product(price="1e2", currency="JPY")

    result = build_result(product, EnrichmentFallback("No JSON object found."))

    assert result.product_info.pricing.amount == 100.0
    assert result.product_info.pricing.currency == "JPY"
    assert result.product_info.description == product.description
    assert result.product_info.category == "General"
