import pytest
from pydantic import ValidationError

from listing_service.contracts_models import ProductInput


def _product(**overrides):
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
    return data


def test_request_requires_title():
    data = _product()
    del data["title"]
    with pytest.raises(ValidationError):
        ProductInput.model_validate(data)


def test_request_rejects_blank_company_name():
    with pytest.raises(ValidationError):
        ProductInput.model_validate(_product(company_name="   "))


@pytest.mark.parametrize("price", ["abc", "", "-5", "-0", "-0.00", "inf", "NaN", "1,50", True])
def test_request_rejects_invalid_price(price):
    with pytest.raises(ValidationError):
        ProductInput.model_validate(_product(price=price))


def test_request_accepts_numeric_price():
    product = ProductInput.model_validate(_product(price=12.5))
    assert product.price == "12.5"
    assert product.price_amount == 12.5


def test_request_accepts_zero_price():
    assert ProductInput.model_validate(_product(price="0")).price_amount == 0.0


def test_request_rejects_unknown_currency():
    with pytest.raises(ValidationError):
        ProductInput.model_validate(_product(currency="CHF"))


def test_keywords_default_to_empty():
    data = _product()
    del data["keywords"]
    assert ProductInput.model_validate(data).keywords == []


def test_keywords_string_is_split_on_commas():
    product = ProductInput.model_validate(_product(keywords="bluetooth, speaker, ,bass "))
    assert product.keywords == ["bluetooth", "speaker", "bass"]


def test_keywords_list_is_kept_unchanged():
    keywords = ["Bass ", "bluetooth", "bluetooth"]
    assert ProductInput.model_validate(_product(keywords=keywords)).keywords == keywords
