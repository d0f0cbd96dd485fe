from __future__ import annotations

import math
import re
from typing import Any, List, Literal, Optional, get_args

from pydantic import BaseModel, Field, field_validator

Currency = Literal["USD", "EUR", "GBP", "INR", "JPY", "CNY", "AUD", "CAD"]
StepStatus = Literal["pending", "processing", "completed", "error"]

CURRENCIES: tuple[str, ...] = get_args(Currency)

_PRICE_PATTERN = re.compile(r"^\+?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def split_keywords(raw: str) -> list[str]:
    return [token.strip() for token in raw.split(",") if token.strip()]


def parse_price(value: str) -> float:
    text = value.strip()
    # "-0" is rejected too, so amounts never come out as -0.0
    if text.startswith("-"):
        raise ValueError("price must not be negative.")
    if not _PRICE_PATTERN.match(text):
        raise ValueError("price must be a decimal number.")
    amount = float(text)
    if not math.isfinite(amount):
        raise ValueError("price must be a finite number.")
    return amount


class ProductInput(BaseModel):
    title: str
    description: str
    price: str
    currency: Currency
    company_name: str
    manufacturing_country: str
    keywords: List[str] = Field(default_factory=list)

    @field_validator(
        "title",
        "description",
        "company_name",
        "manufacturing_country",
    )
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty.")
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _price_as_text(cls, value: Any) -> Any:
        # JSON numbers are accepted, booleans are not
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("price")
    @classmethod
    def _price_is_numeric(cls, value: str) -> str:
        parse_price(value)
        return value

    @field_validator("keywords", mode="before")
    @classmethod
    def _keywords_from_text(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return split_keywords(value)
        return value

    @property
    def price_amount(self) -> float:
        return parse_price(self.price)


class Pricing(BaseModel):
    amount: float
    currency: str


class ProductInfo(BaseModel):
    title: str
    description: str
    pricing: Pricing
    category: str
    company_name: str
    manufacturing_country: str


class KeywordTimestamp(BaseModel):
    keyword: str
    timestamp: float


class ProductResult(BaseModel):
    product_info: ProductInfo
    keyword_timestamps: List[KeywordTimestamp] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    code: str
    details: Optional[Any] = None


class ProcessingStep(BaseModel):
    id: str
    label: str
    status: StepStatus
    description: Optional[str] = None
