from __future__ import annotations

from ...contracts_models import ProductInput


ENRICHMENT_SYSTEM = """You are a product categorization and description enhancement AI.
Given product information, you should:
1. Enhance the description to be more compelling and detailed.
2. Suggest an appropriate product category.
3. Return ONLY valid JSON, no markdown, no extra text, in this exact format:
{
  "enhanced_description": "enhanced description text",
  "category": "suggested category"
}
"""


def build_enrichment_prompt(product: ProductInput) -> str:
    return f"""
Product: {product.title}
Description: {product.description}
Price: {product.price} {product.currency}
Company: {product.company_name}
Manufacturing Country: {product.manufacturing_country}
""".strip()


def build_messages(product: ProductInput) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": ENRICHMENT_SYSTEM},
        {"role": "user", "content": build_enrichment_prompt(product)},
    ]
