"""Prompts and fallbacks for LLM-generated pricing insights.

Series are embedded as compact JSON so the model sees the same numbers
the views display.
"""

from __future__ import annotations

import json

from src.common.models import CompetitorPrice, PricePoint, TrendPoint

BUYER_WINDOW = 30
TREND_WINDOW = 7
FEED_SIZE = 3

SYSTEM_PROMPT = """\
You are FairLens, a pricing assistant for an online electronics marketplace.
Answer in plain English. Use only the numbers you are given and never invent prices.
Keep every answer to one short sentence unless asked otherwise.
"""

BUYER_FALLBACK = (
    "Insight: The price has been stable recently. Check market comparisons for the best deal."
)

PRICING_FALLBACK = "We recommend aligning your price with the market average to stay competitive."

FEED_FALLBACK: tuple[str, ...] = (
    "Your product was viewed 20% more than the category average yesterday.",
    "A competitor recently lowered their price. Consider a promotional offer.",
    "Weekend sales show a strong upward trend for this item.",
)

INSIGHT_FEED_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "insights": {
            "type": "array",
            "items": {"type": "string"},
        },
    },
    "required": ["insights"],
    "additionalProperties": False,
}


def _to_json(items: list) -> str:
    return json.dumps([item.model_dump(mode="json") for item in items], ensure_ascii=False)


def build_buyer_prompt(price_history: list[PricePoint], product_name: str) -> str:
    """Ask for a one-sentence deal assessment from the last 30 days of prices.

    Args:
        price_history: Full generated history (only the tail is sent)
        product_name: Display name of the product

    Returns:
        Formatted user prompt string
    """
    recent = price_history[-BUYER_WINDOW:]
    return (
        f"Analyze this price history for a '{product_name}'. "
        "The data covers the last 90 days; the most recent 30 are shown. "
        "Provide a short, smart insight for a potential buyer in a single sentence, "
        "highlighting if it's a good deal. "
        'Example: "This product\'s price dropped 12% over the past month. '
        "You're getting a great deal today.\" "
        f"The data is: {_to_json(recent)}"
    )


def build_pricing_prompt(
    seller_price: int,
    competitor_prices: list[CompetitorPrice],
    search_trend: list[TrendPoint],
    product_name: str,
    currency: str = "Toman",
    market: str = "Iranian",
) -> str:
    """Ask for one actionable pricing recommendation for the seller."""
    recent_trend = search_trend[-TREND_WINDOW:]
    return (
        f"You are an e-commerce pricing expert for the {market} market. "
        f"A seller's current price for a '{product_name}' is {seller_price} {currency}. "
        f"Competitor prices are {_to_json(competitor_prices)}. "
        f"Recent search trends are {_to_json(recent_trend)}. "
        "Provide a concise, actionable pricing recommendation in a single sentence. "
        'Example: "Based on current demand and competitor analysis, we recommend lowering '
        'your price by 3.8% to potentially increase conversion rate by up to 9%."'
    )


def build_feed_prompt(product_name: str, market: str = "Iranian", embed_schema: bool = False) -> str:
    """Ask for exactly three seller insights as a JSON object.

    Args:
        product_name: Display name of the product
        market: Market the seller operates in
        embed_schema: Spell out the JSON shape for providers without
            native structured output
    """
    prompt = (
        f"Generate exactly {FEED_SIZE} short, distinct, actionable insights for an "
        f"e-commerce seller of a '{product_name}' in the {market} market. "
        "Examples: 'Your product was the most clicked in its category yesterday.', "
        "'Competitor TechnoLife raised their price by 4% today.', "
        "'Search interest for this product is up 15% this week.'"
    )
    if embed_schema:
        prompt += (
            "\n\nRespond with ONLY a JSON object matching this schema, no markdown:\n"
            f"{json.dumps(INSIGHT_FEED_SCHEMA)}"
        )
    return prompt
