"""Insight Provider: LLM-written insights for buyers and sellers.

Each public method is a coroutine that makes exactly one request to the
configured LLM. There is no retry and no caching: the first failure of
any kind (network, quota, missing key, malformed output) is logged and
replaced by a fixed fallback.

Usage:
    provider = InsightProvider()
    text = await provider.buyer_insight(history, product.name)
    feed = await provider.seller_insight_feed(product.name)
"""

from __future__ import annotations

import asyncio
import json

from src.common.config import Settings, get_anthropic_api_key, get_openai_api_key
from src.common.logging import setup_logging
from src.common.models import CompetitorPrice, PricePoint, TrendPoint

from .models import InsightConfig, InsightKind, LLMProvider
from .prompts import (
    BUYER_FALLBACK,
    FEED_FALLBACK,
    FEED_SIZE,
    INSIGHT_FEED_SCHEMA,
    PRICING_FALLBACK,
    SYSTEM_PROMPT,
    build_buyer_prompt,
    build_feed_prompt,
    build_pricing_prompt,
)

logger = setup_logging(module_name="insight_provider")

TREND_KEYWORDS = (
    "price",
    "competitor",
    "increase",
    "decrease",
    "demand",
    "interest",
    "trend",
)


def classify_insight(text: str) -> InsightKind:
    """Pick an icon hint: market-movement lines get TREND, the rest TIP."""
    lowered = text.lower()
    if any(keyword in lowered for keyword in TREND_KEYWORDS):
        return InsightKind.TREND
    return InsightKind.TIP


class InsightProvider:
    """Thin wrapper over an LLM that turns pricing data into short insights.

    The vendor SDK calls are synchronous; the coroutines run them in a
    worker thread so the buyer and seller fetches can overlap.
    """

    def __init__(self, config: InsightConfig | None = None, settings: Settings | None = None):
        self.settings = settings or Settings.load()
        self.config = config or InsightConfig(
            provider=LLMProvider(self.settings.llm.provider),
            temperature=self.settings.llm.temperature,
            max_tokens=self.settings.llm.max_tokens,
        )

    # --- Public operations ---

    async def buyer_insight(self, price_history: list[PricePoint], product_name: str) -> str:
        """One-sentence deal assessment for a buyer, or BUYER_FALLBACK."""
        try:
            prompt = build_buyer_prompt(price_history, product_name)
            return await self._complete_text(prompt)
        except Exception as e:
            logger.error("Error generating buyer insight for %s: %s", product_name, e)
            return BUYER_FALLBACK

    async def seller_pricing_suggestion(
        self,
        seller_price: int,
        competitor_prices: list[CompetitorPrice],
        search_trend: list[TrendPoint],
        product_name: str,
    ) -> str:
        """One actionable pricing recommendation, or PRICING_FALLBACK."""
        try:
            prompt = build_pricing_prompt(
                seller_price,
                competitor_prices,
                search_trend,
                product_name,
                currency=self.config.currency,
                market=self.config.market,
            )
            return await self._complete_text(prompt)
        except Exception as e:
            logger.error("Error generating pricing suggestion for %s: %s", product_name, e)
            return PRICING_FALLBACK

    async def seller_insight_feed(self, product_name: str) -> list[str]:
        """Exactly three seller insights, or the three FEED_FALLBACK lines."""
        try:
            prompt = build_feed_prompt(
                product_name,
                market=self.config.market,
                embed_schema=self.config.provider != LLMProvider.OPENAI,
            )
            response_text = await asyncio.to_thread(
                self._call_llm, SYSTEM_PROMPT, prompt, INSIGHT_FEED_SCHEMA
            )
            return self._parse_feed_response(response_text)
        except Exception as e:
            logger.error("Error generating seller insight feed for %s: %s", product_name, e)
            return list(FEED_FALLBACK)

    # --- Response handling ---

    async def _complete_text(self, prompt: str) -> str:
        text = await asyncio.to_thread(self._call_llm, SYSTEM_PROMPT, prompt)
        if not text or not text.strip():
            raise ValueError("LLM returned an empty response")
        return text

    def _parse_feed_response(self, response_text: str) -> list[str]:
        """Parse ``{"insights": [...]}`` into exactly FEED_SIZE strings.

        Raises:
            ValueError: If the payload is not valid JSON or does not carry
                at least FEED_SIZE non-empty strings under ``insights``.
        """
        # Extract JSON from response (may be wrapped in ```json ... ```)
        json_str = response_text
        if "```json" in json_str:
            json_str = json_str.split("```json")[1].split("```")[0]
        elif "```" in json_str:
            json_str = json_str.split("```")[1].split("```")[0]

        try:
            data = json.loads(json_str.strip())
        except json.JSONDecodeError as e:
            raise ValueError(f"Insight feed is not valid JSON: {e}") from e

        insights = data.get("insights") if isinstance(data, dict) else None
        if not isinstance(insights, list):
            raise ValueError("Insight feed has no 'insights' list")
        if not all(isinstance(item, str) and item.strip() for item in insights):
            raise ValueError("Insight feed contains non-string or empty items")
        if len(insights) < FEED_SIZE:
            raise ValueError(f"Insight feed has {len(insights)} items, expected {FEED_SIZE}")

        return insights[:FEED_SIZE]

    # --- LLM Integration ---

    def _call_llm(self, system_prompt: str, user_prompt: str, schema: dict | None = None) -> str:
        """Call the configured LLM provider and return the response text.

        Args:
            system_prompt: System-level instructions
            user_prompt: User message with data and request
            schema: JSON schema for structured output, if any

        Returns:
            LLM response text
        """
        if not self.config.enabled:
            raise RuntimeError("LLM calls are disabled")
        if self.config.provider == LLMProvider.OPENAI:
            return self._call_openai(system_prompt, user_prompt, schema)
        else:
            return self._call_anthropic(system_prompt, user_prompt)

    def _call_openai(self, system_prompt: str, user_prompt: str, schema: dict | None = None) -> str:
        """Call OpenAI chat completions, with json_schema output when requested."""
        import openai

        api_key = get_openai_api_key()
        client = openai.OpenAI(api_key=api_key)

        model = self.config.model or self.settings.llm.openai_model

        kwargs: dict = {}
        if schema is not None:
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": "insight_feed", "schema": schema, "strict": True},
            }

        response = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
            **kwargs,
        )

        return response.choices[0].message.content or ""

    def _call_anthropic(self, system_prompt: str, user_prompt: str) -> str:
        """Call Anthropic Claude API (schema, if any, is already in the prompt)."""
        import anthropic

        api_key = get_anthropic_api_key()
        client = anthropic.Anthropic(api_key=api_key)

        model = self.config.model or self.settings.llm.anthropic_model

        response = client.messages.create(
            model=model,
            max_tokens=self.config.max_tokens,
            system=system_prompt,
            messages=[
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.config.temperature,
        )

        return response.content[0].text
