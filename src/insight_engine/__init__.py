# Insight Engine: LLM-written buyer and seller insights with static fallbacks
"""
Insight engine for the buyer and seller views.

Each operation sends one prompt to the configured LLM and returns its
text. Any failure degrades to a fixed fallback so callers never see an
error from the external service.
"""

from .models import InsightConfig, InsightKind, LLMProvider
from .prompts import (
    BUYER_FALLBACK,
    FEED_FALLBACK,
    INSIGHT_FEED_SCHEMA,
    PRICING_FALLBACK,
    build_buyer_prompt,
    build_feed_prompt,
    build_pricing_prompt,
)
from .provider import InsightProvider, classify_insight

__all__ = [
    "InsightConfig",
    "InsightKind",
    "InsightProvider",
    "LLMProvider",
    "BUYER_FALLBACK",
    "FEED_FALLBACK",
    "INSIGHT_FEED_SCHEMA",
    "PRICING_FALLBACK",
    "build_buyer_prompt",
    "build_feed_prompt",
    "build_pricing_prompt",
    "classify_insight",
]
