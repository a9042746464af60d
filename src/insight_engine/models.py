"""Data models for the insight engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class InsightKind(str, Enum):
    """Icon hint for an insight line."""
    TREND = "trend"
    TIP = "tip"


@dataclass
class InsightConfig:
    """Configuration for the insight provider."""
    provider: LLMProvider = LLMProvider.OPENAI
    model: str = ""  # Empty = use default from settings
    temperature: float = 0.7
    max_tokens: int = 512
    currency: str = "Toman"
    market: str = "Iranian"
    enabled: bool = True  # False = always use fallbacks
