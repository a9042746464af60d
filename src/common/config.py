"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = PROJECT_ROOT / "data"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class LLMSettings(BaseModel):
    """LLM API settings."""
    provider: str = "openai"
    openai_model: str = "gpt-4o-mini"
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = 512
    temperature: float = 0.7


class StorageSettings(BaseModel):
    """Alert persistence settings."""
    db_path: str = "data/fairlens.db"
    alert_key_prefix: str = "fairlens:alert:"

    @property
    def db_abs_path(self) -> Path:
        """Resolve database path relative to project root."""
        p = Path(self.db_path)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p


class AppSettings(BaseModel):
    """Defaults for the view-state controller."""
    default_product_id: str = "samsung_galaxy_a55_5g"
    default_view: str = "buyer"


class Settings(BaseModel):
    """Top-level application settings."""
    llm: LLMSettings = Field(default_factory=LLMSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        FAIRLENS_DB_PATH and FAIRLENS_LLM_PROVIDER override the file.
        """
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        loaded = cls(**data)

        if db_path := os.getenv("FAIRLENS_DB_PATH"):
            loaded.storage.db_path = db_path
        if provider := os.getenv("FAIRLENS_LLM_PROVIDER"):
            loaded.llm.provider = provider
        return loaded


def get_openai_api_key() -> str:
    """Get OpenAI API key from environment."""
    key = os.getenv("OPENAI_API_KEY", "")
    if not key:
        raise ValueError("OPENAI_API_KEY not set in environment")
    return key


def get_anthropic_api_key() -> str:
    """Get Anthropic API key from environment."""
    key = os.getenv("ANTHROPIC_API_KEY", "")
    if not key:
        raise ValueError("ANTHROPIC_API_KEY not set in environment")
    return key


# Singleton settings instance
settings = Settings.load()
