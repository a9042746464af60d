"""Shared test fixtures for FairLens."""

import random
import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.config import Settings
from src.data_engine.catalog import get_product
from src.insight_engine.models import InsightConfig
from src.insight_engine.provider import InsightProvider
from src.view_state.alert_store import AlertStore


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible series."""
    return random.Random(1234)


@pytest.fixture
def today() -> date:
    return date(2026, 10, 19)


@pytest.fixture
def samsung():
    return get_product("samsung_galaxy_a55_5g")


@pytest.fixture
def iphone():
    return get_product("apple_iphone_15_pro")


@pytest.fixture
def poco():
    return get_product("xiaomi_poco_x6_pro")


@pytest.fixture
def alert_store(tmp_path) -> AlertStore:
    """AlertStore backed by a temporary SQLite database."""
    return AlertStore(db_path=tmp_path / "test_fairlens.db")


@pytest.fixture
def provider() -> InsightProvider:
    """InsightProvider with default settings (tests patch _call_llm)."""
    return InsightProvider(config=InsightConfig(), settings=Settings())
