"""Synthetic pricing and demand data for the buyer and seller views.

Every series is generated from a product's base attributes with a simple
random walk. The random source and the reference day are injectable so
tests can pin both; production callers get a fresh unseeded generator
and today's date.

Usage:
    rng = random.Random(42)
    history = generate_price_history(product, rng=rng)
    trend = generate_search_trend(product, rng=rng)
"""

from __future__ import annotations

import math
import random
from datetime import date, timedelta

from src.common.models import (
    CompetitorPrice,
    FunnelMetrics,
    FunnelStage,
    PricePoint,
    Product,
    TrendPoint,
)

from .catalog import DEMO_PRODUCT_ID

# --- Price history ---
HISTORY_DAYS = 90  # plus today = 91 points
DAILY_STEP_PCT = 0.02
PRICE_FLOOR_PCT = 0.90
PRICE_UNIT = 1_000
FINAL_PRICE_PCT = 0.95
DEMO_FINAL_PRICE = 19_500_000

# --- Competitors ---
COMPETITOR_UNIT = 10_000
SELLER_STORE = "You (Digikala)"
# Store name -> multiplier on market average, in display order
COMPETITOR_MARKUPS: tuple[tuple[str, float], ...] = (
    ("TechnoLife", 1.02),
    ("Basalam", 1.04),
    ("Other Sellers", 1.01),
)
BUYER_STORE = "Digikala"
BUYER_COMPARISON_MARKUPS: tuple[tuple[str, float], ...] = (
    ("TechnoLife", 1.02),
    ("Basalam", 1.04),
    ("Mobile.ir", 1.01),
)
SELLER_PRICE_PCT = 0.98

# --- Demand ---
PREMIUM_THRESHOLD = 50_000_000
PREMIUM_IMPRESSIONS = 25_000
STANDARD_IMPRESSIONS = 15_000
FUNNEL_STAGES: tuple[tuple[str, float, str], ...] = (
    ("Impressions", 1.0, "#ef4444"),
    ("Clicks", 0.08, "#f87171"),
    ("Cart Adds", 0.03, "#fb923c"),
    ("Purchases", 0.012, "#facc15"),
)

TREND_DAYS = 30
PREMIUM_SEARCHES = 2_000
STANDARD_SEARCHES = 800
TREND_STEP_PCT = 0.05
TREND_FLOOR_PCT = 0.80

FAIR_PRICE_MARGIN = 1.05


def round_to(value: float, unit: int) -> int:
    """Round half-up to the nearest multiple of ``unit``."""
    return int(math.floor(value / unit + 0.5)) * unit


def _require_valid(product: Product) -> None:
    if product.base_price <= 0 or product.market_average <= 0:
        raise ValueError(
            f"Product {product.product_id} needs positive base_price and market_average"
        )


def _is_premium(product: Product) -> bool:
    return product.base_price > PREMIUM_THRESHOLD


def generate_price_history(
    product: Product,
    rng: random.Random | None = None,
    today: date | None = None,
) -> list[PricePoint]:
    """Generate 91 daily prices ending today.

    The walk adds a uniform step of +/-2% of the base price each day,
    never dropping below 90% of base. The last point is pinned to a
    visible drop: 19,500,000 for the demo product, 95% of base otherwise.

    Raises:
        ValueError: If the product has a non-positive base price.
    """
    _require_valid(product)
    rng = rng or random.Random()
    today = today or date.today()

    base = product.base_price
    floor_price = base * PRICE_FLOOR_PCT
    min_rounded = math.ceil(floor_price / PRICE_UNIT) * PRICE_UNIT
    step = base * DAILY_STEP_PCT

    price = float(base)
    history: list[PricePoint] = []
    for days_back in range(HISTORY_DAYS, -1, -1):
        price += rng.uniform(-step, step)
        price = max(floor_price, price)
        history.append(
            PricePoint(
                date=today - timedelta(days=days_back),
                price=max(min_rounded, round_to(price, PRICE_UNIT)),
            )
        )

    if product.product_id == DEMO_PRODUCT_ID:
        final_price = DEMO_FINAL_PRICE
    else:
        final_price = max(min_rounded, round_to(base * FINAL_PRICE_PCT, PRICE_UNIT))
    history[-1] = PricePoint(date=history[-1].date, price=final_price)

    return history


def seller_price_for(product: Product) -> int:
    """The seller's own listing price: 98% of base, to the nearest 10,000."""
    _require_valid(product)
    return round_to(product.base_price * SELLER_PRICE_PCT, COMPETITOR_UNIT)


def generate_competitor_prices(product: Product, seller_price: int) -> list[CompetitorPrice]:
    """Seller's price followed by three competitors marked up from market average.

    Each entry carries ``seller_price`` so a chart can draw both bars.
    """
    _require_valid(product)
    prices = [CompetitorPrice(store=SELLER_STORE, price=seller_price, seller_price=seller_price)]
    for store, markup in COMPETITOR_MARKUPS:
        prices.append(
            CompetitorPrice(
                store=store,
                price=round_to(product.market_average * markup, COMPETITOR_UNIT),
                seller_price=seller_price,
            )
        )
    return prices


def buyer_market_comparison(product: Product, current_price: int) -> list[CompetitorPrice]:
    """Store comparison shown to buyers, rounded to the nearest 1,000."""
    _require_valid(product)
    comparison = [CompetitorPrice(store=BUYER_STORE, price=round_to(current_price, PRICE_UNIT))]
    for store, markup in BUYER_COMPARISON_MARKUPS:
        comparison.append(
            CompetitorPrice(
                store=store,
                price=round_to(product.market_average * markup, PRICE_UNIT),
            )
        )
    return comparison


def generate_funnel_data(product: Product) -> list[FunnelStage]:
    """Four funnel stages as fixed fractions of a price-tier impression base."""
    _require_valid(product)
    impressions = PREMIUM_IMPRESSIONS if _is_premium(product) else STANDARD_IMPRESSIONS
    return [
        FunnelStage(name=name, value=round_to(impressions * fraction, 1), fill=fill)
        for name, fraction, fill in FUNNEL_STAGES
    ]


def compute_funnel_metrics(funnel: list[FunnelStage], seller_price: int) -> FunnelMetrics:
    """Headline counts plus revenue in millions (purchases x seller price)."""
    purchases = funnel[3].value
    return FunnelMetrics(
        views=funnel[0].value,
        clicks=funnel[1].value,
        conversions=purchases,
        revenue=round_to(purchases * seller_price / 1_000_000, 1),
    )


def generate_search_trend(
    product: Product,
    rng: random.Random | None = None,
    today: date | None = None,
) -> list[TrendPoint]:
    """Generate 30 days of search volume ending today.

    Each step moves the running volume by up to +/-5% of itself and
    never falls below 80% of the previous day's value.
    """
    _require_valid(product)
    rng = rng or random.Random()
    today = today or date.today()

    searches = float(PREMIUM_SEARCHES if _is_premium(product) else STANDARD_SEARCHES)
    trend: list[TrendPoint] = []
    for days_back in range(TREND_DAYS - 1, -1, -1):
        previous = searches
        searches += rng.uniform(-TREND_STEP_PCT, TREND_STEP_PCT) * previous
        searches = max(previous * TREND_FLOOR_PCT, searches)
        day = today - timedelta(days=days_back)
        trend.append(TrendPoint(day=day.strftime("%b %d"), searches=round_to(searches, 1)))
    return trend


def reference_price(previous_price: int) -> int:
    """Struck-through "was" price: 5% above the previous day, to the nearest 1,000."""
    return round_to(previous_price * FAIR_PRICE_MARGIN, PRICE_UNIT)


def is_fair_price(current_price: int, market_average: int) -> bool:
    """A price is fair when it is at most 5% above the market average."""
    return current_price <= market_average * FAIR_PRICE_MARGIN
