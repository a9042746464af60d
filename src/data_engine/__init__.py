# Data Engine: product catalog and synthetic series generation
"""
Data engine modules:
- catalog: fixed product list loaded once at import
- generator: randomized price history, search trend, funnel and competitor data
"""

from .catalog import DEFAULT_PRODUCT_ID, DEMO_PRODUCT_ID, get_product, list_products
from .generator import (
    buyer_market_comparison,
    compute_funnel_metrics,
    generate_competitor_prices,
    generate_funnel_data,
    generate_price_history,
    generate_search_trend,
    is_fair_price,
    reference_price,
    round_to,
    seller_price_for,
)

__all__ = [
    "DEFAULT_PRODUCT_ID",
    "DEMO_PRODUCT_ID",
    "get_product",
    "list_products",
    "buyer_market_comparison",
    "compute_funnel_metrics",
    "generate_competitor_prices",
    "generate_funnel_data",
    "generate_price_history",
    "generate_search_trend",
    "is_fair_price",
    "reference_price",
    "round_to",
    "seller_price_for",
]
