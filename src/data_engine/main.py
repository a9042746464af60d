"""CLI entry point for synthetic data generation.

Usage:
    python -m src.data_engine.main --product samsung_galaxy_a55_5g
    python -m src.data_engine.main --product apple_iphone_15_pro --seed 7 --output data/iphone.json
"""

from __future__ import annotations

import argparse
import json
import random
import sys
from pathlib import Path

from src.common.logging import setup_logging

from .catalog import get_product, list_products
from .generator import (
    compute_funnel_metrics,
    generate_competitor_prices,
    generate_funnel_data,
    generate_price_history,
    generate_search_trend,
    seller_price_for,
)

logger = setup_logging(module_name="data_engine.main")


def build_dataset(product_id: str, seed: int | None = None) -> dict:
    """Generate every series for one product as a JSON-ready dict."""
    product = get_product(product_id)
    rng = random.Random(seed)
    seller_price = seller_price_for(product)
    funnel = generate_funnel_data(product)

    return {
        "product": product.model_dump(),
        "price_history": [p.model_dump(mode="json") for p in generate_price_history(product, rng=rng)],
        "seller_price": seller_price,
        "competitor_prices": [
            c.model_dump() for c in generate_competitor_prices(product, seller_price)
        ],
        "funnel": [s.model_dump() for s in funnel],
        "funnel_metrics": compute_funnel_metrics(funnel, seller_price).model_dump(),
        "search_trend": [t.model_dump() for t in generate_search_trend(product, rng=rng)],
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate FairLens mock data for a product")
    parser.add_argument(
        "--product",
        required=True,
        choices=[p.product_id for p in list_products()],
        help="Catalog product id",
    )
    parser.add_argument("--seed", type=int, help="Seed for reproducible series")
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")

    args = parser.parse_args()

    dataset = build_dataset(args.product, seed=args.seed)
    payload = json.dumps(dataset, ensure_ascii=False, indent=2)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload, encoding="utf-8")
        logger.info("Dataset written to: %s", args.output)
    else:
        sys.stdout.write(payload + "\n")


if __name__ == "__main__":
    main()
