"""CLI entry point that prints a buyer or seller view snapshot.

Usage:
    python -m src.view_state.main --product samsung_galaxy_a55_5g --view buyer
    python -m src.view_state.main --product google_pixel_8_pro --view seller --no-llm
    python -m src.view_state.main --product xiaomi_poco_x6_pro --alert 16000000 --seed 3
"""

from __future__ import annotations

import argparse
import asyncio
import json
import random
import sys
from pathlib import Path

from src.common.config import settings
from src.common.logging import setup_logging
from src.common.models import ViewMode
from src.data_engine.catalog import list_products
from src.insight_engine.models import InsightConfig, LLMProvider
from src.insight_engine.provider import InsightProvider

from .alert_store import AlertStore
from .controller import ViewStateController

logger = setup_logging(module_name="view_state.main")


async def run(args: argparse.Namespace) -> dict:
    store = AlertStore(db_path=args.db)
    config = InsightConfig(
        provider=LLMProvider(args.provider),
        temperature=settings.llm.temperature,
        max_tokens=settings.llm.max_tokens,
        enabled=not args.no_llm,
    )
    controller = ViewStateController(
        store,
        InsightProvider(config=config),
        product_id=args.product,
        view=args.view,
        rng=random.Random(args.seed) if args.seed is not None else None,
    )

    if args.remove_alert:
        controller.remove_alert()
    elif args.alert is not None and not controller.set_alert(args.alert):
        logger.error("Alert price must be a positive whole number: %s", args.alert)
        sys.exit(2)

    if controller.view == ViewMode.BUYER:
        await controller.refresh_buyer_insight()
    else:
        await controller.refresh_seller_insights()

    return controller.snapshot()


def main() -> None:
    parser = argparse.ArgumentParser(description="Print a FairLens view snapshot as JSON")
    parser.add_argument(
        "--product",
        default=settings.app.default_product_id,
        choices=[p.product_id for p in list_products()],
        help="Catalog product id",
    )
    parser.add_argument(
        "--view",
        choices=[v.value for v in ViewMode],
        default=settings.app.default_view,
        help="buyer or seller view (default from settings)",
    )
    parser.add_argument("--alert", help="Set a target price alert before rendering")
    parser.add_argument("--remove-alert", action="store_true", help="Remove the stored alert")
    parser.add_argument("--seed", type=int, help="Seed for reproducible series")
    parser.add_argument(
        "--provider",
        choices=[p.value for p in LLMProvider],
        default=settings.llm.provider,
        help="LLM provider (default from settings)",
    )
    parser.add_argument("--no-llm", action="store_true", help="Skip LLM calls and use fallbacks")
    parser.add_argument("--db", type=Path, help="Alert database path (default from settings)")

    args = parser.parse_args()

    snapshot = asyncio.run(run(args))
    sys.stdout.write(json.dumps(snapshot, ensure_ascii=False, indent=2) + "\n")


if __name__ == "__main__":
    main()
