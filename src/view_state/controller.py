"""View-state controller for the buyer and seller views.

Holds the selected product, the active view, the product's alert
threshold and the latest insight text. Everything derived from the
product (price history, fairness, funnel, competitor prices) is built
once per selection into an immutable ``ProductView`` snapshot.

Insight fetches are coroutines. Each selection bumps a generation
counter; a fetch that completes after the selection has changed is
discarded instead of overwriting the newer product's insight.

Usage:
    controller = ViewStateController(AlertStore(), InsightProvider())
    controller.select_product("xiaomi_poco_x6_pro")
    controller.set_alert("16000000")
    await controller.refresh_insights()
    print(controller.snapshot())
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from datetime import date

from src.common.config import settings
from src.common.logging import setup_logging
from src.common.models import (
    CompetitorPrice,
    FunnelMetrics,
    FunnelStage,
    PricePoint,
    Product,
    TrendPoint,
    ViewMode,
)
from src.data_engine.catalog import get_product
from src.data_engine.generator import (
    buyer_market_comparison,
    compute_funnel_metrics,
    generate_competitor_prices,
    generate_funnel_data,
    generate_price_history,
    generate_search_trend,
    is_fair_price,
    reference_price,
    seller_price_for,
)
from src.insight_engine.provider import InsightProvider, classify_insight

from .alert_store import AlertStore

logger = setup_logging(module_name="view_state")

BUYER_PLACEHOLDER = "Generating smart insight..."


@dataclass(frozen=True)
class ProductView:
    """All data derived from one product selection."""
    product: Product
    price_history: list[PricePoint]
    current_price: int
    previous_price: int
    reference_price: int
    is_fair_price: bool
    seller_price: int
    competitor_prices: list[CompetitorPrice]
    market_comparison: list[CompetitorPrice]
    funnel: list[FunnelStage]
    funnel_metrics: FunnelMetrics
    search_trend: list[TrendPoint]


def build_product_view(
    product: Product,
    rng: random.Random | None = None,
    today: date | None = None,
) -> ProductView:
    """Generate every series for a product and derive the view values."""
    history = generate_price_history(product, rng=rng, today=today)
    current = history[-1].price
    previous = history[-2].price if len(history) > 1 else current
    seller_price = seller_price_for(product)
    funnel = generate_funnel_data(product)

    return ProductView(
        product=product,
        price_history=history,
        current_price=current,
        previous_price=previous,
        reference_price=reference_price(previous),
        is_fair_price=is_fair_price(current, product.market_average),
        seller_price=seller_price,
        competitor_prices=generate_competitor_prices(product, seller_price),
        market_comparison=buyer_market_comparison(product, current),
        funnel=funnel,
        funnel_metrics=compute_funnel_metrics(funnel, seller_price),
        search_trend=generate_search_trend(product, rng=rng, today=today),
    )


def parse_alert_input(raw_input: str | int | None) -> int | None:
    """Parse a target price typed by the user; None when unusable."""
    if raw_input is None or isinstance(raw_input, bool):
        return None
    try:
        value = int(str(raw_input).strip())
    except ValueError:
        return None
    return value if value > 0 else None


class ViewStateController:
    """Selected product, view toggle, price alert and insight state."""

    def __init__(
        self,
        store: AlertStore,
        provider: InsightProvider,
        product_id: str | None = None,
        view: ViewMode | str | None = None,
        rng: random.Random | None = None,
        today: date | None = None,
    ) -> None:
        self.store = store
        self.provider = provider
        self._rng = rng
        self._today = today

        self.view = ViewMode(view or settings.app.default_view)
        self.product_id: str | None = None
        self.product_view: ProductView | None = None
        self.alert_threshold: int | None = None
        self.alert_triggered = False

        self.buyer_insight = BUYER_PLACEHOLDER
        self.buyer_loading = True
        self.pricing_suggestion = ""
        self.seller_insights: list[str] = []
        self.seller_loading = True

        self._generation = 0

        self.select_product(product_id or settings.app.default_product_id)

    # --- Derived values ---

    @property
    def current(self) -> ProductView:
        assert self.product_view is not None
        return self.product_view

    @property
    def current_price(self) -> int:
        return self.current.current_price

    @property
    def is_fair_price(self) -> bool:
        return self.current.is_fair_price

    # --- Selection ---

    def select_product(self, product_id: str) -> None:
        """Switch to another product and rebuild its derived state.

        Raises:
            KeyError: If the product is not in the catalog.
        """
        if product_id == self.product_id:
            return

        product = get_product(product_id)
        self.product_id = product_id
        self.product_view = build_product_view(product, rng=self._rng, today=self._today)
        self._generation += 1

        self.buyer_insight = BUYER_PLACEHOLDER
        self.buyer_loading = True
        self.pricing_suggestion = ""
        self.seller_insights = []
        self.seller_loading = True

        self.alert_triggered = False
        self.alert_threshold = self.store.get_threshold(product_id)
        self._evaluate_alert()

        logger.info(
            "Selected %s: current %s, fair=%s, alert=%s",
            product_id,
            f"{self.current_price:,}",
            self.is_fair_price,
            self.alert_threshold,
        )

    def switch_view(self, view: ViewMode | str) -> None:
        self.view = ViewMode(view)

    # --- Alerts ---

    def _evaluate_alert(self) -> None:
        price = self.current_price
        if self.alert_threshold is not None and 0 < price <= self.alert_threshold:
            if not self.alert_triggered:
                logger.info(
                    "Price drop alert for %s: %s <= %s",
                    self.product_id,
                    f"{price:,}",
                    f"{self.alert_threshold:,}",
                )
            self.alert_triggered = True

    def can_set_alert(self, raw_input: str | int | None) -> bool:
        """Whether the confirm action should be enabled for this input."""
        return parse_alert_input(raw_input) is not None

    def set_alert(self, raw_input: str | int | None) -> bool:
        """Persist a target price and check it against the current price.

        Returns:
            False when the input is not a positive integer (nothing changes).
        """
        threshold = parse_alert_input(raw_input)
        if threshold is None:
            logger.debug("Rejected alert input %r for %s", raw_input, self.product_id)
            return False

        self.store.set_threshold(self.product_id, threshold)
        self.alert_threshold = threshold
        self._evaluate_alert()
        return True

    def remove_alert(self) -> None:
        self.store.delete_threshold(self.product_id)
        self.alert_threshold = None
        self.alert_triggered = False

    def dismiss_alert(self) -> None:
        """Hide the drop notification; the threshold stays active."""
        self.alert_triggered = False

    # --- Insights ---

    def _is_stale(self, generation: int, label: str, product_id: str) -> bool:
        if generation != self._generation:
            logger.debug("Discarding stale %s for %s", label, product_id)
            return True
        return False

    async def refresh_buyer_insight(self) -> bool:
        """Fetch the buyer insight for the current selection.

        Returns:
            True if the result was applied, False if it arrived stale.
        """
        generation = self._generation
        view = self.current
        self.buyer_loading = True

        insight = await self.provider.buyer_insight(view.price_history, view.product.name)

        if self._is_stale(generation, "buyer insight", view.product.product_id):
            return False
        self.buyer_insight = insight
        self.buyer_loading = False
        return True

    async def refresh_seller_insights(self) -> bool:
        """Fetch the pricing suggestion and insight feed concurrently."""
        generation = self._generation
        view = self.current
        self.seller_loading = True

        suggestion, feed = await asyncio.gather(
            self.provider.seller_pricing_suggestion(
                view.seller_price,
                view.competitor_prices,
                view.search_trend,
                view.product.name,
            ),
            self.provider.seller_insight_feed(view.product.name),
        )

        if self._is_stale(generation, "seller insights", view.product.product_id):
            return False
        self.pricing_suggestion = suggestion
        self.seller_insights = list(feed)
        self.seller_loading = False
        return True

    async def refresh_insights(self) -> None:
        await asyncio.gather(self.refresh_buyer_insight(), self.refresh_seller_insights())

    # --- Snapshot ---

    def snapshot(self) -> dict:
        """JSON-ready state of the active view."""
        view = self.current
        state: dict = {
            "view": self.view.value,
            "product": view.product.model_dump(),
            "alert": {
                "threshold": self.alert_threshold,
                "triggered": self.alert_triggered,
            },
        }

        if self.view == ViewMode.BUYER:
            state["buyer"] = {
                "current_price": view.current_price,
                "reference_price": view.reference_price,
                "is_fair_price": view.is_fair_price,
                "price_history": [p.model_dump(mode="json") for p in view.price_history],
                "market_comparison": [c.model_dump() for c in view.market_comparison],
                "insight": self.buyer_insight,
                "loading": self.buyer_loading,
            }
        else:
            # Pricing suggestion first, then the first two feed items
            lines = [self.pricing_suggestion, *self.seller_insights[:2]]
            state["seller"] = {
                "seller_price": view.seller_price,
                "funnel_metrics": view.funnel_metrics.model_dump(),
                "competitor_prices": [c.model_dump() for c in view.competitor_prices],
                "funnel": [s.model_dump() for s in view.funnel],
                "search_trend": [t.model_dump() for t in view.search_trend],
                "insights": [
                    {"text": line, "kind": classify_insight(line).value}
                    for line in lines
                    if line
                ],
                "loading": self.seller_loading,
            }

        return state
