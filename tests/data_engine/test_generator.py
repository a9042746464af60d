"""Tests for the synthetic data generator."""

from __future__ import annotations

import random
from datetime import timedelta

import pytest

from src.common.models import Product
from src.data_engine.catalog import list_products
from src.data_engine.generator import (
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


def _invalid_product(**overrides) -> Product:
    fields = dict(
        product_id="broken",
        name="Broken",
        image="",
        rating=4.0,
        reviews=0,
        seller="Nobody",
        base_price=0,
        market_average=1_000_000,
    )
    fields.update(overrides)
    # model_construct skips validation so the generator's own guard is exercised
    return Product.model_construct(**fields)


class TestRoundTo:
    def test_half_up(self):
        assert round_to(1_500, 1_000) == 2_000
        assert round_to(2_500, 1_000) == 3_000
        assert round_to(1_499, 1_000) == 1_000

    def test_unit_one(self):
        assert round_to(179.5, 1) == 180
        assert round_to(0.4, 1) == 0


class TestPriceHistory:
    def test_length_and_dates(self, samsung, rng, today):
        history = generate_price_history(samsung, rng=rng, today=today)

        assert len(history) == 91
        assert history[0].date == today - timedelta(days=90)
        assert history[-1].date == today
        for prev, cur in zip(history, history[1:]):
            assert cur.date - prev.date == timedelta(days=1)

    def test_demo_product_final_price_is_exact(self, samsung, rng, today):
        history = generate_price_history(samsung, rng=rng, today=today)
        assert history[-1].price == 19_500_000

    def test_other_products_end_at_95_percent(self, poco, iphone, rng, today):
        assert generate_price_history(poco, rng=rng, today=today)[-1].price == 15_960_000
        assert generate_price_history(iphone, rng=rng, today=today)[-1].price == 71_250_000

    @pytest.mark.parametrize("seed", range(25))
    def test_invariants_hold_for_any_seed(self, seed, today):
        rng = random.Random(seed)
        for product in list_products():
            history = generate_price_history(product, rng=rng, today=today)
            assert len(history) == 91
            assert all(p.price >= 0.9 * product.base_price for p in history)
            assert all(p.price % 1_000 == 0 for p in history)

    def test_same_seed_same_series(self, poco, today):
        first = generate_price_history(poco, rng=random.Random(7), today=today)
        second = generate_price_history(poco, rng=random.Random(7), today=today)
        assert first == second

    def test_steps_bounded_by_two_percent(self, iphone, rng, today):
        history = generate_price_history(iphone, rng=rng, today=today)
        # Exclude the pinned final point; allow for rounding to 1,000
        max_step = 0.02 * iphone.base_price + 1_000
        for prev, cur in zip(history[:-1], history[1:-1]):
            assert abs(cur.price - prev.price) <= max_step

    def test_defaults_to_today(self, samsung):
        from datetime import date

        history = generate_price_history(samsung)
        assert history[-1].date == date.today()

    def test_non_positive_base_price_is_rejected(self):
        with pytest.raises(ValueError):
            generate_price_history(_invalid_product(base_price=0))


class TestCompetitorPrices:
    def test_poco_end_to_end(self, poco):
        seller_price = seller_price_for(poco)
        prices = generate_competitor_prices(poco, seller_price)

        assert len(prices) == 4
        assert prices[0].store == "You (Digikala)"
        assert prices[0].price == seller_price
        assert prices[1].price == 16_830_000
        assert prices[2].price == 17_160_000

    @pytest.mark.parametrize("product", list_products(), ids=lambda p: p.product_id)
    def test_bounds_for_every_product(self, product):
        seller_price = seller_price_for(product)
        prices = generate_competitor_prices(product, seller_price)

        assert len(prices) == 4
        assert sum(1 for c in prices if c.price == seller_price) >= 1
        for competitor in prices[1:]:
            assert product.market_average <= competitor.price <= product.market_average * 1.05
            assert competitor.price % 10_000 == 0
        assert all(c.seller_price == seller_price for c in prices)

    def test_store_names_are_unique(self, samsung):
        prices = generate_competitor_prices(samsung, seller_price_for(samsung))
        assert len({c.store for c in prices}) == 4

    def test_non_positive_market_average_is_rejected(self):
        with pytest.raises(ValueError):
            generate_competitor_prices(
                _invalid_product(base_price=1_000_000, market_average=-1), 1_000_000
            )


class TestSellerPrice:
    def test_rounded_to_ten_thousand(self, poco, samsung):
        assert seller_price_for(poco) == 16_460_000
        assert seller_price_for(samsung) == 21_070_000


class TestBuyerComparison:
    def test_comparison_rows(self, samsung):
        rows = buyer_market_comparison(samsung, 19_500_000)

        assert [r.store for r in rows] == ["Digikala", "TechnoLife", "Basalam", "Mobile.ir"]
        assert rows[0].price == 19_500_000
        assert rows[1].price == 20_910_000
        assert rows[2].price == 21_320_000
        assert all(r.seller_price is None for r in rows)


class TestFunnel:
    def test_standard_tier(self, poco):
        funnel = generate_funnel_data(poco)
        assert [s.name for s in funnel] == ["Impressions", "Clicks", "Cart Adds", "Purchases"]
        assert [s.value for s in funnel] == [15_000, 1_200, 450, 180]

    def test_premium_tier(self, iphone):
        funnel = generate_funnel_data(iphone)
        assert [s.value for s in funnel] == [25_000, 2_000, 750, 300]

    @pytest.mark.parametrize("product", list_products(), ids=lambda p: p.product_id)
    def test_counts_non_increasing(self, product):
        values = [s.value for s in generate_funnel_data(product)]
        assert len(values) == 4
        assert values == sorted(values, reverse=True)
        assert all(s.fill.startswith("#") for s in generate_funnel_data(product))

    def test_funnel_metrics(self, poco):
        funnel = generate_funnel_data(poco)
        metrics = compute_funnel_metrics(funnel, seller_price_for(poco))

        assert metrics.views == 15_000
        assert metrics.clicks == 1_200
        assert metrics.conversions == 180
        # 180 x 16,460,000 = 2,962.8M
        assert metrics.revenue == 2_963


class TestSearchTrend:
    def test_length_and_labels(self, samsung, rng, today):
        trend = generate_search_trend(samsung, rng=rng, today=today)

        assert len(trend) == 30
        assert trend[-1].day == "Oct 19"
        assert trend[0].day == "Sep 20"

    @pytest.mark.parametrize("seed", range(10))
    def test_walk_stays_near_tier_base(self, seed, iphone, poco, today):
        rng = random.Random(seed)
        for product, base in ((iphone, 2_000), (poco, 800)):
            trend = generate_search_trend(product, rng=rng, today=today)
            first = trend[0].searches
            assert 0.95 * base - 1 <= first <= 1.05 * base + 1
            for prev, cur in zip(trend, trend[1:]):
                assert cur.searches >= 0.8 * prev.searches - 1
                assert cur.searches >= 0


class TestFairPrice:
    def test_fair_at_five_percent_margin(self):
        assert is_fair_price(21_524_000, 20_500_000)
        assert not is_fair_price(21_526_000, 20_500_000)

    def test_reference_price(self):
        assert reference_price(20_000_000) == 21_000_000
        assert reference_price(19_501_000) == 20_476_000
