"""Static product catalog.

The catalog is process-wide reference data: built once at import,
validated through the Product model, and never mutated.
"""

from __future__ import annotations

from src.common.models import Product

_GSMARENA = "https://cdn.gsmarena.com/imgroot/news"

PRODUCTS: tuple[Product, ...] = (
    Product(
        product_id="samsung_galaxy_a55_5g",
        name="Samsung Galaxy A55 5G",
        image=f"{_GSMARENA}/24/03/samsung-galaxy-a55-a35-ofic/inline/-1200/gsmarena_001.jpg",
        rating=4.6,
        reviews=258,
        seller="Digikala Official Store",
        base_price=21_500_000,
        market_average=20_500_000,
    ),
    Product(
        product_id="apple_iphone_15_pro",
        name="Apple iPhone 15 Pro",
        image=f"{_GSMARENA}/23/09/apple-iphone-15-pro-max-ofic/inline/-1200/gsmarena_001.jpg",
        rating=4.8,
        reviews=782,
        seller="Apple Store IR",
        base_price=75_000_000,
        market_average=73_500_000,
    ),
    Product(
        product_id="xiaomi_poco_x6_pro",
        name="Xiaomi Poco X6 Pro",
        image=f"{_GSMARENA}/24/01/poco-x6-pro-and-m6-pro-4g-ofic/inline/-1200/gsmarena_001.jpg",
        rating=4.5,
        reviews=412,
        seller="Xiaomi Iran",
        base_price=16_800_000,
        market_average=16_500_000,
    ),
    Product(
        product_id="google_pixel_8_pro",
        name="Google Pixel 8 Pro",
        image=f"{_GSMARENA}/23/09/google-pixel-8-pro-ofic/inline/-1200/gsmarena_001.jpg",
        rating=4.7,
        reviews=550,
        seller="Google Store",
        base_price=68_000_000,
        market_average=67_000_000,
    ),
)

# The demo product's price history ends on a fixed, visible drop
DEMO_PRODUCT_ID = "samsung_galaxy_a55_5g"
DEFAULT_PRODUCT_ID = PRODUCTS[0].product_id

_BY_ID: dict[str, Product] = {p.product_id: p for p in PRODUCTS}


def list_products() -> tuple[Product, ...]:
    """Return every catalog product in display order."""
    return PRODUCTS


def get_product(product_id: str) -> Product:
    """Look up a product by identifier.

    Raises:
        KeyError: If the identifier is not in the catalog.
    """
    try:
        return _BY_ID[product_id]
    except KeyError:
        raise KeyError(f"Unknown product id: {product_id}") from None
