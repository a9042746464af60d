"""Shared Pydantic data models for FairLens.

These models define the data contracts between the data engine
(catalog + synthetic series), the insight engine and the view-state
controller. All modules import from here.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field


# === Enums ===

class ViewMode(str, Enum):
    """Top-level views of the prototype."""
    BUYER = "buyer"
    SELLER = "seller"


# === Catalog ===

class Product(BaseModel):
    """Immutable catalog entry."""
    product_id: str
    name: str
    image: str
    rating: float = Field(ge=0, le=5)
    reviews: int = Field(ge=0)
    seller: str
    base_price: int = Field(gt=0, description="Base price in Toman")
    market_average: int = Field(gt=0, description="Market average price in Toman")

    model_config = {"frozen": True}


# === Generated series ===

class PricePoint(BaseModel):
    """Single day of a generated price history."""
    date: date
    price: int = Field(gt=0, description="Price in Toman, multiple of 1000")

    model_config = {"frozen": True}


class CompetitorPrice(BaseModel):
    """A store's price, optionally paired with the seller's own price."""
    store: str
    price: int = Field(gt=0)
    seller_price: int | None = None

    model_config = {"frozen": True}


class TrendPoint(BaseModel):
    """Search volume for one day."""
    day: str
    searches: int = Field(ge=0)

    model_config = {"frozen": True}


class FunnelStage(BaseModel):
    """One stage of the demand funnel."""
    name: str
    value: int = Field(ge=0)
    fill: str

    model_config = {"frozen": True}


class FunnelMetrics(BaseModel):
    """Headline seller metrics derived from the funnel."""
    views: int
    clicks: int
    conversions: int
    revenue: int = Field(description="Revenue in millions of Toman")


# === Alerts ===

class Alert(BaseModel):
    """A user's target price for a product."""
    product_id: str
    threshold: int = Field(gt=0)
