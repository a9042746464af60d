# View State: selected product, buyer/seller toggle, price alerts, insight state
"""
View-state layer:
- alert_store: SQLite-backed per-product alert thresholds
- controller: derived product data, alert lifecycle and guarded insight fetches
"""

from .alert_store import AlertStore
from .controller import ProductView, ViewStateController, build_product_view, parse_alert_input

__all__ = [
    "AlertStore",
    "ProductView",
    "ViewStateController",
    "build_product_view",
    "parse_alert_input",
]
