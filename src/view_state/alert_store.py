"""Persistent price-alert thresholds, one per product.

Thresholds live in the shared ``kv_store`` table under namespaced keys
(``fairlens:alert:<product_id>`` by default) so unrelated keys in the
same store never collide. Values are JSON-serialized integers.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from src.common.config import settings
from src.common.database import get_connection, init_db

logger = logging.getLogger(__name__)


class AlertStore:
    """Read, write and delete alert thresholds keyed by product id.

    Usage:
        store = AlertStore()
        store.set_threshold("xiaomi_poco_x6_pro", 16_000_000)
        store.get_threshold("xiaomi_poco_x6_pro")  # 16000000
    """

    def __init__(self, db_path: str | Path | None = None, key_prefix: str | None = None) -> None:
        self.db_path = Path(db_path) if db_path else settings.storage.db_abs_path
        self.key_prefix = key_prefix if key_prefix is not None else settings.storage.alert_key_prefix
        init_db(self.db_path)

    def _key(self, product_id: str) -> str:
        return f"{self.key_prefix}{product_id}"

    def get_threshold(self, product_id: str) -> int | None:
        """Return the stored threshold, or None when absent or unreadable."""
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (self._key(product_id),)
            ).fetchone()
        finally:
            conn.close()

        if row is None:
            return None

        raw = row["value"]
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Corrupt alert value for %s: %r; treating as absent", product_id, raw)
            return None

        # bool is an int subclass; "true" must not read as a threshold of 1
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            logger.warning("Invalid alert threshold for %s: %r; treating as absent", product_id, raw)
            return None
        return value

    def set_threshold(self, product_id: str, threshold: int) -> None:
        """Persist a threshold, replacing any existing one.

        Raises:
            ValueError: If threshold is not a positive integer.
        """
        if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold <= 0:
            raise ValueError(f"Alert threshold must be a positive integer, got {threshold!r}")

        conn = get_connection(self.db_path)
        try:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (self._key(product_id), json.dumps(threshold)),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("Alert set for %s at %s", product_id, f"{threshold:,}")

    def delete_threshold(self, product_id: str) -> None:
        """Remove the threshold for a product (no-op when none is stored)."""
        conn = get_connection(self.db_path)
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (self._key(product_id),))
            conn.commit()
        finally:
            conn.close()
        logger.info("Alert removed for %s", product_id)
