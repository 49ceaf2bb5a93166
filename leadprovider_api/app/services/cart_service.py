"""
Business logic for the per-user cart.

A cart is the set of ``cart_items`` rows of one user.  The unique
``(user_id, service_id)`` constraint makes adding idempotent; removing
an absent entry is a no-op.  Listing resolves stored ids against the
static catalog.
"""

import logging
import sqlite3
from typing import List

from ..core.db import get_connection
from ..core.errors import NotFoundError, PersistenceError
from ..schemas.catalog import ServiceOffering
from .catalog_service import CatalogService


logger = logging.getLogger(__name__)


class CartService:
    """Сервис корзины: добавление, удаление и просмотр выбранных услуг."""

    @classmethod
    async def add(cls, user_id: int, service_id: int) -> List[ServiceOffering]:
        """Add a catalog service to the user's cart and return the cart.

        Adding a service that is already in the cart leaves the cart
        unchanged.  Raises ``NotFoundError`` for ids missing from the
        catalog.
        """
        if CatalogService.get_service(service_id) is None:
            raise NotFoundError(f"Service {service_id} not found")
        conn = get_connection()
        try:
            conn.execute(
                "INSERT OR IGNORE INTO cart_items (user_id, service_id) VALUES (?, ?)",
                (user_id, service_id),
            )
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Failed to add service %s to cart of user %s", service_id, user_id)
            raise PersistenceError("Failed to update cart") from exc
        finally:
            conn.close()
        return await cls.list(user_id)

    @classmethod
    async def remove(cls, user_id: int, service_id: int) -> List[ServiceOffering]:
        """Remove a service from the cart; absent entries are ignored."""
        conn = get_connection()
        try:
            conn.execute(
                "DELETE FROM cart_items WHERE user_id = ? AND service_id = ?",
                (user_id, service_id),
            )
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Failed to remove service %s from cart of user %s", service_id, user_id)
            raise PersistenceError("Failed to update cart") from exc
        finally:
            conn.close()
        return await cls.list(user_id)

    @classmethod
    async def list(cls, user_id: int) -> List[ServiceOffering]:
        """Return the offerings in the cart in the order they were added.

        Ids no longer present in the catalog are dropped silently.
        """
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT service_id FROM cart_items WHERE user_id = ? ORDER BY id",
                (user_id,),
            ).fetchall()
        except sqlite3.Error as exc:
            logger.exception("Failed to load cart of user %s", user_id)
            raise PersistenceError("Failed to load cart") from exc
        finally:
            conn.close()
        return CatalogService.resolve([row["service_id"] for row in rows])
