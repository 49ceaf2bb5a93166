"""
Business logic for orders and their admin review.

Checkout turns a cart into an order inside one write transaction: the
order row, one item row per service (with the catalog title and image
copied at that moment) and the clearing of the user's cart either all
happen or none of them do.  Administrators later move an order from
``pending`` to ``approved`` or ``rejected``.
"""

import logging
import sqlite3
from typing import Dict, List, Optional

from ..core.config import POLICY_STRICT, settings
from ..core.db import get_connection, transaction
from ..core.errors import ConflictError, NotFoundError, PersistenceError, ValidationError
from ..schemas.catalog import ServiceOffering
from ..schemas.order import (
    REVIEW_STATUSES,
    STATUS_PENDING,
    AdminOrderRead,
    OrderItemRead,
    OrderRead,
)
from .catalog_service import CatalogService


logger = logging.getLogger(__name__)


class OrderService:
    """Сервис заказов: оформление корзины, история и модерация."""

    @classmethod
    async def checkout(cls, user_id: int, service_ids: Optional[List[int]] = None) -> int:
        """Create an order from the user's cart and return its ID.

        If ``service_ids`` is ``None`` the server-side cart is read inside
        the transaction, otherwise the given ids (a client-held cart) are
        ordered.  Duplicated ids are ordered once.  The user's stored cart
        is cleared in both cases.

        Raises ``ValidationError`` for an empty cart or an id missing from
        the catalog and ``PersistenceError`` when the transaction fails;
        nothing is written in either case.
        """
        if service_ids is not None:
            offerings = cls._offerings_for(service_ids)
            if not offerings:
                raise ValidationError("Cart is empty")
        try:
            with transaction() as cursor:
                if service_ids is None:
                    offerings = cls._load_cart(cursor, user_id)
                    if not offerings:
                        raise ValidationError("Cart is empty")
                cursor.execute(
                    "INSERT INTO orders (user_id, status) VALUES (?, ?)",
                    (user_id, STATUS_PENDING),
                )
                order_id = cursor.lastrowid
                cls._insert_items(cursor, order_id, offerings)
                cursor.execute("DELETE FROM cart_items WHERE user_id = ?", (user_id,))
        except sqlite3.Error as exc:
            logger.exception("Checkout failed for user %s", user_id)
            raise PersistenceError("Failed to place order") from exc
        logger.info("User %s placed order %s with %d item(s)", user_id, order_id, len(offerings))
        return order_id

    @staticmethod
    def _offerings_for(service_ids: List[int]) -> List[ServiceOffering]:
        offerings: List[ServiceOffering] = []
        seen = set()
        for service_id in service_ids:
            if service_id in seen:
                continue
            seen.add(service_id)
            offering = CatalogService.get_service(service_id)
            if offering is None:
                raise ValidationError(f"Unknown service: {service_id}")
            offerings.append(offering)
        return offerings

    @staticmethod
    def _load_cart(cursor: sqlite3.Cursor, user_id: int) -> List[ServiceOffering]:
        rows = cursor.execute(
            "SELECT service_id FROM cart_items WHERE user_id = ? ORDER BY id",
            (user_id,),
        ).fetchall()
        return CatalogService.resolve([row["service_id"] for row in rows])

    @staticmethod
    def _insert_items(cursor: sqlite3.Cursor, order_id: int, offerings: List[ServiceOffering]) -> None:
        cursor.executemany(
            "INSERT INTO order_items (order_id, service_id, service_title, service_image) "
            "VALUES (?, ?, ?, ?)",
            [(order_id, o.id, o.title, o.image) for o in offerings],
        )

    @classmethod
    async def list_for_user(cls, user_id: int) -> List[OrderRead]:
        """Return the user's orders with their items, newest first."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT id, user_id, status, created_at FROM orders "
                "WHERE user_id = ? ORDER BY created_at DESC, id DESC",
                (user_id,),
            ).fetchall()
            items = cls._items_by_order(conn, [row["id"] for row in rows])
        except sqlite3.Error as exc:
            logger.exception("Failed to load orders of user %s", user_id)
            raise PersistenceError("Failed to load orders") from exc
        finally:
            conn.close()
        return [cls._to_order(row, items) for row in rows]

    @classmethod
    async def list_all(cls) -> List[AdminOrderRead]:
        """Return every order with its items and the owner's email, newest first."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT o.id, o.user_id, o.status, o.created_at, u.email AS user_email "
                "FROM orders o JOIN users u ON u.id = o.user_id "
                "ORDER BY o.created_at DESC, o.id DESC"
            ).fetchall()
            items = cls._items_by_order(conn, [row["id"] for row in rows])
        except sqlite3.Error as exc:
            logger.exception("Failed to load orders for review")
            raise PersistenceError("Failed to load orders") from exc
        finally:
            conn.close()
        return [
            AdminOrderRead(**cls._to_order(row, items).model_dump(), user_email=row["user_email"])
            for row in rows
        ]

    @classmethod
    async def get_order(cls, order_id: int) -> Optional[OrderRead]:
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, user_id, status, created_at FROM orders WHERE id = ?",
                (order_id,),
            ).fetchone()
            if not row:
                return None
            items = cls._items_by_order(conn, [order_id])
        finally:
            conn.close()
        return cls._to_order(row, items)

    @classmethod
    async def update_status(cls, order_id: int, new_status: Optional[str]) -> OrderRead:
        """Set the review status of an order and return the updated order.

        Only ``approved`` and ``rejected`` may be assigned.  With the
        ``strict`` policy the order must still be ``pending``; with the
        default ``lenient`` policy the status is overwritten regardless of
        its current value.
        """
        if new_status not in REVIEW_STATUSES:
            raise ValidationError("Invalid status. Must be 'approved' or 'rejected'.")
        strict = settings.order_status_policy == POLICY_STRICT
        try:
            with transaction() as cursor:
                row = cursor.execute("SELECT status FROM orders WHERE id = ?", (order_id,)).fetchone()
                if not row:
                    raise NotFoundError("Order not found")
                if strict and row["status"] != STATUS_PENDING:
                    raise ConflictError(
                        f"Order {order_id} is already {row['status']} and can no longer change status"
                    )
                cursor.execute("UPDATE orders SET status = ? WHERE id = ?", (new_status, order_id))
        except sqlite3.Error as exc:
            logger.exception("Failed to update status of order %s", order_id)
            raise PersistenceError("Failed to update order") from exc
        logger.info("Order %s status changed from %s to %s", order_id, row["status"], new_status)
        return await cls.get_order(order_id)

    @staticmethod
    def _items_by_order(conn: sqlite3.Connection, order_ids: List[int]) -> Dict[int, List[OrderItemRead]]:
        grouped: Dict[int, List[OrderItemRead]] = {order_id: [] for order_id in order_ids}
        if not order_ids:
            return grouped
        placeholders = ", ".join("?" for _ in order_ids)
        rows = conn.execute(
            "SELECT id, order_id, service_id, service_title, service_image FROM order_items "
            f"WHERE order_id IN ({placeholders}) ORDER BY id",
            tuple(order_ids),
        ).fetchall()
        for row in rows:
            grouped[row["order_id"]].append(OrderItemRead(**dict(row)))
        return grouped

    @staticmethod
    def _to_order(row: sqlite3.Row, items: Dict[int, List[OrderItemRead]]) -> OrderRead:
        return OrderRead(
            id=row["id"],
            user_id=row["user_id"],
            status=row["status"],
            created_at=str(row["created_at"]),
            items=items.get(row["id"], []),
        )
