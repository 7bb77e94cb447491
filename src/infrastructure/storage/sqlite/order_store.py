"""SQLite implementation of order storage."""

import aiosqlite

from src.config import get_logger
from src.core.entities.order import Order, OrderLineItem, OrderPatch, OrderStatus
from src.core.interfaces.order_store import IOrderStore
from src.infrastructure.storage.sqlite.columns import (
    date_from_db,
    datetime_from_db,
    decimal_from_db,
    decimal_to_db,
    now_iso,
)

logger = get_logger(__name__)


class SQLiteOrderStore(IOrderStore):
    """Order and line item storage bound to a unit of work's connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def create_order(self, order: Order) -> Order:
        """Insert the order row, then all of its line items."""
        cursor = await self._conn.execute(
            """
            INSERT INTO orders (
                customer_id, delivery_date, status, stock_restored,
                created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                order.customer_id,
                order.delivery_date.isoformat(),
                order.status.value,
                int(order.stock_restored),
                order.created_at.isoformat(),
                order.updated_at.isoformat(),
            ),
        )
        order.id = cursor.lastrowid
        await self._insert_items(order.id, order.items)  # type: ignore[arg-type]

        logger.info(
            "order_created",
            order_id=order.id,
            customer_id=order.customer_id,
            items=len(order.items),
            total_amount=order.total_amount,
        )
        return order

    async def get_order(self, order_id: int) -> Order | None:
        """Get order by ID with its line items."""
        cursor = await self._conn.execute(
            "SELECT * FROM orders WHERE id = ?", (order_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_order(row, await self._get_items(order_id))

    async def list_orders(
        self,
        status: OrderStatus | None = None,
        customer_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Order]:
        """List orders, newest first."""
        status_value = status.value if status else None
        cursor = await self._conn.execute(
            """
            SELECT * FROM orders
            WHERE (? IS NULL OR status = ?)
              AND (? IS NULL OR customer_id = ?)
            ORDER BY created_at DESC, id DESC
            LIMIT ? OFFSET ?
            """,
            (status_value, status_value, customer_id, customer_id, limit, offset),
        )
        rows = await cursor.fetchall()
        return [
            self._row_to_order(row, await self._get_items(row["id"])) for row in rows
        ]

    async def update_status(self, order_id: int, status: OrderStatus) -> None:
        await self._conn.execute(
            "UPDATE orders SET status = ?, updated_at = ? WHERE id = ?",
            (status.value, now_iso(), order_id),
        )
        logger.info("order_status_updated", order_id=order_id, status=status.value)

    async def mark_stock_restored(self, order_id: int) -> bool:
        """Set the restoration flag; False if another restoration got there first."""
        cursor = await self._conn.execute(
            """
            UPDATE orders SET stock_restored = 1, updated_at = ?
            WHERE id = ? AND stock_restored = 0
            """,
            (now_iso(), order_id),
        )
        return cursor.rowcount == 1

    async def replace_items(self, order_id: int, items: list[OrderLineItem]) -> None:
        await self._conn.execute(
            "DELETE FROM order_line_items WHERE order_id = ?", (order_id,)
        )
        await self._insert_items(order_id, items)
        await self._conn.execute(
            "UPDATE orders SET updated_at = ? WHERE id = ?", (now_iso(), order_id)
        )
        logger.info("order_items_replaced", order_id=order_id, items=len(items))

    async def apply_patch(self, order_id: int, patch: OrderPatch) -> None:
        delivery_date = patch.delivery_date.isoformat() if patch.delivery_date else None
        await self._conn.execute(
            """
            UPDATE orders SET
                delivery_date = COALESCE(?, delivery_date),
                updated_at = ?
            WHERE id = ?
            """,
            (delivery_date, now_iso(), order_id),
        )
        logger.info(
            "order_details_updated",
            order_id=order_id,
            fields=sorted(patch.model_dump(exclude_none=True)),
        )

    async def _insert_items(self, order_id: int, items: list[OrderLineItem]) -> None:
        await self._conn.executemany(
            """
            INSERT INTO order_line_items (
                order_id, product_id, quantity, unit_price,
                custom_amount_per_unit, is_custom_size, length, width, height,
                order_from_stock
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    order_id,
                    item.product_id,
                    item.quantity,
                    decimal_to_db(item.unit_price),
                    decimal_to_db(item.custom_amount_per_unit),
                    int(item.is_custom_size),
                    decimal_to_db(item.length),
                    decimal_to_db(item.width),
                    decimal_to_db(item.height),
                    int(item.order_from_stock),
                )
                for item in items
            ],
        )
        for item in items:
            item.order_id = order_id

    async def _get_items(self, order_id: int) -> list[OrderLineItem]:
        cursor = await self._conn.execute(
            """
            SELECT * FROM order_line_items
            WHERE order_id = ?
            ORDER BY product_id
            """,
            (order_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_item(row) for row in rows]

    @staticmethod
    def _row_to_order(row: aiosqlite.Row, items: list[OrderLineItem]) -> Order:
        """Convert a database row and its line items to an Order entity."""
        return Order(
            id=row["id"],
            customer_id=row["customer_id"],
            delivery_date=date_from_db(row["delivery_date"]),
            status=OrderStatus(row["status"]),
            stock_restored=bool(row["stock_restored"]),
            items=items,
            created_at=datetime_from_db(row["created_at"]),
            updated_at=datetime_from_db(row["updated_at"]),
        )

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> OrderLineItem:
        """Convert a database row to an OrderLineItem entity."""
        return OrderLineItem(
            order_id=row["order_id"],
            product_id=row["product_id"],
            quantity=row["quantity"],
            unit_price=decimal_from_db(row["unit_price"]),
            custom_amount_per_unit=decimal_from_db(row["custom_amount_per_unit"]),
            is_custom_size=bool(row["is_custom_size"]),
            length=decimal_from_db(row["length"]),
            width=decimal_from_db(row["width"]),
            height=decimal_from_db(row["height"]),
            order_from_stock=bool(row["order_from_stock"]),
        )
