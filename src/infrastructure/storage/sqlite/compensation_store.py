"""SQLite implementation of compensation record storage."""

import json

import aiosqlite
from pydantic import ValidationError

from src.config import get_logger
from src.core.entities.compensation import (
    CompensationRecord,
    CompensationStatus,
    PlannedDelta,
)
from src.core.interfaces.compensation_store import ICompensationStore
from src.infrastructure.storage.sqlite.columns import (
    datetime_from_db,
    now_iso,
    optional_datetime_from_db,
)

logger = get_logger(__name__)


class SQLiteCompensationStore(ICompensationStore):
    """Compensation record storage bound to a unit of work's connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def create_pending(self, order_id: int) -> CompensationRecord:
        """Insert a pending record; an existing record for the order is kept."""
        now = now_iso()
        await self._conn.execute(
            """
            INSERT INTO compensation_records (order_id, status, created_at, updated_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(order_id) DO NOTHING
            """,
            (order_id, CompensationStatus.PENDING.value, now, now),
        )
        record = await self.get_by_order(order_id)
        logger.info(
            "compensation_record_pending",
            order_id=order_id,
            record_id=record.id,  # type: ignore[union-attr]
        )
        return record  # type: ignore[return-value]

    async def get_by_order(self, order_id: int) -> CompensationRecord | None:
        cursor = await self._conn.execute(
            "SELECT * FROM compensation_records WHERE order_id = ?", (order_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    async def list_pending(self, limit: int = 100) -> list[CompensationRecord]:
        cursor = await self._conn.execute(
            """
            SELECT * FROM compensation_records
            WHERE status = ?
            ORDER BY id
            LIMIT ?
            """,
            (CompensationStatus.PENDING.value, limit),
        )
        rows = await cursor.fetchall()
        return [self._row_to_record(row) for row in rows]

    async def record_failure(
        self,
        order_id: int,
        error: str,
        planned_deltas: list[PlannedDelta],
        attempts: int,
    ) -> None:
        """Accumulate attempts and keep the latest error and deltas."""
        await self._conn.execute(
            """
            UPDATE compensation_records SET
                attempts = attempts + ?,
                last_error = ?,
                planned_deltas = ?,
                updated_at = ?
            WHERE order_id = ?
            """,
            (
                attempts,
                error,
                json.dumps([d.model_dump(mode="json") for d in planned_deltas]),
                now_iso(),
                order_id,
            ),
        )

    async def mark_resolved(self, order_id: int) -> None:
        now = now_iso()
        await self._conn.execute(
            """
            UPDATE compensation_records SET
                status = ?, updated_at = ?, resolved_at = ?
            WHERE order_id = ?
            """,
            (CompensationStatus.RESOLVED.value, now, now, order_id),
        )

    async def mark_failed(self, order_id: int, error: str) -> None:
        await self._conn.execute(
            """
            UPDATE compensation_records SET
                status = ?, last_error = ?, updated_at = ?
            WHERE order_id = ?
            """,
            (CompensationStatus.FAILED.value, error, now_iso(), order_id),
        )
        logger.warning("compensation_record_failed", order_id=order_id, error=error)

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> CompensationRecord:
        """Convert a database row to a CompensationRecord entity."""
        deltas = []
        if row["planned_deltas"]:
            try:
                deltas = [PlannedDelta(**d) for d in json.loads(row["planned_deltas"])]
            except (json.JSONDecodeError, TypeError, ValidationError) as e:
                logger.warning(
                    "compensation_deltas_unreadable",
                    order_id=row["order_id"],
                    error=str(e),
                )

        return CompensationRecord(
            id=row["id"],
            order_id=row["order_id"],
            status=CompensationStatus(row["status"]),
            attempts=row["attempts"],
            last_error=row["last_error"],
            planned_deltas=deltas,
            created_at=datetime_from_db(row["created_at"]),
            updated_at=datetime_from_db(row["updated_at"]),
            resolved_at=optional_datetime_from_db(row["resolved_at"]),
        )
