"""Durable markers for stock restoration that still has to happen."""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class CompensationStatus(str, Enum):
    """State of a compensation record."""

    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


class PlannedDelta(BaseModel):
    """A stock change the restoration attempted to apply."""

    material_id: int | None = None
    product_id: int | None = None
    delta: Decimal


class CompensationRecord(BaseModel):
    """Tracks restoration of a cancelled order's stock until it succeeds."""

    id: int | None = None
    order_id: int
    status: CompensationStatus = CompensationStatus.PENDING
    attempts: int = 0
    last_error: str | None = None
    planned_deltas: list[PlannedDelta] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    resolved_at: datetime | None = None
