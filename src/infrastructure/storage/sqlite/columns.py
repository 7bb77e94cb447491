"""Column value conversions shared by the SQLite stores."""

from datetime import UTC, date, datetime
from decimal import Decimal


def decimal_to_db(value: Decimal | None) -> str | None:
    """
    Canonical TEXT form of a decimal.

    Every decimal column is written through here so that equality guards
    in ``WHERE`` clauses compare like with like.
    """
    if value is None:
        return None
    normalized = value.normalize()
    if normalized == 0:
        return "0"
    return format(normalized, "f")


def decimal_from_db(value: str | int | float | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value))


def datetime_from_db(value: str | None) -> datetime:
    """Parse a stored timestamp, falling back to now for unreadable values."""
    if value:
        try:
            parsed = datetime.fromisoformat(value)
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
        except (ValueError, TypeError):
            pass
    return datetime.now(UTC)


def optional_datetime_from_db(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime_from_db(value)


def date_from_db(value: str) -> date:
    return date.fromisoformat(value)


def now_iso() -> str:
    return datetime.now(UTC).isoformat()
