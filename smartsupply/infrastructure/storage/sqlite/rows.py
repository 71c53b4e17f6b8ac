"""Column conversions shared by the SQLite stores."""

from datetime import UTC, date, datetime
from decimal import Decimal

from smartsupply.core.entities.common import to_money


def to_db_datetime(value: datetime) -> str:
    """Serialize as UTC ISO text so lexical order matches time order."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def to_db_money(value: Decimal) -> str:
    return str(to_money(value))


def parse_money(value: str | None) -> Decimal:
    return to_money(Decimal(value)) if value is not None else Decimal("0.00")


def like_pattern(search: str) -> str:
    """Case-insensitive substring pattern for LIKE ... ESCAPE '\\'."""
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped.lower()}%"
