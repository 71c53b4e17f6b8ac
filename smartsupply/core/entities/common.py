"""Shared helpers for domain entities: identifiers, timestamps and money."""

import uuid
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

MONEY_PLACES = Decimal("0.01")


def new_id() -> str:
    """Generate a new entity identifier."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(UTC)


def to_money(value: Decimal | float | int | str) -> Decimal:
    """Quantize a monetary value to two decimal places."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
