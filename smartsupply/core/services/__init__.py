"""
Core business logic services.

Layer-pure services that depend only on:
- smartsupply/core/entities/*
- smartsupply/core/interfaces/*
- smartsupply/core/exceptions.py

NO infrastructure imports.
"""

from smartsupply.core.services.assistant_context import (
    SYSTEM_PROMPT,
    AssistantContextBuilder,
)
from smartsupply.core.services.stock_ledger import (
    DEFAULT_ADJUSTMENT_REASON,
    StockLedgerService,
    receipt_reason,
)

__all__ = [
    # Stock ledger
    "StockLedgerService",
    "DEFAULT_ADJUSTMENT_REASON",
    "receipt_reason",
    # Assistant
    "AssistantContextBuilder",
    "SYSTEM_PROMPT",
]
