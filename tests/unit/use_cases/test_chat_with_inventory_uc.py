"""Tests for ChatWithInventoryUseCase."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from smartsupply.application.dto.requests import ChatRequest
from smartsupply.application.use_cases.chat_with_inventory import (
    APOLOGY_MESSAGE,
    ChatWithInventoryUseCase,
)
from smartsupply.core.entities.catalog import Product
from smartsupply.core.exceptions import CircuitBreakerOpenError, LLMTimeoutError
from smartsupply.core.interfaces.llm import LLMResponse
from smartsupply.core.services.assistant_context import AssistantContextBuilder


def empty_store(**listing):
    store = AsyncMock()
    for name, value in listing.items():
        getattr(store, name).return_value = value
    return store


@pytest.fixture
def mock_llm():
    llm = AsyncMock()
    llm.generate.return_value = LLMResponse(text="You have 3 laptops.", model="test-model")
    return llm


@pytest.fixture
def use_case(mock_llm):
    return ChatWithInventoryUseCase(
        llm=mock_llm,
        product_store=empty_store(
            list_products=[Product(sku="ELEC-001", name="Laptop", price=Decimal("10"))]
        ),
        warehouse_store=empty_store(list_warehouses=[]),
        inventory_store=empty_store(list_items=[], list_movements=[]),
        supplier_store=empty_store(list_suppliers=[]),
        order_store=empty_store(list_orders=[]),
        context_builder=AssistantContextBuilder(max_chars=5000),
    )


class TestChatWithInventoryUseCase:
    async def test_answer_passed_through(self, use_case, mock_llm):
        response = await use_case.execute(ChatRequest(message="How many laptops?"))
        assert response.response == "You have 3 laptops."

        kwargs = mock_llm.generate.call_args.kwargs
        assert kwargs["prompt"] == "How many laptops?"
        assert "DATA CONTEXT:" in kwargs["system_prompt"]
        assert "Laptop (SKU: ELEC-001" in kwargs["system_prompt"]

    @pytest.mark.parametrize(
        "error",
        [
            LLMTimeoutError(60),
            CircuitBreakerOpenError("gemini", 30),
            RuntimeError("boom"),
        ],
    )
    async def test_provider_failure_returns_apology(self, use_case, mock_llm, error):
        mock_llm.generate.side_effect = error
        response = await use_case.execute(ChatRequest(message="Hi"))
        assert response.response == APOLOGY_MESSAGE

    async def test_data_failure_returns_apology(self, mock_llm):
        failing = AsyncMock()
        failing.list_products.side_effect = RuntimeError("database is locked")
        use_case = ChatWithInventoryUseCase(
            llm=mock_llm,
            product_store=failing,
            warehouse_store=AsyncMock(),
            inventory_store=AsyncMock(),
            supplier_store=AsyncMock(),
            order_store=AsyncMock(),
            context_builder=AssistantContextBuilder(),
        )
        response = await use_case.execute(ChatRequest(message="Hi"))
        assert response.response == APOLOGY_MESSAGE
        mock_llm.generate.assert_not_called()
