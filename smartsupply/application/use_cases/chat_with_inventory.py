"""
Chat With Inventory Use Case.

Answers free-text questions with an LLM, grounded in a snapshot of the
current catalog, stock, orders and movement history.
"""

from smartsupply.application.dto.requests import ChatRequest
from smartsupply.application.dto.responses import ChatResponse
from smartsupply.config import get_logger, get_settings
from smartsupply.core.interfaces import (
    IInventoryStore,
    ILLMProvider,
    IProductStore,
    IPurchaseOrderStore,
    ISupplierStore,
    IWarehouseStore,
)
from smartsupply.core.services.assistant_context import AssistantContextBuilder

logger = get_logger(__name__)

APOLOGY_MESSAGE = (
    "Sorry, the assistant is unavailable right now. Please try again in a moment."
)

# Upper bounds on rows pulled into the prompt; the builder truncates further
SNAPSHOT_LIMIT = 1000
MOVEMENT_LIMIT = 200


class ChatWithInventoryUseCase:
    """
    Chat proxy over the configured LLM provider.

    Never raises: any failure while gathering data or calling the provider is
    logged and answered with APOLOGY_MESSAGE.
    """

    def __init__(
        self,
        llm: ILLMProvider | None = None,
        product_store: IProductStore | None = None,
        warehouse_store: IWarehouseStore | None = None,
        inventory_store: IInventoryStore | None = None,
        supplier_store: ISupplierStore | None = None,
        order_store: IPurchaseOrderStore | None = None,
        context_builder: AssistantContextBuilder | None = None,
    ):
        self._llm = llm
        self._product_store = product_store
        self._warehouse_store = warehouse_store
        self._inventory_store = inventory_store
        self._supplier_store = supplier_store
        self._order_store = order_store
        self._builder = context_builder or AssistantContextBuilder(
            max_chars=get_settings().llm.context_max_chars
        )

    def _get_llm(self) -> ILLMProvider:
        if self._llm is None:
            from smartsupply.infrastructure.llm import get_llm_provider

            self._llm = get_llm_provider()
        return self._llm

    async def _load_stores(self) -> None:
        from smartsupply.infrastructure.storage import sqlite

        if self._product_store is None:
            self._product_store = await sqlite.get_product_store()
        if self._warehouse_store is None:
            self._warehouse_store = await sqlite.get_warehouse_store()
        if self._inventory_store is None:
            self._inventory_store = await sqlite.get_inventory_store()
        if self._supplier_store is None:
            self._supplier_store = await sqlite.get_supplier_store()
        if self._order_store is None:
            self._order_store = await sqlite.get_purchase_order_store()

    async def build_context(self) -> str:
        """Render the data snapshot the assistant answers from."""
        await self._load_stores()
        return self._builder.build(
            products=await self._product_store.list_products(limit=SNAPSHOT_LIMIT),
            warehouses=await self._warehouse_store.list_warehouses(limit=SNAPSHOT_LIMIT),
            inventory=await self._inventory_store.list_items(limit=SNAPSHOT_LIMIT),
            suppliers=await self._supplier_store.list_suppliers(limit=SNAPSHOT_LIMIT),
            orders=await self._order_store.list_orders(limit=SNAPSHOT_LIMIT),
            movements=await self._inventory_store.list_movements(limit=MOVEMENT_LIMIT),
        )

    async def execute(self, request: ChatRequest) -> ChatResponse:
        """Execute chat use case."""
        logger.info("assistant_chat_started", message_len=len(request.message))

        try:
            context = await self.build_context()
            result = await self._get_llm().generate(
                prompt=request.message,
                system_prompt=self._builder.system_prompt(context),
            )
        except Exception as e:
            logger.error(
                "assistant_chat_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return ChatResponse(response=APOLOGY_MESSAGE)

        logger.info(
            "assistant_chat_complete",
            context_len=len(context),
            response_len=len(result.text),
            model=result.model,
        )
        return ChatResponse(response=result.text)
