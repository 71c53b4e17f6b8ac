"""Assistant chat endpoint."""

from fastapi import APIRouter, Depends

from smartsupply.api.dependencies import get_chat_use_case
from smartsupply.application.dto.requests import ChatRequest
from smartsupply.application.dto.responses import ChatResponse
from smartsupply.application.use_cases import ChatWithInventoryUseCase

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    use_case: ChatWithInventoryUseCase = Depends(get_chat_use_case),
) -> ChatResponse:
    """
    Ask the assistant about current stock, orders and suppliers.

    Always answers 200; provider failures come back as an apology.
    """
    return await use_case.execute(request)
