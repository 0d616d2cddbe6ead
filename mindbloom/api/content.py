"""Public content endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from mindbloom.api.dependencies import get_companion_service
from mindbloom.schemas.ai import QuoteResponse
from mindbloom.services.companion import CompanionService

router = APIRouter(prefix="/api/v1/content", tags=["content"])


@router.get("/quote", response_model=QuoteResponse)
async def get_quote(
    companion: Annotated[CompanionService, Depends(get_companion_service)],
):
    """Get a motivational quote."""
    return await companion.quote()
