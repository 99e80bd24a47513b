"""
Cards router - save a finished card and fetch it by short id
"""
from fastapi import APIRouter, Depends

from backend.utils.responses import success_response, error_response
from models.mix import CardRequest
from services.card_service import CardService
from services.errors import CardStoreError
from utils.dependencies import get_card_service
from utils.shared_utils import log_endpoint_event

cards_router = APIRouter(prefix="/api/cards", tags=["cards"])


@cards_router.post("")
async def save_card(request: CardRequest, service: CardService = Depends(get_card_service)):
    try:
        card_id = await service.save(request.model_dump())
    except CardStoreError as e:
        return error_response(e.message, status_code=e.status_code)
    log_endpoint_event("/cards", card_id, "success", {})
    return success_response({"id": card_id})


@cards_router.get("/{card_id}")
async def get_card(card_id: str, service: CardService = Depends(get_card_service)):
    try:
        card = await service.get(card_id)
    except CardStoreError as e:
        return error_response(e.message, status_code=e.status_code)
    return success_response(card)
