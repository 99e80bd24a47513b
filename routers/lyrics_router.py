from fastapi import APIRouter, Depends

from backend.utils.responses import success_response, error_response
from models.mix import LyricsRequest
from services.errors import LyricsError
from services.lyrics_service import LyricsService
from utils.dependencies import get_lyrics_service

lyrics_router = APIRouter(prefix="/api", tags=["lyrics"])


@lyrics_router.post("/generate")
async def generate_lyrics(request: LyricsRequest, service: LyricsService = Depends(get_lyrics_service)):
    """Write greeting lyrics for the card"""
    try:
        lyrics = await service.generate(request.name, request.occasion, request.prompt, request.mood)
    except LyricsError as e:
        return error_response(e.message, status_code=e.status_code)
    return success_response({"lyrics": lyrics})
