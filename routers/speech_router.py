"""
Speech router - plain text-to-speech without mixing
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from backend.utils.responses import error_response
from models.mix import SpeechRequest
from services.errors import SynthesisError
from services.tts_service import VoiceSynthesizer
from utils.config import Settings
from utils.dependencies import get_settings, get_synthesizer

speech_router = APIRouter(prefix="/api", tags=["speech"])


async def _speak(text: Optional[str], voice: Optional[str], synthesizer: VoiceSynthesizer, settings: Settings):
    if not text:
        return error_response("Text is required", status_code=400)
    try:
        audio = await synthesizer.synthesize(text, voice or settings.default_voice_id)
    except SynthesisError as e:
        return error_response(e.message, status_code=e.status_code)
    return Response(content=audio, media_type="audio/mpeg")


@speech_router.get("/speech")
async def speech_get(
    text: Optional[str] = Query(None),
    voice: Optional[str] = Query(None),
    synthesizer: VoiceSynthesizer = Depends(get_synthesizer),
    settings: Settings = Depends(get_settings),
):
    return await _speak(text, voice, synthesizer, settings)


@speech_router.post("/speech")
async def speech_post(
    request: SpeechRequest,
    synthesizer: VoiceSynthesizer = Depends(get_synthesizer),
    settings: Settings = Depends(get_settings),
):
    return await _speak(request.text, request.voice, synthesizer, settings)
