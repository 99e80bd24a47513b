"""
Mix router - voice over background track
"""
import logging

from fastapi import APIRouter, Depends

from backend.utils.responses import success_response, error_response
from models.mix import MixAudioRequest
from services.errors import MixPipelineError
from services.mix_coordinator import MixCoordinator
from utils.dependencies import get_coordinator
from utils.shared_utils import log_endpoint_event

logger = logging.getLogger(__name__)

mix_router = APIRouter(prefix="/api", tags=["mix"])


@mix_router.post("/mix-audio")
async def mix_audio(request: MixAudioRequest, coordinator: MixCoordinator = Depends(get_coordinator)):
    """Synthesize the text, mix it over bgUrl and return the public mix URL"""
    try:
        outcome = await coordinator.run(request.text, request.bgUrl, request.voice)
    except MixPipelineError as e:
        log_endpoint_event("/mix-audio", e.session_id, "error", {"error": e.message})
        return error_response(e.message, status_code=e.status_code)

    log_endpoint_event("/mix-audio", outcome.session_id, "success", {"mixUrl": outcome.mix_url})
    return success_response({"mixUrl": outcome.mix_url})
