"""
Media router for user track uploads and the audio pass-through proxy
"""
import uuid
import logging
from typing import Optional

from fastapi import APIRouter, File, UploadFile, Query, Depends, HTTPException
from fastapi.responses import StreamingResponse

from backend.utils.responses import success_response, error_response
from services.errors import ProxyError, PublishError
from services.proxy_service import AudioProxy
from services.storage_service import ArtifactPublisher
from utils.dependencies import get_audio_proxy, get_publisher
from utils.security import read_audio_upload, upload_extension
from utils.shared_utils import log_endpoint_event

logger = logging.getLogger(__name__)

media_router = APIRouter(prefix="/api", tags=["media"])


@media_router.post("/upload-audio")
async def upload_audio(
    audio: Optional[UploadFile] = File(None),
    publisher: ArtifactPublisher = Depends(get_publisher),
):
    """Store a user's own track in the audio bucket and return its public URL"""
    if audio is None:
        return error_response("No audio file provided", status_code=400)
    try:
        content = await read_audio_upload(audio)
    except HTTPException as e:
        return error_response(e.detail, status_code=e.status_code)

    filename = f"{uuid.uuid4()}{upload_extension(audio.filename)}"
    try:
        url = await publisher.upload(content, filename, audio.content_type or "audio/mpeg")
    except PublishError:
        log_endpoint_event("/upload-audio", None, "error", {"filename": filename})
        return error_response("Failed to upload audio to storage", status_code=500)

    log_endpoint_event("/upload-audio", None, "success", {"filename": filename, "bytes": len(content)})
    return success_response({"url": url})


@media_router.get("/audio-proxy")
async def audio_proxy(url: Optional[str] = Query(None), proxy: AudioProxy = Depends(get_audio_proxy)):
    """Stream a remote track through this origin"""
    if not url:
        return error_response("Missing URL", status_code=400)
    try:
        proxied = await proxy.open(url)
    except ProxyError as e:
        return error_response(e.message, status_code=e.status_code)

    return StreamingResponse(
        proxied.body,
        status_code=proxied.status_code,
        headers=proxied.headers,
        media_type=proxied.headers["Content-Type"],
    )
