import os
from fastapi import UploadFile, HTTPException


MAX_AUDIO_BYTES = 15 * 1024 * 1024  # 15 MB
DEFAULT_AUDIO_EXTENSION = ".mp3"


def upload_extension(filename: str) -> str:
    """Extension of the uploaded file, or .mp3 when it has none"""
    ext = os.path.splitext(filename or "")[1]
    return ext or DEFAULT_AUDIO_EXTENSION


async def read_audio_upload(file: UploadFile) -> bytes:
    """
    Read the uploaded audio into memory.
    Raise HTTPException if it is empty or over the size limit.
    """
    content = await file.read()
    if len(content) == 0:
        raise HTTPException(status_code=400, detail="No audio file provided")
    if len(content) > MAX_AUDIO_BYTES:
        raise HTTPException(status_code=413, detail="File size exceeds 15MB limit")
    return content
