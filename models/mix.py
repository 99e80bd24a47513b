"""
Request models for the card service API
"""

from pydantic import BaseModel, Field
from typing import Optional


class MixAudioRequest(BaseModel):
    # Presence is checked by the coordinator so a missing field is a plain 400
    text: Optional[str] = None
    voice: Optional[str] = Field(default=None, description="ElevenLabs voice id")
    bgUrl: Optional[str] = Field(default=None, description="Background track URL")


class SpeechRequest(BaseModel):
    text: Optional[str] = None
    voice: Optional[str] = None


class LyricsRequest(BaseModel):
    name: str = ""
    occasion: str = ""
    prompt: str = ""
    mood: str = ""


class CardRequest(BaseModel):
    name: Optional[str] = None
    occasion: Optional[str] = None
    lyrics: Optional[str] = None
    audioUrl: Optional[str] = None
    melodyText: Optional[str] = None
