"""
TTS Service - ElevenLabs text-to-speech client
"""
import asyncio
import logging

import requests

from services.errors import SynthesisError

logger = logging.getLogger(__name__)

TTS_MODEL_ID = "eleven_multilingual_v2"
VOICE_SETTINGS = {
    "stability": 0.35,  # lower = more expressive
    "similarity_boost": 0.8,
}


class VoiceSynthesizer:
    """
    Turns text into mp3 bytes through the ElevenLabs API.
    The HTTP session is injected so tests can substitute a fake.
    """

    def __init__(self, http: requests.Session, api_key: str, base_url: str = "https://api.elevenlabs.io"):
        self.http = http
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    def build_payload(self, text: str) -> dict:
        return {
            "text": text,
            "model_id": TTS_MODEL_ID,
            "voice_settings": dict(VOICE_SETTINGS),
        }

    def _synthesize_sync(self, text: str, voice_id: str) -> bytes:
        url = f"{self.base_url}/v1/text-to-speech/{voice_id}"
        headers = {
            "Accept": "audio/mpeg",
            "xi-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        try:
            res = self.http.post(url, json=self.build_payload(text), headers=headers)
        except requests.RequestException as e:
            logger.error(f"TTS request failed for voice {voice_id}: {e}")
            raise SynthesisError("Failed to generate speech") from e

        if not res.ok:
            logger.error(f"TTS returned {res.status_code} for voice {voice_id}: {res.text[:200]}")
            raise SynthesisError("Failed to generate speech")
        return res.content

    async def synthesize(self, text: str, voice_id: str) -> bytes:
        """Return raw audio/mpeg bytes. No retry."""
        return await asyncio.to_thread(self._synthesize_sync, text, voice_id)
