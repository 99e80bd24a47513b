"""
Unit tests for VoiceSynthesizer
"""
import pytest
import requests

from conftest import FakeResponse
from services.errors import SynthesisError
from services.tts_service import VoiceSynthesizer


@pytest.mark.asyncio
async def test_synthesize_posts_fixed_model_and_settings(http):
    http.queue("POST", FakeResponse(200, content=b"ID3voice"))
    synth = VoiceSynthesizer(http, api_key="xi-key", base_url="https://tts.test/")

    audio = await synth.synthesize("Happy birthday!", "EXAVITQu4vr4xnSDxMaL")

    assert audio == b"ID3voice"
    call = http.calls[0]
    assert call["url"] == "https://tts.test/v1/text-to-speech/EXAVITQu4vr4xnSDxMaL"
    assert call["headers"]["xi-api-key"] == "xi-key"
    assert call["headers"]["Accept"] == "audio/mpeg"
    assert call["json"] == {
        "text": "Happy birthday!",
        "model_id": "eleven_multilingual_v2",
        "voice_settings": {"stability": 0.35, "similarity_boost": 0.8},
    }


@pytest.mark.asyncio
async def test_upstream_error_raises_synthesis_error(http):
    http.queue("POST", FakeResponse(401, content=b"invalid api key"))
    synth = VoiceSynthesizer(http, api_key="bad")

    with pytest.raises(SynthesisError) as exc:
        await synth.synthesize("hi", "voice")
    assert exc.value.status_code == 500
    # No retry
    assert len(http.calls) == 1


@pytest.mark.asyncio
async def test_transport_failure_raises_synthesis_error(http):
    http.queue("POST", requests.ConnectionError("dns"))
    synth = VoiceSynthesizer(http, api_key="k")

    with pytest.raises(SynthesisError):
        await synth.synthesize("hi", "voice")
