"""
HTTP contract tests: every endpoint answers exactly once, errors as {"error": ...}
"""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from conftest import FakeHttp, FakeResponse
from backend.orchestrator import SessionStateTracker
from main import app
from services.card_service import CardService
from services.errors import CardNotFoundError, FetchError, LyricsError, SynthesisError
from services.lyrics_service import LyricsService
from services.mix_coordinator import MixCoordinator
from services.proxy_service import AudioProxy
from services.storage_service import ArtifactPublisher
from utils import dependencies


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def override(dep, value):
    app.dependency_overrides[dep] = lambda: value


def make_coordinator(tmp_path, publish_result="https://cdn.test/mix_1.mp3", fetch_error=None):
    synthesizer = AsyncMock()
    synthesizer.synthesize.return_value = b"VOICE"
    fetcher = AsyncMock()
    if fetch_error:
        fetcher.fetch.side_effect = fetch_error
    mixer = AsyncMock()
    mixer.mix.return_value = b"MIXED"
    publisher = AsyncMock()
    publisher.publish.return_value = publish_result
    janitor = MagicMock()
    return MixCoordinator(synthesizer, fetcher, mixer, publisher, janitor, tmp_dir=str(tmp_path))


def test_root_health(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.text == "Music Card API is running!"


def test_mix_audio_success(client, tmp_path):
    coordinator = make_coordinator(tmp_path)
    override(dependencies.get_coordinator, coordinator)

    res = client.post("/api/mix-audio", json={"text": "Happy birthday!", "voice": "v1", "bgUrl": "https://example.com/beat.mp3"})

    assert res.status_code == 200
    assert res.json() == {"mixUrl": "https://cdn.test/mix_1.mp3"}
    coordinator.synthesizer.synthesize.assert_awaited_once_with("Happy birthday!", "v1")
    coordinator.janitor.cleanup.assert_called_once()


def test_mix_audio_missing_background_is_400(client, tmp_path):
    coordinator = make_coordinator(tmp_path)
    override(dependencies.get_coordinator, coordinator)

    res = client.post("/api/mix-audio", json={"text": "hi"})

    assert res.status_code == 400
    assert res.json() == {"error": "Text and bgUrl are required"}
    coordinator.synthesizer.synthesize.assert_not_called()
    coordinator.janitor.cleanup.assert_not_called()


def test_mix_audio_stage_failure_is_single_500(client, tmp_path):
    coordinator = make_coordinator(tmp_path, fetch_error=FetchError("Failed to download background track"))
    override(dependencies.get_coordinator, coordinator)

    res = client.post("/api/mix-audio", json={"text": "hi", "bgUrl": "https://example.com/beat.mp3"})

    assert res.status_code == 500
    assert res.json() == {"error": "Failed to download background track"}
    coordinator.mixer.mix.assert_not_called()
    coordinator.publisher.publish.assert_not_called()
    coordinator.janitor.cleanup.assert_called_once()


def test_speech_post_returns_audio(client):
    synthesizer = AsyncMock()
    synthesizer.synthesize.return_value = b"ID3audio"
    override(dependencies.get_synthesizer, synthesizer)

    res = client.post("/api/speech", json={"text": "hello"})

    assert res.status_code == 200
    assert res.headers["content-type"] == "audio/mpeg"
    assert res.content == b"ID3audio"
    synthesizer.synthesize.assert_awaited_once_with("hello", "EXAVITQu4vr4xnSDxMaL")


def test_speech_get_requires_text(client):
    override(dependencies.get_synthesizer, AsyncMock())
    res = client.get("/api/speech")
    assert res.status_code == 400
    assert res.json() == {"error": "Text is required"}


def test_speech_failure(client):
    synthesizer = AsyncMock()
    synthesizer.synthesize.side_effect = SynthesisError("Failed to generate speech")
    override(dependencies.get_synthesizer, synthesizer)

    res = client.get("/api/speech", params={"text": "hi", "voice": "v2"})

    assert res.status_code == 500
    assert res.json() == {"error": "Failed to generate speech"}


def test_upload_audio_keeps_extension(client):
    http = FakeHttp()
    http.queue("POST", FakeResponse(200))
    override(dependencies.get_publisher, ArtifactPublisher(http, "https://proj.supabase.co", "sb"))

    res = client.post("/api/upload-audio", files={"audio": ("song.wav", b"RIFFdata", "audio/wav")})

    assert res.status_code == 200
    url = res.json()["url"]
    assert url.startswith("https://proj.supabase.co/storage/v1/object/public/audio-uploads/")
    assert url.endswith(".wav")
    assert http.calls[0]["headers"]["Content-Type"] == "audio/wav"


def test_upload_audio_without_file(client):
    override(dependencies.get_publisher, MagicMock())
    res = client.post("/api/upload-audio")
    assert res.status_code == 400
    assert res.json() == {"error": "No audio file provided"}


def test_upload_audio_storage_failure(client):
    http = FakeHttp()
    http.queue("POST", FakeResponse(500, content=b"down"))
    override(dependencies.get_publisher, ArtifactPublisher(http, "https://proj.supabase.co", "sb"))

    res = client.post("/api/upload-audio", files={"audio": ("song", b"data", "audio/mpeg")})

    assert res.status_code == 500
    assert res.json() == {"error": "Failed to upload audio to storage"}


def test_audio_proxy_passes_body_and_headers(client):
    http = FakeHttp()
    upstream = FakeResponse(206, chunks=[b"abc", b"def"], headers={"content-type": "audio/ogg", "content-length": "6"})
    http.queue("GET", upstream)
    override(dependencies.get_audio_proxy, AudioProxy(http))

    res = client.get("/api/audio-proxy", params={"url": "https://example.com/a.ogg"})

    assert res.status_code == 206
    assert res.content == b"abcdef"
    assert res.headers["content-type"].startswith("audio/ogg")
    assert res.headers["accept-ranges"] == "bytes"
    assert res.headers["access-control-allow-origin"] == "*"
    assert upstream.closed


def test_audio_proxy_requires_url(client):
    res = client.get("/api/audio-proxy")
    assert res.status_code == 400
    assert res.json() == {"error": "Missing URL"}


def test_generate_lyrics(client):
    service = AsyncMock(spec=LyricsService)
    service.generate.return_value = "Happy day, hooray"
    override(dependencies.get_lyrics_service, service)

    res = client.post("/api/generate", json={"name": "Ann", "occasion": "birthday", "prompt": "cats", "mood": "rap"})

    assert res.status_code == 200
    assert res.json() == {"lyrics": "Happy day, hooray"}
    service.generate.assert_awaited_once_with("Ann", "birthday", "cats", "rap")


def test_generate_lyrics_failure(client):
    service = AsyncMock(spec=LyricsService)
    service.generate.side_effect = LyricsError("Failed to generate lyrics")
    override(dependencies.get_lyrics_service, service)

    res = client.post("/api/generate", json={})

    assert res.status_code == 500
    assert res.json() == {"error": "Failed to generate lyrics"}


def test_cards_roundtrip_through_service(client):
    service = AsyncMock(spec=CardService)
    service.save.return_value = "ab12cd34"
    service.get.side_effect = CardNotFoundError("Card not found")
    override(dependencies.get_card_service, service)

    saved = client.post("/api/cards", json={"name": "Ann", "audioUrl": "https://cdn.test/mix.mp3"})
    missing = client.get("/api/cards/zz999999")

    assert saved.json() == {"id": "ab12cd34"}
    assert service.save.await_args.args[0]["audioUrl"] == "https://cdn.test/mix.mp3"
    assert missing.status_code == 404
    assert missing.json() == {"error": "Card not found"}


def test_mix_audio_logs_the_session_of_this_request(client, tmp_path):
    coordinator = make_coordinator(tmp_path)
    override(dependencies.get_coordinator, coordinator)
    destinations = []

    async def interleaved_fetch(url, destination):
        # Another request on the same coordinator replaces its last tracker
        destinations.append(destination)
        coordinator.last_tracker = SessionStateTracker("other-session")
        raise FetchError("Failed to download background track")

    coordinator.fetcher.fetch.side_effect = interleaved_fetch

    with patch("routers.mix_router.log_endpoint_event") as log_event:
        res = client.post("/api/mix-audio", json={"text": "hi", "bgUrl": "https://example.com/beat.mp3"})

    assert res.status_code == 500
    session_id = log_event.call_args.args[1]
    assert destinations[0].name == f"{session_id}_bg.mp3"
