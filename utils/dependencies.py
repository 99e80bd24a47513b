"""
FastAPI dependency providers. Everything is built from app.state so tests
can swap any piece through app.dependency_overrides.
"""
from fastapi import Request
import requests

from services.card_service import CardService
from services.janitor import ResourceJanitor
from services.lyrics_service import LyricsService
from services.mix_coordinator import MixCoordinator
from services.mix_service import Mixer
from services.proxy_service import AudioProxy
from services.storage_service import ArtifactPublisher
from services.track_fetcher import TrackFetcher
from services.tts_service import VoiceSynthesizer
from utils.config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_http_session(request: Request) -> requests.Session:
    return request.app.state.http


def get_synthesizer(request: Request) -> VoiceSynthesizer:
    settings = get_settings(request)
    return VoiceSynthesizer(get_http_session(request), settings.elevenlabs_api_key, settings.elevenlabs_base_url)


def get_publisher(request: Request) -> ArtifactPublisher:
    settings = get_settings(request)
    return ArtifactPublisher(
        get_http_session(request),
        settings.supabase_url,
        settings.supabase_key,
        settings.supabase_bucket,
    )


def get_coordinator(request: Request) -> MixCoordinator:
    settings = get_settings(request)
    http = get_http_session(request)
    return MixCoordinator(
        synthesizer=get_synthesizer(request),
        fetcher=TrackFetcher(http),
        mixer=Mixer(settings.ffmpeg_path),
        publisher=get_publisher(request),
        janitor=ResourceJanitor(),
        tmp_dir=settings.tmp_dir,
        default_voice_id=settings.default_voice_id,
    )


def get_lyrics_service(request: Request) -> LyricsService:
    settings = get_settings(request)
    return LyricsService(settings.openai_api_key, settings.openai_model)


def get_card_service(request: Request) -> CardService:
    settings = get_settings(request)
    return CardService(get_http_session(request), settings.supabase_url, settings.supabase_key)


def get_audio_proxy(request: Request) -> AudioProxy:
    return AudioProxy(get_http_session(request))
