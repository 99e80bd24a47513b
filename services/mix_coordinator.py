"""
Mix Coordinator - drives one mix-audio request through the pipeline
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from backend.orchestrator import SessionState, SessionStateTracker
from services.errors import MixPipelineError, ValidationError
from services.janitor import ResourceJanitor
from services.mix_service import Mixer
from services.session import MixedArtifact, session_scope
from services.storage_service import ArtifactPublisher
from services.track_fetcher import TrackFetcher
from services.tts_service import VoiceSynthesizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MixOutcome:
    session_id: str
    mix_url: str


class MixCoordinator:
    """
    Runs synthesize -> fetch -> mix -> publish strictly in order for one
    request. The first failing stage stops the rest. The session's temp
    files are cleaned up exactly once whatever the outcome.
    Uses dependency injection for every stage.
    """

    def __init__(
        self,
        synthesizer: VoiceSynthesizer,
        fetcher: TrackFetcher,
        mixer: Mixer,
        publisher: ArtifactPublisher,
        janitor: Optional[ResourceJanitor] = None,
        tmp_dir: Optional[str] = None,
        default_voice_id: str = "EXAVITQu4vr4xnSDxMaL",
    ):
        self.synthesizer = synthesizer
        self.fetcher = fetcher
        self.mixer = mixer
        self.publisher = publisher
        self.janitor = janitor or ResourceJanitor()
        self.tmp_dir = tmp_dir
        self.default_voice_id = default_voice_id
        # Tracker of the most recent run, for inspection only
        self.last_tracker: Optional[SessionStateTracker] = None

    @staticmethod
    def validate(text: Optional[str], background_url: Optional[str]):
        if not text or not background_url:
            raise ValidationError("Text and bgUrl are required")

    async def run(self, text: Optional[str], background_url: Optional[str], voice_id: Optional[str] = None) -> MixOutcome:
        """
        Mix ``text`` spoken by ``voice_id`` over ``background_url``.

        Returns the session id and the public URL of the published mix.
        Raises a MixPipelineError subclass for the stage that failed, with
        ``session_id`` set once a session exists.
        """
        # Nothing is allocated before validation passes
        self.validate(text, background_url)
        voice_id = voice_id or self.default_voice_id
        logger.info(f"Starting mix for voice {voice_id} and bgUrl: {background_url[:50]}...")

        with session_scope(self.tmp_dir, self.janitor) as session:
            tracker = SessionStateTracker(session.session_id)
            self.last_tracker = tracker
            try:
                tracker.advance(SessionState.SYNTHESIZING)
                voice = await self.synthesizer.synthesize(text, voice_id)

                tracker.advance(SessionState.FETCHING)
                await self.fetcher.fetch(background_url, session.background_path)

                tracker.advance(SessionState.MIXING)
                mixed = await self.mixer.mix(session, voice)

                tracker.advance(SessionState.PUBLISHING)
                url = await self.publisher.publish(MixedArtifact(data=mixed))

                tracker.advance(SessionState.DONE)
                return MixOutcome(session.session_id, url)
            except MixPipelineError as e:
                tracker.fail(e.message)
                e.session_id = session.session_id
                raise
            except asyncio.CancelledError:
                tracker.fail("cancelled")
                raise
            except Exception as e:
                logger.exception(f"Unexpected error in mix session {session.session_id}")
                tracker.fail(str(e))
                err = MixPipelineError("Failed to process audio mixture")
                err.session_id = session.session_id
                raise err from e
