"""
Mix Service - runs ffmpeg to lay the synthesized voice over the background
"""
import asyncio
import logging
from typing import List

from services.errors import MixError
from services.filter_graph import DUCKING_FILTER, FilterGraphSpec
from services.session import MixSession

logger = logging.getLogger(__name__)

# Keep the tail of ffmpeg's stderr; the banner at the top is noise
MAX_DIAGNOSTIC_CHARS = 2000


class Mixer:
    def __init__(self, ffmpeg_path: str = "ffmpeg", filter_spec: FilterGraphSpec = DUCKING_FILTER):
        self.ffmpeg_path = ffmpeg_path
        self.filter_spec = filter_spec

    def build_command(self, session: MixSession) -> List[str]:
        return [
            self.ffmpeg_path,
            "-y",
            "-i", str(session.background_path),
            "-i", str(session.voice_path),
            "-filter_complex", self.filter_spec.to_expression(),
            "-ac", "2",
            "-f", "mp3",
            str(session.output_path),
        ]

    async def _run_engine(self, cmd: List[str]) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise MixError("Error mixing audio", diagnostics=str(e)) from e

        # Suspends this session only until ffmpeg exits
        try:
            _, stderr = await proc.communicate()
        except BaseException:
            # Cancelled: ffmpeg must be gone before the session files are removed
            if proc.returncode is None:
                try:
                    proc.kill()
                except ProcessLookupError:
                    pass
                await proc.wait()
            logger.warning(f"FFmpeg stopped early (pid={proc.pid})")
            raise
        if proc.returncode != 0:
            stderr_text = stderr.decode("utf-8", errors="replace")[-MAX_DIAGNOSTIC_CHARS:]
            raise MixError("Error mixing audio", diagnostics=stderr_text)

    async def mix(self, session: MixSession, voice: bytes) -> bytes:
        """
        Write the voice to its slot, mix it over the already downloaded
        background and return the mp3 bytes of the result.
        """
        with open(session.voice_path, "wb") as f:
            f.write(voice)

        cmd = self.build_command(session)
        logger.info(f"Mixing session {session.session_id}: {' '.join(cmd)}")
        try:
            await self._run_engine(cmd)
        except MixError as e:
            logger.error(f"FFmpeg error (session={session.session_id}): {e.diagnostics}")
            raise

        try:
            return await asyncio.to_thread(session.output_path.read_bytes)
        except OSError as e:
            raise MixError("Error mixing audio", diagnostics=str(e)) from e
