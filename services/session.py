"""
Per-request mix session: a unique id and the three temp file slots it owns
"""
import uuid
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Union


@dataclass(frozen=True)
class MixSession:
    session_id: str
    voice_path: Path
    background_path: Path
    output_path: Path

    @classmethod
    def create(cls, tmp_dir: Optional[Union[str, Path]] = None) -> "MixSession":
        """Allocate a new session. No file is created on disk."""
        base = Path(tmp_dir or tempfile.gettempdir())
        base.mkdir(parents=True, exist_ok=True)
        session_id = str(uuid.uuid4())
        return cls(
            session_id=session_id,
            voice_path=base / f"{session_id}_voice.mp3",
            background_path=base / f"{session_id}_bg.mp3",
            output_path=base / f"{session_id}_mixed.mp3",
        )

    @property
    def slots(self) -> List[Path]:
        return [self.voice_path, self.background_path, self.output_path]


@dataclass
class MixedArtifact:
    data: bytes
    content_type: str = "audio/mpeg"
    filename: str = field(default_factory=lambda: f"mix_{uuid.uuid4()}.mp3")


@contextmanager
def session_scope(tmp_dir, janitor) -> Iterator[MixSession]:
    """Yield a fresh session; the janitor runs exactly once on exit."""
    session = MixSession.create(tmp_dir)
    try:
        yield session
    finally:
        janitor.cleanup(session)
