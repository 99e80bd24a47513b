"""
Environment-driven settings
"""
import os
import logging
import tempfile
from typing import List, Optional

from pydantic import BaseModel
from pydub.utils import which

logger = logging.getLogger(__name__)

# Keys the service can start without, but not serve every endpoint
REQUIRED_KEYS = [
    "ELEVENLABS_API_KEY",
    "SUPABASE_URL",
    "SUPABASE_KEY",
    "OPENAI_API_KEY",
]

DEFAULT_VOICE_ID = "EXAVITQu4vr4xnSDxMaL"


class Settings(BaseModel):
    elevenlabs_api_key: str = ""
    elevenlabs_base_url: str = "https://api.elevenlabs.io"
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_bucket: str = "audio-uploads"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    ffmpeg_path: str = "ffmpeg"
    tmp_dir: str = tempfile.gettempdir()
    default_voice_id: str = DEFAULT_VOICE_ID
    cors_origins: List[str] = ["*"]
    port: int = 3000

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            elevenlabs_api_key=os.getenv("ELEVENLABS_API_KEY", ""),
            elevenlabs_base_url=os.getenv("ELEVENLABS_BASE_URL", "https://api.elevenlabs.io"),
            supabase_url=os.getenv("SUPABASE_URL", "").rstrip("/"),
            supabase_key=os.getenv("SUPABASE_KEY", ""),
            supabase_bucket=os.getenv("SUPABASE_BUCKET", "audio-uploads"),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            ffmpeg_path=os.getenv("FFMPEG_PATH") or which("ffmpeg") or "ffmpeg",
            tmp_dir=os.getenv("MIX_TMP_DIR") or tempfile.gettempdir(),
            default_voice_id=os.getenv("DEFAULT_VOICE_ID", DEFAULT_VOICE_ID),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            port=int(os.getenv("PORT", "3000")),
        )


def missing_keys(env: Optional[dict] = None) -> List[str]:
    env = os.environ if env is None else env
    return [key for key in REQUIRED_KEYS if not env.get(key)]
