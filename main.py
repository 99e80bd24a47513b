"""
Music Card API - Backend
Greeting cards with synthesized voice mixed over a background track.
Services: ElevenLabs (TTS), OpenAI (lyrics), Supabase (storage + cards), local ffmpeg
"""

import logging
from pathlib import Path

import requests
from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from backend.utils.responses import success_response
from routers.cards_router import cards_router
from routers.lyrics_router import lyrics_router
from routers.media_router import media_router
from routers.mix_router import mix_router
from routers.speech_router import speech_router
from utils.config import Settings, missing_keys
from utils.request_log import RequestLogMiddleware

# ============================================================================
# LOGGING
# ============================================================================

# Logging setup - write ALL events to /logs/app.log
LOGS_DIR = Path("./logs")
LOGS_DIR.mkdir(exist_ok=True)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(LOGS_DIR / "app.log"),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

# ============================================================================
# FASTAPI APP SETUP
# ============================================================================

settings = Settings.from_env()

app = FastAPI(title="Music Card API")
app.state.settings = settings
# One pooled HTTP session for all outbound calls
app.state.http = requests.Session()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.add_middleware(RequestLogMiddleware)

api = APIRouter(prefix="/api")

# ============================================================================
# STARTUP / SHUTDOWN
# ============================================================================

@app.on_event("startup")
async def validate_keys():
    missing = missing_keys()
    if missing:
        logger.warning(f"Startup check: Missing environment variables: {', '.join(missing)}")
    else:
        logger.info("Startup check: All API keys loaded")
    logger.info(f"Using ffmpeg at {settings.ffmpeg_path}, temp dir {settings.tmp_dir}")


@app.on_event("shutdown")
async def close_http_session():
    app.state.http.close()

# ============================================================================
# UTILITY ENDPOINTS
# ============================================================================

@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Music Card API is running!"


@api.get("/health")
async def health_check():
    return success_response({
        "status": "healthy",
        "elevenlabs_configured": bool(settings.elevenlabs_api_key),
        "openai_configured": bool(settings.openai_api_key),
        "supabase_configured": bool(settings.supabase_url and settings.supabase_key),
    })

# ============================================================================
# INCLUDE ROUTERS
# ============================================================================
app.include_router(api)
app.include_router(mix_router)
app.include_router(speech_router)
app.include_router(media_router)
app.include_router(lyrics_router)
app.include_router(cards_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
