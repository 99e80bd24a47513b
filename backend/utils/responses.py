"""
JSON response helpers shared by the routers
"""
import logging
from typing import Optional

from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def success_response(data: Optional[dict] = None, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=data or {})


def error_response(error: str, status_code: int = 500) -> JSONResponse:
    """Every failure goes out as {"error": <message>}"""
    logger.error(f"Error response ({status_code}): {error}")
    return JSONResponse(status_code=status_code, content={"error": error})
