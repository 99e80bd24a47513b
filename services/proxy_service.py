"""
Proxy Service - passes a remote audio body through to the browser
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Iterator

import requests

from services.errors import ProxyError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


@dataclass
class ProxiedAudio:
    status_code: int
    headers: Dict[str, str]
    body: Iterator[bytes]


class AudioProxy:
    def __init__(self, http: requests.Session):
        self.http = http

    def _open_sync(self, url: str) -> ProxiedAudio:
        try:
            res = self.http.get(url, stream=True)
        except requests.RequestException as e:
            logger.error(f"Audio proxy error: {e}")
            raise ProxyError("Audio proxy error") from e

        headers = {
            "Access-Control-Allow-Origin": "*",
            "Content-Type": res.headers.get("content-type", "audio/mpeg"),
            "Accept-Ranges": res.headers.get("accept-ranges", "bytes"),
        }
        if res.headers.get("content-length"):
            headers["Content-Length"] = res.headers["content-length"]

        def body() -> Iterator[bytes]:
            try:
                for chunk in res.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        yield chunk
            finally:
                res.close()

        return ProxiedAudio(status_code=res.status_code, headers=headers, body=body())

    async def open(self, url: str) -> ProxiedAudio:
        return await asyncio.to_thread(self._open_sync, url)
