"""
Downloads a remote background track into a session slot
"""
import asyncio
import logging
import threading
from pathlib import Path
from typing import Optional

import requests

from services.errors import FetchError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class TrackFetcher:
    def __init__(self, http: requests.Session):
        self.http = http

    def _fetch_sync(self, url: str, destination: Path, stop: Optional[threading.Event] = None) -> int:
        written = 0
        try:
            with self.http.get(url, stream=True) as res:
                res.raise_for_status()
                with open(destination, "wb") as f:
                    for chunk in res.iter_content(chunk_size=CHUNK_SIZE):
                        if stop is not None and stop.is_set():
                            break
                        if chunk:
                            f.write(chunk)
                            written += len(chunk)
        except (requests.RequestException, OSError) as e:
            logger.error(f"Background download failed for {url[:50]}: {e}")
            raise FetchError("Failed to download background track") from e
        return written

    async def fetch(self, url: str, destination: Path) -> int:
        """
        Stream the body of ``url`` into ``destination``.

        Returns only after the file has been closed, so the data is on disk
        before anything reads it. Returns the number of bytes written.
        If cancelled, the download is stopped and the file closed before
        the cancellation propagates.
        """
        stop = threading.Event()
        worker = asyncio.ensure_future(asyncio.to_thread(self._fetch_sync, url, destination, stop))
        try:
            written = await asyncio.shield(worker)
        except asyncio.CancelledError:
            stop.set()
            await asyncio.wait([worker])
            if not worker.cancelled():
                worker.exception()
            logger.warning(f"Background download cancelled: {destination.name}")
            raise
        logger.info(f"Background track saved to {destination.name} ({written} bytes)")
        return written
