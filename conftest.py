"""
Shared fakes: a requests.Session stand-in and an ffmpeg stand-in
"""
import asyncio
from pathlib import Path
from typing import Dict, List, Optional

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code: int = 200, content: bytes = b"", headers: Optional[Dict[str, str]] = None,
                 json_data=None, chunks: Optional[List[bytes]] = None, fail_midway: bool = False):
        self.status_code = status_code
        self.content = content
        self.text = content.decode("utf-8", errors="replace")
        self.headers = headers or {}
        self._json = json_data
        self._chunks = chunks if chunks is not None else [content]
        self._fail_midway = fail_midway
        self.closed = False

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        return self._json

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} error")

    def iter_content(self, chunk_size: int = 1):
        for chunk in self._chunks:
            yield chunk
        if self._fail_midway:
            raise requests.ConnectionError("connection reset")

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class FakeHttp:
    """Records calls and replays queued responses (or raises queued errors)."""

    def __init__(self):
        self.calls = []
        self.responses = {"GET": [], "POST": []}

    def queue(self, method: str, response):
        self.responses[method].append(response)

    def _next(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses[method].pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)

    def close(self):
        pass


class FakeProcess:
    """Stands in for an ffmpeg process: writes the output file on success."""

    def __init__(self, cmd, returncode: int = 0, stderr: bytes = b"", output: bytes = b"MIXED"):
        self.cmd = list(cmd)
        self.pid = 4242
        self.returncode = None
        self._returncode = returncode
        self._stderr = stderr
        self._output = output

    async def communicate(self):
        if self._returncode == 0:
            Path(self.cmd[-1]).write_bytes(self._output)
        self.returncode = self._returncode
        return b"", self._stderr


def fake_engine(returncode: int = 0, stderr: bytes = b"", output: bytes = b"MIXED", calls: Optional[list] = None):
    """Build a create_subprocess_exec replacement."""
    async def _exec(*cmd, **kwargs):
        if calls is not None:
            calls.append(list(cmd))
        return FakeProcess(cmd, returncode=returncode, stderr=stderr, output=output)
    return _exec


@pytest.fixture
def http():
    return FakeHttp()


class RunawayProcess:
    """
    An ffmpeg stand-in that keeps running on its own: it writes the output
    file after ``delay`` seconds unless it is killed first.
    """

    def __init__(self, cmd, delay: float = 0.1):
        self.cmd = list(cmd)
        self.pid = 4343
        self.returncode = None
        self.killed = False
        self._kill = asyncio.Event()
        self._done = asyncio.ensure_future(self._run(delay))

    async def _run(self, delay):
        try:
            await asyncio.wait_for(self._kill.wait(), delay)
            self.returncode = -9
        except asyncio.TimeoutError:
            Path(self.cmd[-1]).write_bytes(b"LATE")
            self.returncode = 0

    async def communicate(self):
        await asyncio.shield(self._done)
        return b"", b""

    def kill(self):
        self.killed = True
        self._kill.set()

    async def wait(self):
        await self._done
        return self.returncode
