"""
Storage Service - uploads audio to the Supabase storage bucket
"""
import asyncio
import logging

import requests

from services.errors import PublishError
from services.session import MixedArtifact

logger = logging.getLogger(__name__)


class ArtifactPublisher:
    """
    Uploads bytes to Supabase storage and returns their public URL.
    Used for finished mixes and for user-provided tracks.
    """

    def __init__(self, http: requests.Session, base_url: str, api_key: str, bucket: str = "audio-uploads"):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.bucket = bucket

    def upload_url(self, filename: str) -> str:
        return f"{self.base_url}/storage/v1/object/{self.bucket}/{filename}"

    def public_url(self, filename: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{filename}"

    def _upload_sync(self, data: bytes, filename: str, content_type: str) -> str:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "apikey": self.api_key,
            "Content-Type": content_type,
        }
        try:
            res = self.http.post(self.upload_url(filename), data=data, headers=headers)
        except requests.RequestException as e:
            logger.error(f"Supabase upload failed for {filename}: {e}")
            raise PublishError("Failed to upload to storage") from e

        if not res.ok:
            logger.error(f"Supabase upload failed: {res.status_code} {res.text[:200]}")
            raise PublishError("Failed to upload to storage")
        return self.public_url(filename)

    async def upload(self, data: bytes, filename: str, content_type: str = "audio/mpeg") -> str:
        return await asyncio.to_thread(self._upload_sync, data, filename, content_type)

    async def publish(self, artifact: MixedArtifact) -> str:
        try:
            url = await self.upload(artifact.data, artifact.filename, artifact.content_type)
        except PublishError as e:
            raise PublishError("Failed to upload mix") from e
        logger.info(f"Published {artifact.filename} ({len(artifact.data)} bytes)")
        return url
