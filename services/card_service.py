"""
Card Service - greeting card records in the Supabase `cards` table
"""
import asyncio
import uuid
import logging
from typing import Dict

import requests

from services.errors import CardNotFoundError, CardStoreError

logger = logging.getLogger(__name__)


class CardService:
    def __init__(self, http: requests.Session, base_url: str, api_key: str):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/rest/v1/cards"

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }

    def _save_sync(self, card: Dict) -> str:
        card_id = str(uuid.uuid4())[:8]
        row = {
            "id": card_id,
            "name": card.get("name"),
            "occasion": card.get("occasion"),
            "lyrics": card.get("lyrics"),
            "audio_url": card.get("audioUrl"),
            "melody_text": card.get("melodyText"),
        }
        headers = self._headers()
        headers["Content-Type"] = "application/json"
        headers["Prefer"] = "return=minimal"
        try:
            res = self.http.post(self.table_url, json=row, headers=headers)
        except requests.RequestException as e:
            raise CardStoreError("Failed to save card") from e
        if not res.ok:
            logger.error(f"Supabase error saving card: {res.status_code} {res.text[:200]}")
            raise CardStoreError("Failed to save card")
        return card_id

    def _get_sync(self, card_id: str) -> Dict:
        try:
            res = self.http.get(
                self.table_url,
                params={"id": f"eq.{card_id}", "select": "*"},
                headers=self._headers(),
            )
        except requests.RequestException as e:
            raise CardStoreError("Failed to retrieve card") from e
        if not res.ok:
            logger.error(f"Supabase error retrieving card: {res.status_code}")
            raise CardStoreError("Failed to retrieve card")

        rows = res.json()
        if not rows:
            raise CardNotFoundError("Card not found")
        row = rows[0]
        return {
            "name": row.get("name"),
            "occasion": row.get("occasion"),
            "lyrics": row.get("lyrics"),
            "audioUrl": row.get("audio_url"),
            "melodyText": row.get("melody_text"),
        }

    async def save(self, card: Dict) -> str:
        """Insert a card and return its short id."""
        return await asyncio.to_thread(self._save_sync, card)

    async def get(self, card_id: str) -> Dict:
        return await asyncio.to_thread(self._get_sync, card_id)
