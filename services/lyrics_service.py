"""
Lyrics Service - short rhythmic greeting text via OpenAI
"""
import asyncio
import logging

from services.errors import LyricsError

logger = logging.getLogger(__name__)


def build_system_prompt(name: str, occasion: str, prompt: str, mood: str) -> str:
    """Russian system prompt for a two-quatrain greeting"""
    return f"""Ты профессиональный сонграйтер-копирайтер. Твоя задача — написать текст короткого ритмичного поздравления (2 четверостишия).
Адресат: {name}. Повод: {occasion}.
Смысл/информация от заказчика: "{prompt}".
ВАЖНО: Текст должен читаться как рэп или ритмичная поэзия в стиле: {mood}.
Используй ЖЕСТКУЮ РИФМУ (ААББ или АБАБ) и очень четкий РИТМ.
РАССТАВЛЯЙ ПУНКТУАЦИЮ (запятые, тире, многоточия), чтобы диктору было понятно, где делать музыкальные паузы и акценты.
Никаких лишних слов, только текст хита."""


USER_PROMPT = "Напиши поздравление."


class LyricsService:
    """
    Generates greeting lyrics. The OpenAI client is injected; the default
    one is built lazily from the API key.
    """

    def __init__(self, api_key: str = "", model: str = "gpt-4o-mini", client=None):
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def client(self):
        if self._client is None:
            from openai import OpenAI
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def _generate_sync(self, name: str, occasion: str, prompt: str, mood: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": build_system_prompt(name, occasion, prompt, mood)},
                    {"role": "user", "content": USER_PROMPT},
                ],
                temperature=0.7,
                max_tokens=150,
            )
            return response.choices[0].message.content.strip()
        except Exception as e:
            logger.error(f"Error generating lyrics: {e}")
            raise LyricsError("Failed to generate lyrics") from e

    async def generate(self, name: str, occasion: str, prompt: str, mood: str) -> str:
        return await asyncio.to_thread(self._generate_sync, name, occasion, prompt, mood)
