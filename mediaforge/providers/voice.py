"""
Narration Synthesis Client - ElevenLabs voices and text-to-speech.
"""
import logging
from dataclasses import dataclass
from typing import List

from mediaforge.credentials import ProviderName
from .base import BaseProviderClient
from .exceptions import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Voice:
    """An ElevenLabs voice."""
    voice_id: str
    name: str


class VoiceClient(BaseProviderClient):
    """ElevenLabs TTS API client."""

    provider = ProviderName.ELEVENLABS

    @property
    def name(self) -> str:
        return "ElevenLabs"

    def _headers(self, api_key: str) -> dict:
        return {"xi-api-key": api_key}

    async def list_voices(self) -> List[Voice]:
        """Voices in provider order."""
        api_key = self._require_key()

        response = await self._send(
            "GET",
            f"{self.settings.elevenlabs_base_url}/v1/voices",
            "fetch voices",
            headers=self._headers(api_key),
        )
        self._check_response(response, "fetch voices")

        try:
            data = response.json()
            entries = data["voices"]
        except (ValueError, KeyError, TypeError):
            raise UpstreamError(self.name, "Failed to fetch voices: unexpected response shape")

        voices = []
        for entry in entries or []:
            if isinstance(entry, dict) and entry.get("voice_id"):
                voices.append(Voice(
                    voice_id=str(entry["voice_id"]),
                    name=str(entry.get("name") or entry["voice_id"]),
                ))
        logger.info(f"[VOICE] {len(voices)} voices available")
        return voices

    async def default_voice(self) -> Voice:
        """First listed voice."""
        voices = await self.list_voices()
        if not voices:
            raise UpstreamError(self.name, "No voices available for this account")
        return voices[0]

    async def synthesize(self, text: str, voice_id: str) -> bytes:
        """
        Synthesize speech.

        Returns:
            Raw audio bytes (MP3)
        """
        if not text or not text.strip():
            raise ValueError("Text must not be empty")
        api_key = self._require_key()

        payload = {
            "text": text,
            "model_id": self.settings.voice_model,
            "voice_settings": {
                "stability": self.settings.voice_stability,
                "similarity_boost": self.settings.voice_similarity_boost,
            },
        }

        logger.info(f"[VOICE] Synthesizing {len(text)} chars with voice {voice_id}")
        response = await self._send(
            "POST",
            f"{self.settings.elevenlabs_base_url}/v1/text-to-speech/{voice_id}",
            "generate voice",
            headers={**self._headers(api_key), "Content-Type": "application/json"},
            json=payload,
        )
        self._check_response(response, "generate voice")

        if not response.content:
            raise UpstreamError(self.name, "Failed to generate voice: empty audio")
        return response.content
