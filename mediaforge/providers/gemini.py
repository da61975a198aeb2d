"""
Google Gemini generateContent transport shared by the script and scene clients.
"""
import json
import logging
from typing import Optional

from mediaforge.credentials import ProviderName
from .base import BaseProviderClient
from .exceptions import UpstreamError

logger = logging.getLogger(__name__)


class GeminiClient(BaseProviderClient):
    """One POST to models/{model}:generateContent per call, no retries."""

    provider = ProviderName.GEMINI

    @property
    def name(self) -> str:
        return "Gemini"

    async def _generate_content(self, model: str, text: str, action: str) -> str:
        api_key = self._require_key()

        url = f"{self.settings.gemini_base_url}/models/{model}:generateContent"
        payload = {
            "contents": [{
                "parts": [{
                    "text": text
                }]
            }]
        }

        response = await self._send(
            "POST",
            url,
            action,
            params={"key": api_key},
            headers={"Content-Type": "application/json"},
            json=payload,
        )
        self._check_response(response, action)

        try:
            data = response.json()
        except ValueError:
            raise UpstreamError(self.name, f"Failed to {action}: response is not JSON")

        generated = self._candidate_text(data)
        if generated is None:
            logger.error(f"Gemini response without candidate text: {json.dumps(data)[:300]}")
            error = data.get("error") if isinstance(data, dict) else None
            raise UpstreamError(
                self.name,
                f"Failed to {action}: " + json.dumps(error or data)[:300],
            )
        return generated

    @staticmethod
    def _candidate_text(data) -> Optional[str]:
        """candidates[0].content.parts[0].text, or None when absent."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None
        return text if isinstance(text, str) and text else None
