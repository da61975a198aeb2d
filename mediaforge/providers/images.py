"""
Image Synthesis Client - Hugging Face Inference text-to-image.
Any model from the configured list can be substituted per call.
"""
import logging
from typing import Optional

from mediaforge.credentials import ProviderName
from .base import BaseProviderClient
from .exceptions import UpstreamError

logger = logging.getLogger(__name__)


class ImageClient(BaseProviderClient):
    """One POST per (prompt, model); the body of a success is raw image bytes."""

    provider = ProviderName.HUGGINGFACE

    @property
    def name(self) -> str:
        return "Hugging Face"

    def model_url(self, model: str) -> str:
        return f"{self.settings.huggingface_base_url}/models/{model}"

    async def probe(self, model: Optional[str] = None) -> None:
        """
        Lightweight HEAD request to check the key before a batch.

        Raises CredentialMissing / CredentialInvalid, or UpstreamError when the
        endpoint cannot be reached. Other statuses (e.g. 405, 503 while a model
        loads) say nothing about the key and are accepted.
        """
        api_key = self._require_key()
        model = model or self.settings.image_models[0]

        response = await self._send(
            "HEAD",
            self.model_url(model),
            "validate Hugging Face API key",
            headers={"Authorization": f"Bearer {api_key}"},
        )
        if response.status_code in (401, 403):
            self._check_response(response, "validate Hugging Face API key")
        logger.info(f"[IMAGES] API key accepted (probe HTTP {response.status_code})")

    async def generate_image(self, prompt: str, model: Optional[str] = None) -> bytes:
        """
        Generate one image.

        Returns:
            Raw image bytes as sent by the provider
        """
        api_key = self._require_key()
        model = model or self.settings.image_models[0]

        logger.info(f"[IMAGES] Generating with {model}: {prompt[:80]}...")
        response = await self._send(
            "POST",
            self.model_url(model),
            f"generate image with model {model}",
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json={"inputs": prompt},
        )
        self._check_response(response, f"generate image with model {model}")

        content = response.content
        if not content:
            raise UpstreamError(self.name, f"Model {model} returned an empty image")
        content_type = response.headers.get("content-type", "")
        if content_type.startswith("application/json"):
            raise UpstreamError(self.name, f"Model {model} returned JSON instead of an image")
        return content
