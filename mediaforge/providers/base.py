"""
Base class for remote AI provider clients.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from mediaforge.config import ProviderSettings
from mediaforge.credentials import CredentialAccessor, ProviderName
from .exceptions import CredentialInvalid, CredentialMissing, UpstreamError

logger = logging.getLogger(__name__)


class BaseProviderClient(ABC):
    """
    Shared plumbing for the Gemini, Hugging Face and ElevenLabs clients.

    Settings and credentials are injected; the httpx client may be injected
    too (tests pass a mock), otherwise one is created lazily.
    """

    provider: ProviderName

    def __init__(
        self,
        credentials: CredentialAccessor,
        settings: Optional[ProviderSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.credentials = credentials
        self.settings = settings or ProviderSettings()
        self._client = client
        self._owns_client = client is None

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider display name."""
        pass

    @property
    def is_available(self) -> bool:
        return self.credentials.get(self.provider) is not None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.request_timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _require_key(self) -> str:
        api_key = self.credentials.get(self.provider)
        if api_key is None:
            raise CredentialMissing(self.name)
        return api_key

    async def _send(self, method: str, url: str, action: str, **kwargs: Any) -> httpx.Response:
        """Issue one request; transport failures become UpstreamError."""
        try:
            if method == "GET":
                return await self.client.get(url, **kwargs)
            if method == "POST":
                return await self.client.post(url, **kwargs)
            if method == "HEAD":
                return await self.client.head(url, **kwargs)
            return await self.client.request(method, url, **kwargs)
        except httpx.TimeoutException:
            logger.error(f"{self.name} request timed out ({action})")
            raise UpstreamError(self.name, f"Request timed out while trying to {action}")
        except httpx.RequestError as e:
            logger.error(f"{self.name} request failed ({action}): {e}")
            raise UpstreamError(self.name, f"Request failed while trying to {action}: {e}")

    def _check_response(self, response: httpx.Response, action: str) -> None:
        """Map non-success statuses onto the error taxonomy."""
        if response.is_success:
            return

        status_code = response.status_code
        if status_code in (401, 403):
            logger.error(f"{self.name} rejected the API key (HTTP {status_code})")
            raise CredentialInvalid(self.name, status_code)

        detail = self._error_detail(response)
        logger.error(f"{self.name} API error (HTTP {status_code}) while trying to {action}: {detail}")
        raise UpstreamError(
            self.name,
            f"Failed to {action} (HTTP {status_code}): {detail}",
            status_code=status_code,
        )

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        """Best-effort error message from a provider response body."""
        try:
            data = response.json()
        except ValueError:
            return (response.text or response.reason_phrase or "Unknown error")[:300]

        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if isinstance(error, str):
                return error
            detail = data.get("detail")
            if isinstance(detail, dict) and detail.get("message"):
                return str(detail["message"])
            if isinstance(detail, str):
                return detail
        return "Unknown error"
