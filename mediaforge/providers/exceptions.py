"""
Provider exceptions.
"""
from typing import List, Optional


class ProviderError(Exception):
    """Base exception for provider errors."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"[{provider}] {message}")


class CredentialMissing(ProviderError):
    """No secret is configured for the provider."""

    def __init__(self, provider: str):
        super().__init__(
            provider,
            f"{provider} API key not found. Please add your API key in the settings.",
        )


class CredentialInvalid(ProviderError):
    """The provider rejected the configured secret (HTTP 401/403)."""

    def __init__(self, provider: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(
            provider,
            f"Invalid or unauthorized {provider} API key. Please check your key in the settings.",
        )


class UpstreamError(ProviderError):
    """Any other non-success provider response or transport failure."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(provider, message)


class ParseError(ProviderError):
    """The provider answered, but not in the expected structured shape."""


class SceneGenerationFailed(ProviderError):
    """Every fallback model failed for one scene."""

    def __init__(self, provider: str, scene_index: int, errors: Optional[List[ProviderError]] = None):
        self.scene_index = scene_index
        self.errors = list(errors or [])
        detail = "; ".join(str(e) for e in self.errors) or "no models attempted"
        super().__init__(
            provider,
            f"Failed to generate image for scene {scene_index + 1} with every model ({detail})",
        )
