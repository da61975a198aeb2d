"""
Credential models.
"""
from dataclasses import dataclass
from enum import Enum


class ProviderName(str, Enum):
    """Providers a credential can belong to."""
    GEMINI = "gemini"
    ELEVENLABS = "elevenlabs"
    HUGGINGFACE = "huggingface"

    @classmethod
    def from_string(cls, value: str) -> "ProviderName":
        """Get provider from its name or role alias."""
        value_lower = value.lower()
        for provider in cls:
            if value_lower in (provider.value, provider.role):
                return provider
        raise ValueError(f"Unknown provider: {value}")

    @property
    def role(self) -> str:
        roles = {
            self.GEMINI: "script-provider",
            self.ELEVENLABS: "speech-provider",
            self.HUGGINGFACE: "image-provider",
        }
        return roles[self]

    @property
    def env_key(self) -> str:
        return f"{self.value.upper()}_API_KEY"


@dataclass(frozen=True)
class Credential:
    """A provider secret."""
    provider_name: ProviderName
    secret: str

    def __repr__(self) -> str:
        return f"Credential(provider_name={self.provider_name.value!r}, secret={mask_secret(self.secret)!r})"


def mask_secret(secret: str) -> str:
    """Show the first 4 and last 4 characters only."""
    if not secret:
        return ""
    if len(secret) <= 12:
        return "***"
    return secret[:4] + "..." + secret[-4:]
