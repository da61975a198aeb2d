"""
Providers Layer.

Thin async clients for the three remote AI services:
- Gemini (script and scene generation)
- Hugging Face Inference (images)
- ElevenLabs (voices and narration)

Credentials and settings are injected; no client reads ambient state.
"""
from .exceptions import (
    ProviderError,
    CredentialMissing,
    CredentialInvalid,
    UpstreamError,
    ParseError,
    SceneGenerationFailed,
)
from .base import BaseProviderClient
from .payload import extract_json_array, iter_json_arrays
from .script import ScriptClient
from .scenes import SceneClient, SceneDescriptor
from .images import ImageClient
from .voice import VoiceClient, Voice

__all__ = [
    # Exceptions
    "ProviderError",
    "CredentialMissing",
    "CredentialInvalid",
    "UpstreamError",
    "ParseError",
    "SceneGenerationFailed",

    # Clients
    "BaseProviderClient",
    "ScriptClient",
    "SceneClient",
    "SceneDescriptor",
    "ImageClient",
    "VoiceClient",
    "Voice",

    # Utilities
    "extract_json_array",
    "iter_json_arrays",
]
