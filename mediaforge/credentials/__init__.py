"""
Credentials Layer.

Provider secrets are resolved through a CredentialAccessor injected into every
generation client. Only the key-management routes write to a store.
"""
from .models import Credential, ProviderName, mask_secret
from .store import (
    CredentialStore,
    InMemoryCredentialStore,
    EnvCredentialStore,
    JsonFileCredentialStore,
    ChainedCredentialStore,
    CredentialAccessor,
    CredentialManager,
    build_credential_manager,
)

__all__ = [
    "Credential",
    "ProviderName",
    "mask_secret",
    "CredentialStore",
    "InMemoryCredentialStore",
    "EnvCredentialStore",
    "JsonFileCredentialStore",
    "ChainedCredentialStore",
    "CredentialAccessor",
    "CredentialManager",
    "build_credential_manager",
]
