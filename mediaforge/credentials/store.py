"""
Credential stores and the read-only accessor used by the generation clients.
"""
import os
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Dict, Iterable, List, Optional, Union

from .models import Credential, ProviderName, mask_secret

logger = logging.getLogger(__name__)

ProviderKey = Union[ProviderName, str]


def _provider(name: ProviderKey) -> ProviderName:
    if isinstance(name, ProviderName):
        return name
    return ProviderName.from_string(name)


class CredentialStore(ABC):
    """Keyed mapping provider -> secret."""

    label = "store"

    @abstractmethod
    def read(self, provider: ProviderName) -> Optional[str]:
        """Return the stored secret or None."""
        pass

    def source(self, provider: ProviderName) -> Optional[str]:
        """Where the secret for provider comes from, or None when unset."""
        return self.label if self.read(provider) else None

    def write(self, provider: ProviderName, secret: str) -> None:
        raise NotImplementedError(f"{type(self).__name__} is read-only")

    def remove(self, provider: ProviderName) -> None:
        raise NotImplementedError(f"{type(self).__name__} is read-only")


class InMemoryCredentialStore(CredentialStore):
    """Process-local store."""

    label = "memory"

    def __init__(self, secrets: Optional[Dict[ProviderKey, str]] = None):
        self._secrets: Dict[ProviderName, str] = {}
        for name, secret in (secrets or {}).items():
            self._secrets[_provider(name)] = secret

    def read(self, provider: ProviderName) -> Optional[str]:
        return self._secrets.get(provider)

    def write(self, provider: ProviderName, secret: str) -> None:
        self._secrets[provider] = secret

    def remove(self, provider: ProviderName) -> None:
        self._secrets.pop(provider, None)


class EnvCredentialStore(CredentialStore):
    """Reads GEMINI_API_KEY, ELEVENLABS_API_KEY and HUGGINGFACE_API_KEY."""

    label = "env"

    def read(self, provider: ProviderName) -> Optional[str]:
        return os.environ.get(provider.env_key)


class JsonFileCredentialStore(CredentialStore):
    """
    File-backed store.

    The file holds a JSON list of {"name": ..., "key": ...} objects, the same
    shape the browser front-end keeps under "mediaforge_api_keys".
    """

    label = "file"

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = Lock()

    def _load(self) -> List[dict]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error retrieving API keys from {self.path}: {e}")
            return []
        if not isinstance(data, list):
            logger.error(f"Unexpected API key file format in {self.path}")
            return []
        return [entry for entry in data if isinstance(entry, dict)]

    def _save(self, entries: List[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(entries, indent=2), encoding="utf-8")

    def read(self, provider: ProviderName) -> Optional[str]:
        for entry in self._load():
            if entry.get("name") == provider.value:
                key = entry.get("key")
                return key if isinstance(key, str) else None
        return None

    def write(self, provider: ProviderName, secret: str) -> None:
        with self._lock:
            entries = [e for e in self._load() if e.get("name") != provider.value]
            entries.append({"name": provider.value, "key": secret})
            self._save(entries)

    def remove(self, provider: ProviderName) -> None:
        with self._lock:
            entries = [e for e in self._load() if e.get("name") != provider.value]
            self._save(entries)


class ChainedCredentialStore(CredentialStore):
    """First store holding a secret wins; writes go to the first store."""

    def __init__(self, stores: Iterable[CredentialStore]):
        self.stores = list(stores)
        if not self.stores:
            raise ValueError("At least one credential store is required")

    def read(self, provider: ProviderName) -> Optional[str]:
        for store in self.stores:
            secret = store.read(provider)
            if secret:
                return secret
        return None

    def source(self, provider: ProviderName) -> Optional[str]:
        for store in self.stores:
            label = store.source(provider)
            if label:
                return label
        return None

    def write(self, provider: ProviderName, secret: str) -> None:
        self.stores[0].write(provider, secret)

    def remove(self, provider: ProviderName) -> None:
        self.stores[0].remove(provider)


class CredentialAccessor:
    """
    Read-only view over a credential store.

    get() never raises: a missing, blank or placeholder secret is reported as
    None and callers check for it before issuing a request.
    """

    def __init__(self, store: CredentialStore):
        self._store = store

    @staticmethod
    def _usable(secret: Optional[str]) -> bool:
        return bool(secret and secret.strip() and not secret.startswith("PASTE_"))

    def get(self, name: ProviderKey) -> Optional[str]:
        try:
            provider = _provider(name)
            secret = self._store.read(provider)
        except Exception as e:
            logger.error(f"Error retrieving API key for {name}: {e}")
            return None
        return secret.strip() if self._usable(secret) else None

    def credential(self, name: ProviderKey) -> Optional[Credential]:
        secret = self.get(name)
        if secret is None:
            return None
        return Credential(provider_name=_provider(name), secret=secret)

    def _source(self, provider: ProviderName) -> Optional[str]:
        try:
            return self._store.source(provider)
        except Exception as e:
            logger.error(f"Error resolving key source for {provider.value}: {e}")
            return None

    def status(self) -> Dict[str, dict]:
        """Which providers are configured, with masked secrets."""
        status = {}
        for provider in ProviderName:
            secret = self.get(provider)
            status[provider.value] = {
                "role": provider.role,
                "is_set": secret is not None,
                "masked": mask_secret(secret) if secret else None,
                "source": self._source(provider) if secret else None,
            }
        return status


class CredentialManager(CredentialAccessor):
    """Accessor plus the write operations of the key-management screen."""

    def set(self, name: ProviderKey, secret: str) -> Credential:
        provider = _provider(name)
        secret = secret.strip()
        if not secret:
            raise ValueError("API key must not be empty")
        self._store.write(provider, secret)
        logger.info(f"{provider.value} API key updated ({mask_secret(secret)})")
        return Credential(provider_name=provider, secret=secret)

    def delete(self, name: ProviderKey) -> None:
        provider = _provider(name)
        self._store.remove(provider)
        logger.info(f"{provider.value} API key removed")


def build_credential_manager(credentials_file: Optional[Path] = None) -> CredentialManager:
    """File store (when configured) in front of the environment."""
    stores: List[CredentialStore] = []
    if credentials_file is not None:
        stores.append(JsonFileCredentialStore(credentials_file))
    else:
        stores.append(InMemoryCredentialStore())
    stores.append(EnvCredentialStore())
    return CredentialManager(ChainedCredentialStore(stores))
