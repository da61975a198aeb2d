"""
Shared dependencies for API routes.

Every getter is cached so the whole app shares one credential manager, one
media library and one orchestrator (which remembers finished runs). Tests swap
them through app.dependency_overrides.
"""
import logging
from functools import lru_cache

from fastapi import Depends

from mediaforge.config import AppConfig, config
from mediaforge.credentials import CredentialManager, build_credential_manager
from mediaforge.providers import ImageClient, SceneClient, ScriptClient, VoiceClient
from mediaforge.services import (
    BatchImageGenerator,
    BundleExporter,
    MediaLibrary,
    WorkflowOrchestrator,
)

logger = logging.getLogger(__name__)


def get_config() -> AppConfig:
    """Get global configuration."""
    return config


@lru_cache()
def get_credential_manager() -> CredentialManager:
    """Get cached CredentialManager instance."""
    return build_credential_manager(get_config().credentials_file)


@lru_cache()
def get_library() -> MediaLibrary:
    """Get cached MediaLibrary instance."""
    return MediaLibrary()


@lru_cache()
def get_script_client() -> ScriptClient:
    return ScriptClient(get_credential_manager(), get_config().providers)


@lru_cache()
def get_scene_client() -> SceneClient:
    return SceneClient(get_credential_manager(), get_config().providers)


@lru_cache()
def get_image_client() -> ImageClient:
    return ImageClient(get_credential_manager(), get_config().providers)


@lru_cache()
def get_voice_client() -> VoiceClient:
    return VoiceClient(get_credential_manager(), get_config().providers)


@lru_cache()
def get_orchestrator() -> WorkflowOrchestrator:
    """Get cached WorkflowOrchestrator wired to the shared clients and library."""
    batch_images = BatchImageGenerator(
        get_image_client(),
        max_concurrency=get_config().image_concurrency,
    )
    return WorkflowOrchestrator(
        script_client=get_script_client(),
        scene_client=get_scene_client(),
        batch_images=batch_images,
        voice_client=get_voice_client(),
        library=get_library(),
        max_runs=get_config().max_runs,
    )


def get_bundle_exporter(library: MediaLibrary = Depends(get_library)) -> BundleExporter:
    return BundleExporter(library)


async def close_clients() -> None:
    """Close the HTTP clients that were actually created."""
    for getter in (get_script_client, get_scene_client, get_image_client, get_voice_client):
        if getter.cache_info().currsize:
            await getter().aclose()
    logger.info("Provider clients closed")
