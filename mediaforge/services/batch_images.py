"""
Batch Image Generator - one image per scene with a per-scene model fallback ladder.

For every scene the configured models are tried in order until one succeeds.
If every model fails for a scene, the whole batch fails with
SceneGenerationFailed(scene_index); nothing generated so far is returned.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from mediaforge.providers import (
    ImageClient,
    ProviderError,
    SceneDescriptor,
    SceneGenerationFailed,
)
from .assets import ImageAsset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Generated:
    """A model produced the scene's image."""
    asset: ImageAsset


@dataclass(frozen=True)
class Exhausted:
    """Every model failed for the scene."""
    scene_index: int
    errors: List[ProviderError] = field(default_factory=list)


FallbackOutcome = Union[Generated, Exhausted]


class BatchImageGenerator:
    """
    Drives ImageClient across all scenes.

    max_concurrency=1 processes scenes one at a time. Higher values run scenes
    concurrently; the failure semantics are the same (lowest failing scene index
    is reported, no partial list).
    """

    def __init__(
        self,
        image_client: ImageClient,
        models: Optional[Sequence[str]] = None,
        max_concurrency: int = 1,
    ):
        self.image_client = image_client
        self.models = list(models or image_client.settings.image_models)
        if not self.models:
            raise ValueError("At least one image model is required")
        self.max_concurrency = max(1, max_concurrency)

    async def generate(self, scenes: Sequence[SceneDescriptor]) -> List[ImageAsset]:
        """
        Generate images for all scenes, index-aligned with the input.

        Raises:
            CredentialMissing / CredentialInvalid: From the up-front key probe
            UpstreamError: The probe could not reach the provider
            SceneGenerationFailed: All models failed for one scene
        """
        if not scenes:
            return []

        # One probe up front instead of walking the ladder with a doomed key.
        await self.image_client.probe(self.models[0])

        logger.info(f"[IMAGES] Generating {len(scenes)} images, models: {', '.join(self.models)}")

        if self.max_concurrency == 1:
            images = []
            for index, scene in enumerate(scenes):
                outcome = await self.generate_scene(index, scene)
                images.append(self._unwrap(outcome))
            return images

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded(index: int, scene: SceneDescriptor) -> FallbackOutcome:
            async with semaphore:
                return await self.generate_scene(index, scene)

        outcomes = await asyncio.gather(
            *(_bounded(index, scene) for index, scene in enumerate(scenes))
        )
        return [self._unwrap(outcome) for outcome in outcomes]

    async def generate_scene(self, index: int, scene: SceneDescriptor) -> FallbackOutcome:
        """Walk the model ladder for one scene; stop at the first success."""
        errors: List[ProviderError] = []

        for model in self.models:
            try:
                data = await self.image_client.generate_image(scene.description, model)
            except ProviderError as e:
                logger.warning(f"Scene {index + 1}: failed with model {model}, trying next model... ({e})")
                errors.append(e)
                continue

            logger.info(f"Scene {index + 1}: image generated with {model}")
            return Generated(ImageAsset(data=data, scene_index=index, model=model))

        logger.error(f"Scene {index + 1} ({scene.title}): all {len(self.models)} models failed")
        return Exhausted(scene_index=index, errors=errors)

    def _unwrap(self, outcome: FallbackOutcome) -> ImageAsset:
        if isinstance(outcome, Exhausted):
            raise SceneGenerationFailed(self.image_client.name, outcome.scene_index, outcome.errors)
        return outcome.asset
