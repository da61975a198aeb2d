"""
Scene Decomposition Client - a fixed number of scene descriptors per prompt.

Scenes are derived from the user's idea, not from the generated script.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from .exceptions import ParseError
from .gemini import GeminiClient
from .payload import extract_json_array, iter_json_arrays

logger = logging.getLogger(__name__)


SCENE_PROMPT = """Based on this video idea: "{prompt}", generate {count} distinct scene descriptions for a short video.
Format the output as a JSON array with objects that have 'scene' (one-line title) and 'description' (detailed visual description) fields.
Make sure the descriptions are detailed enough for image generation."""


@dataclass(frozen=True)
class SceneDescriptor:
    """Title + visual description driving one image generation call."""
    title: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"scene": self.title, "description": self.description}

    @classmethod
    def from_dict(cls, data: Any) -> "SceneDescriptor":
        """Accepts {"scene"|"title": ..., "description": ...}."""
        if not isinstance(data, dict):
            raise ValueError(f"Scene entry is not an object: {data!r}")
        title = data.get("scene", data.get("title"))
        description = data.get("description")
        if not isinstance(title, str) or not title.strip():
            raise ValueError("Scene entry has no title")
        if not isinstance(description, str) or not description.strip():
            raise ValueError("Scene entry has no description")
        return cls(title=title.strip(), description=description.strip())


class SceneClient(GeminiClient):
    """Turns one prompt into exactly settings.scene_count scene descriptors."""

    async def generate_scenes(self, prompt: str) -> List[SceneDescriptor]:
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must not be empty")

        count = self.settings.scene_count
        instruction = SCENE_PROMPT.format(prompt=prompt.strip(), count=count)

        logger.info(f"[SCENES] Requesting {count} scenes from {self.settings.scene_model}")
        raw = await self._generate_content(
            self.settings.scene_model,
            instruction,
            "generate scene prompts",
        )
        return self.parse_scenes(raw)

    def parse_scenes(self, raw: str) -> List[SceneDescriptor]:
        """
        Extract the embedded array and validate its shape and size.

        Prose may carry bracketed text such as citations ahead of the real
        payload, so a candidate that fails validation falls through to the
        next array in the response.
        """
        # Raises for empty output or output without any JSON array.
        extract_json_array(raw, provider=self.name)

        error = None
        for items in iter_json_arrays(raw):
            try:
                scenes = self._validate(items)
            except ParseError as e:
                logger.debug(f"Skipping scene candidate: {e}")
                error = error or e
                continue
            logger.info(f"[SCENES] Parsed {len(scenes)} scenes: {[s.title for s in scenes]}")
            return scenes
        raise error

    def _validate(self, items: List[Any]) -> List[SceneDescriptor]:
        try:
            scenes = [SceneDescriptor.from_dict(item) for item in items]
        except ValueError as e:
            logger.error(f"Error parsing scene prompts: {e}")
            raise ParseError(self.name, f"Failed to parse scene prompts: {e}")

        expected = self.settings.scene_count
        if len(scenes) != expected:
            raise ParseError(
                self.name,
                f"Expected {expected} scene descriptions, got {len(scenes)}",
            )
        return scenes
