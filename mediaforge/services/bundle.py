"""
Bundle Exporter - packages a workflow result into a single zip archive.

Archive layout (entries at the archive root):
    script.txt                 narration text
    scene-descriptions.txt     "Scene {n}: {title}\\n{description}" blocks
    scene-{n}.png              one per image, 1-indexed
    audio.mp3                  narration audio
"""
import io
import logging
import zipfile
from pathlib import Path
from typing import Optional

from .library import MediaLibrary
from .workflow import WorkflowResult

logger = logging.getLogger(__name__)

DEFAULT_BUNDLE_NAME = "media-forge-content.zip"


def format_scene_descriptions(result: WorkflowResult) -> str:
    blocks = [
        f"Scene {i + 1}: {scene.title}\n{scene.description}"
        for i, scene in enumerate(result.scene_prompts)
    ]
    return "\n\n".join(blocks)


class BundleExporter:
    """Builds zip bundles from workflow results, resolving assets via the library."""

    def __init__(self, library: MediaLibrary):
        self.library = library

    def export(self, result: WorkflowResult) -> bytes:
        """Return the zip archive bytes. Assets that cannot be fetched are skipped."""
        buf = io.BytesIO()
        entries = 0

        with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as z:
            if result.script:
                z.writestr("script.txt", result.script)
                entries += 1

            if result.scene_prompts:
                z.writestr("scene-descriptions.txt", format_scene_descriptions(result))
                entries += 1

            for i, reference in enumerate(result.image_urls):
                if not reference:
                    continue
                data = self._fetch(reference)
                if data is not None:
                    z.writestr(f"scene-{i + 1}.png", data)
                    entries += 1

            if result.audio_url:
                data = self._fetch(result.audio_url)
                if data is not None:
                    z.writestr("audio.mp3", data)
                    entries += 1

        logger.info(f"[BUNDLE] Packaged {entries} entries")
        return buf.getvalue()

    def write(self, result: WorkflowResult, path: Path) -> Path:
        """Export to disk. A path without a .zip suffix is a directory and gets the default bundle name."""
        path = Path(path)
        if path.is_dir() or path.suffix.lower() != ".zip":
            path = path / DEFAULT_BUNDLE_NAME
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.export(result))
        logger.info(f"[BUNDLE] Saved: {path}")
        return path

    def _fetch(self, reference: str) -> Optional[bytes]:
        try:
            return self.library.get(reference)
        except KeyError as e:
            logger.error(f"Error adding {reference} to zip: {e}")
            return None
