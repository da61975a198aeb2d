"""
Media Library - in-memory store of generated files and current selections.
"""
import uuid
import logging
from dataclasses import dataclass
from datetime import datetime
from threading import Lock
from typing import Dict, List, Optional

from .assets import AssetType, GeneratedAsset

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "asset://"


class AssetNotFound(KeyError):
    """Raised when a reference does not resolve to a stored asset."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Asset not found: {reference}")


@dataclass
class MediaFile:
    """A generated file as listed in the file manager."""
    file_id: str
    name: str
    type: AssetType
    url: str
    media_type: str
    size: int
    created_at: str
    content: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.file_id,
            "name": self.name,
            "type": self.type.value,
            "url": self.url,
            "media_type": self.media_type,
            "size": self.size,
            "created_at": self.created_at,
            "content": self.content,
        }


def asset_id(reference: str) -> str:
    """Strip the asset:// prefix."""
    if reference.startswith(REFERENCE_PREFIX):
        return reference[len(REFERENCE_PREFIX):]
    return reference


class MediaLibrary:
    """
    Holds every asset handed over by a workflow run or a standalone generator.

    Assets are never mutated; evicted runs remove theirs. References have the form
    asset://<hex id>.
    """

    def __init__(self):
        self._lock = Lock()
        self._files: List[MediaFile] = []
        self._data: Dict[str, bytes] = {}

        self.current_script: Optional[str] = None
        self.current_audio_url: Optional[str] = None
        self.current_image_url: Optional[str] = None
        self.current_video_url: Optional[str] = None

    def add(self, asset: GeneratedAsset, name: Optional[str] = None) -> str:
        """Store an asset and return its reference."""
        file_id = uuid.uuid4().hex
        reference = f"{REFERENCE_PREFIX}{file_id}"
        data = asset.data
        media_file = MediaFile(
            file_id=file_id,
            name=name or f"{asset.asset_type.value.capitalize()} {datetime.now().strftime('%Y-%m-%d')}",
            type=asset.asset_type,
            url=reference,
            media_type=asset.media_type,
            size=len(data),
            created_at=datetime.utcnow().isoformat(),
            content=getattr(asset, "text", None),
        )
        with self._lock:
            self._data[file_id] = data
            self._files.insert(0, media_file)
        logger.debug(f"Stored {media_file.type.value} asset {reference} ({len(data)} bytes)")
        return reference

    def get(self, reference: str) -> bytes:
        with self._lock:
            data = self._data.get(asset_id(reference))
        if data is None:
            raise AssetNotFound(reference)
        return data

    def describe(self, reference: str) -> MediaFile:
        file_id = asset_id(reference)
        with self._lock:
            for media_file in self._files:
                if media_file.file_id == file_id:
                    return media_file
        raise AssetNotFound(reference)

    def files(self, asset_type: Optional[AssetType] = None) -> List[MediaFile]:
        """Newest first."""
        with self._lock:
            files = list(self._files)
        if asset_type is not None:
            files = [f for f in files if f.type == asset_type]
        return files

    def remove(self, reference: str) -> bool:
        """Drop an asset. Current selections pointing at it are cleared."""
        file_id = asset_id(reference)
        with self._lock:
            removed = self._data.pop(file_id, None) is not None
            self._files = [f for f in self._files if f.file_id != file_id]
        if self.current_image_url == reference:
            self.current_image_url = None
        if self.current_audio_url == reference:
            self.current_audio_url = None
        if self.current_video_url == reference:
            self.current_video_url = None
        return removed

    def clear_current(self) -> None:
        self.current_script = None
        self.current_audio_url = None
        self.current_image_url = None
        self.current_video_url = None
