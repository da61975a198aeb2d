"""
Generated asset types.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class AssetType(str, Enum):
    """Media file types."""
    SCRIPT = "script"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"


@dataclass(frozen=True)
class ScriptAsset:
    """Narration text."""
    text: str
    asset_type: AssetType = field(default=AssetType.SCRIPT, init=False)

    @property
    def data(self) -> bytes:
        return self.text.encode("utf-8")

    @property
    def media_type(self) -> str:
        return "text/plain; charset=utf-8"


@dataclass(frozen=True)
class ImageAsset:
    """Image bytes for one scene."""
    data: bytes
    scene_index: int
    model: str = ""
    asset_type: AssetType = field(default=AssetType.IMAGE, init=False)

    @property
    def media_type(self) -> str:
        """Sniffed from the leading bytes; models answer with PNG, JPEG or WebP."""
        if self.data.startswith(b"\xff\xd8\xff"):
            return "image/jpeg"
        if self.data[:4] == b"RIFF" and self.data[8:12] == b"WEBP":
            return "image/webp"
        return "image/png"


@dataclass(frozen=True)
class AudioAsset:
    """Narration audio bytes."""
    data: bytes
    voice_id: str = ""
    asset_type: AssetType = field(default=AssetType.AUDIO, init=False)

    @property
    def media_type(self) -> str:
        return "audio/mpeg"


GeneratedAsset = Union[ScriptAsset, ImageAsset, AudioAsset]
