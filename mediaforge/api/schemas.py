"""
Pydantic schemas for API requests and responses.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
from enum import Enum
from datetime import datetime


class ScriptLength(str, Enum):
    """Narration length presets."""
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class HealthResponse(BaseModel):
    """GET /health response."""
    status: str = "healthy"
    service: str = "mediaforge-api"
    version: str = "1.0.0"
    providers: Dict[str, bool] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class KeyStatus(BaseModel):
    """Configuration state of one provider key (masked)."""
    provider: str
    role: str
    is_set: bool
    masked: Optional[str] = None
    source: Optional[str] = Field(default=None, description="memory, file or env")


class KeyUpdateRequest(BaseModel):
    """PUT /api/keys/{provider} request body."""
    key: str = Field(..., min_length=1)

    @field_validator("key")
    @classmethod
    def strip_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("API key must not be empty")
        return v


class ScriptRequest(BaseModel):
    """POST /api/script request body."""
    prompt: str = Field(..., min_length=1, max_length=5000)
    length: ScriptLength = ScriptLength.MEDIUM


class ScriptResponse(BaseModel):
    """POST /api/script response."""
    script: str
    url: str


class VoiceInfo(BaseModel):
    """One ElevenLabs voice."""
    voice_id: str
    name: str


class VoiceRequest(BaseModel):
    """POST /api/voice request body."""
    text: str = Field(..., min_length=1)
    voice_id: Optional[str] = Field(default=None, description="Defaults to the first listed voice")


class VoiceResponse(BaseModel):
    """POST /api/voice response."""
    audio_url: str
    voice_id: str
    size: int


class ImageRequest(BaseModel):
    """POST /api/image request body."""
    prompt: str = Field(..., min_length=1)
    model: Optional[str] = Field(default=None, description="Defaults to the first configured model")


class ImageResponse(BaseModel):
    """POST /api/image response."""
    image_url: str
    model: str
    size: int


class WorkflowRequest(BaseModel):
    """POST /api/workflow request body."""
    prompt: str = Field(..., min_length=1, max_length=5000)
    length: ScriptLength = ScriptLength.MEDIUM


class SceneInfo(BaseModel):
    """Scene descriptor as sent over the wire."""
    scene: str
    description: str


class WorkflowResultResponse(BaseModel):
    """Accumulated (possibly partial) workflow output."""
    script: Optional[str] = None
    scene_prompts: List[SceneInfo] = Field(default_factory=list)
    image_urls: List[Optional[str]] = Field(default_factory=list)
    audio_url: Optional[str] = None
    video_url: Optional[str] = None


class WorkflowResponse(BaseModel):
    """Workflow run outcome. Failed runs still carry their partial result."""
    run_id: str
    prompt: str
    length: str
    status: str
    stage: str
    failed_stage: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    created_at: str
    completed_at: Optional[str] = None
    result: WorkflowResultResponse


class MediaFileResponse(BaseModel):
    """Entry of the generated-files list."""
    id: str
    name: str
    type: str
    url: str
    media_type: str
    size: int
    created_at: str
    content: Optional[str] = None


class CurrentSelection(BaseModel):
    """Currently selected script and media."""
    script: Optional[str] = None
    audio_url: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None


class FilesResponse(BaseModel):
    """GET /api/files response."""
    files: List[MediaFileResponse]
    current: CurrentSelection
