"""
Standalone generation endpoints: script, voices, narration and single images.

Each generated asset is added to the media library and becomes the current
selection of its type. Provider failures are mapped by the app's
ProviderError handler.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends

from mediaforge.providers import ImageClient, ScriptClient, VoiceClient
from mediaforge.services import AudioAsset, ImageAsset, MediaLibrary, ScriptAsset
from ..dependencies import get_image_client, get_library, get_script_client, get_voice_client
from ..exceptions import ValidationError
from ..schemas import (
    ImageRequest,
    ImageResponse,
    ScriptRequest,
    ScriptResponse,
    VoiceInfo,
    VoiceRequest,
    VoiceResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Generation"])


@router.post("/script", response_model=ScriptResponse)
async def generate_script(
    request: ScriptRequest,
    script_client: ScriptClient = Depends(get_script_client),
    library: MediaLibrary = Depends(get_library),
):
    """Generate a narration script from a prompt."""
    try:
        script = await script_client.generate_script(request.prompt, request.length.value)
    except ValueError as e:
        raise ValidationError(str(e))

    url = library.add(ScriptAsset(text=script))
    library.current_script = script
    return ScriptResponse(script=script, url=url)


@router.get("/voices", response_model=List[VoiceInfo])
async def list_voices(voice_client: VoiceClient = Depends(get_voice_client)):
    """Voices available to the configured ElevenLabs account."""
    voices = await voice_client.list_voices()
    return [VoiceInfo(voice_id=v.voice_id, name=v.name) for v in voices]


@router.post("/voice", response_model=VoiceResponse)
async def generate_voice(
    request: VoiceRequest,
    voice_client: VoiceClient = Depends(get_voice_client),
    library: MediaLibrary = Depends(get_library),
):
    """Synthesize narration. Without a voice_id the first listed voice is used."""
    text = request.text.strip()
    if not text:
        raise ValidationError("Text must not be empty")

    voice_id = request.voice_id
    if not voice_id:
        voice_id = (await voice_client.default_voice()).voice_id

    try:
        audio = await voice_client.synthesize(text, voice_id)
    except ValueError as e:
        raise ValidationError(str(e))
    url = library.add(AudioAsset(data=audio, voice_id=voice_id))
    library.current_audio_url = url
    return VoiceResponse(audio_url=url, voice_id=voice_id, size=len(audio))


@router.post("/image", response_model=ImageResponse)
async def generate_image(
    request: ImageRequest,
    image_client: ImageClient = Depends(get_image_client),
    library: MediaLibrary = Depends(get_library),
):
    """Generate one image with a single model (no fallback)."""
    model = request.model or image_client.settings.image_models[0]
    data = await image_client.generate_image(request.prompt, model)

    url = library.add(ImageAsset(data=data, scene_index=0, model=model), name=f"Image ({model})")
    library.current_image_url = url
    return ImageResponse(image_url=url, model=model, size=len(data))
