"""
Media library endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from mediaforge.services import AssetNotFound, AssetType, MediaLibrary
from ..dependencies import get_library
from ..exceptions import AssetNotFoundError, ValidationError
from ..schemas import CurrentSelection, FilesResponse, MediaFileResponse

router = APIRouter(prefix="/api", tags=["Files"])


@router.get("/files", response_model=FilesResponse)
async def list_files(
    type: Optional[str] = None,
    library: MediaLibrary = Depends(get_library),
):
    """Generated files, newest first, plus the current selections."""
    asset_type = None
    if type:
        try:
            asset_type = AssetType(type)
        except ValueError:
            raise ValidationError(f"Unknown file type: {type}")

    return FilesResponse(
        files=[MediaFileResponse(**f.to_dict()) for f in library.files(asset_type)],
        current=CurrentSelection(
            script=library.current_script,
            audio_url=library.current_audio_url,
            image_url=library.current_image_url,
            video_url=library.current_video_url,
        ),
    )


@router.get("/assets/{asset_id}")
async def get_asset(asset_id: str, library: MediaLibrary = Depends(get_library)):
    """Raw bytes of a stored asset."""
    try:
        media_file = library.describe(asset_id)
        data = library.get(asset_id)
    except AssetNotFound:
        raise AssetNotFoundError(asset_id)
    return Response(content=data, media_type=media_file.media_type)
