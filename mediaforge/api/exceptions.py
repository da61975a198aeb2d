"""
API Exceptions and Error Handlers.
"""
import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Optional

from mediaforge.providers import (
    CredentialInvalid,
    CredentialMissing,
    ParseError,
    ProviderError,
    SceneGenerationFailed,
)

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standard error response format."""
    error: str
    detail: Optional[str] = None
    code: str
    status_code: int
    provider: Optional[str] = None


class APIError(Exception):
    """Base API exception."""

    def __init__(
        self,
        message: str,
        code: str = "API_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: Optional[str] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=self.message,
            detail=self.detail,
            code=self.code,
            status_code=self.status_code,
        )


class ValidationError(APIError):
    """400 - Bad Request / Validation Error."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class NotFoundError(APIError):
    """404 - Resource Not Found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource} not found: {resource_id}",
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class RunNotFoundError(NotFoundError):
    """404 - Workflow Run Not Found."""

    def __init__(self, run_id: str):
        super().__init__(resource="Workflow run", resource_id=run_id)


class AssetNotFoundError(NotFoundError):
    """404 - Asset Not Found."""

    def __init__(self, asset_id: str):
        super().__init__(resource="Asset", resource_id=asset_id)


def provider_error_status(exc: ProviderError) -> tuple:
    """(HTTP status, error code) for a provider failure."""
    if isinstance(exc, CredentialMissing):
        return status.HTTP_400_BAD_REQUEST, "CREDENTIAL_MISSING"
    if isinstance(exc, CredentialInvalid):
        return status.HTTP_400_BAD_REQUEST, "CREDENTIAL_INVALID"
    if isinstance(exc, SceneGenerationFailed):
        return status.HTTP_502_BAD_GATEWAY, "SCENE_GENERATION_FAILED"
    if isinstance(exc, ParseError):
        return status.HTTP_502_BAD_GATEWAY, "PARSE_ERROR"
    return status.HTTP_502_BAD_GATEWAY, "UPSTREAM_ERROR"


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    """Handle provider failures raised by the standalone generation endpoints."""
    status_code, code = provider_error_status(exc)
    logger.warning(f"{request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=exc.message,
            code=code,
            status_code=status_code,
            provider=exc.provider,
        ).model_dump(),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc) if request.app.debug else None,
            "code": "INTERNAL_ERROR",
            "status_code": 500,
        },
    )
