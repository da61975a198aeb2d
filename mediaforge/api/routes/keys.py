"""
API key management endpoints.

The only place that writes credentials. Responses carry masked keys only.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status

from mediaforge.credentials import CredentialManager, ProviderName
from ..dependencies import get_credential_manager
from ..exceptions import NotFoundError, ValidationError
from ..schemas import KeyStatus, KeyUpdateRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/keys", tags=["API Keys"])


def _resolve(provider: str) -> ProviderName:
    try:
        return ProviderName.from_string(provider)
    except ValueError:
        raise NotFoundError(resource="Provider", resource_id=provider)


def _status(credentials: CredentialManager, provider: ProviderName) -> KeyStatus:
    info = credentials.status()[provider.value]
    return KeyStatus(provider=provider.value, **info)


@router.get("", response_model=List[KeyStatus])
async def list_keys(credentials: CredentialManager = Depends(get_credential_manager)):
    """Configuration state of every provider key."""
    return [_status(credentials, provider) for provider in ProviderName]


@router.put("/{provider}", response_model=KeyStatus)
async def set_key(
    provider: str,
    request: KeyUpdateRequest,
    credentials: CredentialManager = Depends(get_credential_manager),
):
    """Store or replace a provider key. Accepts provider names and role aliases."""
    name = _resolve(provider)
    try:
        credentials.set(name, request.key)
    except ValueError as e:
        raise ValidationError(str(e))
    return _status(credentials, name)


@router.delete("/{provider}", response_model=KeyStatus, status_code=status.HTTP_200_OK)
async def delete_key(
    provider: str,
    credentials: CredentialManager = Depends(get_credential_manager),
):
    """Remove a stored key. A key that only exists in the environment stays visible."""
    name = _resolve(provider)
    credentials.delete(name)
    return _status(credentials, name)
