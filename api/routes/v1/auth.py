"""
api/routes/v1/auth.py -- Session endpoints.

Routes:
  POST /auth/logout  -- end every session of the token's owner

Token issuance (login) is owned by whatever system appends credentials to
the store; this API only consumes and revokes them.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.models import MessageResponse
from auth.dependencies import get_credential_service, get_token
from auth.models import Token
from auth.service import CredentialService

router = APIRouter()


@router.post("/auth/logout", response_model=MessageResponse)
def logout(
    token: Token = Depends(get_token),
    credentials: CredentialService = Depends(get_credential_service),
) -> MessageResponse:
    """Revoke all tokens of the caller, on every device."""
    credentials.logout(token)
    return MessageResponse(message="Logged out.")
