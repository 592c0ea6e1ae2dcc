"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

The session token travels in a request header (TOKEN_HEADER, default
"Token"). get_token() only extracts it: a missing or blank header is a 401
straight away, anything else is handed to CredentialService, which decides
whether the token is valid.

Layer rule: no imports from tasks/ or timetables/.
  auth/dependencies.py may import from fastapi (for HTTPException/Request)
  because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from auth.models import Token
from auth.service import CredentialService
from core.config import get_settings
from core.errors import InvalidToken


def get_token(request: Request) -> Token:
    """Require a session token header. Raises HTTP 401 if it is absent.

    Use as a FastAPI dependency:
        @router.get("/tasks")
        def route(token: Token = Depends(get_token)): ...
    """
    raw = request.headers.get(get_settings().token_header, "").strip()
    if not raw:
        raise HTTPException(
            status_code=401,
            detail={"code": InvalidToken.code, "message": InvalidToken.message},
        )
    return Token(raw)


def get_credential_service(request: Request) -> CredentialService:
    return request.app.state.credential_service
