"""
auth/service.py -- Token to identity resolution.

CredentialService is the single choke point every resource operation passes
through. The check is deliberately two-step:

  1. has_credential(token) -- existence only. Store failures propagate, an
     unknown token is simply False. Callers reject with InvalidToken.
  2. whose(token)          -- resolve the owning Username.

Keeping the steps apart lets "token absent" and "storage failed" surface as
different errors, and keeps the resolution query off the unauthenticated
path.

Layer rule: no imports from api/, tasks/, or timetables/.
"""

from __future__ import annotations

import logging

from auth.models import Token, Username
from auth.store import CredentialRepository
from core.errors import InvalidToken, InvalidUsername

logger = logging.getLogger("homeroom.auth")


class CredentialService:
    def __init__(self, credentials: CredentialRepository) -> None:
        self._credentials = credentials

    def has_credential(self, token: Token) -> bool:
        return self._credentials.exists(token)

    def whose(self, token: Token) -> Username:
        """Return the Username bound to token.

        Raises InvalidToken when no credential matches or when the stored
        username is malformed.
        """
        try:
            credential = self._credentials.get_by_token(token)
        except InvalidUsername:
            logger.warning("Credential record with a malformed username; rejecting token")
            raise InvalidToken() from None
        if credential is None:
            raise InvalidToken()
        return credential.username

    def authorize(self, token: Token) -> Username:
        """Fail closed unless token is known, then resolve its owner."""
        self.ensure_credential(token)
        return self.whose(token)

    def ensure_credential(self, token: Token) -> None:
        if not self.has_credential(token):
            logger.info("Rejected request with unknown session token")
            raise InvalidToken()

    def logout(self, token: Token) -> Username:
        """End every session of the token's owner, not just this one."""
        username = self.authorize(token)
        self._credentials.remove(username)
        logger.info("Logged out %s from all sessions", username)
        return username
