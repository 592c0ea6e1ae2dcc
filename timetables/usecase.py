"""
timetables/usecase.py -- Authorization-gated timetable operations.
"""

from __future__ import annotations

import logging

from auth.models import Token
from auth.service import CredentialService
from core.errors import TimetablesNotFound
from timetables.models import Timetables
from timetables.store import TimetablesRepository

logger = logging.getLogger("homeroom.timetables")


class TimetablesUsecase:
    def __init__(self, credentials: CredentialService, timetables: TimetablesRepository) -> None:
        self._credentials = credentials
        self._timetables = timetables

    def add(self, token: Token, timetables: Timetables) -> None:
        """Replace the caller's whole week. Slots are never merged with the old value."""
        username = self._credentials.authorize(token)
        self._timetables.add(username, timetables)
        logger.info("Stored timetables for %s", username)

    def get(self, token: Token) -> Timetables:
        username = self._credentials.authorize(token)
        timetables = self._timetables.get(username)
        if timetables is None:
            raise TimetablesNotFound()
        return timetables
