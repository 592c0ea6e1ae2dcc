"""
tasks/usecase.py -- Authorization-gated task operations.

Every operation is one authorize-then-act sequence through CredentialService.
delete() never trusts the id alone: it fetches the caller's own tasks and
checks membership first, so guessing another user's id yields InvalidID
rather than a cross-user delete.
"""

from __future__ import annotations

import logging

from auth.models import Token
from auth.service import CredentialService
from core.errors import IDIsNotZero, InvalidID
from tasks.models import Task
from tasks.store import TaskRepository

logger = logging.getLogger("homeroom.tasks")


class TaskUsecase:
    def __init__(self, credentials: CredentialService, tasks: TaskRepository) -> None:
        self._credentials = credentials
        self._tasks = tasks

    def add(self, token: Token, task: Task) -> int:
        """Create task for the token's owner. Not idempotent: repeats create duplicates."""
        username = self._credentials.authorize(token)
        task_id = self._tasks.create(username, task)
        logger.info("Created task %s for %s", task_id, username)
        return task_id

    def delete(self, token: Token, task_id: int) -> None:
        self._credentials.ensure_credential(token)

        if task_id == 0:
            raise IDIsNotZero()
        if task_id < 0:
            raise InvalidID()

        username = self._credentials.whose(token)
        owned = self._tasks.get_all(username)
        if not _contains_id(owned, task_id):
            logger.info("Rejected delete of task %s: not owned by %s", task_id, username)
            raise InvalidID()

        self._tasks.remove(username, task_id)
        logger.info("Deleted task %s for %s", task_id, username)

    def delete_all(self, token: Token) -> None:
        username = self._credentials.authorize(token)
        self._tasks.remove_all(username)
        logger.info("Deleted all tasks for %s", username)

    def get_all(self, token: Token) -> list[Task]:
        username = self._credentials.authorize(token)
        return self._tasks.get_all(username)


def _contains_id(tasks: list[Task], task_id: int) -> bool:
    for task in tasks:
        if task.id == task_id:
            return True
    return False
