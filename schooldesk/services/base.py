"""Shared plumbing for the data-access services."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, TypeVar

from beanie import PydanticObjectId
from beanie.exceptions import RevisionIdWasChanged
from pymongo.errors import DuplicateKeyError

from schooldesk.config import settings
from schooldesk.db import Backend
from schooldesk.errors import MissingTenantScope, WriteConflict

logger = logging.getLogger(__name__)

T = TypeVar("T")


def require_scope(**ids: str | None) -> None:
    """Every read and write names its tenant explicitly."""
    for name, value in ids.items():
        if not value or not str(value).strip():
            raise MissingTenantScope(f"{name} is required")


def safe_object_id(value: str | None) -> PydanticObjectId | None:
    if not value:
        return None
    try:
        return PydanticObjectId(value)
    except Exception:
        return None


async def retry_on_conflict(operation: Callable[[], Awaitable[T]], attempts: int | None = None) -> T:
    """Run a read-modify-write, re-running it when another writer got there first.

    A stale revision on save or a duplicate key on insert means the document
    changed between our read and our write; the operation re-reads and re-applies.
    """
    attempts = attempts or settings.write_conflict_retries
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except (RevisionIdWasChanged, DuplicateKeyError) as e:
            logger.info("Write conflict (attempt %d/%d): %s", attempt, attempts, type(e).__name__)
    raise WriteConflict(f"Gave up after {attempts} conflicting writes")


class BackendService:
    """Base for services bound to a backend handle."""

    def __init__(self, backend: Backend):
        self.backend = backend

    def _unavailable(self, action: str) -> bool:
        """Read paths degrade to empty results when the store is not connected."""
        if self.backend.ready:
            return False
        logger.warning("Database not initialized, cannot %s.", action)
        return True
