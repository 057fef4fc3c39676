"""Thread-safe in-memory repository.

Notes:
- Per-process only: state is lost on restart and not shared between workers.
- One RLock per collection guards the map and the id counter.
- Entities are deep-copied in and out, so nothing outside the lock ever
  holds a reference into the shared map.
"""

from __future__ import annotations

import copy
import logging
import threading
from datetime import datetime, timezone
from typing import Callable, ClassVar, Protocol, TypeVar

from app.core.errors import ValidationAppError
from app.repositories.base import AbstractRepository

logger = logging.getLogger(__name__)


class _Record(Protocol):
    id: int
    email: str


RecordT = TypeVar("RecordT", bound=_Record)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryRepository(AbstractRepository[RecordT]):
    """Dict-backed repository with unique, case-insensitive emails.

    Subclasses set:
        resource_name: Label used in error messages ("Candidate").
        duplicate_email_message: Message template for a taken email.
        created_field: Attribute stamped with the clock on create and carried
            over unchanged on update.

    Entities must expose ``id`` and ``email`` attributes.
    """

    resource_name: ClassVar[str] = "Entity"
    created_field: ClassVar[str] = "created_at"
    duplicate_email_message: ClassVar[str] = "An entity with email {email} already exists"

    def __init__(self, *, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock
        self._lock = threading.RLock()
        self._items: dict[int, RecordT] = {}
        self._next_id = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _email_in_use_locked(self, email: str, exclude_id: int | None = None) -> bool:
        wanted = email.casefold()
        return any(
            item_id != exclude_id and item.email.casefold() == wanted
            for item_id, item in self._items.items()
        )

    def _duplicate_email_error(self, email: str) -> ValidationAppError:
        return ValidationAppError(
            code="duplicate_email",
            message=self.duplicate_email_message.format(email=email),
            details={"field": "email", "resource": self.resource_name},
        )

    def get_by_id(self, entity_id: int) -> RecordT | None:
        with self._lock:
            item = self._items.get(entity_id)
            return copy.deepcopy(item) if item is not None else None

    def list_all(self) -> list[RecordT]:
        with self._lock:
            return [copy.deepcopy(item) for item in self._items.values()]

    def create(self, entity: RecordT) -> RecordT:
        stored = copy.deepcopy(entity)
        with self._lock:
            if self._email_in_use_locked(stored.email):
                raise self._duplicate_email_error(stored.email)

            stored.id = self._next_id
            self._next_id += 1
            setattr(stored, self.created_field, self._clock())
            self._items[stored.id] = stored

            logger.debug(
                "repository.created",
                extra={"resource": self.resource_name, "resource_id": stored.id},
            )
            return copy.deepcopy(stored)

    def update(self, entity_id: int, entity: RecordT) -> RecordT | None:
        stored = copy.deepcopy(entity)
        with self._lock:
            existing = self._items.get(entity_id)
            if existing is None:
                return None
            if self._email_in_use_locked(stored.email, exclude_id=entity_id):
                raise self._duplicate_email_error(stored.email)

            stored.id = entity_id
            setattr(stored, self.created_field, getattr(existing, self.created_field))
            self._items[entity_id] = stored
            return copy.deepcopy(stored)

    def delete(self, entity_id: int) -> bool:
        with self._lock:
            return self._items.pop(entity_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self._next_id = 1
