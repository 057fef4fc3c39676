"""Repository interface shared by all entity collections."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

EntityT = TypeVar("EntityT")


class AbstractRepository(ABC, Generic[EntityT]):
    """CRUD interface over a collection of entities keyed by integer id."""

    @abstractmethod
    def get_by_id(self, entity_id: int) -> EntityT | None:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[EntityT]:
        """Return every entity in ascending id order."""
        raise NotImplementedError

    @abstractmethod
    def create(self, entity: EntityT) -> EntityT:
        """Store a new entity and return it with its id assigned.

        Raises:
            ValidationAppError: If the email is already in use.
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, entity_id: int, entity: EntityT) -> EntityT | None:
        """Replace the entity stored under ``entity_id``.

        Returns:
            The stored entity, or None when no entity has that id.

        Raises:
            ValidationAppError: If another entity already uses the email.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, entity_id: int) -> bool:
        """Remove an entity; return False when it did not exist."""
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Remove all entities and restart id assignment at 1."""
        raise NotImplementedError
