"""
In-memory entity storage.

Behaves like a host entity store: load_entity() returns a fresh copy of the
committed record, and save_entity() commits the entity, exposes the
previous record as entity.original, and fires the registered save
listeners before clearing the snapshot again.
"""

from typing import Any, Optional

from reference.entity import MemoryEntity
from storage.base import SaveListener


class MemoryEntityStorage:
    """Entity records keyed by (entity_type, str(id)).

    Args:
        entities: Initial records; stored without firing listeners
    """

    def __init__(self, entities: Optional[list[MemoryEntity]] = None):
        self._records: dict[tuple[str, str], MemoryEntity] = {}
        self._listeners: list[SaveListener] = []
        self.save_count = 0
        for entity in entities or []:
            self.add(entity)

    @staticmethod
    def _key(entity_type: str, entity_id: Any) -> tuple[str, str]:
        return (entity_type, str(entity_id))

    def add_listener(self, listener: SaveListener) -> None:
        self._listeners.append(listener)

    def add(self, entity: MemoryEntity) -> None:
        """Store a record directly (fixtures, imports); no hook is fired."""
        self._records[self._key(entity.entity_type, entity.id)] = entity.snapshot()

    def load_entity(self, entity_type: str, entity_id: Any) -> Optional[MemoryEntity]:
        record = self._records.get(self._key(entity_type, entity_id))
        return record.snapshot() if record is not None else None

    def save_entity(self, entity: MemoryEntity) -> None:
        key = self._key(entity.entity_type, entity.id)
        previous = self._records.get(key)

        entity.original = previous.snapshot() if previous is not None else None
        self._records[key] = entity.snapshot()
        self.save_count += 1
        self._commit()

        try:
            for listener in self._listeners:
                listener(entity)
        finally:
            entity.original = None

    def _commit(self) -> None:
        """Hook for subclasses that persist the records."""

    def all(self) -> list[MemoryEntity]:
        return [record.snapshot() for record in self._records.values()]
