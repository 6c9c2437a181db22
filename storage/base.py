"""Storage collaborator contract for entity persistence."""

from typing import Any, Callable, Optional, Protocol

from reference.entity import FieldableEntity

# Called after an entity is written, while entity.original holds the
# pre-save snapshot. Mirrors the host's "entity saved" hook.
SaveListener = Callable[[FieldableEntity], None]


class EntityStorage(Protocol):
    def load_entity(self, entity_type: str, entity_id: Any) -> Optional[FieldableEntity]:
        """Return the entity, or None if it does not exist."""
        ...

    def save_entity(self, entity: FieldableEntity) -> None:
        """Persist the entity and fire the save hook. Failures raise."""
        ...
