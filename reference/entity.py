"""
Entity capability used by the reconciliation code.

The host framework's entities are opaque; the plugin only needs a small
capability set from them (field presence, reference values, type, bundle,
id, label and the pre-save snapshot). FieldableEntity states that contract
as a Protocol, and MemoryEntity is a plain implementation used by the
bundled storages and the tests.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class EntityReference:
    """One item of an entity reference field.

    Attributes:
        target_id: Unique key of the referenced entity
        target_type: Entity type of the referenced entity (None = same
                     type as the entity holding the field)
    """
    target_id: Any
    target_type: Optional[str] = None

    @property
    def key(self) -> str:
        """Comparison key; hosts may hand back ids as ints or strings."""
        return str(self.target_id)

    def points_to(self, entity: "FieldableEntity") -> bool:
        """Check whether this reference targets the given entity."""
        return self.key == str(entity.id)

    @classmethod
    def coerce(cls, value: Any) -> "EntityReference":
        """Build a reference from an EntityReference, a dict or a bare id.

        Dicts follow the host field item shape: {'target_id': 5} with an
        optional 'target_type'.
        """
        if isinstance(value, EntityReference):
            return value
        if isinstance(value, dict):
            return cls(value['target_id'], value.get('target_type'))
        return cls(value)

    def to_dict(self) -> dict:
        data = {'target_id': self.target_id}
        if self.target_type is not None:
            data['target_type'] = self.target_type
        return data


@runtime_checkable
class FieldableEntity(Protocol):
    """Capability set the reconciliation engine requires from an entity."""

    @property
    def id(self) -> Any: ...

    @property
    def entity_type(self) -> str: ...

    @property
    def bundle(self) -> str: ...

    @property
    def label(self) -> str: ...

    @property
    def original(self) -> Optional["FieldableEntity"]: ...

    def has_field(self, name: str) -> bool: ...

    def get_field_value(self, name: str) -> list[EntityReference]: ...

    def set_field_value(self, name: str, values: Sequence[EntityReference]) -> None: ...


@dataclass
class MemoryEntity:
    """In-memory entity record.

    Attributes:
        entity_type: Entity type id (e.g. 'node', 'commerce_product')
        bundle: Bundle id (e.g. 'article')
        id: Unique key within the entity type
        label: Display label used in notices
        fields: Reference fields by name; a field exists when its name is a key
        original: Pre-save snapshot (None for new entities)
    """
    entity_type: str
    bundle: str
    id: Any
    label: str = ""
    fields: dict[str, list[EntityReference]] = field(default_factory=dict)
    original: Optional["MemoryEntity"] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        self.fields = {
            name: [EntityReference.coerce(v) for v in values]
            for name, values in self.fields.items()
        }
        if not self.label:
            self.label = f"{self.entity_type} {self.id}"

    def has_field(self, name: str) -> bool:
        return bool(name) and name in self.fields

    def get_field_value(self, name: str) -> list[EntityReference]:
        """Return a copy of the field's references (empty if field missing)."""
        return list(self.fields.get(name, []))

    def set_field_value(self, name: str, values: Sequence[EntityReference]) -> None:
        if not self.has_field(name):
            raise KeyError(f"{self.entity_type} {self.id} has no field '{name}'")
        self.fields[name] = [EntityReference.coerce(v) for v in values]

    def snapshot(self) -> "MemoryEntity":
        """Detached copy of the current state, without its own snapshot."""
        return MemoryEntity(
            entity_type=self.entity_type,
            bundle=self.bundle,
            id=self.id,
            label=self.label,
            fields=copy.deepcopy(self.fields),
        )

    def to_dict(self) -> dict:
        return {
            'entity_type': self.entity_type,
            'bundle': self.bundle,
            'id': self.id,
            'label': self.label,
            'fields': {
                name: [ref.to_dict() for ref in values]
                for name, values in self.fields.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MemoryEntity":
        """Create from a stored/hook record dict."""
        return cls(
            entity_type=data['entity_type'],
            bundle=data.get('bundle') or data['entity_type'],
            id=data['id'],
            label=data.get('label', ''),
            fields={name: list(values or []) for name, values in (data.get('fields') or {}).items()},
        )
