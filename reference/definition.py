"""
Corresponding reference definitions.

A definition pairs two entity reference fields that must mirror each other,
scoped to a set of entity type / bundle combinations. Definitions are loaded
from the config store and are immutable afterwards.
"""

import re
from typing import Optional, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from reference.entity import FieldableEntity

if TYPE_CHECKING:
    from reconciliation.engine import ReconciliationEngine, SyncResult

# Bundle wildcard: the definition applies to every bundle of the entity type
ALL_BUNDLES = '*'

_MACHINE_NAME = re.compile(r'^[a-z0-9_]+$')


class ReferencePairDefinition(BaseModel):
    """
    One bidirectional reference field pair.

    Attributes:
        id: Machine name, unique across definitions
        label: Human-readable name
        first_field: First corresponding field name
        second_field: Second corresponding field name (may equal first_field)
        bundles: Bundles keyed by entity type, e.g.
                 {'node': ('article', 'page'), 'commerce_product': ('*',)}
        enabled: Disabled definitions are never loaded for reconciliation
    """

    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ''
    first_field: str = ''
    second_field: str = ''
    bundles: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    enabled: bool = True

    @field_validator('id', mode='after')
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Machine names are lower-case letters, digits and underscores."""
        if not _MACHINE_NAME.match(v):
            raise ValueError('id must contain only lowercase letters, numbers and underscores')
        return v

    @field_validator('first_field', 'second_field', mode='before')
    @classmethod
    def normalize_field_name(cls, v):
        if v is None:
            return ''
        return v.strip() if isinstance(v, str) else v

    @field_validator('bundles', mode='before')
    @classmethod
    def normalize_bundles(cls, v):
        """Accept a single bundle string per entity type as a one-item tuple."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {
                entity_type: (bundles,) if isinstance(bundles, str) else bundles
                for entity_type, bundles in v.items()
            }
        return v

    @field_validator('enabled', mode='before')
    @classmethod
    def validate_enabled(cls, v):
        """Config stores may hold 0/1 or string flags."""
        if isinstance(v, bool):
            return v
        if isinstance(v, int) and v in (0, 1):
            return bool(v)
        if isinstance(v, str):
            lower = v.lower()
            if lower in ('true', '1', 'yes'):
                return True
            if lower in ('false', '0', 'no'):
                return False
        raise ValueError(f"Invalid boolean value: {v}")

    def corresponding_fields(self) -> list[str]:
        """Configured field names, de-duplicated, empty names dropped.

        First field comes first. A definition with equal fields yields a
        single name.
        """
        fields = []
        for name in (self.first_field, self.second_field):
            if name and name not in fields:
                fields.append(name)
        return fields

    def has_corresponding_fields(self, entity: FieldableEntity) -> bool:
        """Check whether the entity exposes at least one corresponding field."""
        return any(entity.has_field(name) for name in self.corresponding_fields())

    def is_valid(self, entity: FieldableEntity) -> bool:
        """
        Check whether this definition applies to the entity.

        The entity type must be configured, its bundle listed (or the
        wildcard listed), and it must carry one of the corresponding fields.
        """
        bundles = self.bundles.get(entity.entity_type)
        if bundles is None:
            return False

        if entity.bundle not in bundles and ALL_BUNDLES not in bundles:
            return False

        return self.has_corresponding_fields(entity)

    def corresponding_field_of(self, field_name: str) -> Optional[str]:
        """
        Name of the field on the counterpart entity that mirrors field_name.

        Args:
            field_name: One of corresponding_fields()

        Returns:
            field_name itself for single-field definitions, otherwise the
            other configured field.
        """
        fields = self.corresponding_fields()

        if len(fields) == 1:
            return field_name

        remaining = [name for name in fields if name != field_name]
        return remaining[0] if remaining else None

    def synchronize(self, entity: FieldableEntity, engine: "ReconciliationEngine") -> "SyncResult":
        """Propagate the entity's reference changes through the engine."""
        return engine.synchronize(self, entity)


def validate_definition(data: dict) -> tuple[Optional[ReferencePairDefinition], Optional[str]]:
    """
    Validate a stored definition dict.

    Args:
        data: Dictionary as read from the config store

    Returns:
        Tuple of (ReferencePairDefinition, None) on success,
        or (None, error_message) on validation failure
    """
    try:
        return (ReferencePairDefinition(**data), None)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field = '.'.join(str(loc) for loc in error['loc'])
            errors.append(f"{field}: {error['msg']}")
        return (None, '; '.join(errors))
    except TypeError as e:
        # data was not a mapping
        return (None, str(e))
