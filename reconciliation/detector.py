"""Delta detection between an entity's reference field and its pre-save snapshot."""
from dataclasses import dataclass, field
from enum import Enum

from reference.entity import EntityReference, FieldableEntity


class Operation(str, Enum):
    """Inverse mutation applied to a counterpart entity."""
    LINK = 'add'
    UNLINK = 'remove'


@dataclass
class CorrespondenceDelta:
    """References added to and removed from a field by a save.

    Attributes:
        to_link: References present now but not in the snapshot
        to_unlink: References present in the snapshot but not now
    """
    to_link: list[EntityReference] = field(default_factory=list)
    to_unlink: list[EntityReference] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.to_link or self.to_unlink)

    def items(self):
        """Yield (operation, reference) pairs, links first."""
        for reference in self.to_link:
            yield Operation.LINK, reference
        for reference in self.to_unlink:
            yield Operation.UNLINK, reference


def _unique(references: list[EntityReference]) -> list[EntityReference]:
    seen = set()
    unique = []
    for reference in references:
        if reference.key not in seen:
            seen.add(reference.key)
            unique.append(reference)
    return unique


def compute_delta(entity: FieldableEntity, field_name: str, bootstrap: bool = False) -> CorrespondenceDelta:
    """Compare the entity's current field value against its snapshot.

    New entities (no snapshot) link every current reference. Otherwise a
    reference is classified by whether its target id appears on only one
    side; unchanged references produce nothing.

    Args:
        entity: The saved entity
        field_name: Reference field to compare
        bootstrap: Ignore the snapshot and treat the entity as new

    Returns:
        CorrespondenceDelta, empty if the entity lacks the field
    """
    delta = CorrespondenceDelta()

    if not entity.has_field(field_name):
        return delta

    current = entity.get_field_value(field_name)
    original = None if bootstrap else entity.original

    if original is None:
        delta.to_link = _unique(current)
        return delta

    previous = original.get_field_value(field_name) if original.has_field(field_name) else []

    current_keys = {reference.key for reference in current}
    previous_keys = {reference.key for reference in previous}

    delta.to_link = _unique([r for r in current if r.key not in previous_keys])
    delta.to_unlink = _unique([r for r in previous if r.key not in current_keys])

    return delta
