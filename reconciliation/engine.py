"""
Reconciliation engine for corresponding references.

Takes a saved entity, works out which references were added or removed on
each corresponding field, and mirrors every change onto the referenced
(counterpart) entity. Counterpart saves go back through the host, which
fires the save hook again for the counterpart; the back-reference check in
apply_inverse() is what ends that recursion.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, TYPE_CHECKING

from reconciliation.detector import Operation, compute_delta
from reconciliation.notifier import LogNotifier, Notifier
from reference.entity import EntityReference, FieldableEntity

if TYPE_CHECKING:
    from reference.definition import ReferencePairDefinition
    from reference.repository import DefinitionRepository
    from storage.base import EntityStorage

from shared.log import create_logger
log_trace, log_debug, log_info, log_warn, log_error = create_logger("Engine")


@dataclass
class SyncResult:
    """Summary of one reconciliation pass.

    Attributes:
        definitions_applied: Definitions whose validity check passed
        linked: Back-references added to counterpart entities
        unlinked: Back-references removed from counterpart entities
        unchanged: Inverse operations that were already satisfied
        unresolved: Referenced entities that could not be loaded
    """
    definitions_applied: int = 0
    linked: int = 0
    unlinked: int = 0
    unchanged: int = 0
    unresolved: int = 0

    @property
    def changed(self) -> int:
        return self.linked + self.unlinked

    def merge(self, other: "SyncResult") -> "SyncResult":
        self.definitions_applied += other.definitions_applied
        self.linked += other.linked
        self.unlinked += other.unlinked
        self.unchanged += other.unchanged
        self.unresolved += other.unresolved
        return self


class ReconciliationEngine:
    """Applies inverse reference mutations for reference pair definitions.

    Args:
        storage: Entity storage used to load counterparts and persist changes
        repository: Definition repository (needed by synchronize_entity only)
        notifier: Channel for user-facing notices (default: plugin log)
    """

    def __init__(
        self,
        storage: "EntityStorage",
        repository: Optional["DefinitionRepository"] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.storage = storage
        self.repository = repository
        self.notifier = notifier if notifier is not None else LogNotifier()

    def apply_inverse(
        self,
        source: FieldableEntity,
        counterpart: FieldableEntity,
        counterpart_field: str,
        operation: Operation = Operation.LINK,
    ) -> bool:
        """
        Mirror a reference change onto the counterpart entity.

        LINK appends a back-reference to source unless one already exists.
        UNLINK removes the first back-reference to source, if any. The
        counterpart is saved only when its field actually changed.

        Args:
            source: Entity whose field changed
            counterpart: Entity referenced (or formerly referenced) by source
            counterpart_field: Field on counterpart that mirrors the change
            operation: Operation.LINK or Operation.UNLINK

        Returns:
            True if the counterpart was modified and saved

        Raises:
            Whatever the storage raises when saving the counterpart.
        """
        if not counterpart_field or not counterpart.has_field(counterpart_field):
            log_trace(f"{counterpart.entity_type} {counterpart.id} has no field '{counterpart_field}', skipping")
            return False

        values = counterpart.get_field_value(counterpart_field)

        index = None
        for idx, reference in enumerate(values):
            if reference.points_to(source):
                index = idx
                break

        if operation == Operation.LINK:
            if index is not None:
                return False
            values.append(EntityReference(source.id, source.entity_type))
            verb = 'Added'
        else:
            if index is None:
                return False
            del values[index]
            verb = 'Removed'

        self._notify(f"{verb} 1 corresponding record(s) on entity {counterpart.label}")

        counterpart.set_field_value(counterpart_field, values)
        log_debug(
            f"{verb} {source.entity_type} {source.id} on "
            f"{counterpart.entity_type} {counterpart.id}.{counterpart_field}"
        )
        self.storage.save_entity(counterpart)
        return True

    def synchronize(
        self,
        definition: "ReferencePairDefinition",
        entity: FieldableEntity,
        bootstrap: bool = False,
    ) -> SyncResult:
        """
        Propagate the entity's reference changes for one definition.

        Args:
            definition: Reference pair definition to apply
            entity: The saved entity (with its pre-save snapshot, if any)
            bootstrap: Treat the entity as new and link every current reference

        Returns:
            SyncResult with counts for this definition
        """
        result = SyncResult()

        if not definition.is_valid(entity):
            log_trace(f"'{definition.id}' does not apply to {entity.entity_type}/{entity.bundle} {entity.id}")
            return result

        result.definitions_applied = 1

        for field_name in definition.corresponding_fields():
            if not entity.has_field(field_name):
                continue

            delta = compute_delta(entity, field_name, bootstrap=bootstrap)
            if not delta:
                continue

            corresponding_field = definition.corresponding_field_of(field_name)
            log_trace(
                f"'{definition.id}' {entity.entity_type} {entity.id}.{field_name}: "
                f"{len(delta.to_link)} to link, {len(delta.to_unlink)} to unlink"
            )

            for operation, reference in delta.items():
                counterpart = self._resolve(entity, reference)
                if counterpart is None:
                    result.unresolved += 1
                    continue

                if not self.apply_inverse(entity, counterpart, corresponding_field, operation):
                    result.unchanged += 1
                elif operation == Operation.LINK:
                    result.linked += 1
                else:
                    result.unlinked += 1

        return result

    def synchronize_entity(self, entity: FieldableEntity) -> SyncResult:
        """
        Run every enabled definition against a saved entity.

        The repository loads all enabled definitions; each definition then
        decides through is_valid() whether it applies.
        """
        if self.repository is None:
            raise RuntimeError("synchronize_entity requires a definition repository")

        result = SyncResult()
        for definition in self.repository.load_applicable(entity):
            result.merge(self.synchronize(definition, entity))

        if result.changed:
            log_info(
                f"{entity.entity_type} {entity.id}: {result.linked} linked, "
                f"{result.unlinked} unlinked"
            )
        return result

    def resynchronize(
        self,
        definition: "ReferencePairDefinition",
        entities: Iterable[FieldableEntity],
    ) -> SyncResult:
        """
        Bootstrap back-references for existing entities.

        Every current reference of every given entity gets its
        back-reference, as if the entities had just been created. Removed
        references are not inferred.
        """
        result = SyncResult()
        for entity in entities:
            result.merge(self.synchronize(definition, entity, bootstrap=True))

        log_info(
            f"Synchronized '{definition.id}': {result.definitions_applied} entities in scope, "
            f"{result.linked} back-references added"
        )
        return result

    def _resolve(self, entity: FieldableEntity, reference: EntityReference) -> Optional[FieldableEntity]:
        """Load the entity a reference points at.

        References without a target type point at the holder's own type.
        """
        target_type = reference.target_type or entity.entity_type
        counterpart = self.storage.load_entity(target_type, reference.target_id)
        if counterpart is None:
            log_warn(
                f"{entity.entity_type} {entity.id} references missing "
                f"{target_type} {reference.target_id}, skipping"
            )
        return counterpart

    def _notify(self, message: str) -> None:
        try:
            self.notifier.notify(message)
        except Exception as e:
            log_warn(f"Notifier failed for '{message}': {e}")
