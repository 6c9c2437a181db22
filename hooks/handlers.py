"""
Hook handlers for entity save events.

Every entity save (create or update) runs reconciliation to completion
before control returns to the host. Counterpart saves made by the engine
come back through the same handler; the engine's back-reference checks
stop that recursion after one round trip.
"""

import time
from typing import Optional, TYPE_CHECKING

from reference.entity import FieldableEntity, MemoryEntity

from shared.log import create_logger
log_trace, log_debug, log_info, log_warn, log_error = create_logger("Hook")

if TYPE_CHECKING:
    from reconciliation.engine import ReconciliationEngine, SyncResult
    from storage.memory import MemoryEntityStorage
    from validation.config import CorrespondingReferenceConfig


ENTITY_SAVE_HOOKS = frozenset({'Entity.Create.Post', 'Entity.Update.Post'})


def on_entity_save(
    entity: FieldableEntity,
    engine: "ReconciliationEngine",
    config: Optional["CorrespondingReferenceConfig"] = None,
) -> Optional["SyncResult"]:
    """
    Handle an entity saved event.

    Args:
        entity: The saved entity; entity.original is the pre-save snapshot
                (None for newly created entities)
        engine: Reconciliation engine with a definition repository
        config: Plugin config; a disabled plugin skips reconciliation

    Returns:
        SyncResult, or None if the plugin is disabled
    """
    if config is not None and not config.enabled:
        log_trace(f"Plugin disabled, skipping {entity.entity_type} {entity.id}")
        return None

    start = time.time()
    event = 'update' if entity.original is not None else 'create'
    log_trace(f"{entity.entity_type}/{entity.bundle} {entity.id} saved ({event})")

    result = engine.synchronize_entity(entity)

    elapsed_ms = (time.time() - start) * 1000
    log_debug(
        f"Reconciled {entity.entity_type} {entity.id} in {elapsed_ms:.1f}ms "
        f"({result.definitions_applied} definitions applied)"
    )
    return result


def register_save_hook(
    storage: "MemoryEntityStorage",
    engine: "ReconciliationEngine",
    config: Optional["CorrespondingReferenceConfig"] = None,
) -> None:
    """Subscribe on_entity_save to a storage's save events."""
    storage.add_listener(lambda entity: on_entity_save(entity, engine, config))


def handle_save_hook(hook_context: dict, storage: "MemoryEntityStorage") -> Optional[MemoryEntity]:
    """
    Apply a host save event to the entity store.

    Expected hook_context structure:
    {
        "type": "Entity.Update.Post",
        "entity": {"entity_type": "node", "bundle": "article", "id": "1",
                   "label": "...", "fields": {"field_a": ["2"]}}
    }

    The stored record (if any) becomes the snapshot; saving fires the
    registered hooks.

    Returns:
        The saved entity, or None for ignored hook types
    """
    hook_type = hook_context.get("type", "")
    record = hook_context.get("entity") or {}

    if hook_type not in ENTITY_SAVE_HOOKS:
        log_trace(f"Unhandled hook type: {hook_type}")
        return None

    if not record:
        log_warn(f"{hook_type} hook missing entity data")
        return None

    entity = MemoryEntity.from_dict(record)
    storage.save_entity(entity)
    return entity
