#!/usr/bin/env python3
"""
CorrespondingReference - keeps pairs of entity reference fields in sync

Entry point for the host plugin protocol. Reads one JSON request from
stdin, handles a save hook or a task, and writes one JSON response to
stdout. Logs go to stderr.

Request shapes:
    {"settings": {...}, "args": {"hookContext": {"type": "Entity.Update.Post", "entity": {...}}}}
    {"settings": {...}, "args": {"mode": "list"}}
    {"settings": {...}, "args": {"mode": "resync", "definition": "related_content"}}
"""

import json
import sys

from shared.log import create_logger
log_trace, log_debug, log_info, log_warn, log_error = create_logger()

from hooks.handlers import handle_save_hook, register_save_hook
from reconciliation.engine import ReconciliationEngine
from reconciliation.notifier import MessageCollector, NullNotifier
from reference.exceptions import CorrespondingReferenceError
from reference.list_builder import build_rows, render_table
from reference.repository import DefinitionRepository, YamlDefinitionStore
from shared.logging_config import configure_logging
from storage.json_store import JsonEntityStorage
from validation.config import CorrespondingReferenceConfig, validate_config

# Globals (initialized in initialize)
config: CorrespondingReferenceConfig = None
repository: DefinitionRepository = None
storage: JsonEntityStorage = None
engine: ReconciliationEngine = None
messages: MessageCollector = None


def initialize(config_dict: dict = None):
    """
    Build config, repository, storage and engine, and wire the save hook.

    Args:
        config_dict: Settings passed by the host; CR_ environment
                     variables fill in anything missing.

    Raises:
        SystemExit: If configuration validation fails
    """
    global config, repository, storage, engine, messages

    validated_config, error = validate_config(config_dict or {})
    if error:
        log_error(f"Configuration error: {error}")
        print(json.dumps({"error": f"Configuration error: {error}"}))
        raise SystemExit(1)

    config = validated_config
    configure_logging(config.log_level, json_output=config.json_logs)
    config.log_config()

    repository = DefinitionRepository(YamlDefinitionStore(config.definitions_path))
    storage = JsonEntityStorage(config.entities_path)
    messages = MessageCollector()
    engine = ReconciliationEngine(
        storage,
        repository=repository,
        notifier=messages if config.notify else NullNotifier(),
    )
    register_save_hook(storage, engine, config)
    log_trace("Initialization complete")


def handle_list() -> list[dict]:
    """Print the definitions table to stderr and return its rows."""
    definitions = repository.load_all()
    log_info(f"{len(definitions)} corresponding reference(s) configured\n{render_table(definitions)}")
    return build_rows(definitions)


def handle_resync(definition_id: str) -> dict:
    """Add missing back-references for every stored entity in scope."""
    definition = repository.load(definition_id)
    result = engine.resynchronize(definition, storage.all())
    return {
        'definition': definition.id,
        'entities': result.definitions_applied,
        'linked': result.linked,
        'unresolved': result.unresolved,
    }


def handle_task(task_args: dict):
    mode = task_args.get("mode", "")
    if mode == "list":
        return handle_list()
    if mode == "resync":
        definition_id = task_args.get("definition")
        if not definition_id:
            raise ValueError("resync task requires a 'definition' argument")
        return handle_resync(definition_id)
    raise ValueError(f"Unknown task mode: {mode}")


def main():
    # Read input from stdin (host plugin protocol)
    raw_input = sys.stdin.read()
    input_data = json.loads(raw_input) if raw_input.strip() else {}

    initialize(input_data.get("settings") or {})

    args = input_data.get("args", {})

    if "hookContext" in args:
        if not config.enabled:
            print(json.dumps({"output": "disabled"}))
            return
        saved = handle_save_hook(args["hookContext"], storage)
        output = {"saved": saved is not None, "messages": messages.drain()}
    elif "mode" in args:
        output = handle_task(args)
    else:
        log_warn("No hookContext or mode in input")
        output = "ok"

    print(json.dumps({"output": output}))


if __name__ == "__main__":
    try:
        main()
    except SystemExit:
        raise
    except CorrespondingReferenceError as e:
        log_error(str(e))
        print(json.dumps({"error": str(e)}))
        sys.exit(1)
    except Exception as e:
        import traceback
        print(json.dumps({"error": str(e)}))
        traceback.print_exc()
        sys.exit(1)
