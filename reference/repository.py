"""
Definition repository backed by a plain config store.

Loading is a two-stage filter: the repository hands out every enabled
definition, and each definition decides through is_valid() whether it
applies to a given entity.
"""

import logging
import os
from typing import Optional, Protocol

import yaml

from reference.definition import ReferencePairDefinition, validate_definition
from reference.entity import FieldableEntity
from reference.exceptions import DefinitionNotFound

log = logging.getLogger('CorrespondingReference.repository')


class DefinitionStore(Protocol):
    def load_definitions(self) -> list[dict]: ...

    def save_definitions(self, definitions: list[dict]) -> None: ...


class YamlDefinitionStore:
    """Definitions kept as a YAML list of dicts.

    Example file:
        - id: related_content
          label: Related content
          first_field: field_related_products
          second_field: field_related_articles
          bundles:
            node: [article]
            commerce_product: ['*']
          enabled: true
    """

    def __init__(self, path: str):
        self.path = path

    def load_definitions(self) -> list[dict]:
        if not os.path.exists(self.path):
            log.debug(f"No definitions file at {self.path}")
            return []

        with open(self.path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or []

        if not isinstance(data, list):
            raise ValueError(f"{self.path} must contain a list of definitions")
        return data

    def save_definitions(self, definitions: list[dict]) -> None:
        temp_path = self.path + '.tmp'
        with open(temp_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(definitions, f, sort_keys=False)
        os.replace(temp_path, self.path)


class MemoryDefinitionStore:
    """Definitions held in a list (tests, embedding hosts)."""

    def __init__(self, definitions: Optional[list[dict]] = None):
        self.definitions = list(definitions or [])

    def load_definitions(self) -> list[dict]:
        return list(self.definitions)

    def save_definitions(self, definitions: list[dict]) -> None:
        self.definitions = list(definitions)


class DefinitionRepository:
    """Read and write reference pair definitions through a store.

    Args:
        store: Config store holding definition dicts
    """

    def __init__(self, store: DefinitionStore):
        self.store = store

    def load_all(self) -> list[ReferencePairDefinition]:
        """All valid stored definitions; invalid entries are logged and skipped."""
        definitions = []
        for data in self.store.load_definitions():
            definition, error = validate_definition(data)
            if error:
                entry_id = data.get('id', '?') if isinstance(data, dict) else '?'
                log.warning(f"Skipping invalid corresponding reference '{entry_id}': {error}")
                continue
            definitions.append(definition)
        return definitions

    def load_applicable(self, entity: Optional[FieldableEntity] = None) -> list[ReferencePairDefinition]:
        """
        Enabled definitions to run against a saved entity.

        The entity is accepted for interface symmetry; scoping to entity
        type and bundle is left to ReferencePairDefinition.is_valid().
        """
        return [definition for definition in self.load_all() if definition.enabled]

    def load(self, definition_id: str) -> ReferencePairDefinition:
        for definition in self.load_all():
            if definition.id == definition_id:
                return definition
        raise DefinitionNotFound(definition_id)

    def save(self, definition: ReferencePairDefinition) -> None:
        """Insert or replace a definition by id."""
        stored = [
            data for data in self.store.load_definitions()
            if not (isinstance(data, dict) and data.get('id') == definition.id)
        ]
        stored.append(definition.model_dump(mode='json'))
        self.store.save_definitions(stored)

    def delete(self, definition_id: str) -> None:
        stored = self.store.load_definitions()
        remaining = [
            data for data in stored
            if not (isinstance(data, dict) and data.get('id') == definition_id)
        ]
        if len(remaining) == len(stored):
            raise DefinitionNotFound(definition_id)
        self.store.save_definitions(remaining)
