"""
Corresponding reference definitions and the entity capability they act on.

Classes:
    ReferencePairDefinition: One bidirectional reference field pair
    DefinitionRepository: Loads enabled definitions from a config store
    YamlDefinitionStore / MemoryDefinitionStore: Config stores
    EntityReference: One item of a reference field
    MemoryEntity: Plain entity record implementing FieldableEntity
"""

from reference.definition import ALL_BUNDLES, ReferencePairDefinition, validate_definition
from reference.entity import EntityReference, FieldableEntity, MemoryEntity
from reference.exceptions import CorrespondingReferenceError, DefinitionNotFound
from reference.repository import DefinitionRepository, MemoryDefinitionStore, YamlDefinitionStore

__all__ = [
    'ALL_BUNDLES',
    'ReferencePairDefinition',
    'validate_definition',
    'EntityReference',
    'FieldableEntity',
    'MemoryEntity',
    'CorrespondingReferenceError',
    'DefinitionNotFound',
    'DefinitionRepository',
    'MemoryDefinitionStore',
    'YamlDefinitionStore',
]
