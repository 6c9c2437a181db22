"""
Shared pytest fixtures for CorrespondingReference tests.

Provides reusable fixtures for:
- Reference pair definitions (dicts and models)
- In-memory entities and entity storage
- Definition repository and reconciliation engine
- A fully wired "host" where saves re-fire the save hook
"""

import logging

import pytest
from unittest.mock import MagicMock

from hooks.handlers import register_save_hook
from reconciliation.engine import ReconciliationEngine
from reconciliation.notifier import MessageCollector
from reference.definition import ReferencePairDefinition
from reference.entity import MemoryEntity
from reference.repository import DefinitionRepository, MemoryDefinitionStore
from shared.log import ROOT_LOGGER_NAME
from storage.memory import MemoryEntityStorage


# =============================================================================
# Definition Fixtures
# =============================================================================

@pytest.fixture
def cross_field_dict():
    """
    Definition linking field_a and field_b on node articles.

    Usage:
        def test_x(cross_field_dict):
            definition = ReferencePairDefinition(**cross_field_dict)
    """
    return {
        "id": "d1",
        "label": "Articles A/B",
        "first_field": "field_a",
        "second_field": "field_b",
        "bundles": {"node": ["article"]},
        "enabled": True,
    }


@pytest.fixture
def cross_field_definition(cross_field_dict):
    return ReferencePairDefinition(**cross_field_dict)


@pytest.fixture
def self_reference_definition():
    """Single-field symmetric definition on every node bundle."""
    return ReferencePairDefinition(
        id="related",
        label="Related nodes",
        first_field="related",
        second_field="related",
        bundles={"node": ["*"]},
    )


@pytest.fixture
def product_article_definition():
    """Products and articles linked through two distinct fields."""
    return ReferencePairDefinition(
        id="related_content",
        label="Related content",
        first_field="field_related_articles",
        second_field="field_related_products",
        bundles={"commerce_product": ["default"], "node": ["article"]},
    )


# =============================================================================
# Entity Fixtures
# =============================================================================

def make_node(entity_id, bundle="article", **fields):
    """Node entity with the given reference fields (lists of ids)."""
    return MemoryEntity(
        entity_type="node",
        bundle=bundle,
        id=entity_id,
        label=f"Node {entity_id}",
        fields=fields,
    )


@pytest.fixture
def node_factory():
    return make_node


@pytest.fixture
def storage():
    """Empty in-memory entity storage without hooks."""
    return MemoryEntityStorage()


@pytest.fixture
def mock_storage():
    """
    Mock EntityStorage.

    Provides:
        - load_entity(): returns None by default
        - save_entity(): records calls
    """
    mock = MagicMock()
    mock.load_entity.return_value = None
    mock.save_entity.return_value = None
    return mock


@pytest.fixture
def messages():
    return MessageCollector()


# =============================================================================
# Repository / Engine Fixtures
# =============================================================================

@pytest.fixture
def definition_store(cross_field_dict):
    return MemoryDefinitionStore([cross_field_dict])


@pytest.fixture
def repository(definition_store):
    return DefinitionRepository(definition_store)


@pytest.fixture
def engine(storage, repository, messages):
    """Engine over the plain storage; saves do not re-fire hooks."""
    return ReconciliationEngine(storage, repository=repository, notifier=messages)


@pytest.fixture
def host(storage, repository, messages):
    """
    Storage, engine and notices wired like a host framework.

    Every save_entity() fires on_entity_save, so counterpart saves made by
    the engine re-enter reconciliation.

    Usage:
        def test_flow(host):
            storage, engine, messages = host
            storage.save_entity(make_node(1, field_a=[2]))
    """
    engine = ReconciliationEngine(storage, repository=repository, notifier=messages)
    register_save_hook(storage, engine)
    return storage, engine, messages


# =============================================================================
# Logging Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def reset_plugin_logger():
    """Restore the plugin logger after tests that call configure_logging()."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
