"""
Integration test fixtures for CorrespondingReference.

These fixtures compose the unit test fixtures from tests/conftest.py
into complete host setups where every save re-fires the save hook.

All integration tests should be marked with @pytest.mark.integration
"""

import pytest

from hooks.handlers import register_save_hook
from reconciliation.engine import ReconciliationEngine
from reference.repository import DefinitionRepository, MemoryDefinitionStore


# Integration fixtures inherit from tests/conftest.py automatically via pytest


@pytest.fixture
def product_host(storage, messages, product_article_definition):
    """
    Host wired with the product/article definition only.

    Usage:
        def test_flow(product_host):
            storage, engine, messages = product_host
    """
    repository = DefinitionRepository(MemoryDefinitionStore([product_article_definition.model_dump()]))
    engine = ReconciliationEngine(storage, repository=repository, notifier=messages)
    register_save_hook(storage, engine)
    return storage, engine, messages
