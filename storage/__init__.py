"""Entity storage collaborators."""
from storage.base import EntityStorage, SaveListener
from storage.memory import MemoryEntityStorage
from storage.json_store import JsonEntityStorage

__all__ = [
    'EntityStorage',
    'SaveListener',
    'MemoryEntityStorage',
    'JsonEntityStorage',
]
