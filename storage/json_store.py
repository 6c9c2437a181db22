"""
JSON-file entity storage for the plugin script.

Records live in a single JSON document:
    {"entities": [{"entity_type": "node", "bundle": "article", "id": "1",
                   "label": "...", "fields": {"field_a": [{"target_id": "2"}]}}]}

The file is rewritten atomically (write to temp, rename) after every save,
before the save hook fires, so cascaded saves always see committed state.
"""

import json
import os

from reference.entity import MemoryEntity
from storage.memory import MemoryEntityStorage

from shared.log import create_logger
log_trace, log_debug, log_info, log_warn, log_error = create_logger("Store")


class JsonEntityStorage(MemoryEntityStorage):
    """Entity storage persisted to a JSON file.

    Args:
        path: JSON file path; a missing file starts an empty store
    """

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        for record in self._read():
            self.add(MemoryEntity.from_dict(record))
        log_trace(f"Loaded {len(self._records)} entities from {path}")

    def _read(self) -> list[dict]:
        if not os.path.exists(self.path):
            return []

        with open(self.path, 'r') as f:
            data = json.load(f)
        return data.get('entities', [])

    def _commit(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        temp_path = self.path + '.tmp'
        with open(temp_path, 'w') as f:
            json.dump({'entities': [r.to_dict() for r in self._records.values()]}, f, indent=2)
        os.replace(temp_path, self.path)
