"""
Exception hierarchy for corresponding reference handling.

Bad configuration never raises during reconciliation (it degrades to a
no-op); these exceptions cover explicit lookups that cannot be satisfied.
Storage failures raised by the host are propagated as-is and are not
wrapped here.
"""


class CorrespondingReferenceError(Exception):
    """Base class for corresponding reference errors."""


class DefinitionNotFound(CorrespondingReferenceError):
    """No reference pair definition is stored under the requested id."""

    def __init__(self, definition_id: str):
        self.definition_id = definition_id
        super().__init__(f"Corresponding reference '{definition_id}' not found")
