"""Reconciliation package: delta detection and inverse reference mutation."""
from reconciliation.detector import CorrespondenceDelta, Operation, compute_delta
from reconciliation.engine import ReconciliationEngine, SyncResult
from reconciliation.notifier import LogNotifier, MessageCollector, NullNotifier

__all__ = [
    'CorrespondenceDelta',
    'Operation',
    'compute_delta',
    'ReconciliationEngine',
    'SyncResult',
    'LogNotifier',
    'MessageCollector',
    'NullNotifier',
]
