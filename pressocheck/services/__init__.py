"""
Core services for the application.

This package contains the record store contract, the observable state
primitives and the state manager that drives the measurement screens.
"""

from .observable import Observable, Subscription
from .pressure_state import PressureStateManager
from .record_store import InMemoryRecordStore, LiveQuery, RecordStore
from .scope import CancellationScope, open_scope

__all__ = [
    "CancellationScope",
    "InMemoryRecordStore",
    "LiveQuery",
    "Observable",
    "PressureStateManager",
    "RecordStore",
    "Subscription",
    "open_scope",
]
