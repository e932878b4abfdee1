"""
Application layer - Use cases and orchestration.

This layer contains the registry and the components it orchestrates.
It depends only on the Domain layer.
"""

from .lifetime_manager import LifetimeManager
from .operation_service import (
    OPERATION_KEYS,
    OPERATION_SCOPED,
    OPERATION_SINGLETON,
    OPERATION_TRANSIENT,
    OperationService,
    build_operation_registry,
)
from .record_factory import RecordFactory
from .registry import LifetimeRegistry
from .sequence import SequenceCounter

__all__ = [
    "LifetimeRegistry",
    "LifetimeManager",
    "RecordFactory",
    "SequenceCounter",
    "OperationService",
    "build_operation_registry",
    "OPERATION_KEYS",
    "OPERATION_TRANSIENT",
    "OPERATION_SCOPED",
    "OPERATION_SINGLETON",
]
