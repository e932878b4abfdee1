"""
lifetime-demo: Observe per-request, per-scope and per-process instance lifetimes.

Public API exports for the lifetime_demo package.
"""

# Application exports
from lifetime_demo.application.operation_service import OperationService, build_operation_registry
from lifetime_demo.application.registry import LifetimeRegistry

# Domain exports
from lifetime_demo.domain.enums import Lifetime
from lifetime_demo.domain.exceptions import (
    LifetimeDemoError,
    MissingScopeError,
    RegistrationError,
    UnknownCapabilityError,
)
from lifetime_demo.domain.models import InstanceRecord, Scope

__version__ = "0.1.0"

__all__ = [
    # Registry
    "LifetimeRegistry",
    "OperationService",
    "build_operation_registry",
    # Enums
    "Lifetime",
    # Models
    "InstanceRecord",
    "Scope",
    # Exceptions
    "LifetimeDemoError",
    "MissingScopeError",
    "UnknownCapabilityError",
    "RegistrationError",
]
