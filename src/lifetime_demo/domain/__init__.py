"""
Domain layer - Core models and rules.

This layer contains the lifetime policies, instance records and errors.
It has no dependencies on other layers.
"""

from .enums import Lifetime
from .exceptions import (
    LifetimeDemoError,
    MissingScopeError,
    RegistrationError,
    UnknownCapabilityError,
)
from .interfaces import ILifetimeManager, ILifetimeRegistry
from .models import InstanceRecord, OperationSnapshot, Registration, Scope

__all__ = [
    # Enums
    "Lifetime",
    # Exceptions
    "LifetimeDemoError",
    "MissingScopeError",
    "UnknownCapabilityError",
    "RegistrationError",
    # Interfaces
    "ILifetimeRegistry",
    "ILifetimeManager",
    # Models
    "InstanceRecord",
    "Registration",
    "Scope",
    "OperationSnapshot",
]
