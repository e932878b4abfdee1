"""
Testing utilities module.

Provides helpers for testing code that uses the lifetime registry.
"""

from .utilities import RegistryScope, TestRegistry, create_test_registry

__all__ = [
    "TestRegistry",
    "create_test_registry",
    "RegistryScope",
]
