"""
Infrastructure layer - External integrations.

This layer contains integrations with external frameworks and tools.
It depends on both Application and Domain layers.
"""

from . import api, fastapi_integration, testing

__all__ = [
    "api",
    "fastapi_integration",
    "testing",
]
