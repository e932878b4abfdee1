"""
HTTP API module.

Exposes operation ids so callers can observe how each lifetime reuses instances.
"""

from .app import create_app, handle_registry_error
from .routes import create_operations_router

__all__ = [
    "create_app",
    "create_operations_router",
    "handle_registry_error",
]
