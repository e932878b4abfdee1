"""
FastAPI integration module.

Provides helpers for using the lifetime registry from FastAPI.
"""

from .integration import (
    SCOPE_STATE_ATTRIBUTE,
    ScopedRegistryMiddleware,
    create_record_dependency,
    get_request_scope,
)

__all__ = [
    "create_record_dependency",
    "get_request_scope",
    "ScopedRegistryMiddleware",
    "SCOPE_STATE_ATTRIBUTE",
]
