from typing import Awaitable, Callable, Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from lifetime_demo.application import LifetimeRegistry
from lifetime_demo.domain import InstanceRecord, MissingScopeError, Scope

SCOPE_STATE_ATTRIBUTE = "lifetime_scope"


def get_request_scope(request: Request, key: Optional[str] = None) -> Scope:
    """Return the scope the middleware attached to the request.

    Args:
        request: The incoming HTTP request.
        key: Capability key being resolved, reported in the error.

    Raises:
        MissingScopeError: If ScopedRegistryMiddleware is not installed.
    """
    scope = getattr(request.state, SCOPE_STATE_ATTRIBUTE, None)
    if scope is None:
        raise MissingScopeError(
            key,
            "request has no scope, did you forget to add ScopedRegistryMiddleware?",
        )
    return scope


def create_record_dependency(registry: LifetimeRegistry, key: str) -> Callable[[Request], InstanceRecord]:
    """Create a FastAPI Depends() callable that resolves a capability key.

    The dependency resolves within the request scope, so per-scope keys are
    shared by every dependency of the same request. FastAPI caches a dependency
    per request, so use distinct dependency callables to observe two
    resolutions of the same key.

    Args:
        registry: The registry to resolve from.
        key: The capability key to resolve.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> get_scoped = create_record_dependency(registry, "operation.scoped")
        >>>
        >>> @app.get("/scoped")
        >>> def scoped(record: InstanceRecord = Depends(get_scoped)):
        ...     return {"id": record.instance_id}
    """

    def dependency(request: Request) -> InstanceRecord:
        """Resolve the capability within the request's scope."""
        return registry.resolve(key, scope=get_request_scope(request, key))

    return dependency


class ScopedRegistryMiddleware(BaseHTTPMiddleware):
    """Middleware that begins a registry scope for each request.

    The scope is accessible via ``request.state.lifetime_scope`` and is ended
    once the response has been produced.

    Attributes:
        registry: The registry to create scopes from.
    """

    def __init__(self, app: FastAPI, registry: LifetimeRegistry):
        """Initialize the middleware with a registry.

        Args:
            app: The FastAPI/Starlette application.
            registry: The registry to create scopes from.
        """
        super().__init__(app)
        self.registry = registry

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Begin a scope for the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        scope = self.registry.begin_scope()
        setattr(request.state, SCOPE_STATE_ATTRIBUTE, scope)

        try:
            response = await call_next(request)
            return response
        finally:
            self.registry.end_scope(scope)
