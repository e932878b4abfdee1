"""Application layer - Operation capabilities wired at startup."""

from typing import Optional

from lifetime_demo.application.record_factory import utc_now
from lifetime_demo.application.registry import LifetimeRegistry
from lifetime_demo.domain import InstanceRecord, Lifetime, OperationSnapshot, Scope

OPERATION_TRANSIENT = "operation.transient"
OPERATION_SCOPED = "operation.scoped"
OPERATION_SINGLETON = "operation.singleton"

OPERATION_KEYS = {
    Lifetime.PER_REQUEST: OPERATION_TRANSIENT,
    Lifetime.PER_SCOPE: OPERATION_SCOPED,
    Lifetime.PER_PROCESS: OPERATION_SINGLETON,
}


def build_operation_registry(registry: Optional[LifetimeRegistry] = None) -> LifetimeRegistry:
    """Register the three operation capabilities, one per lifetime.

    The same record type is bound under three keys; only the registered
    lifetime decides how records are reused.

    Args:
        registry: Optional registry to register into, a new one is created otherwise.

    Returns:
        The registry holding the operation registrations.
    """
    registry = registry if registry is not None else LifetimeRegistry()
    for lifetime, key in OPERATION_KEYS.items():
        registry.register(key, lifetime)
    return registry


class OperationService:
    """Resolves one operation record per lifetime within a scope.

    Mirrors a service that depends on all three operations, so its records can
    be compared against records resolved directly by a request handler.

    Attributes:
        transient: Record of the per-request operation.
        scoped: Record of the per-scope operation.
        singleton: Record of the per-process operation.
    """

    def __init__(self, registry: LifetimeRegistry, scope: Scope) -> None:
        self.transient: InstanceRecord = registry.resolve(OPERATION_TRANSIENT, Lifetime.PER_REQUEST, scope)
        self.scoped: InstanceRecord = registry.resolve(OPERATION_SCOPED, Lifetime.PER_SCOPE, scope)
        self.singleton: InstanceRecord = registry.resolve(OPERATION_SINGLETON, Lifetime.PER_PROCESS, scope)

    def snapshot(self) -> OperationSnapshot:
        """Get the identifiers of all three operations for easy comparison."""
        return OperationSnapshot(
            transient_id=self.transient.instance_id,
            scoped_id=self.scoped.instance_id,
            singleton_id=self.singleton.instance_id,
            timestamp=utc_now(),
        )
