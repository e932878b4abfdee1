from typing import Dict, Optional, Tuple

from lifetime_demo.application import LifetimeRegistry
from lifetime_demo.domain import ILifetimeRegistry, Lifetime, Registration, Scope


class TestRegistry(LifetimeRegistry):
    """Lifetime registry for tests with registration override capabilities.

    Inherits all registrations from a parent registry but allows selective
    override of lifetimes, without touching the parent.

    Attributes:
        _parent_registry: The parent registry to inherit registrations from.
        _overrides: Keys whose lifetime was overridden in this registry.

    Example:
        >>> registry = build_operation_registry()
        >>>
        >>> def test_scoped_behaves_like_singleton():
        ...     with TestRegistry(registry) as test_registry:
        ...         test_registry.override_lifetime("operation.scoped", Lifetime.PER_PROCESS)
        ...         first = test_registry.resolve("operation.scoped")
        ...         second = test_registry.resolve("operation.scoped")
        ...         assert first == second
    """

    __test__ = False  # Tell pytest not to collect this class as a test

    def __init__(self, parent_registry: Optional[ILifetimeRegistry] = None) -> None:
        """Initialize the test registry.

        Args:
            parent_registry: Optional parent registry to inherit registrations from.
                             If None, creates an empty registry.
        """
        super().__init__()
        self._parent_registry = parent_registry
        self._overrides: Dict[str, Lifetime] = {}

        if parent_registry:
            self._registrations = parent_registry.registrations()

    def override_lifetime(self, key: str, lifetime: Lifetime) -> Registration:
        """Replace the lifetime of a capability, registering it if needed.

        Per-process records are dropped so the new lifetime starts fresh.

        Args:
            key: The capability key to override.
            lifetime: The lifetime to use from now on.

        Returns:
            The new registration.
        """
        self._overrides[key] = lifetime
        self._registrations.pop(key, None)
        self._lifetime_manager.clear_cache()
        return self.register(key, lifetime)

    def overrides(self) -> Dict[str, Lifetime]:
        """Get the lifetimes overridden since the last reset, keyed by capability key."""
        return dict(self._overrides)

    def reset_overrides(self) -> None:
        """Remove all overrides and restore parent registrations."""
        self._overrides.clear()
        self._lifetime_manager.clear_cache()
        if self._parent_registry:
            self._registrations = self._parent_registry.registrations()
        else:
            self._registrations.clear()

    def __enter__(self) -> "TestRegistry":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Context manager exit - automatically clean up overrides."""
        self.reset_overrides()
        self.clear()
        return False


def create_test_registry(*registrations: Tuple[str, Lifetime]) -> TestRegistry:
    """Create a test registry with pre-configured capabilities.

    Args:
        *registrations: Tuples of (capability_key, lifetime).

    Returns:
        TestRegistry with the capabilities registered.

    Example:
        >>> registry = create_test_registry(
        ...     ("svc", Lifetime.PER_SCOPE),
        ...     ("config", Lifetime.PER_PROCESS),
        ... )
    """
    registry = TestRegistry()

    for key, lifetime in registrations:
        registry.register(key, lifetime)

    return registry


class RegistryScope:
    """Context manager for scoped testing with automatic cleanup.

    Unlike ``LifetimeRegistry.scope()``, the scope stays inspectable after exit.

    Example:
        >>> with RegistryScope(registry) as scope:
        ...     first = registry.resolve("svc", scope=scope)
        ...     assert registry.resolve("svc", scope=scope) == first
        ...
        ... # Scope ended here
    """

    def __init__(self, registry: ILifetimeRegistry) -> None:
        """Initialize the registry scope.

        Args:
            registry: The registry to begin the scope from.
        """
        self._registry = registry
        self.scope: Optional[Scope] = None

    def __enter__(self) -> Scope:
        self.scope = self._registry.begin_scope()
        return self.scope

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Exit the scoped context and end the scope."""
        if self.scope is not None:
            self._registry.end_scope(self.scope)
        return False
