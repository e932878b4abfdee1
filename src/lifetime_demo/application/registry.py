import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from lifetime_demo.application.lifetime_manager import LifetimeManager
from lifetime_demo.domain import (
    ILifetimeManager,
    ILifetimeRegistry,
    InstanceRecord,
    Lifetime,
    Registration,
    RegistrationError,
    Scope,
    UnknownCapabilityError,
)

logger = logging.getLogger(__name__)


class LifetimeRegistry(ILifetimeRegistry):
    """Resolves capability keys to instance records according to their lifetime.

    The registry is constructed explicitly and shared by reference with the
    request-handling code. Registrations are expected at startup; resolutions
    may then happen from many threads.

    Attributes:
        _registrations: Dictionary mapping capability keys to their registration.
        _lifetime_manager: Component applying lifetime rules.
        _registration_lock: Guards changes to the registrations.
    """

    def __init__(self, lifetime_manager: Optional[ILifetimeManager] = None) -> None:
        """Initialize the registry with no registrations.

        Args:
            lifetime_manager: Optional lifetime manager, a default one is created otherwise.
        """
        self._registrations: Dict[str, Registration] = {}
        self._lifetime_manager: ILifetimeManager = (
            lifetime_manager if lifetime_manager is not None else LifetimeManager()
        )
        self._registration_lock = threading.Lock()

    def register(self, key: str, lifetime: Lifetime) -> Registration:
        """Declare a capability key with its lifetime.

        Registering a key again with the same lifetime is a no-op.

        Args:
            key: The capability key.
            lifetime: How long resolved records should live.

        Returns:
            The registration stored for the key.

        Raises:
            RegistrationError: If the key is blank or already registered with a different lifetime.

        Example:
            >>> registry.register("operation.scoped", Lifetime.PER_SCOPE)
        """
        if not isinstance(key, str) or not key.strip():
            raise RegistrationError(f"Capability key must be a non-empty string, got {key!r}")
        try:
            lifetime = Lifetime(lifetime)
        except ValueError as e:
            raise RegistrationError(f"Invalid lifetime {lifetime!r} for capability '{key}'") from e

        with self._registration_lock:
            existing = self._registrations.get(key)
            if existing is not None:
                if existing.lifetime != lifetime:
                    raise RegistrationError(
                        f"Capability '{key}' is already registered "
                        f"with lifetime {existing.lifetime.value}, "
                        f"cannot re-register with {lifetime.value}"
                    )
                return existing

            registration = Registration(key=key, lifetime=lifetime)
            self._registrations[key] = registration

        logger.debug("Registered capability '%s' as %s", key, lifetime)
        return registration

    def register_per_request(self, *keys: str) -> None:
        """Register capabilities that get a new record on every resolution.

        Example:
            >>> registry.register_per_request("operation.transient", "request.token")
        """
        for key in keys:
            self.register(key, Lifetime.PER_REQUEST)

    def register_per_scope(self, *keys: str) -> None:
        """Register capabilities that share one record within a scope."""
        for key in keys:
            self.register(key, Lifetime.PER_SCOPE)

    def register_per_process(self, *keys: str) -> None:
        """Register capabilities that share one record for the whole process."""
        for key in keys:
            self.register(key, Lifetime.PER_PROCESS)

    def resolve(
        self,
        key: str,
        lifetime: Optional[Lifetime] = None,
        scope: Optional[Scope] = None,
    ) -> InstanceRecord:
        """Resolve an instance record for the capability key.

        Args:
            key: The capability key to resolve.
            lifetime: Optional expected lifetime. When given it must match the registration.
            scope: The current scope. Required for per-scope keys, ignored otherwise.

        Returns:
            The instance record selected by the key's lifetime.

        Raises:
            UnknownCapabilityError: If the key was never registered.
            RegistrationError: If ``lifetime`` differs from the registered lifetime.
            MissingScopeError: If a per-scope key is resolved without an active scope.

        Example:
            >>> scope = registry.begin_scope()
            >>> first = registry.resolve("operation.scoped", scope=scope)
            >>> second = registry.resolve("operation.scoped", scope=scope)
            >>> assert first.instance_id == second.instance_id
        """
        registration = self._registrations.get(key)
        if registration is None:
            raise UnknownCapabilityError(key)

        if lifetime is not None:
            try:
                lifetime = Lifetime(lifetime)
            except ValueError as e:
                raise RegistrationError(f"Invalid lifetime {lifetime!r} for capability '{key}'") from e
            if lifetime != registration.lifetime:
                raise RegistrationError(
                    f"Capability '{key}' is registered with lifetime {registration.lifetime.value}, "
                    f"not {lifetime.value}"
                )

        return self._lifetime_manager.get_or_create(registration, scope)

    def begin_scope(self) -> Scope:
        """Create a new empty scope.

        The caller owns the scope and must end it with ``end_scope``.

        Returns:
            A new active scope.
        """
        scope = Scope()
        logger.debug("Scope %s started", scope.scope_id)
        return scope

    def end_scope(self, scope: Scope) -> None:
        """Discard the scope's per-scope records.

        Ending a scope twice has no further effect.

        Args:
            scope: The scope to end.
        """
        if scope.closed:
            return
        discarded = len(scope.records)
        scope.records.clear()
        scope.closed = True
        logger.debug("Scope %s ended, discarded %d record(s)", scope.scope_id, discarded)

    @contextmanager
    def scope(self) -> Iterator[Scope]:
        """Begin a scope for the duration of a ``with`` block.

        Example:
            >>> with registry.scope() as scope:
            ...     record = registry.resolve("operation.scoped", scope=scope)
        """
        scope = self.begin_scope()
        try:
            yield scope
        finally:
            self.end_scope(scope)

    def is_registered(self, key: str) -> bool:
        return key in self._registrations

    def registrations(self) -> Dict[str, Registration]:
        """Get a copy of the current registrations.

        Returns:
            Copy of the registrations keyed by capability key.
        """
        with self._registration_lock:
            return dict(self._registrations)

    def clear(self) -> None:
        """Clear all registrations and per-process records.

        Useful for testing or resetting the registry state.
        """
        with self._registration_lock:
            self._registrations.clear()
        self._lifetime_manager.clear_cache()
