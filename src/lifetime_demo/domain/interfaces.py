from abc import ABC, abstractmethod
from typing import Dict, Optional

from lifetime_demo.domain.enums import Lifetime
from lifetime_demo.domain.models import InstanceRecord, Registration, Scope


class ILifetimeRegistry(ABC):
    """Abstract interface for lifetime-scoped instance resolution."""

    @abstractmethod
    def register(self, key: str, lifetime: Lifetime) -> Registration:
        """Declare a capability key with its lifetime.

        Args:
            key: The capability key.
            lifetime: The lifetime policy attached to the key.
        """

    @abstractmethod
    def resolve(
        self,
        key: str,
        lifetime: Optional[Lifetime] = None,
        scope: Optional[Scope] = None,
    ) -> InstanceRecord:
        """Return an instance record for the key according to its lifetime.

        Args:
            key: The capability key to resolve.
            lifetime: Optional expected lifetime, checked against the registration.
            scope: The current scope, required for per-scope keys.
        """

    @abstractmethod
    def begin_scope(self) -> Scope:
        """Create and return a new empty scope."""

    @abstractmethod
    def end_scope(self, scope: Scope) -> None:
        """Discard all per-scope records held by the scope."""

    @abstractmethod
    def registrations(self) -> Dict[str, Registration]:
        """Get a copy of the current registrations."""


class ILifetimeManager(ABC):
    """Abstract interface for applying a lifetime policy to record creation."""

    @abstractmethod
    def get_or_create(self, registration: Registration, scope: Optional[Scope] = None) -> InstanceRecord:
        """Get an existing record or create a new one based on lifetime.

        Args:
            registration: The registration carrying key and lifetime.
            scope: The current scope, if any.
        """

    @abstractmethod
    def clear_cache(self) -> None:
        """Clear any cached per-process records."""
