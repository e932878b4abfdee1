import threading
from typing import Dict, Optional

from lifetime_demo.application.record_factory import RecordFactory
from lifetime_demo.domain import (
    ILifetimeManager,
    InstanceRecord,
    Lifetime,
    MissingScopeError,
    Registration,
    Scope,
)


class LifetimeManager(ILifetimeManager):
    """Applies per-request, per-scope and per-process lifetimes to record creation.

    Per-process records live in a map shared by every thread. The map is only
    written under ``_process_lock``; the first creation for a key uses
    double-checked locking so concurrent callers observe a single record.
    Per-scope records live in the scope itself, which is owned by one thread.

    Attributes:
        _factory: Creates new instance records.
        _process_cache: Per-process records keyed by capability key.
        _process_lock: Guards first creation of per-process records.
    """

    def __init__(self, factory: Optional[RecordFactory] = None) -> None:
        """Initialize the lifetime manager with an empty process cache.

        Args:
            factory: Optional record factory, a default one is created otherwise.
        """
        self._factory = factory if factory is not None else RecordFactory()
        self._process_cache: Dict[str, InstanceRecord] = {}
        self._process_lock = threading.Lock()

    @property
    def factory(self) -> RecordFactory:
        return self._factory

    def get_or_create(self, registration: Registration, scope: Optional[Scope] = None) -> InstanceRecord:
        """Get existing record or create new one based on lifetime.

        Args:
            registration: Registration containing key and lifetime.
            scope: Current scope, required for per-scope lifetimes.

        Returns:
            Record according to lifetime rules:
            - Per process: Returns cached record or creates and caches a new one
            - Per scope: Returns the scope's record or creates and stores a new one
            - Per request: Always creates a new record

        Raises:
            MissingScopeError: If a per-scope record is requested without an active scope.
        """
        key = registration.key
        lifetime = registration.lifetime

        if lifetime == Lifetime.PER_PROCESS:
            record = self._process_cache.get(key)
            if record is not None:
                return record
            with self._process_lock:
                # Another thread may have created it while we waited
                record = self._process_cache.get(key)
                if record is None:
                    record = self._factory.create(key)
                    self._process_cache[key] = record
                return record

        if lifetime == Lifetime.PER_SCOPE:
            if scope is None:
                raise MissingScopeError(key)
            if scope.closed:
                raise MissingScopeError(key, f"scope {scope.scope_id} has already ended")
            record = scope.records.get(key)
            if record is None:
                record = self._factory.create(key)
                scope.records[key] = record
            return record

        # Lifetime.PER_REQUEST
        return self._factory.create(key)

    def clear_cache(self) -> None:
        """Clear all per-process records.

        Useful for testing or resetting registry state.
        """
        with self._process_lock:
            self._process_cache.clear()

    def get_process_cache(self) -> Dict[str, InstanceRecord]:
        """Get a copy of the per-process records.

        Returns:
            Copy of the per-process cache.
        """
        with self._process_lock:
            return dict(self._process_cache)
