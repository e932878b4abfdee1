from typing import Optional


class LifetimeDemoError(Exception):
    """Base exception for lifetime registry errors."""


class MissingScopeError(LifetimeDemoError):
    """Raised when a resolution needs an active scope and none is available.

    This occurs when:
    - A per-scope capability is resolved without a scope handle.
    - The scope handle has already been ended.
    - A request handler runs without the scope middleware installed.

    Attributes:
        key: The capability key being resolved, if known.
    """

    def __init__(self, key: Optional[str] = None, reason: Optional[str] = None) -> None:
        self.key = key
        self.reason = reason
        if key is None:
            message = "No active scope is available"
        else:
            message = f"Capability '{key}' cannot be resolved: no active scope was provided"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class UnknownCapabilityError(LifetimeDemoError):
    """Raised when resolving a capability key that was never registered.

    Attributes:
        key: The unregistered capability key.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Capability '{key}' is not registered")


class RegistrationError(LifetimeDemoError):
    """Raised for invalid capability registrations.

    This occurs when:
    - Registering the same key with conflicting lifetimes.
    - Registering an empty key.
    - Resolving a key with a lifetime other than the declared one.
    """
