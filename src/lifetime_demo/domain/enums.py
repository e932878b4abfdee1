from enum import Enum


class Lifetime(str, Enum):
    """Defines how long a resolved instance record is reused.

    Attributes:
        PER_REQUEST: New record created on each resolution.
        PER_SCOPE: Single record per scope (e.g., per HTTP request).
        PER_PROCESS: Single record shared across the entire process.
    """

    PER_REQUEST = "per_request"
    PER_SCOPE = "per_scope"
    PER_PROCESS = "per_process"

    def __str__(self) -> str:
        return self.value

    @property
    def behavior(self) -> str:
        """Human readable description of the reuse rule."""
        return _BEHAVIORS[self]


_BEHAVIORS = {
    Lifetime.PER_REQUEST: "New instance every time it's requested",
    Lifetime.PER_SCOPE: "Same instance within a single HTTP request",
    Lifetime.PER_PROCESS: "Same instance for entire application lifetime",
}
