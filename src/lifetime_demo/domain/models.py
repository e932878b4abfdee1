from datetime import datetime
from typing import Dict
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lifetime_demo.domain.enums import Lifetime

SHORT_ID_LENGTH = 8


class InstanceRecord(BaseModel):
    """Immutable identity of one created instance.

    Attributes:
        instance_id: Randomly generated unique identifier.
        sequence: Monotonic creation number, starting at 1.
        created_at: UTC timestamp of creation.
    """

    model_config = ConfigDict(frozen=True)

    instance_id: UUID = Field(..., description="Unique identifier assigned at creation.")
    sequence: int = Field(..., ge=1, description="Creation order within the registry.")
    created_at: datetime = Field(..., description="UTC timestamp of creation.")

    @property
    def short_id(self) -> str:
        """First hex characters of the identifier, for easier visual comparison."""
        return self.short(SHORT_ID_LENGTH)

    def short(self, length: int) -> str:
        """Return the first ``length`` hex characters of the identifier."""
        return self.instance_id.hex[:length]


class Registration(BaseModel):
    """Value object binding a capability key to its lifetime.

    Attributes:
        key: The capability key being registered.
        lifetime: How long resolved records should live.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="The capability key to be registered.")
    lifetime: Lifetime = Field(..., description="The lifetime of the registered capability.")

    @field_validator("key")
    @classmethod
    def _key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("capability key must not be blank")
        return value


class Scope(BaseModel):
    """A bounded unit of work owning its per-scope instance records.

    A scope is owned by a single thread or task, so its record map is not locked.

    Attributes:
        scope_id: Identifier of this scope, useful in logs.
        records: Per-scope records keyed by capability key.
        closed: Whether the scope has been ended.
    """

    scope_id: UUID = Field(default_factory=uuid4, description="Identifier of the scope.")
    records: Dict[str, InstanceRecord] = Field(
        default_factory=dict,
        description="Per-scope instance records keyed by capability key.",
    )
    closed: bool = Field(default=False, description="Whether the scope has been ended.")

    @property
    def active(self) -> bool:
        return not self.closed


class OperationSnapshot(BaseModel):
    """Identifiers of the three operation lifetimes observed at one moment."""

    model_config = ConfigDict(frozen=True)

    transient_id: UUID
    scoped_id: UUID
    singleton_id: UUID
    timestamp: datetime
