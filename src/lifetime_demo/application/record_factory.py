import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import UUID

from lifetime_demo.application.sequence import SequenceCounter
from lifetime_demo.domain import InstanceRecord

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordFactory:
    """Creates instance records with a fresh id, the next sequence number and a timestamp.

    Attributes:
        _counter: Source of monotonic sequence numbers.
        _id_factory: Source of unique identifiers.
        _clock: Source of UTC timestamps.
    """

    def __init__(
        self,
        counter: Optional[SequenceCounter] = None,
        id_factory: Callable[[], UUID] = uuid.uuid4,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._counter = counter if counter is not None else SequenceCounter()
        self._id_factory = id_factory
        self._clock = clock

    def create(self, key: str) -> InstanceRecord:
        """Create a new instance record for the capability key.

        Args:
            key: Capability key the record is created for, used for logging only.

        Returns:
            A new immutable instance record.
        """
        record = InstanceRecord(
            instance_id=self._id_factory(),
            sequence=self._counter.next(),
            created_at=self._clock(),
        )
        logger.info(
            "[%s] Instance #%d created for '%s' with ID: %s",
            record.created_at.strftime("%H:%M:%S.%f")[:-3],
            record.sequence,
            key,
            record.instance_id.hex,
        )
        return record

    @property
    def created_count(self) -> int:
        """Number of records created so far."""
        return self._counter.value
