"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from registrations.domain import PageRequest, Record, RecordPage, ReferenceEvent


class RecordStore(ABC):
    """Interface for the hosted registration tables.

    Every method raises ``RecordStoreError`` when the store cannot be reached
    or rejects the query.
    """

    @abstractmethod
    def list_records(self, page: PageRequest) -> RecordPage:
        """Return one page of records ordered by id ascending, with the total count."""
        ...

    @abstractmethod
    def get_record(self, record_id: str) -> Record | None:
        """Return the record whose id equals ``record_id`` exactly, or None."""
        ...

    @abstractmethod
    def list_reference_events(self) -> list[ReferenceEvent]:
        """Return every reference event."""
        ...

    @abstractmethod
    def update_record(self, record_id: int, patch: Mapping[str, str]) -> None:
        """Apply a partial-field update to one record in a single request."""
        ...
