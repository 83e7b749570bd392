"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Column names of the hosted tables are mapped in the store layer.
"""

from dataclasses import dataclass

from registrations.domain.value_objects import EVENT_SLOTS, FieldKind


@dataclass(frozen=True)
class Record:
    """One participant registration."""

    id: int
    email: str
    name: str | None = None
    payment: str | None = None
    pass_type: str | None = None
    registration: str | None = None
    concert_payment: str | None = None
    event_1_day3: str | None = None
    event_2_day3: str | None = None
    event_3_day3: str | None = None
    event_4_day3: str | None = None
    event_1_day4: str | None = None

    def slot_value(self, slot: FieldKind) -> str | None:
        if slot not in EVENT_SLOTS:
            raise ValueError(f"{slot.value} is not an event slot")
        return getattr(self, slot.value)


@dataclass(frozen=True)
class ReferenceEvent:
    """An event name offered to holders of a pass on a given day."""

    pass_type: str
    name: str
    day: str


@dataclass(frozen=True)
class RecordPage:
    """One page of records plus the exact number of matching records."""

    records: tuple[Record, ...]
    total: int
