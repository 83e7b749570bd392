"""Pure derivations over already loaded data."""

from collections.abc import Iterable

from registrations.domain.models import Record, ReferenceEvent
from registrations.domain.value_objects import PassType

EDITABLE_PASSES = frozenset({PassType.GENERAL.value, PassType.SIGNATURE.value})


def filter_records(records: Iterable[Record], term: str) -> list[Record]:
    """Return records whose name, email or id contains ``term``, ignoring case."""
    needle = term.lower()
    return [
        record
        for record in records
        if needle in (record.name or "").lower()
        or needle in record.email.lower()
        or needle in str(record.id)
    ]


def available_events(
    events: Iterable[ReferenceEvent], pass_type: str | None, day: str
) -> list[ReferenceEvent]:
    """Return the reference events offered for ``pass_type``.

    ``day`` is accepted but does not narrow the result: a pass grants the
    same events on every day.
    """
    if not pass_type:
        return []
    return [event for event in events if event.pass_type == pass_type]


def slot_editable(pass_type: str | None) -> bool:
    return pass_type in EDITABLE_PASSES


def filter_event_names(events: Iterable[ReferenceEvent], term: str) -> list[str]:
    needle = term.lower()
    return [event.name for event in events if needle in event.name.lower()]
