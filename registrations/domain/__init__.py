from registrations.domain.models import Record, RecordPage, ReferenceEvent
from registrations.domain.updates import (
    ConcertUpdate,
    EventSlotUpdate,
    PassUpdate,
    PaymentUpdate,
    Update,
    build_update,
)
from registrations.domain.value_objects import Day, FieldKind, PageRequest, PassType
from registrations.domain.view_state import Dropdown, FetchMode, Notification, ViewState

__all__ = [
    "Record",
    "RecordPage",
    "ReferenceEvent",
    "PaymentUpdate",
    "PassUpdate",
    "ConcertUpdate",
    "EventSlotUpdate",
    "Update",
    "build_update",
    "Day",
    "FieldKind",
    "PageRequest",
    "PassType",
    "Dropdown",
    "FetchMode",
    "Notification",
    "ViewState",
]
