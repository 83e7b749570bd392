"""Closed set of record mutations.

Each variant maps deterministically to the partial-field patch sent to the
store. Patch keys are domain field names of ``Record``.
"""

from dataclasses import dataclass
from typing import ClassVar

from registrations.domain.errors import InvalidSelectionError
from registrations.domain.value_objects import (
    CONCERT_SUCCESSFUL,
    EVENT_SLOTS,
    PAYMENT_CANCELLED,
    PAYMENT_SUCCESSFUL,
    REGISTERED,
    FieldKind,
    PassType,
)

PAYMENT_OPTIONS = (PAYMENT_SUCCESSFUL, PAYMENT_CANCELLED)
PASS_OPTIONS = tuple(p.value for p in PassType)
CONCERT_OPTIONS = (CONCERT_SUCCESSFUL,)


@dataclass(frozen=True)
class PaymentUpdate:
    status: str

    field: ClassVar[FieldKind] = FieldKind.PAYMENT
    success_message: ClassVar[str] = "Payment status updated successfully"
    failure_message: ClassVar[str] = "Failed to update payment status"

    def __post_init__(self) -> None:
        if self.status not in PAYMENT_OPTIONS:
            raise InvalidSelectionError(self.field.value, self.status)

    def to_patch(self) -> dict[str, str]:
        return {"payment": self.status}


@dataclass(frozen=True)
class PassUpdate:
    """Pass change; a General pass also marks the participant registered."""

    pass_type: str

    field: ClassVar[FieldKind] = FieldKind.PASS
    success_message: ClassVar[str] = "Pass updated successfully"
    failure_message: ClassVar[str] = "Failed to update pass"

    def __post_init__(self) -> None:
        if self.pass_type not in PASS_OPTIONS:
            raise InvalidSelectionError(self.field.value, self.pass_type)

    def to_patch(self) -> dict[str, str]:
        patch = {"pass_type": self.pass_type}
        if self.pass_type == PassType.GENERAL.value:
            patch["registration"] = REGISTERED
        return patch


@dataclass(frozen=True)
class ConcertUpdate:
    field: ClassVar[FieldKind] = FieldKind.CONCERT
    success_message: ClassVar[str] = "Concert payment updated successfully"
    failure_message: ClassVar[str] = "Failed to update concert payment"

    def to_patch(self) -> dict[str, str]:
        return {"concert_payment": CONCERT_SUCCESSFUL}


@dataclass(frozen=True)
class EventSlotUpdate:
    slot: FieldKind
    event_name: str

    success_message: ClassVar[str] = "Event updated successfully"
    failure_message: ClassVar[str] = "Failed to update event"

    def __post_init__(self) -> None:
        if self.slot not in EVENT_SLOTS:
            raise InvalidSelectionError(self.slot.value, self.event_name)
        if not self.event_name:
            raise InvalidSelectionError(self.slot.value, self.event_name)

    @property
    def field(self) -> FieldKind:
        return self.slot

    def to_patch(self) -> dict[str, str]:
        return {self.slot.value: self.event_name}


Update = PaymentUpdate | PassUpdate | ConcertUpdate | EventSlotUpdate


def build_update(field: FieldKind, value: str) -> Update:
    """Return the update variant for a dropdown selection.

    Raises:
        InvalidSelectionError: If ``value`` is not an option of ``field``.
    """
    if field is FieldKind.PAYMENT:
        return PaymentUpdate(status=value)
    if field is FieldKind.PASS:
        return PassUpdate(pass_type=value)
    if field is FieldKind.CONCERT:
        if value not in CONCERT_OPTIONS:
            raise InvalidSelectionError(field.value, value)
        return ConcertUpdate()
    return EventSlotUpdate(slot=field, event_name=value)
