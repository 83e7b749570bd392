"""Domain primitives that enforce validity at creation time."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Self

from registrations.domain.errors import InvalidFieldError

PAYMENT_SUCCESSFUL = "Successful"
PAYMENT_CANCELLED = "payment cancelled"
CONCERT_SUCCESSFUL = "Successful"
REGISTERED = "Registered"


class PassType(str, Enum):
    """Pass categories a participant can hold."""

    GENERAL = "General"
    HACKATHON = "Hackathon"
    SIGNATURE = "Signature"


class Day(str, Enum):
    """Event days that carry assignment slots."""

    DAY3 = "day3"
    DAY4 = "day4"


class FieldKind(str, Enum):
    """Editable fields of a record, one dropdown each."""

    PAYMENT = "payment"
    PASS = "pass"
    CONCERT = "concert"
    EVENT_1_DAY3 = "event_1_day3"
    EVENT_2_DAY3 = "event_2_day3"
    EVENT_3_DAY3 = "event_3_day3"
    EVENT_4_DAY3 = "event_4_day3"
    EVENT_1_DAY4 = "event_1_day4"

    @classmethod
    def parse(cls, value: str) -> Self:
        try:
            return cls(value)
        except ValueError:
            raise InvalidFieldError(value) from None

    @property
    def is_event_slot(self) -> bool:
        return self in EVENT_SLOTS

    @property
    def day(self) -> Day | None:
        if not self.is_event_slot:
            return None
        return Day.DAY4 if self.value.endswith("day4") else Day.DAY3


EVENT_SLOTS = (
    FieldKind.EVENT_1_DAY3,
    FieldKind.EVENT_2_DAY3,
    FieldKind.EVENT_3_DAY3,
    FieldKind.EVENT_4_DAY3,
    FieldKind.EVENT_1_DAY4,
)


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page of a listing."""

    page: int
    page_size: int

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("Page cannot be negative")
        if self.page_size <= 0:
            raise ValueError("Page size must be positive")

    @property
    def offset(self) -> int:
        return self.page * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def total_pages(total: int, page_size: int) -> int:
    """Number of pages needed to show ``total`` records."""
    return math.ceil(total / page_size)
