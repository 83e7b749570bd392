"""In-memory state driving the dashboard view.

The state is owned by ``DashboardService`` and kept in the operator's
session between requests as a plain dict.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Self

from registrations.domain.models import Record, ReferenceEvent
from registrations.domain.value_objects import FieldKind


class FetchMode(str, Enum):
    """Which read produced the loaded records."""

    PAGE = "page"
    LOOKUP = "lookup"


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Dropdown:
    """The single open dropdown, identified by record and field."""

    record_id: int
    field: FieldKind


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str


@dataclass
class ViewState:
    page_size: int
    page: int = 0
    total: int = 0
    total_pages: int = 0
    search_term: str = ""
    mode: FetchMode = FetchMode.PAGE
    loading: bool = False
    updating_id: int | None = None
    dropdown: Dropdown | None = None
    event_search_term: str = ""
    records: list[Record] = field(default_factory=list)
    reference_events: list[ReferenceEvent] = field(default_factory=list)
    loaded: bool = False
    notifications: list[Notification] = field(default_factory=list)

    def find_record(self, record_id: int) -> Record | None:
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def notify(self, level: NotificationLevel, message: str) -> None:
        self.notifications.append(Notification(level=level, message=message))

    def drain_notifications(self) -> list[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation for session storage."""
        data = asdict(self)
        data["mode"] = self.mode.value
        data["dropdown"] = (
            {"record_id": self.dropdown.record_id, "field": self.dropdown.field.value}
            if self.dropdown
            else None
        )
        data["notifications"] = [
            {"level": n.level.value, "message": n.message} for n in self.notifications
        ]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        dropdown = data.get("dropdown")
        return cls(
            page_size=data["page_size"],
            page=data["page"],
            total=data["total"],
            total_pages=data["total_pages"],
            search_term=data["search_term"],
            mode=FetchMode(data["mode"]),
            loading=data["loading"],
            updating_id=data["updating_id"],
            dropdown=(
                Dropdown(record_id=dropdown["record_id"], field=FieldKind(dropdown["field"]))
                if dropdown
                else None
            ),
            event_search_term=data["event_search_term"],
            records=[Record(**r) for r in data["records"]],
            reference_events=[ReferenceEvent(**e) for e in data["reference_events"]],
            loaded=data["loaded"],
            notifications=[
                Notification(level=NotificationLevel(n["level"]), message=n["message"])
                for n in data["notifications"]
            ],
        )
