"""PostgREST implementation of the RecordStore.

Talks to the REST endpoint of the hosted Postgres database that owns the
participants and events tables.
"""

import logging
from collections.abc import Mapping
from typing import Any

import requests

from registrations.domain import PageRequest, Record, RecordPage, ReferenceEvent
from registrations.domain.errors import RecordStoreError
from registrations.stores.interfaces import RecordStore

logger = logging.getLogger(__name__)

# Record field -> table column
RECORD_COLUMNS = {
    "id": "id",
    "name": "Name",
    "email": "Email",
    "payment": "Payment",
    "pass_type": "Pass",
    "registration": "EW",
    "concert_payment": "Concert_Payment",
    "event_1_day3": "Event_1_Day3",
    "event_2_day3": "Event_2_Day3",
    "event_3_day3": "Event_3_Day3",
    "event_4_day3": "Event_4_Day3",
    "event_1_day4": "Event_1_Day4",
}

EVENT_COLUMNS = {
    "pass_type": "pass",
    "name": "events",
    "day": "Day",
}


def parse_content_range(value: str | None) -> int:
    """Return the total from a ``Content-Range`` header such as ``0-99/250``."""
    if not value or "/" not in value:
        return 0
    total = value.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else 0


def _row_to_record(row: Mapping[str, Any]) -> Record:
    values = {field: row.get(column) for field, column in RECORD_COLUMNS.items()}
    values["email"] = values["email"] or ""
    return Record(**values)


def _row_to_event(row: Mapping[str, Any]) -> ReferenceEvent:
    return ReferenceEvent(**{field: row.get(column) or "" for field, column in EVENT_COLUMNS.items()})


class PostgrestRecordStore(RecordStore):
    """Record store backed by a PostgREST endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        records_table: str = "Participants",
        events_table: str = "Events",
        timeout: float = 20,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = f"{base_url.rstrip('/')}/rest/v1"
        self._api_key = api_key
        self._records_table = records_table
        self._events_table = events_table
        self._timeout = timeout
        self._session = session or requests.Session()

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        h = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        if prefer:
            h["Prefer"] = prefer
        return h

    def _request(
        self,
        method: str,
        table: str,
        operation: str,
        params: Mapping[str, Any],
        prefer: str | None = None,
        payload: Mapping[str, Any] | None = None,
        decode: bool = True,
    ) -> tuple[Any, Mapping[str, str]]:
        """Send one request and return its decoded JSON body and headers."""
        url = f"{self._base_url}/{table}"
        try:
            r = self._session.request(
                method,
                url,
                headers=self._headers(prefer),
                params=params,
                json=payload,
                timeout=self._timeout,
            )
            r.raise_for_status()
            return (r.json() if decode else None), r.headers
        except requests.HTTPError as e:
            body = e.response.text if e.response is not None else ""
            status = e.response.status_code if e.response is not None else ""
            logger.error("Record store %s %s failed: %s %s", method, url, status, body[:500])
            raise RecordStoreError(operation) from e
        except ValueError as e:
            # requests.JSONDecodeError is both a ValueError and a RequestException
            logger.error("Record store %s %s returned a body that is not JSON: %s", method, url, e)
            raise RecordStoreError(operation) from e
        except requests.RequestException as e:
            logger.error("Record store %s %s unreachable: %s", method, url, e)
            raise RecordStoreError(operation) from e

    def list_records(self, page: PageRequest) -> RecordPage:
        rows, headers = self._request(
            "GET",
            self._records_table,
            "list",
            params={
                "select": "*",
                "order": "id.asc",
                "offset": page.offset,
                "limit": page.limit,
            },
            prefer="count=exact",
        )
        records = tuple(_row_to_record(row) for row in rows)
        return RecordPage(records=records, total=parse_content_range(headers.get("Content-Range")))

    def get_record(self, record_id: str) -> Record | None:
        rows, _ = self._request(
            "GET",
            self._records_table,
            "lookup",
            params={"select": "*", "id": f"eq.{record_id}"},
        )
        return _row_to_record(rows[0]) if rows else None

    def list_reference_events(self) -> list[ReferenceEvent]:
        rows, _ = self._request("GET", self._events_table, "list events", params={"select": "*"})
        return [_row_to_event(row) for row in rows]

    def update_record(self, record_id: int, patch: Mapping[str, str]) -> None:
        payload = {RECORD_COLUMNS[field]: value for field, value in patch.items()}
        self._request(
            "PATCH",
            self._records_table,
            "update",
            params={"id": f"eq.{record_id}"},
            prefer="return=minimal",
            payload=payload,
            decode=False,
        )
