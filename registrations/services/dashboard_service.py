"""Dashboard service - all view transition logic lives here.

Services:
- Depend only on interfaces (stores)
- Own the view state and apply one transition per user action
- Turn store failures into notifications, never into partial state
- Raise domain errors for invalid input
"""

import logging

from registrations.domain import (
    Dropdown,
    FetchMode,
    FieldKind,
    PageRequest,
    Record,
    RecordPage,
    Update,
    ViewState,
)
from registrations.domain.errors import (
    InvalidPageError,
    InvalidSelectionError,
    RecordNotLoadedError,
    RecordStoreError,
    SlotNotEditableError,
)
from registrations.domain.filters import available_events, filter_records, slot_editable
from registrations.domain.updates import EventSlotUpdate
from registrations.domain.value_objects import total_pages
from registrations.domain.view_state import NotificationLevel
from registrations.services.fetch_sequence import FetchSequence
from registrations.stores.interfaces import RecordStore

logger = logging.getLogger(__name__)

LOAD_RECORDS_FAILED = "Failed to load participants"
LOAD_EVENTS_FAILED = "Failed to load events"


class DashboardService:
    """View controller for the registration dashboard."""

    def __init__(
        self,
        store: RecordStore,
        state: ViewState,
        sequence: FetchSequence | None = None,
    ) -> None:
        self._store = store
        self._sequence = sequence or FetchSequence()
        self.state = state
        # Set when a newer fetch of the same session overtook this one.
        self.stale = False

    # -- reads -----------------------------------------------------------

    def load(self) -> None:
        """Fetch the current page and the reference events."""
        self._fetch_records()
        self._fetch_reference_events()
        self.state.loaded = True

    def refresh(self) -> None:
        """Re-run the last read, by id or by page, and reload the events."""
        self._fetch_records()
        self._fetch_reference_events()

    def search(self, term: str) -> None:
        """Apply a keystroke in the search box.

        Non-empty text is looked up as an exact record id; empty text goes
        back to the first page of the listing.
        """
        self.state.search_term = term
        if term:
            self.state.mode = FetchMode.LOOKUP
        else:
            self.state.mode = FetchMode.PAGE
            self.state.page = 0
        self._fetch_records()

    def go_to_page(self, page: int) -> None:
        """Fetch page ``page`` from the store.

        Raises:
            InvalidPageError: If ``page`` is negative.
        """
        if page < 0:
            raise InvalidPageError(page)
        self.state.page = page
        self.state.mode = FetchMode.PAGE
        self._fetch_records()
        self._fetch_reference_events()

    def visible_records(self) -> list[Record]:
        """Return the loaded records narrowed by the search term."""
        return filter_records(self.state.records, self.state.search_term)

    def _fetch_records(self) -> None:
        state = self.state
        ticket = self._sequence.issue()
        state.loading = True
        try:
            if state.mode is FetchMode.LOOKUP:
                record = self._store.get_record(state.search_term)
                rows = (record,) if record else ()
                self._apply_records(ticket, RecordPage(records=rows, total=len(rows)))
            else:
                request = PageRequest(page=state.page, page_size=state.page_size)
                self._apply_records(ticket, self._store.list_records(request))
        except RecordStoreError:
            logger.exception("Error fetching participants")
            state.notify(NotificationLevel.ERROR, LOAD_RECORDS_FAILED)
        finally:
            state.loading = False

    def _apply_records(self, ticket: int, result: RecordPage) -> bool:
        """Replace the loaded records unless a newer fetch has started."""
        state = self.state
        latest = self._sequence.latest()
        if ticket != latest:
            logger.debug("Dropping stale fetch %s (latest %s)", ticket, latest)
            self.stale = True
            return False
        state.records = list(result.records)
        state.total = result.total
        state.total_pages = total_pages(result.total, state.page_size)
        if state.mode is FetchMode.LOOKUP:
            state.page = 0
        return True

    def _fetch_reference_events(self) -> None:
        try:
            self.state.reference_events = self._store.list_reference_events()
        except RecordStoreError:
            logger.exception("Error fetching events")
            self.state.notify(NotificationLevel.ERROR, LOAD_EVENTS_FAILED)
        else:
            logger.debug("Fetched %d reference events", len(self.state.reference_events))

    # -- dropdowns -------------------------------------------------------

    def open_dropdown(self, record_id: int, field: FieldKind) -> None:
        """Open the dropdown of one cell, closing any other.

        Raises:
            RecordNotLoadedError: If the record is not on the loaded page.
            SlotNotEditableError: If an event slot is opened for a pass
                without event choices.
        """
        record = self.state.find_record(record_id)
        if record is None:
            raise RecordNotLoadedError(record_id)
        if field.is_event_slot and not slot_editable(record.pass_type):
            raise SlotNotEditableError(record_id)
        self.state.dropdown = Dropdown(record_id=record_id, field=field)

    def close_dropdown(self) -> None:
        self.state.dropdown = None

    def set_event_search(self, term: str) -> None:
        self.state.event_search_term = term

    # -- writes ----------------------------------------------------------

    def select(self, record_id: int, update: Update) -> bool:
        """Send ``update`` for one record, then refresh the current view.

        Returns True when the store accepted the update.

        Raises:
            RecordNotLoadedError: If the record is not on the loaded page.
            SlotNotEditableError: If an event slot is edited without a
                General or Signature pass.
            InvalidSelectionError: If the event is not offered for the pass.
        """
        state = self.state
        try:
            record = state.find_record(record_id)
            if record is None:
                raise RecordNotLoadedError(record_id)
            if isinstance(update, EventSlotUpdate):
                self._check_event_choice(record, update)
            return self._apply_update(record_id, update)
        finally:
            state.dropdown = None

    def _check_event_choice(self, record: Record, update: EventSlotUpdate) -> None:
        if not slot_editable(record.pass_type):
            raise SlotNotEditableError(record.id)
        offered = available_events(
            self.state.reference_events, record.pass_type, update.slot.day.value
        )
        if update.event_name not in {event.name for event in offered}:
            raise InvalidSelectionError(update.slot.value, update.event_name)

    def _apply_update(self, record_id: int, update: Update) -> bool:
        state = self.state
        if state.updating_id is not None and state.updating_id != record_id:
            logger.warning(
                "Updating record %s while record %s is still updating",
                record_id,
                state.updating_id,
            )
        state.updating_id = record_id
        try:
            self._store.update_record(record_id, update.to_patch())
        except RecordStoreError:
            logger.exception("Error updating %s of record %s", update.field.value, record_id)
            state.notify(NotificationLevel.ERROR, update.failure_message)
            return False
        finally:
            state.updating_id = None
        state.notify(NotificationLevel.SUCCESS, update.success_message)
        self._fetch_records()
        return True
