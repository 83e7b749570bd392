"""Unit tests for DashboardService.

These test view transitions, store calls and error handling.
Run with: pytest tests/test_services.py -v
"""

import logging

import pytest

from registrations.domain import (
    ConcertUpdate,
    Dropdown,
    EventSlotUpdate,
    FetchMode,
    FieldKind,
    PassUpdate,
    PaymentUpdate,
    ViewState,
)
from registrations.domain.errors import (
    InvalidPageError,
    InvalidSelectionError,
    RecordNotLoadedError,
    SlotNotEditableError,
)
from registrations.domain.view_state import NotificationLevel
from registrations.services.dashboard_service import DashboardService
from registrations.services.fetch_sequence import CacheFetchSequence
from tests.fakes import FakeRecordStore


@pytest.fixture
def service(store: FakeRecordStore) -> DashboardService:
    svc = DashboardService(store, ViewState(page_size=100))
    svc.load()
    store.calls.clear()
    svc.state.drain_notifications()
    return svc


def messages(service: DashboardService) -> list[tuple[str, str]]:
    return [(n.level.value, n.message) for n in service.state.drain_notifications()]


class TestLoad:
    def test_load_lists_first_page_and_reference_events(self, store):
        svc = DashboardService(store, ViewState(page_size=100))

        svc.load()

        assert store.calls == [("list", 0, 100), ("list events",)]
        assert len(svc.state.records) == 100
        assert svc.state.total == 250
        assert svc.state.total_pages == 3
        assert len(svc.state.reference_events) == 4
        assert svc.state.loaded
        assert not svc.state.loading

    def test_listing_failure_keeps_prior_records(self, service, store, caplog):
        before = list(service.state.records)
        store.fail_on.add("list")

        with caplog.at_level(logging.ERROR):
            service.refresh()

        assert service.state.records == before
        assert service.state.total == 250
        assert not service.state.loading
        assert messages(service) == [("error", "Failed to load participants")]
        assert "Error fetching participants" in caplog.text

    def test_reference_events_failure_is_reported(self, store):
        store.fail_on.add("list events")
        svc = DashboardService(store, ViewState(page_size=100))

        svc.load()

        assert svc.state.reference_events == []
        assert messages(svc) == [("error", "Failed to load events")]
        assert len(svc.state.records) == 100

    def test_reference_events_recover_on_refresh(self, store):
        store.fail_on.add("list events")
        svc = DashboardService(store, ViewState(page_size=100))
        svc.load()
        store.fail_on.clear()

        svc.refresh()

        assert len(svc.state.reference_events) == 4

    def test_reference_events_recover_on_page_click(self, store):
        store.fail_on.add("list events")
        svc = DashboardService(store, ViewState(page_size=100))
        svc.load()
        store.fail_on.clear()

        svc.go_to_page(1)

        assert len(svc.state.reference_events) == 4


class TestPagination:
    def test_page_click_requests_offset_and_limit(self, service, store):
        service.go_to_page(2)

        assert store.calls == [("list", 200, 100), ("list events",)]
        assert [r.id for r in service.state.records] == list(range(201, 251))
        assert service.state.page == 2
        assert service.state.total_pages == 3

    def test_page_click_always_refetches(self, service, store):
        service.go_to_page(1)
        service.go_to_page(1)

        assert [c for c in store.calls if c[0] == "list"] == [("list", 100, 100), ("list", 100, 100)]

    def test_negative_page_is_rejected(self, service, store):
        with pytest.raises(InvalidPageError):
            service.go_to_page(-1)
        assert store.calls == []

    def test_stale_listing_result_is_dropped(self, service, store):
        def click_again(page):
            if page.page == 1:
                store.on_list = None
                service.go_to_page(2)

        store.on_list = click_again

        service.go_to_page(1)

        assert service.state.page == 2
        assert service.state.records[0].id == 201
        assert service.stale

    def test_overtaken_request_of_same_session_is_dropped(self, service, store):
        saved = service.state.to_dict()
        first = DashboardService(store, ViewState.from_dict(saved), CacheFetchSequence("abc"))
        second = DashboardService(store, ViewState.from_dict(saved), CacheFetchSequence("abc"))

        def click_again(page):
            if page.page == 1:
                store.on_list = None
                second.go_to_page(2)

        store.on_list = click_again

        first.go_to_page(1)

        assert first.stale
        assert first.state.records[0].id == 1
        assert not second.stale
        assert second.state.page == 2
        assert second.state.records[0].id == 201

    def test_other_sessions_do_not_share_tickets(self, service, store):
        saved = service.state.to_dict()
        first = DashboardService(store, ViewState.from_dict(saved), CacheFetchSequence("abc"))
        other = DashboardService(store, ViewState.from_dict(saved), CacheFetchSequence("xyz"))

        def click_elsewhere(page):
            if page.page == 1:
                store.on_list = None
                other.go_to_page(2)

        store.on_list = click_elsewhere

        first.go_to_page(1)

        assert not first.stale
        assert first.state.records[0].id == 101


class TestSearch:
    def test_non_empty_search_is_an_exact_id_lookup(self, service, store):
        service.go_to_page(2)
        store.calls.clear()

        service.search("42")

        assert store.calls == [("lookup", "42")]
        assert [r.id for r in service.state.records] == [42]
        assert service.state.total == 1
        assert service.state.total_pages == 1
        assert service.state.page == 0
        assert service.state.mode is FetchMode.LOOKUP

    def test_lookup_without_match_empties_the_table(self, service):
        service.search("9999")

        assert service.state.records == []
        assert service.state.total == 0
        assert service.state.total_pages == 0

    def test_failed_lookup_keeps_page_for_client_filter(self, service, store):
        store.fail_on.add("lookup")

        service.search("Ada")

        assert store.calls == [("lookup", "Ada")]
        assert len(service.state.records) == 100
        assert [r.id for r in service.visible_records()] == [5]
        assert messages(service) == [("error", "Failed to load participants")]

    def test_clearing_search_relists_first_page(self, service, store):
        service.go_to_page(2)
        service.search("42")
        store.calls.clear()

        service.search("")

        assert store.calls == [("list", 0, 100)]
        assert service.state.page == 0
        assert service.state.mode is FetchMode.PAGE
        assert service.state.total == 250

    def test_filter_does_not_change_totals(self, service):
        service.state.search_term = "participant 1"

        visible = service.visible_records()

        assert 0 < len(visible) < 100
        assert service.state.total == 250
        assert service.state.total_pages == 3


class TestDropdowns:
    def test_opening_a_dropdown_replaces_the_open_one(self, service):
        service.open_dropdown(5, FieldKind.PAYMENT)
        service.open_dropdown(5, FieldKind.PASS)

        assert service.state.dropdown == Dropdown(record_id=5, field=FieldKind.PASS)

    def test_dropdown_is_global_across_records(self, service):
        service.open_dropdown(5, FieldKind.PAYMENT)
        service.open_dropdown(7, FieldKind.CONCERT)

        assert service.state.dropdown == Dropdown(record_id=7, field=FieldKind.CONCERT)

    def test_click_outside_closes(self, service):
        service.open_dropdown(5, FieldKind.PAYMENT)

        service.close_dropdown()

        assert service.state.dropdown is None

    def test_event_search_term_is_shared(self, service):
        service.open_dropdown(5, FieldKind.EVENT_1_DAY3)
        service.set_event_search("robo")
        service.open_dropdown(5, FieldKind.EVENT_1_DAY4)

        assert service.state.event_search_term == "robo"

    def test_event_slot_of_hackathon_pass_does_not_open(self, service):
        service.open_dropdown(7, FieldKind.PASS)

        with pytest.raises(SlotNotEditableError):
            service.open_dropdown(7, FieldKind.EVENT_1_DAY3)

        assert service.state.dropdown == Dropdown(record_id=7, field=FieldKind.PASS)

    def test_dropdown_of_record_off_page_does_not_open(self, service):
        with pytest.raises(RecordNotLoadedError):
            service.open_dropdown(150, FieldKind.PAYMENT)

        assert service.state.dropdown is None


class TestSelect:
    def test_general_pass_patches_pass_and_registration_together(self, service, store):
        service.select(7, PassUpdate("General"))

        updates = [c for c in store.calls if c[0] == "update"]
        assert updates == [("update", 7, {"pass_type": "General", "registration": "Registered"})]

    def test_other_pass_patches_only_pass(self, service, store):
        service.select(5, PassUpdate("Hackathon"))

        updates = [c for c in store.calls if c[0] == "update"]
        assert updates == [("update", 5, {"pass_type": "Hackathon"})]

    def test_success_refreshes_current_page_from_store(self, service, store):
        service.open_dropdown(5, FieldKind.PAYMENT)

        assert service.select(5, PaymentUpdate("Successful"))

        assert store.calls[-1] == ("list", 0, 100)
        assert service.state.find_record(5).payment == "Successful"
        assert service.state.dropdown is None
        assert service.state.updating_id is None
        assert messages(service) == [("success", "Payment status updated successfully")]

    def test_success_in_lookup_mode_refreshes_by_id(self, service, store):
        service.search("5")
        store.calls.clear()

        service.select(5, ConcertUpdate())

        assert store.calls[-1] == ("lookup", "5")
        assert service.state.records[0].concert_payment == "Successful"

    def test_record_is_updating_only_during_the_call(self, service, store):
        seen = []
        store.on_update = lambda record_id, patch: seen.append(service.state.updating_id)

        service.select(5, ConcertUpdate())

        assert seen == [5]
        assert service.state.updating_id is None

    def test_failed_update_leaves_record_untouched(self, service, store, caplog):
        before = service.state.find_record(5)
        service.open_dropdown(5, FieldKind.PASS)
        store.fail_on.add("update")

        with caplog.at_level(logging.ERROR):
            assert not service.select(5, PassUpdate("Signature"))

        assert service.state.find_record(5) == before
        assert service.state.dropdown is None
        assert service.state.updating_id is None
        assert not any(c[0] == "list" for c in store.calls)
        assert messages(service) == [("error", "Failed to update pass")]
        assert "Error updating pass of record 5" in caplog.text

    def test_event_choice_for_general_pass(self, service, store):
        service.select(5, EventSlotUpdate(FieldKind.EVENT_2_DAY3, "Code Sprint"))

        assert ("update", 5, {"event_2_day3": "Code Sprint"}) in store.calls
        assert service.state.find_record(5).event_2_day3 == "Code Sprint"
        assert messages(service) == [("success", "Event updated successfully")]

    def test_event_choice_rejected_for_hackathon_pass(self, service, store):
        service.open_dropdown(7, FieldKind.PASS)

        with pytest.raises(SlotNotEditableError):
            service.select(7, EventSlotUpdate(FieldKind.EVENT_1_DAY3, "Hack Night"))

        assert service.state.dropdown is None
        assert store.calls == []

    def test_event_not_offered_for_pass_is_rejected(self, service, store):
        with pytest.raises(InvalidSelectionError):
            service.select(5, EventSlotUpdate(FieldKind.EVENT_1_DAY3, "Battle of Bands"))
        assert store.calls == []

    def test_record_must_be_on_loaded_page(self, service, store):
        with pytest.raises(RecordNotLoadedError):
            service.select(150, PaymentUpdate("Successful"))
        assert store.calls == []

    def test_overlapping_update_is_logged(self, service, store, caplog):
        service.state.updating_id = 7

        with caplog.at_level(logging.WARNING):
            service.select(5, ConcertUpdate())

        assert "while record 7 is still updating" in caplog.text
        assert service.state.updating_id is None
        assert service.state.notifications[0].level is NotificationLevel.SUCCESS
