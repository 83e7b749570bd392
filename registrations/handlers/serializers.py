"""Serializers for request bodies and the dashboard view model.

The view model is derived from ``ViewState`` only; nothing here talks to the
store.
"""

from rest_framework import serializers

from registrations.domain import FieldKind, Record, ViewState
from registrations.domain.filters import (
    available_events,
    filter_event_names,
    filter_records,
    slot_editable,
)
from registrations.domain.updates import CONCERT_OPTIONS, PASS_OPTIONS, PAYMENT_OPTIONS
from registrations.domain.value_objects import EVENT_SLOTS, PAYMENT_CANCELLED, PAYMENT_SUCCESSFUL, Day

FIXED_OPTIONS = {
    FieldKind.PAYMENT: PAYMENT_OPTIONS,
    FieldKind.PASS: PASS_OPTIONS,
    FieldKind.CONCERT: CONCERT_OPTIONS,
}


class SearchSerializer(serializers.Serializer):
    term = serializers.CharField(allow_blank=True, trim_whitespace=False)


class PageSerializer(serializers.Serializer):
    page = serializers.IntegerField()


class DropdownSerializer(serializers.Serializer):
    record_id = serializers.IntegerField()
    field = serializers.CharField()


class SelectSerializer(serializers.Serializer):
    field = serializers.CharField()
    value = serializers.CharField(allow_blank=True, required=False, default="")


def payment_tone(payment: str | None) -> str:
    if payment == PAYMENT_SUCCESSFUL:
        return "successful"
    if payment == PAYMENT_CANCELLED:
        return "cancelled"
    return "neutral"


class RecordRowSerializer(serializers.Serializer):
    """Serializer for one table row with its editable cells.

    Expects ``state`` in the serializer context.
    """

    id = serializers.IntegerField()
    name = serializers.CharField(allow_null=True)
    email = serializers.CharField()
    updating = serializers.SerializerMethodField()
    payment = serializers.SerializerMethodField()
    pass_type = serializers.SerializerMethodField()
    concert_payment = serializers.SerializerMethodField()
    day3_events = serializers.SerializerMethodField()
    day4_events = serializers.SerializerMethodField()

    @property
    def _state(self) -> ViewState:
        return self.context["state"]

    def _is_open(self, record: Record, field: FieldKind) -> bool:
        dropdown = self._state.dropdown
        return dropdown is not None and dropdown.record_id == record.id and dropdown.field is field

    def _fixed_cell(self, record: Record, field: FieldKind, value: str | None) -> dict:
        return {
            "field": field.value,
            "value": value,
            "open": self._is_open(record, field),
            "editable": True,
            "options": list(FIXED_OPTIONS[field]),
        }

    def _slot_cell(self, record: Record, slot: FieldKind) -> dict:
        is_open = self._is_open(record, slot)
        editable = slot_editable(record.pass_type)
        options = []
        if is_open and editable:
            offered = available_events(
                self._state.reference_events, record.pass_type, slot.day.value
            )
            options = filter_event_names(offered, self._state.event_search_term)
        return {
            "field": slot.value,
            "value": record.slot_value(slot),
            "open": is_open,
            "editable": editable,
            "options": options,
        }

    def get_updating(self, record: Record) -> bool:
        return self._state.updating_id == record.id

    def get_payment(self, record: Record) -> dict:
        cell = self._fixed_cell(record, FieldKind.PAYMENT, record.payment)
        cell["tone"] = payment_tone(record.payment)
        return cell

    def get_pass_type(self, record: Record) -> dict:
        return self._fixed_cell(record, FieldKind.PASS, record.pass_type)

    def get_concert_payment(self, record: Record) -> dict:
        return self._fixed_cell(record, FieldKind.CONCERT, record.concert_payment)

    def get_day3_events(self, record: Record) -> list[dict]:
        return [self._slot_cell(record, slot) for slot in EVENT_SLOTS if slot.day is Day.DAY3]

    def get_day4_events(self, record: Record) -> list[dict]:
        return [self._slot_cell(record, slot) for slot in EVENT_SLOTS if slot.day is Day.DAY4]


class DashboardSerializer(serializers.Serializer):
    """Serializer for the whole dashboard, built from a ``ViewState``.

    Expects the drained ``notifications`` in the serializer context.
    """

    summary = serializers.SerializerMethodField()
    page = serializers.IntegerField()
    total_pages = serializers.IntegerField()
    pages = serializers.SerializerMethodField()
    search_term = serializers.CharField()
    event_search_term = serializers.CharField()
    mode = serializers.SerializerMethodField()
    loading = serializers.BooleanField()
    updating_id = serializers.IntegerField(allow_null=True)
    dropdown = serializers.SerializerMethodField()
    records = serializers.SerializerMethodField()
    notifications = serializers.SerializerMethodField()

    def get_summary(self, state: ViewState) -> dict:
        summary = {
            "total_records": state.total,
            "total_events": len(state.reference_events),
        }
        if state.search_term:
            summary["filtered_records"] = len(filter_records(state.records, state.search_term))
        return summary

    def get_pages(self, state: ViewState) -> list[int]:
        return list(range(state.total_pages))

    def get_mode(self, state: ViewState) -> str:
        return state.mode.value

    def get_dropdown(self, state: ViewState) -> dict | None:
        if state.dropdown is None:
            return None
        return {"record_id": state.dropdown.record_id, "field": state.dropdown.field.value}

    def get_records(self, state: ViewState) -> list[dict]:
        rows = filter_records(state.records, state.search_term)
        return RecordRowSerializer(rows, many=True, context={"state": state}).data

    def get_notifications(self, state: ViewState) -> list[dict]:
        return [
            {"level": n.level.value, "message": n.message}
            for n in self.context.get("notifications", [])
        ]
