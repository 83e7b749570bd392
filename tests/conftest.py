"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from registrations.domain import Record
from tests.fakes import REFERENCE_EVENTS, FakeRecordStore, make_records


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def store() -> FakeRecordStore:
    records = make_records(250)
    records[4] = Record(
        id=5,
        email="ada@example.com",
        name="Ada Lovelace",
        payment="pending",
        pass_type="General",
    )
    records[6] = Record(id=7, email="grace@example.com", name="Grace Hopper", pass_type="Hackathon")
    return FakeRecordStore(records=records, events=REFERENCE_EVENTS)


@pytest.fixture
def use_store(monkeypatch, store: FakeRecordStore) -> FakeRecordStore:
    """Route the HTTP handlers to the in-memory store."""
    monkeypatch.setattr("registrations.handlers.views.get_record_store", lambda: store)
    return store
