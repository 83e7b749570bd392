from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from registrations.stores.interfaces import RecordStore
from registrations.stores.postgrest_store import PostgrestRecordStore


def get_record_store() -> RecordStore:
    """Build the configured record store."""
    conf = settings.RECORD_STORE
    if not conf.get("URL"):
        raise ImproperlyConfigured("RECORD_STORE['URL'] is not set")
    return PostgrestRecordStore(
        base_url=conf["URL"],
        api_key=conf.get("API_KEY", ""),
        records_table=conf.get("RECORDS_TABLE", "Participants"),
        events_table=conf.get("EVENTS_TABLE", "Events"),
        timeout=conf.get("TIMEOUT", 20),
    )


__all__ = ["RecordStore", "PostgrestRecordStore", "get_record_store"]
