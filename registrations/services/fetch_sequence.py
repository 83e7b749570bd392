"""Tickets ordering record fetches.

A fetch result is applied only while its ticket is still the latest one
issued. Requests of one session share their tickets through the cache, so a
slow request cannot overwrite the records of a newer one.
"""

from django.core.cache import cache


class FetchSequence:
    """Ticket counter local to one service instance."""

    def __init__(self) -> None:
        self._latest = 0

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def latest(self) -> int:
        return self._latest


class CacheFetchSequence(FetchSequence):
    """Ticket counter shared by every request of one session."""

    def __init__(self, session_key: str) -> None:
        self._key = f"registrations:fetch-seq:{session_key}"

    def issue(self) -> int:
        cache.add(self._key, 0, timeout=None)
        return cache.incr(self._key)

    def latest(self) -> int:
        return cache.get(self._key, 0)
