"""In-memory identity lookup, for tests and for embedding callers that already hold records."""

from __future__ import annotations

from collections.abc import Iterable

from sso_mirror.errors import IdentityNotFoundError
from sso_mirror.identity.base import IdentityLookup
from sso_mirror.models.identity import IdentityRecord


class InMemoryIdentityLookup(IdentityLookup):
    def __init__(self, records: Iterable[IdentityRecord] = ()) -> None:
        self._records = {record.name: record for record in records}

    def add(self, record: IdentityRecord) -> None:
        self._records[record.name] = record

    async def fetch_identity_by_name(self, name: str) -> IdentityRecord:
        try:
            return self._records[name]
        except KeyError:
            raise IdentityNotFoundError(name) from None
