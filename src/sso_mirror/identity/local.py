"""Local identity lookup backed by SQLite storage.

Resolves identity records imported with ``sso-mirror add-identity``, so
provisioning can be run offline against a snapshot of cluster identities.
"""

from __future__ import annotations

from sso_mirror.errors import IdentityNotFoundError
from sso_mirror.identity.base import IdentityLookup
from sso_mirror.models.identity import IdentityRecord
from sso_mirror.storage.sqlite import StorageEngine


class LocalIdentityLookup(IdentityLookup):
    """Fetches identity records from the local SQLite database."""

    def __init__(self, storage: StorageEngine) -> None:
        self._storage = storage

    async def fetch_identity_by_name(self, name: str) -> IdentityRecord:
        row = await self._storage.get_identity(name)
        if row is None:
            raise IdentityNotFoundError(name)
        return IdentityRecord(
            name=row["name"],
            provider_name=row["provider_name"],
            provider_user_name=row["provider_user_name"],
            extra=row["extra"],
        )
