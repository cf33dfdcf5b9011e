"""Pluggable identity lookup interface.

A lookup fetches linked identity records by name. The cluster API client,
the local SQLite store, and in-memory fakes each implement this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sso_mirror.models.identity import IdentityRecord


class IdentityLookup(ABC):
    """Read-only capability for fetching IdentityRecords by name."""

    @abstractmethod
    async def fetch_identity_by_name(self, name: str) -> IdentityRecord:
        """Fetch the identity record called ``name``.

        Must raise IdentityNotFoundError when no such record exists. Any other
        failure (transport, client errors) may propagate as-is.
        """
