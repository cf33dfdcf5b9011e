"""Tests for email resolution from linked identities."""

import pytest

from sso_mirror.errors import IdentityLookupError, IdentityNotFoundError
from sso_mirror.identity.base import IdentityLookup
from sso_mirror.identity.memory import InMemoryIdentityLookup
from sso_mirror.models.identity import IdentityRecord, PlatformUser
from sso_mirror.provisioning.email import resolve_email

TEST_IDENTITY = "test-identity"
TEST_EMAIL = "test@email.com"


class FailingLookup(IdentityLookup):
    """Lookup whose backing client is unavailable."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def fetch_identity_by_name(self, name: str) -> IdentityRecord:
        self.calls.append(name)
        raise ConnectionError("api server unavailable")


@pytest.mark.asyncio
async def test_email_from_identity() -> None:
    lookup = InMemoryIdentityLookup(
        [IdentityRecord(name=TEST_IDENTITY, extra={"email": TEST_EMAIL})]
    )
    user = PlatformUser(name="test-user", identities=[TEST_IDENTITY])
    assert await resolve_email(lookup, user) == TEST_EMAIL


@pytest.mark.asyncio
async def test_missing_email_attribute_is_empty() -> None:
    lookup = InMemoryIdentityLookup([IdentityRecord(name=TEST_IDENTITY, extra={"name": "Test"})])
    user = PlatformUser(name="test-user", identities=[TEST_IDENTITY])
    assert await resolve_email(lookup, user) == ""


@pytest.mark.asyncio
async def test_identity_not_found() -> None:
    user = PlatformUser(name="test-user", identities=[TEST_IDENTITY])
    with pytest.raises(IdentityLookupError) as exc_info:
        await resolve_email(InMemoryIdentityLookup(), user)
    assert exc_info.value.identity_name == TEST_IDENTITY
    assert isinstance(exc_info.value.cause, IdentityNotFoundError)
    assert exc_info.value.__cause__ is exc_info.value.cause


@pytest.mark.asyncio
async def test_is_builtin_lookup_error() -> None:
    user = PlatformUser(name="test-user", identities=[TEST_IDENTITY])
    with pytest.raises(LookupError):
        await resolve_email(InMemoryIdentityLookup(), user)


@pytest.mark.asyncio
async def test_transport_failure_wrapped() -> None:
    lookup = FailingLookup()
    user = PlatformUser(name="test-user", identities=[TEST_IDENTITY])
    with pytest.raises(IdentityLookupError) as exc_info:
        await resolve_email(lookup, user)
    assert isinstance(exc_info.value.cause, ConnectionError)
    assert lookup.calls == [TEST_IDENTITY]


@pytest.mark.asyncio
async def test_no_fallback_to_later_identities() -> None:
    lookup = InMemoryIdentityLookup([IdentityRecord(name="second", extra={"email": TEST_EMAIL})])
    user = PlatformUser(name="test-user", identities=["first", "second"])
    with pytest.raises(IdentityLookupError):
        await resolve_email(lookup, user)


@pytest.mark.asyncio
async def test_only_primary_identity_consulted() -> None:
    lookup = InMemoryIdentityLookup(
        [
            IdentityRecord(name="first", extra={"email": "first@example.com"}),
            IdentityRecord(name="second", extra={"email": "second@example.com"}),
        ]
    )
    user = PlatformUser(name="test-user", identities=["first", "second"])
    assert await resolve_email(lookup, user) == "first@example.com"


@pytest.mark.asyncio
async def test_no_identities() -> None:
    lookup = FailingLookup()
    with pytest.raises(IdentityLookupError) as exc_info:
        await resolve_email(lookup, PlatformUser(name="test-user"))
    assert exc_info.value.identity_name is None
    assert lookup.calls == []
