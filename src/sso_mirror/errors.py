"""Exceptions raised by the provisioning helpers and identity lookups."""

from __future__ import annotations


class SSOMirrorError(Exception):
    """Base class for all sso-mirror errors."""


class IdentityNotFoundError(SSOMirrorError, LookupError):
    """Raised by an identity lookup when no record has the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"identity {name!r} not found")
        self.name = name


class IdentityLookupError(SSOMirrorError, LookupError):
    """The email of a user cannot be determined because its identity lookup failed.

    Callers should treat this as fatal for the current pass over the user,
    never as "no email". The underlying failure is available as ``cause``.
    """

    def __init__(self, identity_name: str | None, cause: BaseException | None = None) -> None:
        if identity_name is None:
            message = "user has no linked identities"
        else:
            message = f"failed to look up identity {identity_name!r}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.identity_name = identity_name
        self.cause = cause
