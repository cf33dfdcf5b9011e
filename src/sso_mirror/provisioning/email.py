"""Resolve a platform user's verified email from its primary linked identity."""

from __future__ import annotations

import logging

from sso_mirror.errors import IdentityLookupError
from sso_mirror.identity.base import IdentityLookup
from sso_mirror.models.identity import PlatformUser

logger = logging.getLogger(__name__)

EMAIL_ATTRIBUTE = "email"


async def resolve_email(lookup: IdentityLookup, user: PlatformUser) -> str:
    """Return the email recorded on the user's first linked identity.

    A missing ``email`` attribute is a normal state and yields ``""``. A failed
    lookup raises IdentityLookupError; later identities are never consulted.
    """
    if not user.identities:
        logger.warning("User %s has no linked identities", user.name)
        raise IdentityLookupError(None)

    identity_name = user.identities[0]
    try:
        identity = await lookup.fetch_identity_by_name(identity_name)
    except Exception as exc:
        logger.warning("Failed to fetch identity %s for user %s: %s", identity_name, user.name, exc)
        raise IdentityLookupError(identity_name, exc) from exc

    email = identity.extra.get(EMAIL_ATTRIBUTE, "")
    if not email:
        logger.debug("Identity %s carries no email for user %s", identity_name, user.name)
    return email
