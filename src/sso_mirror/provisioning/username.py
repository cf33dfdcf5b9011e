"""Generated account names valid under the SSO provider's username grammar.

Provider usernames may only contain lowercase ASCII letters, digits, and the
replacement character. Generated names carry a fixed prefix so they can be told
apart from names chosen by users.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from sso_mirror.models.identity import FederatedIdentity, MirroredAccountDraft

GENERATED_NAME_PREFIX = "generated-"
INVALID_CHARACTER_REPLACEMENT = "-"

_INVALID_RUN = re.compile(r"[^a-z0-9]+")


def sanitize_name(raw_name: str) -> str:
    """Lower-case ``raw_name`` and collapse each run of invalid characters.

    Replacement characters at either end are stripped, so the result never
    starts or ends with one.
    """
    sanitized = _INVALID_RUN.sub(INVALID_CHARACTER_REPLACEMENT, raw_name.lower())
    return sanitized.strip(INVALID_CHARACTER_REPLACEMENT)


def generate_account_name(
    raw_name: str, federated_identities: Sequence[FederatedIdentity] = ()
) -> str:
    """Derive a provider-valid account name from ``raw_name``.

    When the first federated identity has a user ID it is appended verbatim as
    ``-<user_id>``. Users without one whose names sanitize to the same value
    get the same account name.
    """
    parts = [sanitize_name(raw_name)]
    if federated_identities and federated_identities[0].user_id:
        parts.append(federated_identities[0].user_id)
    # an empty sanitized name must not leave a doubled separator after the prefix
    return GENERATED_NAME_PREFIX + INVALID_CHARACTER_REPLACEMENT.join(p for p in parts if p)


def generate_account_name_for(draft: MirroredAccountDraft) -> str:
    """Generate the account name for a draft from its user name and federated identities."""
    return generate_account_name(draft.user_name, draft.federated_identities)
