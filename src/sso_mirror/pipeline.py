"""Provisioning pipeline: platform user in, mirrored-account draft out.

Runs the three provisioning steps in the order the SSO provider expects:
account name, then email, then required actions.
"""

from __future__ import annotations

from collections.abc import Sequence

from sso_mirror.identity.base import IdentityLookup
from sso_mirror.models.identity import FederatedIdentity, MirroredAccountDraft, PlatformUser
from sso_mirror.provisioning.actions import enforce_profile_action
from sso_mirror.provisioning.email import resolve_email
from sso_mirror.provisioning.username import generate_account_name_for


async def build_mirrored_account(
    user: PlatformUser,
    lookup: IdentityLookup,
    federated_identities: Sequence[FederatedIdentity] = (),
) -> MirroredAccountDraft:
    """Build the draft account for ``user``.

    IdentityLookupError from the email lookup propagates; no partial draft is
    returned in that case.
    """
    draft = MirroredAccountDraft(
        user_name=user.name,
        federated_identities=list(federated_identities),
    )
    draft.user_name = generate_account_name_for(draft)
    draft.email = await resolve_email(lookup, user)
    return enforce_profile_action(draft)
