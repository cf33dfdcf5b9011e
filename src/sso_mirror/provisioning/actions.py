"""Required-action handling for mirrored accounts."""

from __future__ import annotations

import logging

from sso_mirror.models.identity import MirroredAccountDraft

logger = logging.getLogger(__name__)

UPDATE_PROFILE_ACTION = "UPDATE_PROFILE"


def enforce_profile_action(draft: MirroredAccountDraft) -> MirroredAccountDraft:
    """Force users without an email through profile completion on next login.

    Adds UPDATE_PROFILE when ``draft.email`` is empty and leaves the actions
    alone otherwise. Mutates and returns the same draft.
    """
    if not draft.email and UPDATE_PROFILE_ACTION not in draft.required_actions:
        logger.debug("Adding %s to account %s", UPDATE_PROFILE_ACTION, draft.user_name)
        draft.required_actions.add(UPDATE_PROFILE_ACTION)
    return draft
