"""Data models for platform users, linked identities, and mirrored accounts."""

from sso_mirror.models.identity import (
    FederatedIdentity,
    IdentityRecord,
    MirroredAccountDraft,
    PlatformUser,
)

__all__ = [
    "FederatedIdentity",
    "IdentityRecord",
    "MirroredAccountDraft",
    "PlatformUser",
]
