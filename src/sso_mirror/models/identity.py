"""Foundation types: platform users, linked identities, and mirrored accounts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class PlatformUser(BaseModel):
    """A cluster-native user account. Read-only input to a provisioning pass."""

    name: str
    full_name: str | None = None
    identities: list[str] = Field(default_factory=list)  # first entry is the primary identity


class IdentityRecord(BaseModel):
    """An external-auth identity linked to a PlatformUser by name."""

    name: str
    provider_name: str | None = None
    provider_user_name: str | None = None
    extra: dict[str, str] = Field(default_factory=dict)  # usually carries "email"


class FederatedIdentity(BaseModel):
    """The same human as known to a third-party identity broker."""

    model_config = ConfigDict(populate_by_name=True)

    identity_provider: str = Field(default="", alias="identityProvider")
    user_id: str = Field(default="", alias="userId")
    user_name: str = Field(default="", alias="userName")


class MirroredAccountDraft(BaseModel):
    """The account submitted to the downstream SSO provider.

    Built fresh for each pass and mutated in place by the provisioning helpers.
    Dumping with ``by_alias=True`` gives the provider's wire representation.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    user_name: str = Field(default="", alias="username")
    email: str = ""
    enabled: bool = True
    required_actions: set[str] = Field(default_factory=set, alias="requiredActions")
    federated_identities: list[FederatedIdentity] = Field(
        default_factory=list, alias="federatedIdentities"
    )

    @field_serializer("required_actions")
    def serialize_required_actions(self, actions: set[str]) -> list[str]:
        return sorted(actions)
