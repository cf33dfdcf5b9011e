"""Tests for mirrored-account export."""

import json
from pathlib import Path

import yaml

from sso_mirror.export.account import ExportFormat, export_account, render_account
from sso_mirror.models.identity import FederatedIdentity, MirroredAccountDraft


def _draft() -> MirroredAccountDraft:
    return MirroredAccountDraft(
        user_name="generated-tester",
        email="",
        required_actions={"UPDATE_PROFILE"},
        federated_identities=[FederatedIdentity(identity_provider="openshift-v4", user_id="uid-1")],
    )


def test_export_json(tmp_path: Path) -> None:
    output = tmp_path / "account.json"
    export_account(_draft(), output, ExportFormat.JSON)
    data = json.loads(output.read_text())
    assert data["username"] == "generated-tester"
    assert data["requiredActions"] == ["UPDATE_PROFILE"]
    assert data["federatedIdentities"][0]["userId"] == "uid-1"


def test_export_defaults_to_json(tmp_path: Path) -> None:
    output = tmp_path / "account.json"
    export_account(_draft(), output)
    assert json.loads(output.read_text())["username"] == "generated-tester"


def test_export_yaml(tmp_path: Path) -> None:
    output = tmp_path / "account.yaml"
    export_account(_draft(), output, ExportFormat.YAML)
    data = yaml.safe_load(output.read_text())
    assert data["username"] == "generated-tester"
    assert data["enabled"] is True
    assert data["requiredActions"] == ["UPDATE_PROFILE"]


def test_render_yaml_is_not_json() -> None:
    text = render_account(_draft(), ExportFormat.YAML)
    assert not text.lstrip().startswith("{")
    assert yaml.safe_load(text)["username"] == "generated-tester"
