"""Export of mirrored-account drafts in the provider's wire form."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

import yaml

from sso_mirror.models.identity import MirroredAccountDraft


class ExportFormat(StrEnum):
    JSON = "json"
    YAML = "yaml"


def render_account(draft: MirroredAccountDraft, fmt: ExportFormat = ExportFormat.JSON) -> str:
    """Render a draft as provider-shaped JSON or YAML text."""
    if fmt is ExportFormat.YAML:
        data = draft.model_dump(mode="json", by_alias=True)
        return yaml.dump(data, default_flow_style=False, sort_keys=False)
    return draft.model_dump_json(by_alias=True, indent=2)


def export_account(
    draft: MirroredAccountDraft, output_path: Path, fmt: ExportFormat = ExportFormat.JSON
) -> None:
    output_path.write_text(render_account(draft, fmt))
