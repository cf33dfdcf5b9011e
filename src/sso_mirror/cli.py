"""CLI entry point for sso-mirror."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from sso_mirror.config import LogLevel, get_settings
from sso_mirror.errors import SSOMirrorError
from sso_mirror.export.account import ExportFormat

app = typer.Typer(
    name="sso-mirror",
    help="Mirror platform users into a single-sign-on provider.",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    log_level: LogLevel | None = typer.Option(
        None, case_sensitive=False, help="Log level (default from SSO_MIRROR_LOG_LEVEL)"
    ),
) -> None:
    if log_level is None:
        try:
            log_level = get_settings().log_level
        except ValidationError as e:
            raise typer.BadParameter(str(e), param_hint="SSO_MIRROR_LOG_LEVEL") from e
    # force: each in-process invocation replaces the previous handler
    logging.basicConfig(
        level=log_level.value,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve_db(db: Path | None) -> Path:
    db_path = db or get_settings().db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


def _parse_extra(pairs: list[str]) -> dict[str, str]:
    extra: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {pair!r}", param_hint="--extra")
        extra[key] = value
    return extra


@app.command()
def init(
    db: Path | None = typer.Option(None, help="Path to SQLite database"),
) -> None:
    """Initialize a new sso-mirror database."""
    from sso_mirror.storage.sqlite import StorageEngine

    db_path = _resolve_db(db)

    async def _init() -> None:
        engine = StorageEngine(db_path)
        await engine.initialize()
        await engine.close()

    asyncio.run(_init())
    console.print(f"[green]Initialized sso-mirror at {db_path}[/green]")


@app.command(name="add-identity")
def add_identity(
    name: str = typer.Argument(help="Identity name, e.g. 'testing-idp:test-user-1'"),
    email: str | None = typer.Option(None, help="Verified email recorded on the identity"),
    extra: list[str] = typer.Option([], help="Additional key=value attribute (repeatable)"),
    provider: str | None = typer.Option(None, help="Name of the identity provider"),
    provider_user_name: str | None = typer.Option(None, help="User name at the identity provider"),
    db: Path | None = typer.Option(None, help="Path to SQLite database"),
) -> None:
    """Store a linked identity record."""
    from sso_mirror.storage.sqlite import StorageEngine

    attributes = _parse_extra(extra)
    if email:
        attributes["email"] = email
    db_path = _resolve_db(db)

    async def _add() -> None:
        storage = StorageEngine(db_path)
        await storage.initialize()
        try:
            await storage.upsert_identity(
                name=name,
                extra=attributes,
                provider_name=provider,
                provider_user_name=provider_user_name,
            )
        finally:
            await storage.close()

    asyncio.run(_add())
    console.print(f"[green]Stored identity {name}[/green]")


@app.command(name="add-user")
def add_user(
    name: str = typer.Argument(help="Platform user name"),
    identity: list[str] = typer.Option([], help="Linked identity name (repeatable, first is primary)"),
    full_name: str | None = typer.Option(None, help="Full name of the user"),
    db: Path | None = typer.Option(None, help="Path to SQLite database"),
) -> None:
    """Store a platform user record."""
    from sso_mirror.storage.sqlite import StorageEngine

    db_path = _resolve_db(db)

    async def _add() -> None:
        storage = StorageEngine(db_path)
        await storage.initialize()
        try:
            await storage.upsert_user(name=name, identities=identity, full_name=full_name)
        finally:
            await storage.close()

    asyncio.run(_add())
    console.print(f"[green]Stored user {name}[/green]")


@app.command()
def status(
    db: Path | None = typer.Option(None, help="Path to SQLite database"),
) -> None:
    """Show stored users and identities."""
    from sso_mirror.storage.sqlite import StorageEngine

    db_path = _resolve_db(db)

    async def _status() -> None:
        storage = StorageEngine(db_path)
        await storage.initialize()
        try:
            users = await storage.list_users()
            identities = await storage.list_identities()

            if not users and not identities:
                console.print("[dim]No users or identities found.[/dim]")
                return

            console.print(f"\n[bold]Users:[/bold] {len(users)}")
            for user in users:
                linked = ", ".join(user["identities"]) or "[dim]none[/dim]"
                console.print(f"  {user['name']}: {linked}")

            with_email = sum(1 for i in identities if i["extra"].get("email"))
            console.print(f"\n[bold]Identities:[/bold] {len(identities)} ({with_email} with email)")
        finally:
            await storage.close()

    asyncio.run(_status())


@app.command(name="generate-name")
def generate_name(
    raw_name: str = typer.Argument(help="Display name to derive an account name from"),
    federated_id: str | None = typer.Option(None, help="Federated identity user ID"),
) -> None:
    """Print the generated account name for a display name."""
    from sso_mirror.models.identity import FederatedIdentity
    from sso_mirror.provisioning.username import generate_account_name

    federated = [FederatedIdentity(user_id=federated_id)] if federated_id else []
    console.print(generate_account_name(raw_name, federated), markup=False, highlight=False)


@app.command()
def provision(
    user: str = typer.Argument(help="Platform user name to provision"),
    federated_id: str | None = typer.Option(None, help="Federated identity user ID"),
    provider: str = typer.Option("", help="Federated identity provider alias"),
    fmt: ExportFormat = typer.Option(
        ExportFormat.JSON, "--format", case_sensitive=False, help="Output format"
    ),
    output: Path | None = typer.Option(None, help="Output file path"),
    db: Path | None = typer.Option(None, help="Path to SQLite database"),
) -> None:
    """Build the mirrored-account draft for a stored platform user."""
    from sso_mirror.export.account import export_account, render_account
    from sso_mirror.identity.local import LocalIdentityLookup
    from sso_mirror.models.identity import FederatedIdentity, PlatformUser
    from sso_mirror.pipeline import build_mirrored_account
    from sso_mirror.storage.sqlite import StorageEngine

    db_path = _resolve_db(db)
    federated = (
        [FederatedIdentity(identity_provider=provider, user_id=federated_id, user_name=user)]
        if federated_id
        else []
    )

    async def _provision() -> None:
        storage = StorageEngine(db_path)
        await storage.initialize()
        try:
            row = await storage.get_user(user)
            if not row:
                console.print(f"[red]No user named {user}. Run add-user first.[/red]")
                raise typer.Exit(1)

            platform_user = PlatformUser(
                name=row["name"], full_name=row["full_name"], identities=row["identities"]
            )
            try:
                draft = await build_mirrored_account(
                    platform_user, LocalIdentityLookup(storage), federated
                )
            except SSOMirrorError as e:
                console.print(f"[red]Error: {e}[/red]")
                raise typer.Exit(1) from e

            if output:
                export_account(draft, output, fmt)
                console.print(f"[green]Exported account {draft.user_name} to {output}[/green]")
            else:
                console.print(
                    render_account(draft, fmt),
                    markup=False,
                    highlight=False,
                    emoji=False,
                    soft_wrap=True,
                )
        finally:
            await storage.close()

    asyncio.run(_provision())
