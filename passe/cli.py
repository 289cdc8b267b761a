"""
Command-line interface for passe.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

import click
from pydantic import ValidationError as ModelValidationError

from passe.client.config_store import ConfigStore
from passe.client.domain.entities import Default
from passe.client.infrastructure.terminal import (
    ClipboardSink,
    TerminalPrompt,
    edit_setting,
)
from passe.client.sync import SyncClient
from passe.common.config import Config
from passe.common.exceptions import PasseError
from passe.common.interfaces import IClipboard
from passe.common.logging_utils import setup_logger
from passe.common.models import MAX_LENGTH, DomainConfig, LoginRequest
from passe.common.password import generate as generate_password
from passe.server import start_server


@dataclass
class CliContext:
    config: Config
    config_path: Path
    server_url: str
    clipboard: IClipboard = field(default_factory=ClipboardSink)

    def load_store(self) -> ConfigStore:
        return ConfigStore.load(self.config_path)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn expected failures into a one-line message and exit code 1."""
    try:
        yield
    except PasseError as e:
        raise click.ClickException(str(e)) from e
    except ModelValidationError as e:
        msg = f"Invalid input: {e.errors()[0]['msg']}"
        raise click.ClickException(msg) from e


pass_context = click.make_pass_decorator(CliContext)


@click.group()
@click.option(
    "--config-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Client config file (default: from PASSE_CONFIG env or ~/.config/passe/user.json)",
)
@click.option(
    "--server",
    default=None,
    help="Sync server URL (default: from PASSE_SERVER env or http://localhost:8000)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: Path | None,
    server: str | None,
    verbose: bool,  # noqa: FBT001
) -> None:
    """Deterministic per-domain passwords"""
    config = Config()
    setup_logger(
        logging.getLogger("passe"), logging.DEBUG if verbose else config.LOG_LEVEL
    )
    ctx.obj = CliContext(
        config=config,
        config_path=config_file or config.CONFIG_PATH,
        server_url=server or config.SERVER_URL,
    )


@cli.command()
@click.argument("domain")
@pass_context
def generate(obj: CliContext, domain: str) -> None:
    """Generate the password for DOMAIN"""
    with reported_errors():
        store = obj.load_store()
        click.echo(f"Domain: {domain}")
        resolved = store.for_domain(domain)
        domain_config = resolved.value
        if domain_config.suffix:
            click.echo(f"Suffix: {domain_config.suffix}")
        if domain_config.note:
            click.echo(f"Note: {domain_config.note}")
        if isinstance(resolved, Default):
            click.echo("** This is a new domain **", err=True)

        master = click.prompt("Master password", hide_input=True, err=True)
        password = generate_password(
            domain,
            master,
            domain_config,
            min_rounds=obj.config.MIN_ROUNDS,
            max_rounds=obj.config.MAX_ROUNDS,
        )
        obj.clipboard.deliver(password)
        store.save()


@cli.command()
@click.argument("domain")
@pass_context
def edit(obj: CliContext, domain: str) -> None:
    """Edit the settings for DOMAIN"""
    with reported_errors():
        store = obj.load_store()
        current = store.for_domain(domain).value
        note = edit_setting("Note", current.note)
        suffix = edit_setting("Suffix", current.suffix)
        length = click.prompt(
            "Length",
            default=current.length,
            type=click.IntRange(1, MAX_LENGTH),
            err=True,
        )
        store.stage(domain, DomainConfig(length=length, suffix=suffix, note=note))
        store.save()


@cli.command()
@click.argument("domain")
@pass_context
def delete(obj: CliContext, domain: str) -> None:
    """Forget the settings for DOMAIN on the next sync"""
    with reported_errors():
        store = obj.load_store()
        store.stage_delete(domain)
        store.save()


@cli.command(name="list")
@pass_context
def list_domains(obj: CliContext) -> None:
    """List known domains"""
    with reported_errors():
        for domain in obj.load_store().domain_list():
            click.echo(domain)


@cli.command()
@click.option("--full", is_flag=True, help="Do a full (initial) sync")
@pass_context
def sync(obj: CliContext, full: bool) -> None:  # noqa: FBT001
    """Sync domain settings with the server"""
    with reported_errors():
        store = obj.load_store()
        client = SyncClient(store, TerminalPrompt(), server_url=obj.server_url)
        try:
            merged = client.sync(full=full)
        finally:
            # Keep a freshly obtained credential even if the sync failed
            store.save()
        click.echo(f"Synced {len(merged)} domains")


@cli.command()
@pass_context
def register(obj: CliContext) -> None:
    """Create an account on the sync server"""
    with reported_errors():
        store = obj.load_store()
        user = click.prompt("User", err=True)
        password = click.prompt(
            "Sync password", hide_input=True, confirmation_prompt=True, err=True
        )
        client = SyncClient(store, TerminalPrompt(), server_url=obj.server_url)
        auth = client.register(LoginRequest(user=user, password=password))
        store.save()
        click.echo(f"Registered {auth.user}")


@cli.command()
@click.option(
    "--host",
    default=None,
    help="Host to bind server to (default: from PASSE_SERVER_HOST env or 127.0.0.1)",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to bind server to (default: from PASSE_SERVER_PORT env or 8000)",
)
@click.option(
    "--data-dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for user data (default: from PASSE_DATA_DIR env or ~/.config/passe-server)",
)
@pass_context
def serve(
    obj: CliContext, host: str | None, port: int | None, data_dir: Path | None
) -> None:
    """Start the sync server"""
    config = obj.config
    if host:
        config.SERVER_HOST = host
    if port:
        config.SERVER_PORT = port
    if data_dir:
        config.DATA_DIR = data_dir
    with reported_errors():
        start_server(config)


if __name__ == "__main__":
    cli()
