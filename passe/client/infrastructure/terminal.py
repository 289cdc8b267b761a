"""Infrastructure layer: terminal prompts and clipboard delivery.
"""

from __future__ import annotations

import logging

import click
import pyperclip

from passe.common.models import LoginRequest

logger = logging.getLogger(__name__)


class TerminalPrompt:
    """Asks for sync credentials on the terminal."""

    def ask_credentials(self, existing_user: str | None) -> LoginRequest:
        user = click.prompt(
            "User",
            default=existing_user,
            err=True,
            show_default=existing_user is not None,
        )
        password = click.prompt("Sync password", hide_input=True, err=True)
        return LoginRequest(user=user, password=password)


def edit_setting(desc: str, current: str | None) -> str | None:
    """Prompt for an optional setting; an empty reply keeps the current value."""
    reply = click.prompt(
        desc,
        default=current or "",
        show_default=current is not None,
        err=True,
    )
    return reply or current


class ClipboardSink:
    """Copies a password to the clipboard, printing it if that fails."""

    def deliver(self, password: str) -> None:
        try:
            pyperclip.copy(password)
        except pyperclip.PyperclipException as e:
            logger.error("Clipboard failed: %s", e)
            click.prompt(
                "Press return to print password ...",
                default="",
                show_default=False,
                hide_input=True,
                err=True,
            )
            click.echo(password)
            return
        click.echo("(copied to your clipboard)")
