"""Command: bind the current directory to a document (named init_cmd to avoid shadowing)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gendocs.commands._base import GendocsCommand

if TYPE_CHECKING:
    from gendocs.commands._context import AppContext

_INIT_EXAMPLES = """\
  gendocs init
  gendocs init --token abc123
  gendocs init --token abc123 --force"""


@click.command("init", cls=GendocsCommand, examples=_INIT_EXAMPLES)
@click.option("--token", default=None, help="Document token.")
@click.option("--force", is_flag=True, help="Overwrite an existing gendocs.json.")
@click.pass_obj
def init_cmd(app: AppContext, token: str | None, force: bool) -> None:
    """Write gendocs.json for an existing document."""
    from gendocs.services.documents import DocumentService

    token = token or app.prompt("Token", option="--token")
    app.emit(
        DocumentService(app.client).init_project(app.settings.project_root, token, force=force)
    )
