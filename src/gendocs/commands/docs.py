"""Commands: docs:create, docs:list, docs:rename, docs:remove."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gendocs.commands._base import GendocsCommand

if TYPE_CHECKING:
    from gendocs.commands._context import AppContext

_email_option = click.option("--email", default=None, help="Account email.")
_password_option = click.option(
    "--password", default=None, envvar="GENDOCS_PASSWORD", help="Account password."
)


def _credentials(app: AppContext, email: str | None, password: str | None) -> tuple[str, str]:
    email = email or app.prompt("Email", option="--email")
    password = password or app.prompt("Password", hide_input=True, option="--password")
    return email, password


@click.command(
    "docs:create",
    cls=GendocsCommand,
    examples="""\
  gendocs docs:create
  gendocs docs:create --name "My Project" --email me@example.com
  gendocs --json docs:create --name api-docs --email me@example.com""",
)
@click.option("--name", default=None, help="Document name.")
@_email_option
@_password_option
@click.pass_obj
def docs_create(
    app: AppContext, name: str | None, email: str | None, password: str | None
) -> None:
    """Create a new hosted document and print its token."""
    from gendocs.services.documents import DocumentService

    email, password = _credentials(app, email, password)
    name = name or app.prompt("Doc name", option="--name")
    app.emit(DocumentService(app.client).create(name, email, password))


@click.command(
    "docs:list",
    cls=GendocsCommand,
    examples="""\
  gendocs docs:list
  gendocs -q docs:list --email me@example.com""",
)
@_email_option
@_password_option
@click.pass_obj
def docs_list(app: AppContext, email: str | None, password: str | None) -> None:
    """List your documents with their tokens and subdomains."""
    from gendocs.services.documents import DocumentService

    email, password = _credentials(app, email, password)
    app.emit(DocumentService(app.client).list(email, password))


@click.command(
    "docs:rename",
    cls=GendocsCommand,
    examples="""\
  gendocs docs:rename
  gendocs docs:rename --name "New Name" --token abc123""",
)
@click.option("--name", default=None, help="New document name.")
@click.option("--token", default=None, help="Document token (default: from project files).")
@click.pass_obj
def docs_rename(app: AppContext, name: str | None, token: str | None) -> None:
    """Rename the current document (also updates gendocs.json)."""
    from gendocs.services.documents import DocumentService

    token = app.resolve_token(token)
    name = name or app.prompt("New doc name", option="--name")
    app.emit(
        DocumentService(app.client).rename(token, name, project_root=app.settings.project_root)
    )


@click.command(
    "docs:remove",
    cls=GendocsCommand,
    examples="""\
  gendocs docs:remove
  gendocs docs:remove --token abc123""",
)
@click.option("--token", default=None, help="Token of the document to remove.")
@click.pass_obj
def docs_remove(app: AppContext, token: str | None) -> None:
    """Remove a document permanently."""
    from gendocs.services.documents import DocumentService

    token = token or app.prompt("Token", option="--token")
    app.emit(DocumentService(app.client).remove(token))
