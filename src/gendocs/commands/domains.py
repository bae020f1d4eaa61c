"""Commands: subdomain:set and domains:add."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gendocs.commands._base import GendocsCommand

if TYPE_CHECKING:
    from gendocs.commands._context import AppContext
    from gendocs.services.domains import DomainService


def _domain_service(app: AppContext) -> DomainService:
    from gendocs.services.domains import DomainService

    return DomainService(
        app.client,
        poll_interval=app.settings.domains.poll_interval,
        timeout=app.settings.domains.provision_timeout,
    )


@click.command(
    "subdomain:set",
    cls=GendocsCommand,
    examples="""\
  gendocs subdomain:set
  gendocs subdomain:set --subdomain my-project
  gendocs --json subdomain:set --subdomain my-project --token abc123""",
)
@click.option("--subdomain", default=None, help="Subdomain to claim.")
@click.option("--token", default=None, help="Document token (default: from project files).")
@click.pass_obj
def subdomain_set(app: AppContext, subdomain: str | None, token: str | None) -> None:
    """Pick the gendocs subdomain your site is served on.

    In interactive mode a taken subdomain asks for another one.
    """
    token = app.resolve_token(token)
    service = _domain_service(app)
    while True:
        subdomain = subdomain or app.prompt("Subdomain", option="--subdomain")
        result = service.set_subdomain(token, subdomain)
        if result.ok or not app.interactive or result.error is None:
            break
        if result.error.code != "SUBDOMAIN_TAKEN":
            break
        click.echo(result.error.message, err=True)
        subdomain = None
    app.emit(result)


@click.command(
    "domains:add",
    cls=GendocsCommand,
    examples="""\
  gendocs domains:add
  gendocs domains:add --domain docs.example.com
  gendocs --json domains:add --domain docs.example.com --token abc123""",
)
@click.option("--domain", "domain_name", default=None, help="Custom domain, e.g. docs.example.com.")
@click.option("--token", default=None, help="Document token (default: from project files).")
@click.pass_obj
def domains_add(app: AppContext, domain_name: str | None, token: str | None) -> None:
    """Attach a custom domain and wait for its SSL certificate."""
    token = app.resolve_token(token)
    domain_name = domain_name or app.prompt("Domain", option="--domain")

    service = _domain_service(app)
    added = service.add_domain(token, domain_name)
    if not added.ok:
        app.emit(added)
        return

    app.progress("Generating SSL Certificate...")
    app.emit(service.watch(added.data["domain"]))
