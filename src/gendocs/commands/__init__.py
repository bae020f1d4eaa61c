"""Subcommand modules for gendocs.

Provides register_commands() which uses deferred imports to keep
``gendocs --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every command on the root CLI group."""
    # --- Documents ---
    from gendocs.commands.docs import docs_create, docs_list, docs_remove, docs_rename
    from gendocs.commands.init_cmd import init_cmd

    cli.add_command(docs_create)
    cli.add_command(docs_list)
    cli.add_command(docs_rename)
    cli.add_command(docs_remove)
    cli.add_command(init_cmd)

    # --- Domains ---
    from gendocs.commands.domains import domains_add, subdomain_set

    cli.add_command(subdomain_set)
    cli.add_command(domains_add)
