"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from gendocs.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from gendocs.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a (possibly styled) string."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: the most useful single value, or the status line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("token", "")) for item in items if isinstance(item, dict))
    for key in ("url", "full_subdomain", "token"):
        if result.data.get(key):
            return str(result.data[key])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="gd.ok"), Text(f"  {result.op}", style="gd.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="gd.key")
    style = {"token": "gd.token", "url": "gd.url", "name": "gd.name"}.get(key, "")
    console.print(k, Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="gd.error")
    op = Text(f"  {result.op}", style="gd.op")
    console.print(label, op, Text("—"), Text(msg))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Document renderers ────────────────────────────────────────────────


def _render_created(result: ServiceResult, console: Console) -> None:
    console.print("Document created successfully!", style="gd.ok")
    console.print(
        Text("Your token: "), Text(str(result.data.get("token", "")), style="gd.token"), sep=""
    )
    console.print()
    console.print('Use "gendocs init" in the directory where you\'d like your config file to live.')
    console.print('If you lose the token, try using "gendocs docs:list" to recover it.')


def _render_document_table(result: ServiceResult, console: Console) -> None:
    items = result.data.get("items", [])
    table = Table(title="Your documents", show_header=True, pad_edge=False, expand=False)
    table.add_column("Name", style="gd.name")
    table.add_column("Token", style="gd.token", no_wrap=True)
    table.add_column("Site", style="gd.url")
    for item in items:
        table.add_row(
            str(item.get("name", "")),
            str(item.get("token", "")),
            str(item.get("full_subdomain") or "-"),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} documents")


def _render_renamed(result: ServiceResult, console: Console) -> None:
    console.print("Doc has been updated.")
    _field(console, "name", result.data.get("name", ""))


def _render_removed(result: ServiceResult, console: Console) -> None:
    console.print(Text(f'Doc "{result.data.get("name", "")}" has been removed.'))


def _render_init(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key in ("name", "path"):
        if key in result.data:
            _field(console, key, result.data[key])
    console.print()
    console.print('Add your pages to the "pages" list in gendocs.json.')


# ── Domain renderers ──────────────────────────────────────────────────


def _render_subdomain(result: ServiceResult, console: Console) -> None:
    console.print(
        Text("Your site is now available at: "),
        Text(str(result.data.get("full_subdomain", "")), style="gd.url"),
        sep="",
    )


def _render_domain_ready(result: ServiceResult, console: Console) -> None:
    console.print("Your domain has been added!", style="gd.ok")
    console.print(
        Text("The site is now available at "),
        Text(str(result.data.get("url", "")), style="gd.url"),
        sep="",
    )


# ── Generic renderer ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    # Documents
    "create_document": _render_created,
    "list_documents": _render_document_table,
    "rename_document": _render_renamed,
    "remove_document": _render_removed,
    "init_project": _render_init,
    # Domains
    "set_subdomain": _render_subdomain,
    "watch_domain": _render_domain_ready,
}
