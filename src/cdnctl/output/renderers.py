"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console opened by
:func:`~cdnctl.output.console.capture`.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from cdnctl.output.console import capture

if TYPE_CHECKING:
    from rich.console import Console

    from cdnctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    with capture() as (console, out):
        if result.ok:
            renderer = _OP_RENDERERS.get(result.op, _render_generic)
            renderer(result, console, verbose=verbose)
        else:
            _render_error(result, console, verbose=verbose)
    return out.text.rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Lists print one identifier per line; uploads print just the URL so
    the output can be piped.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(_extract_id(item) for item in items if _extract_id(item))
    if "url" in result.data:
        return str(result.data["url"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_id(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("url", "folder_id", "name"):
            val = item.get(key)
            if val:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="cdn.ok")
    op = Text(f"  {result.op}", style="cdn.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="cdn.key")
    if key == "url":
        v = Text(str(value), style="cdn.url")
    elif key in ("folder_id", "filename", "name"):
        v = Text(str(value), style="cdn.id")
    elif key == "public_host":
        v = Text(str(value), style="cdn.host")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _table(columns: list[tuple[str, str]], items: list[dict[str, Any]]) -> Table:
    """Build a table with ``(key, header)`` columns from dict items."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for key, header in columns:
        style = "cdn.id" if key in ("folder_id", "name", "filename") else None
        table.add_column(header, style=style, no_wrap=key != "url")
    for item in items:
        table.add_row(*(str(item.get(key, "")) for key, _ in columns))
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="cdn.error")
    op = Text(f"  {result.op}", style="cdn.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── List renderers ────────────────────────────────────────────────────


def _render_domains(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No domains configured.")
        return
    columns = [("folder_id", "Folder"), ("display_name", "Name"), ("public_host", "Host")]
    console.print(_table(columns, items))
    console.print(f"\n{result.data.get('count', len(items))} domains")


def _render_categories(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No categories configured.")
        return
    console.print(_table([("folder_id", "Folder"), ("display_name", "Name")], items))
    console.print(f"\n{result.data.get('count', len(items))} categories")


def _render_files(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    items = d.get("items", [])
    where = f"{d.get('domain', '?')}/{d.get('category', '?')}"
    if not items:
        console.print(f"No files found in {where}")
        return
    columns = [("filename", "File"), ("url", "URL")] if verbose else [("url", "URL")]
    console.print(_table(columns, items))
    console.print(
        f"\nFiles in {where}: {d.get('total', len(items))} total"
        f" — page {d.get('page', 1)}/{d.get('pages', 1)}"
    )


def _render_bindings(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No bindings configured.")
        return
    columns = [("name", "Binding"), ("domain", "Domain"), ("category", "Category")]
    console.print(_table(columns, items))


# ── Generic renderer ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Status line plus every data field."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "list_domains": _render_domains,
    "list_categories": _render_categories,
    "list_files": _render_files,
    "list_bindings": _render_bindings,
}
