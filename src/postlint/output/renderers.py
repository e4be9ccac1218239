"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from postlint.output.console import create_console, get_output, style_for_severity

if TYPE_CHECKING:
    from rich.console import Console

    from postlint.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal, which is
    the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: one line per issue or per item."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "check":
        return "\n".join(_issue_location(i) for i in result.data.get("issues", []))

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(_extract_key(item) for item in items if _extract_key(item))

    if "path" in result.data:
        return str(result.data["path"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_key(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("path", "code", "category"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _issue_location(issue: dict[str, Any]) -> str:
    line = issue.get("line")
    where = f"{issue.get('path')}:{line}" if line else str(issue.get("path"))
    return f"{where}: {issue.get('code')} {issue.get('message')}"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="pl.ok"), Text(f"  {result.op}", style="pl.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="pl.key")
    if key == "path":
        v = Text(str(value), style="pl.path")
    elif key == "title":
        v = Text(str(value), style="pl.title")
    elif key == "date":
        v = Text(str(value), style="pl.date")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {escape(str(span.get('name', '?')))}"
    if span.get("annotations"):
        extras = ", ".join(f"{k}={v}" for k, v in span["annotations"].items())
        line += f"  ({escape(extras)})"
    console.print(line)
    for child in span.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="pl.error"), Text(f"  {result.op}", style="pl.op"), Text(f" — {msg}"),
        sep="",
    )
    if err and err.detail and (verbose or "matches" in err.detail):
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Check renderers ───────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render lint results grouped by file."""
    issues = result.data.get("issues", [])
    count = result.data.get("count", len(issues))
    files = result.data.get("files_checked", 0)

    if count == 0:
        console.print(Text("OK", style="pl.ok"), Text(f"  No issues found in {files} files."))
        if verbose:
            _render_meta(console, result)
        return

    errors = result.data.get("error_count", 0)
    warnings = result.data.get("warning_count", count - errors)
    if errors == 0:
        console.print("No errors found; advisory warnings listed below.")

    by_path: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_path.setdefault(str(issue.get("path", "?")), []).append(issue)

    for path, path_issues in by_path.items():
        console.print()
        console.print(Text(path, style="bold"))
        for issue in path_issues:
            sev = str(issue.get("severity", "warning"))
            line = issue.get("line")
            row = Text("  ")
            row.append(f"{line:>4}" if line else "   -", style="dim")
            row.append("  ")
            row.append(f"{sev:<7}", style=style_for_severity(sev))
            row.append(f" {issue.get('code', '')}", style="pl.code")
            row.append(f"  {issue.get('message', '')}")
            console.print(row)
            if verbose and issue.get("fix_action"):
                console.print(Text(f"          fix: {issue['fix_action']}", style="dim"))

    console.print()
    console.print(f"{errors} errors, {warnings} warnings in {files} files")
    if verbose:
        _render_meta(console, result)


def _render_fix(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    fixes = result.data.get("fixes", [])
    _field(console, "fixes_applied", result.data.get("count", len(fixes)))
    for fix in fixes:
        console.print(Text(f"  - {fix}"))


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Code", style="pl.code", no_wrap=True)
    table.add_column("Category")
    table.add_column("Severity")
    table.add_column("Enabled")
    table.add_column("Summary")
    for rule in result.data.get("items", []):
        sev = str(rule.get("severity", ""))
        table.add_row(
            str(rule.get("code", "")),
            str(rule.get("category", "")),
            Text(sev, style=style_for_severity(sev)),
            "yes" if rule.get("enabled") else "no",
            str(rule.get("summary", "")),
        )
    console.print(table)


# ── Post renderers ────────────────────────────────────────────────────


def _render_post_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text("No posts found.", style="dim"))
        return

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Date", style="pl.date", no_wrap=True)
    table.add_column("Title", style="pl.title")
    table.add_column("Categories")
    if verbose:
        table.add_column("Path", style="pl.path")
    for item in items:
        row = [
            str(item.get("date") or "draft"),
            str(item.get("title", "")),
            ", ".join(item.get("categories", [])),
        ]
        if verbose:
            row.append(str(item.get("path", "")))
        table.add_row(*row)
    console.print(table)
    console.print(Text(f"{result.data.get('count', len(items))} posts", style="dim"))


def _render_post(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    console.print(Text(str(d.get("title", "")), style="pl.title"))
    for key in ("path", "date", "layout"):
        if d.get(key) is not None:
            _field(console, key, d[key])
    for key in ("categories", "tags", "languages"):
        if d.get(key):
            _field(console, key, ", ".join(d[key]))
    _field(console, "code_blocks", d.get("code_blocks", 0))

    headings = d.get("headings", [])
    if headings:
        console.print()
        console.print(Text("  outline:", style="pl.key"))
        for h in headings:
            indent = "  " * (int(h.get("level", 1)) - 1)
            console.print(Text(f"    {indent}{h.get('text', '')}"))
    if verbose:
        _render_meta(console, result)


def _render_categories(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text("No categories found.", style="dim"))
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Category")
    table.add_column("Posts", justify="right")
    for row in items:
        table.add_row(str(row.get("category", "")), str(row.get("posts", 0)))
    console.print(table)


def _render_created(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("path", "title", "date"):
        if result.data.get(key) is not None:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":"), default=str))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "check": _render_check,
    "fix": _render_fix,
    "rules": _render_rules,
    "list_posts": _render_post_table,
    "get_post": _render_post,
    "categories": _render_categories,
    "create_post": _render_created,
}
