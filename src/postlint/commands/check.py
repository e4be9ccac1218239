"""Command: lint posts and optionally repair front matter."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from postlint.commands._base import PostlintCommand

if TYPE_CHECKING:
    from postlint.commands._context import AppContext


@click.command(
    cls=PostlintCommand,
    examples="""\
  postlint check
  postlint check _posts/2021-03-04-kotlin-channels.md
  postlint check --errors-only
  postlint check --drafts
  postlint check --fix
  postlint check --fix _posts/2021-03-04-kotlin-channels.md
  postlint check --fix --level aggressive""",
)
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.option("--drafts", is_flag=True, help="Also check the drafts directory.")
@click.option("--fix", is_flag=True, help="Repair front matter instead of reporting.")
@click.option(
    "--level",
    type=click.Choice(["safe", "aggressive"]),
    default="safe",
    help="Repair aggressiveness level.",
)
@click.pass_obj
def check(
    app: AppContext,
    paths: tuple[Path, ...],
    min_severity: str,
    errors_only: bool,
    drafts: bool,
    fix: bool,
    level: str,
) -> None:
    """Check posts for front matter, file name, and Markdown problems.

    Exits with status 1 when any error-level issue is found.
    """
    from postlint.services.check import CheckService

    svc = CheckService(app.site)
    selected = list(paths) or None
    if fix:
        app.emit(svc.fix(level=level, include_drafts=drafts, paths=selected))
        return

    threshold = "error" if errors_only else min_severity
    result = svc.check(min_severity=threshold, include_drafts=drafts, paths=selected)
    app.emit(result)
    if not result.data.get("healthy", True):
        raise SystemExit(1)
