"""Command: list posts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postlint.commands._base import PostlintCommand

if TYPE_CHECKING:
    from postlint.commands._context import AppContext


@click.command(
    "list",
    cls=PostlintCommand,
    examples="""\
  postlint list
  postlint list --category kotlin --limit 5
  postlint list --year 2021
  postlint -q list --drafts""",
)
@click.option("--category", default=None, help="Only posts in this category.")
@click.option("--year", type=int, default=None, help="Only posts published this year.")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum posts shown.")
@click.option("--drafts", is_flag=True, help="Include drafts.")
@click.pass_obj
def list_cmd(
    app: AppContext,
    category: str | None,
    year: int | None,
    limit: int | None,
    drafts: bool,
) -> None:
    """List posts, newest first."""
    from postlint.services.posts import PostService

    app.emit(
        PostService(app.site).list_posts(
            category=category, year=year, limit=limit, include_drafts=drafts
        )
    )
