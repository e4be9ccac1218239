"""Command: scaffold a new post."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from postlint.commands._base import PostlintCommand

if TYPE_CHECKING:
    from postlint.commands._context import AppContext


@click.command(
    cls=PostlintCommand,
    examples="""\
  postlint new "Kotlin Channels and Backpressure"
  postlint new "Compose Recomposition" --category android --tag compose
  postlint new "Fastlane for Flutter" --date 2021-06-01
  postlint new "Half-baked idea" --draft""",
)
@click.argument("title")
@click.option("--date", "date_", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Publish date (default: today).")
@click.option("--category", "categories", multiple=True, help="Category (repeatable).")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable).")
@click.option("--layout", default=None, help="Layout (default: [site] default_layout).")
@click.option("--summary", default=None, help="Opening paragraph.")
@click.option("--draft", is_flag=True, help="Create an undated draft instead.")
@click.pass_obj
def new(
    app: AppContext,
    title: str,
    date_: datetime | None,
    categories: tuple[str, ...],
    tags: tuple[str, ...],
    layout: str | None,
    summary: str | None,
    draft: bool,
) -> None:
    """Create a new post with valid front matter."""
    from postlint.services.create import CreateService

    app.emit(
        CreateService(app.site).create_post(
            title,
            published=date_.date() if date_ else None,
            categories=list(categories),
            tags=list(tags),
            layout=layout,
            summary=summary,
            draft=draft,
        )
    )
