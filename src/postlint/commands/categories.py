"""Command: category usage counts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postlint.commands._base import PostlintCommand

if TYPE_CHECKING:
    from postlint.commands._context import AppContext


@click.command(
    cls=PostlintCommand,
    examples="  postlint categories\n  postlint categories --drafts",
)
@click.option("--drafts", is_flag=True, help="Include drafts.")
@click.pass_obj
def categories(app: AppContext, drafts: bool) -> None:
    """Count posts per category."""
    from postlint.services.posts import PostService

    app.emit(PostService(app.site).categories(include_drafts=drafts))
