"""Command: show one post."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postlint.commands._base import PostlintCommand

if TYPE_CHECKING:
    from postlint.commands._context import AppContext


@click.command(
    cls=PostlintCommand,
    examples="""\
  postlint show kotlin-channels
  postlint show 2021-03-04-kotlin-channels.md
  postlint --json show _posts/2021-03-04-kotlin-channels.md""",
)
@click.argument("ref")
@click.pass_obj
def show(app: AppContext, ref: str) -> None:
    """Show a post's metadata and heading outline.

    REF is a path relative to the site root, a file name, or a slug.
    """
    from postlint.services.posts import PostService

    app.emit(PostService(app.site).get_post(ref))
