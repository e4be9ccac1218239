"""Command: list lint rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postlint.commands._base import PostlintCommand

if TYPE_CHECKING:
    from postlint.commands._context import AppContext


@click.command(cls=PostlintCommand, examples="  postlint rules\n  postlint --json rules")
@click.pass_obj
def rules(app: AppContext) -> None:
    """List lint rules with their effective severity."""
    from postlint.services.check import CheckService

    app.emit(CheckService(app.site).rules())
