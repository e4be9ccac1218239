"""Jinja2 template loading with per-site override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(group: str, *, site_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with site overrides before packaged defaults.

    Overrides are loaded from ``.postlint/templates/{group}/`` or the flat
    ``.postlint/templates/`` directory inside the site root.
    """
    loaders: list[BaseLoader] = []
    if site_root is not None:
        template_root = site_root / ".postlint" / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("postlint", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)
