"""Filesystem operations for post files.

Pure parsing/rendering lives in :mod:`postlint.domain.content`. This
module handles the actual file I/O, path resolution, and discovery.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from postlint.domain.content import parse_frontmatter, render_frontmatter
from postlint.domain.filenames import POST_SUFFIXES


def read_text(path: Path) -> str:
    """Read a post as UTF-8 text. Decode errors propagate."""
    return path.read_text(encoding="utf-8")


def read_post_file(path: Path) -> tuple[dict[str, Any], str]:
    """Read a markdown file, returning ``(frontmatter, body)``."""
    return parse_frontmatter(read_text(path))


def write_post_file(path: Path, frontmatter: dict[str, Any], body: str) -> None:
    """Write front matter + body to a markdown file, creating parents."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_frontmatter(frontmatter, body), encoding="utf-8")


def resolve_post_path(site_root: Path, directory: str, name: str) -> Path:
    """Resolve ``{site_root}/{directory}/{name}``.

    Raises:
        ValueError: The result would escape the site root.
    """
    result = site_root / directory / name
    if not result.resolve().is_relative_to(site_root.resolve()):
        msg = f"Path escapes site root: {result}"
        raise ValueError(msg)
    return result


def find_post_files(directory: Path) -> list[Path]:
    """Discover Markdown posts under *directory*, sorted.

    Hidden files and anything inside a hidden directory are skipped.
    A missing directory yields an empty list.
    """
    if not directory.is_dir():
        return []

    results: list[Path] = []
    for path in directory.rglob("*"):
        if not path.is_file():
            continue
        rel_parts = path.relative_to(directory).parts
        if any(part.startswith(".") for part in rel_parts):
            continue
        if path.suffix.lower() in POST_SUFFIXES:
            results.append(path)
    return sorted(results)
