"""Post file name contract: ``YYYY-MM-DD-slug.md``.

Dated posts encode their publish date and URL slug in the file name.
Drafts carry no date and are named after the slug alone.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from datetime import date

POST_SUFFIXES: tuple[str, ...] = (".md", ".markdown")

_POST_NAME = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>.+)$")


@dataclass(frozen=True)
class PostFilename:
    """Date and slug parsed from a dated post file name."""

    date: date
    slug: str
    suffix: str = ".md"

    @property
    def name(self) -> str:
        return f"{self.date.isoformat()}-{self.slug}{self.suffix}"


def _split_suffix(name: str) -> tuple[str, str]:
    for suffix in POST_SUFFIXES:
        if name.lower().endswith(suffix):
            return name[: -len(suffix)], name[-len(suffix) :]
    msg = f"Not a Markdown file name: {name!r}"
    raise ValueError(msg)


def parse_post_filename(name: str) -> PostFilename:
    """Parse ``YYYY-MM-DD-slug.md`` into its parts.

    Raises:
        ValueError: Wrong shape, empty slug, or an impossible calendar date
            (``2021-02-30``).
    """
    stem, suffix = _split_suffix(name)
    match = _POST_NAME.match(stem)
    if match is None:
        msg = f"File name {name!r} does not match YYYY-MM-DD-slug{suffix}"
        raise ValueError(msg)

    slug = match["slug"].strip()
    if not slug or slug.strip("-") == "":
        msg = f"File name {name!r} has an empty slug"
        raise ValueError(msg)

    try:
        published = date(int(match["year"]), int(match["month"]), int(match["day"]))
    except ValueError as exc:
        msg = f"File name {name!r} has an invalid date: {exc}"
        raise ValueError(msg) from exc

    return PostFilename(date=published, slug=slug, suffix=suffix)


def parse_draft_filename(name: str) -> str:
    """Return the slug of an undated draft file name."""
    stem, _suffix = _split_suffix(name)
    if not stem.strip():
        msg = f"Draft file name {name!r} has an empty slug"
        raise ValueError(msg)
    return stem


def slugify(title: str) -> str:
    """Turn a post title into a URL slug.

    Lowercases, drops punctuation, and joins words with ``-``. Letters
    outside ASCII are kept, so non-Latin titles stay legible.

    Examples:
        >>> slugify("Kotlin Coroutines: Channels & Backpressure!")
        'kotlin-coroutines-channels-backpressure'
        >>> slugify("  Jetpack   Compose  ")
        'jetpack-compose'
    """
    normalized = unicodedata.normalize("NFKC", title).lower()
    kept = "".join(ch if ch.isalnum() or ch in " -_" else " " for ch in normalized)
    return re.sub(r"[\s_-]+", "-", kept).strip("-")


def post_filename(published: date, slug: str, *, suffix: str = ".md") -> str:
    """Build the file name for a dated post."""
    return PostFilename(date=published, slug=slug, suffix=suffix).name
