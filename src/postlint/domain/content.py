"""Front matter block splitting, parsing, and rendering.

A post file starts with a ``---`` line, followed by a YAML mapping, closed
by another ``---`` (or ``...``) line. Everything after the closing line is
the Markdown body handed to the site generator untouched.

``split_frontmatter`` is purely structural and never fails; it reports what
it found so the linter can point at the exact problem. ``parse_frontmatter``
goes one step further and loads the YAML, raising :class:`FrontmatterError`
when the block exists but cannot be used.
"""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

# ---------------------------------------------------------------------------
# YAML parser (round-trip preserves comments and quote styles)
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful; a failed dump can leave a shared
    instance broken, so every operation gets its own.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    y.width = 4096
    return y


# ---------------------------------------------------------------------------
# Canonical front matter key ordering
# ---------------------------------------------------------------------------

CANONICAL_KEY_ORDER: list[str] = [
    "layout",
    "title",
    "date",
    "category",
    "categories",
    "tags",
    "permalink",
    "published",
    "author",
    "description",
    "excerpt",
    "image",
    "toc",
    "comments",
    "last_modified_at",
]

_FRONTMATTER_DELIMITER = "---"
_FRONTMATTER_END_ALT = "..."


class FrontmatterError(ValueError):
    """Front matter exists but cannot be loaded as a YAML mapping."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


@dataclass(frozen=True)
class FrontmatterBlock:
    """Structural view of a post file.

    Attributes:
        present: The file opens with a ``---`` line.
        closed: A closing delimiter was found.
        yaml_text: Raw YAML between the delimiters ("" when absent).
        body: Markdown after the block (the whole text when absent).
        body_line: 1-based file line on which ``body`` starts.
    """

    present: bool
    closed: bool
    yaml_text: str
    body: str
    body_line: int


# ---------------------------------------------------------------------------
# Pure parsing / rendering utilities
# ---------------------------------------------------------------------------


def split_frontmatter(content: str) -> FrontmatterBlock:
    """Split *content* into its front matter block and body.

    Handles both ``\\n`` and ``\\r\\n`` line endings and a leading BOM.
    """
    normalized = content.replace("\r\n", "\n").removeprefix("\ufeff")
    lines = normalized.split("\n")
    if not lines or lines[0].rstrip() != _FRONTMATTER_DELIMITER:
        return FrontmatterBlock(
            present=False, closed=False, yaml_text="", body=normalized, body_line=1
        )

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.rstrip() in (_FRONTMATTER_DELIMITER, _FRONTMATTER_END_ALT):
            end_idx = i
            break

    if end_idx is None:
        return FrontmatterBlock(
            present=True,
            closed=False,
            yaml_text="\n".join(lines[1:]),
            body="",
            body_line=len(lines) + 1,
        )

    return FrontmatterBlock(
        present=True,
        closed=True,
        yaml_text="\n".join(lines[1:end_idx]),
        body="\n".join(lines[end_idx + 1 :]),
        body_line=end_idx + 2,
    )


def load_frontmatter_yaml(yaml_text: str) -> dict[str, Any]:
    """Load a front matter YAML block into a mapping.

    An empty block yields ``{}``.

    Raises:
        FrontmatterError: Invalid YAML, duplicate keys, or a non-mapping
            document. ``line`` is the 1-based file line when known.
    """
    try:
        data = _new_yaml().load(yaml_text)
    except YAMLError as exc:
        mark = getattr(exc, "problem_mark", None) or getattr(exc, "context_mark", None)
        line = mark.line + 2 if mark is not None else None
        problem = getattr(exc, "problem", None) or str(exc).splitlines()[0]
        raise FrontmatterError(f"Invalid YAML: {problem}", line=line) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Front matter must be a mapping, got {type(data).__name__}"
        raise FrontmatterError(msg, line=2)
    return data


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter and body from markdown content.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. If no complete front
        matter block is found, returns ``({}, content)``.

    Raises:
        FrontmatterError: The block is complete but its YAML is unusable.
    """
    block = split_frontmatter(content)
    if not block.present or not block.closed:
        return {}, content

    body = block.body
    if body.startswith("\n"):
        body = body[1:]
    return load_frontmatter_yaml(block.yaml_text), body


def order_frontmatter(fm: dict[str, Any]) -> dict[str, Any]:
    """Return *fm* with keys in canonical order.

    Keys present in :data:`CANONICAL_KEY_ORDER` come first (in that
    order), followed by any remaining keys sorted alphabetically.
    Keys with an empty value (``image:``) are kept.
    """
    ordered: dict[str, Any] = {}
    for key in CANONICAL_KEY_ORDER:
        if key in fm:
            ordered[key] = fm[key]

    for key in sorted(fm.keys(), key=str):
        if key not in ordered:
            ordered[key] = fm[key]

    return ordered


def render_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Render a front matter dict and body text into a post file.

    A blank line separates the closing delimiter from a non-empty body.
    """
    ordered = order_frontmatter(frontmatter)
    buf = StringIO()
    if ordered:
        _new_yaml().dump(ordered, buf)
    yaml_text = buf.getvalue()

    parts = [_FRONTMATTER_DELIMITER, "\n", yaml_text, _FRONTMATTER_DELIMITER, "\n"]
    if body:
        parts.append("\n")
        parts.append(body.lstrip("\n"))
    return "".join(parts)
