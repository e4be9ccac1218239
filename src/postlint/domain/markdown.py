"""Line-based scanning of a post body: fenced code blocks and ATX headings.

This is not a Markdown parser. It recognizes just enough CommonMark
structure to answer two questions about a post: are all code fences
closed, and is the heading outline well formed. Headings inside fenced
code (a ``# comment`` in a shell snippet, say) never count.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_FENCE_OPEN = re.compile(r"^(?P<indent> {0,3})(?P<marker>`{3,}|~{3,})(?P<info>.*)$")
_ATX_SPACED = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?:[ \t]+(?P<text>.*))?$")
_ATX_UNSPACED = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?P<text>[^#\s].*)$")
_CLOSING_HASHES = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")


@dataclass(frozen=True)
class FenceBlock:
    """A fenced code block. ``end`` is None when the fence never closes."""

    marker: str
    start: int
    end: int | None
    info: str

    @property
    def closed(self) -> bool:
        return self.end is not None

    @property
    def language(self) -> str:
        return self.info.split()[0] if self.info.split() else ""


@dataclass(frozen=True)
class Heading:
    """An ATX heading. ``spaced`` is False for ``#Title`` style lines."""

    level: int
    text: str
    line: int
    spaced: bool = True


def _is_closing(line: str, opener: str) -> bool:
    stripped = line.rstrip()
    indent = len(stripped) - len(stripped.lstrip(" "))
    if indent > 3:
        return False
    run = stripped.lstrip(" ")
    if not run or run[0] != opener[0]:
        return False
    return set(run) == {opener[0]} and len(run) >= len(opener)


def _iter_outside_fences(
    lines: list[str], start_line: int
) -> tuple[list[FenceBlock], list[tuple[int, str]]]:
    """Walk *lines* once, returning fences and the lines outside them."""
    fences: list[FenceBlock] = []
    outside: list[tuple[int, str]] = []

    open_marker: str | None = None
    open_line = 0
    open_info = ""
    for offset, line in enumerate(lines):
        lineno = start_line + offset
        if open_marker is not None:
            if _is_closing(line, open_marker):
                fences.append(FenceBlock(open_marker, open_line, lineno, open_info))
                open_marker = None
            continue

        match = _FENCE_OPEN.match(line)
        if match is not None:
            marker = match["marker"]
            info = match["info"].strip()
            # Backtick fences cannot carry backticks in the info string.
            if not (marker[0] == "`" and "`" in info):
                open_marker, open_line, open_info = marker, lineno, info
                continue
        outside.append((lineno, line))

    if open_marker is not None:
        fences.append(FenceBlock(open_marker, open_line, None, open_info))
    return fences, outside


def scan_fences(lines: list[str], start_line: int = 1) -> list[FenceBlock]:
    """Return every fenced code block in *lines*, in document order."""
    fences, _outside = _iter_outside_fences(lines, start_line)
    return fences


def _heading_text(raw: str) -> str:
    text = raw.strip()
    if set(text) <= {"#"}:
        return ""
    return _CLOSING_HASHES.sub("", text).strip()


def scan_headings(lines: list[str], start_line: int = 1) -> list[Heading]:
    """Return ATX headings outside fenced code, in document order."""
    _fences, outside = _iter_outside_fences(lines, start_line)
    headings: list[Heading] = []
    for lineno, line in outside:
        match = _ATX_SPACED.match(line)
        if match is not None:
            headings.append(
                Heading(len(match["hashes"]), _heading_text(match["text"] or ""), lineno)
            )
            continue
        match = _ATX_UNSPACED.match(line)
        if match is not None:
            headings.append(
                Heading(len(match["hashes"]), _heading_text(match["text"]), lineno, spaced=False)
            )
    return headings


def heading_jumps(headings: list[Heading]) -> list[tuple[Heading, Heading]]:
    """Pairs ``(previous, current)`` where the level grows by more than one."""
    jumps: list[tuple[Heading, Heading]] = []
    for previous, current in zip(headings, headings[1:], strict=False):
        if current.level > previous.level + 1:
            jumps.append((previous, current))
    return jumps
