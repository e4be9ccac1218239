"""Lint rule catalog and issue record.

Codes are stable identifiers users reference in ``postlint.toml`` to
disable a rule or change its severity.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

SEVERITY_RANK: dict[str, int] = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}

CAT_FRONTMATTER = "frontmatter"
CAT_FILENAME = "filename"
CAT_MARKDOWN = "markdown"
CAT_SITE = "site"


@dataclass(frozen=True)
class Rule:
    code: str
    category: str
    severity: str
    summary: str


RULES: dict[str, Rule] = {
    rule.code: rule
    for rule in (
        Rule("FM001", CAT_FRONTMATTER, SEVERITY_ERROR, "File does not start with front matter"),
        Rule("FM002", CAT_FRONTMATTER, SEVERITY_ERROR, "Front matter block is never closed"),
        Rule("FM003", CAT_FRONTMATTER, SEVERITY_ERROR, "Front matter is not a valid YAML mapping"),
        Rule("FM004", CAT_FRONTMATTER, SEVERITY_ERROR, "Title is missing or empty"),
        Rule("FM005", CAT_FRONTMATTER, SEVERITY_ERROR, "Date is missing or invalid"),
        Rule(
            "FM006",
            CAT_FRONTMATTER,
            SEVERITY_ERROR,
            "Category, categories, or tags is not a string or list of strings",
        ),
        Rule("FM007", CAT_FRONTMATTER, SEVERITY_WARNING, "Both category and categories are set"),
        Rule("FM008", CAT_FRONTMATTER, SEVERITY_WARNING, "Layout is missing"),
        Rule("FM009", CAT_FRONTMATTER, SEVERITY_WARNING, "Unrecognized front matter key"),
        Rule("FN001", CAT_FILENAME, SEVERITY_ERROR, "File name is not YYYY-MM-DD-slug.md"),
        Rule("FN002", CAT_FILENAME, SEVERITY_WARNING, "File name date differs from front matter"),
        Rule("MD001", CAT_MARKDOWN, SEVERITY_ERROR, "Fenced code block is not closed"),
        Rule("MD002", CAT_MARKDOWN, SEVERITY_WARNING, "Heading has no space after #"),
        Rule("MD003", CAT_MARKDOWN, SEVERITY_WARNING, "Heading level skips a level"),
        Rule("MD004", CAT_MARKDOWN, SEVERITY_WARNING, "Heading has no text"),
        Rule("ST001", CAT_SITE, SEVERITY_ERROR, "Two posts share the same date and slug"),
    )
}


@dataclass(frozen=True)
class Issue:
    """One problem found in one file."""

    code: str
    category: str
    severity: str
    path: str
    message: str
    line: int | None = None
    fix_action: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def severity_at_least(severity: str, threshold: str) -> bool:
    """True when *severity* is at or above *threshold*."""
    return SEVERITY_RANK.get(severity, 0) >= SEVERITY_RANK.get(threshold, 0)
