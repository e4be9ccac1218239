"""Post front matter model.

The record a site generator reads from each post: ``layout``, ``title``,
``date``, and ``category``/``categories``, plus a handful of optional keys
the generator also understands. Unknown keys are kept on the model so the
linter can report them instead of losing them.
"""

from __future__ import annotations

import datetime as _dt
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

RECOGNIZED_KEYS: frozenset[str] = frozenset(
    {
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
    }
)

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S%z",
)


def parse_post_date(value: Any) -> date:
    """Normalize a front matter ``date`` value to a calendar date.

    Accepts ``date``/``datetime`` objects (what YAML loaders produce) and the
    string forms site generators accept.

    Raises:
        ValueError: The value is empty or not a recognizable date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        msg = f"Not a date: {value!r}"
        raise ValueError(msg)

    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    msg = f"Not a date: {value!r}"
    raise ValueError(msg)


def normalize_terms(value: Any, *, split: bool) -> list[str]:
    """Normalize a category/tag value to a list of strings.

    A string is split on whitespace when *split* is True (``categories:
    kotlin coroutines``) and kept whole otherwise (``category: Android
    Basics``). ``None`` yields an empty list.

    Raises:
        ValueError: The value is neither a string nor a list of scalars.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return value.split() if split else [value.strip()] if value.strip() else []
    if isinstance(value, list):
        terms: list[str] = []
        for item in value:
            if isinstance(item, (dict, list)) or item is None:
                msg = f"Expected a string, got {type(item).__name__}"
                raise ValueError(msg)
            terms.append(str(item))
        return terms
    msg = f"Expected a string or list, got {type(value).__name__}"
    raise ValueError(msg)


class PostFrontmatter(BaseModel):
    """Validated front matter of a single post."""

    model_config = ConfigDict(frozen=True, extra="allow")

    layout: str | None = None
    title: str
    date: _dt.date | None = None
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    permalink: str | None = None
    published: bool = True

    @model_validator(mode="before")
    @classmethod
    def _merge_category_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        merged = dict(data)
        single = normalize_terms(merged.pop("category", None), split=False)
        many = normalize_terms(merged.get("categories"), split=True)
        merged["categories"] = single + [c for c in many if c not in single]
        merged["tags"] = normalize_terms(merged.get("tags"), split=True)
        return merged

    @field_validator("title", mode="before")
    @classmethod
    def _title_from_scalar(cls, value: Any) -> Any:
        # YAML reads `title: 2021-03-04` or `title: true` as non-strings.
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (int, float, date, datetime)):
            return str(value)
        return value

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "title must not be empty"
            raise ValueError(msg)
        return value.strip()

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> _dt.date | None:
        if value is None:
            return None
        return parse_post_date(value)

    @classmethod
    def from_mapping(cls, fm: dict[str, Any]) -> PostFrontmatter:
        """Validate a mapping loaded from YAML (ruamel containers included)."""
        return cls.model_validate({str(k): v for k, v in fm.items()})

    @property
    def extra_keys(self) -> list[str]:
        """Keys present in the source that the model does not define."""
        return sorted(self.model_extra or {})
