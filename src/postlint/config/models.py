"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, postlint.toml only contains
overrides. A typical site needs no config file at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# --- postlint.toml sections ---


class SiteConfig(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    posts_dir: str = "_posts"
    drafts_dir: str = "_drafts"
    default_layout: str = "post"


class LintConfig(BaseModel):
    """[lint] section."""

    model_config = {"frozen": True}

    disable: list[str] = Field(default_factory=list)
    severity: dict[str, Literal["error", "warning"]] = Field(default_factory=dict)
    extra_keys: list[str] = Field(default_factory=list)
    require_layout: bool = True


class NewConfig(BaseModel):
    """[new] section."""

    model_config = {"frozen": True}

    default_categories: list[str] = Field(default_factory=list)
