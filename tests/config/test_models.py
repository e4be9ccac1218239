"""Tests for configuration section models."""

import pytest
from pydantic import ValidationError

from postlint.config.models import LintConfig, NewConfig, SiteConfig


def test_site_defaults() -> None:
    site = SiteConfig()
    assert site.posts_dir == "_posts"
    assert site.drafts_dir == "_drafts"
    assert site.default_layout == "post"


def test_lint_defaults() -> None:
    lint = LintConfig()
    assert lint.disable == []
    assert lint.severity == {}
    assert lint.extra_keys == []
    assert lint.require_layout is True


def test_new_defaults() -> None:
    assert NewConfig().default_categories == []


def test_severity_override_must_be_known_level() -> None:
    with pytest.raises(ValidationError):
        LintConfig(severity={"FM009": "fatal"})


def test_sections_are_frozen() -> None:
    site = SiteConfig()
    with pytest.raises(ValidationError):
        site.posts_dir = "x"  # type: ignore[misc]
