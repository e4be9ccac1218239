"""Shared pytest fixtures and test helpers for postlint tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from postlint.config.settings import PostlintSettings
from postlint.infrastructure.site import Site
from postlint.services.telemetry import disable_telemetry

GOOD_POST = """\
---
layout: post
title: "Kotlin Channels and Backpressure"
date: 2021-03-04
categories: [kotlin, coroutines]
---

Channels let coroutines hand values to each other.

## Rendezvous channels

```kotlin
val channel = Channel<Int>()
launch { channel.send(1) }
println(channel.receive())
```

### Buffered channels

A buffer absorbs bursts.

## Conflated channels

Only the latest value survives.
"""


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """A verbose CLI run switches telemetry on for the rest of the thread."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary site directory with empty posts and drafts folders."""
    (tmp_path / "_posts").mkdir()
    (tmp_path / "_drafts").mkdir()
    return tmp_path


@pytest.fixture
def site(site_root: Path) -> Site:
    settings = PostlintSettings.from_cli(site_root=site_root)
    return Site(settings)


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp site root so the CLI operates on it.

    Use via ``@pytest.mark.usefixtures("_isolated_site")``.
    """
    monkeypatch.delenv("POSTLINT_CONFIG", raising=False)
    monkeypatch.chdir(site_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_post(root: Path, name: str, text: str, *, draft: bool = False) -> Path:
    """Write raw *text* into the posts (or drafts) directory of *root*."""
    path = root / ("_drafts" if draft else "_posts") / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def make_post(
    title: str = "A Post",
    date: str = "2021-03-04",
    body: str = "Some text.\n",
    **extra: str,
) -> str:
    """Build a minimal valid post with optional extra front matter lines."""
    lines = ["---", "layout: post", f"title: {title}", f"date: {date}"]
    lines.extend(f"{k}: {v}" for k, v in extra.items())
    lines.append("---")
    return "\n".join(lines) + "\n\n" + body
