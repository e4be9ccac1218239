"""PostService — read-only index over the site's posts."""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from postlint.domain.content import FrontmatterError, parse_frontmatter, split_frontmatter
from postlint.domain.filenames import parse_draft_filename, parse_post_filename
from postlint.domain.frontmatter import PostFrontmatter
from postlint.domain.markdown import scan_fences, scan_headings
from postlint.infrastructure.filesystem import read_post_file, read_text
from postlint.services._helpers import iso_or_none
from postlint.services.base import BaseService
from postlint.services.result import ServiceResult
from postlint.services.telemetry import traced

logger = logging.getLogger(__name__)


class PostService(BaseService):
    """Lists, looks up, and summarizes posts."""

    @traced
    def list_posts(
        self,
        *,
        category: str | None = None,
        year: int | None = None,
        limit: int | None = None,
        include_drafts: bool = False,
    ) -> ServiceResult:
        """Posts newest first, optionally filtered by category and year.

        Files whose front matter cannot be loaded are skipped and named in
        ``warnings``.
        """
        items, warnings = self._load_all(include_drafts=include_drafts)

        if category is not None:
            wanted = category.casefold()
            items = [i for i in items if wanted in (c.casefold() for c in i["categories"])]
        if year is not None:
            items = [i for i in items if i["date"] and i["date"].startswith(f"{year:04d}-")]

        items.sort(key=lambda i: (i["date"] or "", i["slug"]), reverse=True)
        if limit is not None:
            items = items[:limit]

        return ServiceResult(
            ok=True,
            op="list_posts",
            data={"items": items, "count": len(items)},
            warnings=warnings,
        )

    @traced
    def get_post(self, ref: str) -> ServiceResult:
        """Look up one post by relative path, file name, or slug."""
        matches = self._match(ref)
        if not matches:
            return ServiceResult.fail("get_post", "NOT_FOUND", f"No post matches {ref!r}", ref=ref)
        if len(matches) > 1:
            return ServiceResult.fail(
                "get_post",
                "AMBIGUOUS",
                f"{len(matches)} posts match {ref!r}",
                ref=ref,
                matches=[self._site.relative(m) for m in matches],
            )

        path = matches[0]
        try:
            text = read_text(path)
            fm, _body = parse_frontmatter(text)
            item = self._summarize(path, fm)
        except (UnicodeDecodeError, FrontmatterError, ValidationError) as exc:
            return ServiceResult.fail(
                "get_post",
                "INVALID_POST",
                f"Cannot read {self._site.relative(path)}: {_first_line(exc)}",
                path=self._site.relative(path),
            )

        block = split_frontmatter(text)
        lines = block.body.split("\n")
        item["headings"] = [
            {"level": h.level, "text": h.text, "line": h.line}
            for h in scan_headings(lines, block.body_line)
        ]
        fences = scan_fences(lines, block.body_line)
        item["code_blocks"] = len(fences)
        item["languages"] = sorted({f.language for f in fences if f.language})
        return ServiceResult(ok=True, op="get_post", data=item)

    @traced
    def categories(self, *, include_drafts: bool = False) -> ServiceResult:
        """Category -> post count, most used first."""
        items, warnings = self._load_all(include_drafts=include_drafts)
        counts: Counter[str] = Counter(c for item in items for c in item["categories"])
        rows = [
            {"category": name, "posts": n}
            for name, n in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
        ]
        return ServiceResult(
            ok=True,
            op="categories",
            data={"items": rows, "count": len(rows)},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load_all(self, *, include_drafts: bool) -> tuple[list[dict[str, Any]], list[str]]:
        items: list[dict[str, Any]] = []
        warnings: list[str] = []
        for path in self._site.find_posts(include_drafts=include_drafts):
            try:
                fm, _body = read_post_file(path)
                items.append(self._summarize(path, fm))
            except (UnicodeDecodeError, FrontmatterError, ValidationError) as exc:
                rel = self._site.relative(path)
                logger.debug("Skipping %s", rel, exc_info=True)
                warnings.append(f"Skipped {rel}: {_first_line(exc)}")
        return items, warnings

    def _summarize(self, path: Path, fm: dict[str, Any]) -> dict[str, Any]:
        """Build the summary dict for one post.

        The front matter date wins; the file name date fills in when the
        front matter has none.
        """
        draft = self._site.is_draft(path)
        post = PostFrontmatter.from_mapping(fm)

        slug = path.stem
        published = post.date
        try:
            if draft:
                slug = parse_draft_filename(path.name)
            else:
                parsed = parse_post_filename(path.name)
                slug = parsed.slug
                published = published or parsed.date
        except ValueError:
            pass

        return {
            "path": self._site.relative(path),
            "slug": slug,
            "title": post.title,
            "date": iso_or_none(published),
            "layout": post.layout,
            "categories": list(post.categories),
            "tags": list(post.tags),
            "draft": draft,
        }

    def _match(self, ref: str) -> list[Path]:
        candidates = self._site.find_posts(include_drafts=True)
        direct = (self._site.root / ref).resolve()
        by_path = [p for p in candidates if p.resolve() == direct]
        if by_path:
            return by_path

        by_name = [p for p in candidates if p.name == ref]
        if by_name:
            return by_name

        matches: list[Path] = []
        for p in candidates:
            try:
                slug = parse_post_filename(p.name).slug
            except ValueError:
                slug = p.stem
            if slug == ref:
                matches.append(p)
        return matches


def _first_line(exc: Exception) -> str:
    text = str(exc).strip()
    return text.splitlines()[0] if text else type(exc).__name__
