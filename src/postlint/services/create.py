"""CreateService — scaffold new posts with valid front matter."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from jinja2 import TemplateError

from postlint.domain.filenames import post_filename, slugify
from postlint.infrastructure.filesystem import write_post_file
from postlint.infrastructure.templates import build_template_environment
from postlint.services._helpers import today
from postlint.services.base import BaseService
from postlint.services.result import ServiceResult
from postlint.services.telemetry import traced

logger = logging.getLogger(__name__)

_TEMPLATE_NAME = "post.md.j2"


class CreateService(BaseService):
    """Writes a new post (or draft) that passes ``postlint check``."""

    @traced
    def create_post(
        self,
        title: str,
        *,
        published: date | None = None,
        categories: list[str] | None = None,
        tags: list[str] | None = None,
        layout: str | None = None,
        summary: str | None = None,
        draft: bool = False,
    ) -> ServiceResult:
        """Create a post file from *title* and optional metadata.

        Dated posts land in the posts directory as ``YYYY-MM-DD-slug.md``;
        drafts land in the drafts directory as ``slug.md`` with no date.
        Never overwrites an existing file.
        """
        op = "create_post"
        title = title.strip()
        if not title:
            return ServiceResult.fail(op, "EMPTY_TITLE", "Title must not be empty")

        slug = slugify(title)
        if not slug:
            return ServiceResult.fail(
                op, "EMPTY_TITLE", f"Title {title!r} produces an empty slug", title=title
            )

        settings = self._site.settings
        published = published or today()
        name = f"{slug}.md" if draft else post_filename(published, slug)
        try:
            path = self._site.post_path(name, draft=draft)
        except ValueError as exc:
            return ServiceResult.fail(op, "INVALID_PATH", str(exc), name=name)

        if path.exists():
            return ServiceResult.fail(
                op,
                "ALREADY_EXISTS",
                f"Post already exists: {self._site.relative(path)}",
                path=self._site.relative(path),
            )

        fm: dict[str, Any] = {
            "layout": layout or settings.site.default_layout,
            "title": title,
            "date": None if draft else published,
            "categories": list(categories or settings.new.default_categories) or None,
            "tags": list(tags or []) or None,
        }

        env = build_template_environment("post", site_root=self._site.root)
        try:
            body = env.get_template(_TEMPLATE_NAME).render(
                title=title,
                summary=summary,
                first_heading="Introduction",
                date=published,
                categories=fm["categories"] or [],
            )
        except TemplateError as exc:
            return ServiceResult.fail(op, "TEMPLATE_ERROR", f"Cannot render post body: {exc}")

        write_post_file(path, {k: v for k, v in fm.items() if v is not None}, body)
        logger.debug("Created %s", path)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": self._site.relative(path),
                "slug": slug,
                "title": title,
                "date": None if draft else published.isoformat(),
                "draft": draft,
            },
        )
