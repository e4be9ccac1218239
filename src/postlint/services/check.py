"""CheckService — lint posts and repair front matter.

Single command following the linter pattern. Three per-file categories
(front matter, file name, Markdown body) plus one site-wide category
(duplicate date + slug).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

from postlint.domain.content import (
    FrontmatterBlock,
    FrontmatterError,
    load_frontmatter_yaml,
    order_frontmatter,
    split_frontmatter,
)
from postlint.domain.filenames import parse_draft_filename, parse_post_filename
from postlint.domain.frontmatter import RECOGNIZED_KEYS, normalize_terms, parse_post_date
from postlint.domain.markdown import heading_jumps, scan_fences, scan_headings
from postlint.domain.rules import (
    RULES,
    SEVERITY_ERROR,
    SEVERITY_WARNING,
    Issue,
    severity_at_least,
)
from postlint.infrastructure.filesystem import find_post_files, read_text, write_post_file
from postlint.services.base import BaseService
from postlint.services.result import ServiceResult
from postlint.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from postlint.config.models import LintConfig

logger = logging.getLogger(__name__)

_TERM_KEYS: dict[str, bool] = {"category": False, "categories": True, "tags": True}


# ---------------------------------------------------------------------------
# Single-file linting
# ---------------------------------------------------------------------------


@dataclass
class PostReport:
    """Issues for one file plus the identity used for site-wide checks."""

    path: str
    issues: list[Issue] = field(default_factory=list)
    published: date | None = None
    slug: str | None = None


class _Emitter:
    """Creates issues, honoring disabled rules and severity overrides."""

    def __init__(self, config: LintConfig, path: str) -> None:
        self._config = config
        self._path = path
        self.issues: list[Issue] = []

    def __call__(
        self,
        code: str,
        message: str,
        *,
        line: int | None = None,
        fix_action: str | None = None,
    ) -> None:
        if code in self._config.disable:
            return
        rule = RULES[code]
        self.issues.append(
            Issue(
                code=code,
                category=rule.category,
                severity=self._config.severity.get(code, rule.severity),
                path=self._path,
                message=message,
                line=line,
                fix_action=fix_action,
            )
        )


def lint_post_text(
    text: str,
    *,
    name: str,
    path: str,
    config: LintConfig,
    draft: bool = False,
) -> PostReport:
    """Lint the contents of one post file.

    Args:
        text: Full file contents.
        name: File name (``2021-03-04-channels.md``), checked against the
            ``YYYY-MM-DD-slug`` contract unless *draft*.
        path: Display path recorded on every issue.
        config: ``[lint]`` configuration.
        draft: Drafts carry no date in the name and need no ``date`` key.
    """
    report = PostReport(path=path)
    emit = _Emitter(config, path)

    block = split_frontmatter(text)
    fm_date = _lint_frontmatter(block, emit, config=config, draft=draft)
    _lint_filename(name, emit, draft=draft, fm_date=fm_date, report=report)

    if not block.present or block.closed:
        _lint_body(block.body, block.body_line, emit)

    report.issues = emit.issues
    return report


def _lint_frontmatter(
    block: FrontmatterBlock,
    emit: _Emitter,
    *,
    config: LintConfig,
    draft: bool,
) -> date | None:
    """Front matter checks. Returns the front matter date when valid."""
    if not block.present:
        emit("FM001", "File does not start with a '---' front matter block", line=1)
        return None
    if not block.closed:
        emit("FM002", "Front matter opened on line 1 is never closed", line=1)
        return None

    try:
        fm = load_frontmatter_yaml(block.yaml_text)
    except FrontmatterError as exc:
        emit("FM003", str(exc), line=exc.line)
        return None

    title = fm.get("title")
    if title is None:
        emit("FM004", "Missing 'title'", line=1)
    elif isinstance(title, (dict, list)) or not str(title).strip():
        emit("FM004", "'title' is empty", line=1)

    fm_date: date | None = None
    raw_date = fm.get("date")
    if raw_date is None:
        if not draft:
            emit("FM005", "Missing 'date'", line=1, fix_action="date_from_filename")
    else:
        try:
            fm_date = parse_post_date(raw_date)
        except ValueError:
            emit("FM005", f"Invalid 'date': {raw_date!r}", line=1)

    for key, split in _TERM_KEYS.items():
        if key not in fm:
            continue
        try:
            normalize_terms(fm[key], split=split)
        except ValueError as exc:
            emit("FM006", f"'{key}': {exc}", line=1)

    if "category" in fm and "categories" in fm:
        emit(
            "FM007",
            "Both 'category' and 'categories' are set",
            line=1,
            fix_action="merge_categories",
        )

    if config.require_layout and "layout" not in fm:
        emit("FM008", "Missing 'layout'", line=1, fix_action="set_default_layout")

    allowed = RECOGNIZED_KEYS | set(config.extra_keys)
    for key in fm:
        if str(key) not in allowed:
            emit("FM009", f"Unrecognized key '{key}'", line=1)

    return fm_date


def _lint_filename(
    name: str,
    emit: _Emitter,
    *,
    draft: bool,
    fm_date: date | None,
    report: PostReport,
) -> None:
    if draft:
        try:
            report.slug = parse_draft_filename(name)
        except ValueError as exc:
            emit("FN001", str(exc))
        return

    try:
        parsed = parse_post_filename(name)
    except ValueError as exc:
        emit("FN001", str(exc))
        return

    report.published = parsed.date
    report.slug = parsed.slug
    if fm_date is not None and fm_date != parsed.date:
        emit(
            "FN002",
            f"File name date {parsed.date.isoformat()} differs from "
            f"front matter date {fm_date.isoformat()}",
            line=1,
        )


def _lint_body(body: str, body_line: int, emit: _Emitter) -> None:
    lines = body.split("\n")

    for fence in scan_fences(lines, body_line):
        if not fence.closed:
            emit("MD001", f"Code fence '{fence.marker}' is never closed", line=fence.start)

    headings = scan_headings(lines, body_line)
    for heading in headings:
        if not heading.spaced:
            emit("MD002", "Heading needs a space after #", line=heading.line)
        if not heading.text:
            emit("MD004", "Heading has no text", line=heading.line)

    for previous, current in heading_jumps(headings):
        emit(
            "MD003",
            f"Heading level jumps from h{previous.level} to h{current.level}",
            line=current.line,
        )


def _not_found(op: str, path: Path) -> ServiceResult:
    return ServiceResult.fail(op, "NOT_FOUND", f"No such file or directory: {path}", path=str(path))


# ---------------------------------------------------------------------------
# CheckService
# ---------------------------------------------------------------------------


class CheckService(BaseService):
    """Lints posts and repairs what can be repaired mechanically."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def check(
        self,
        *,
        min_severity: str = SEVERITY_WARNING,
        include_drafts: bool = False,
        paths: list[Path] | None = None,
    ) -> ServiceResult:
        """Report issues without modifying anything."""
        files, missing = self._select_files(paths, include_drafts=include_drafts)
        if missing is not None:
            return _not_found("check", missing)

        reports: list[PostReport] = []
        with trace_span("lint_files") as span:
            for file_path in files:
                reports.append(self._lint_file(file_path))
            if span is not None:
                span.annotate("files", len(files))

        with trace_span("site_checks"):
            site_issues = self._check_duplicate_slugs(reports)

        all_issues = [i for r in reports for i in r.issues] + site_issues
        all_issues.sort(key=lambda i: (i.path, i.line or 0, i.code))
        shown = [i for i in all_issues if severity_at_least(i.severity, min_severity)]

        error_count = sum(1 for i in shown if i.severity == SEVERITY_ERROR)
        logger.debug("Checked %d files, %d issues", len(files), len(all_issues))

        return ServiceResult(
            ok=True,
            op="check",
            data={
                "issues": [i.to_dict() for i in shown],
                "count": len(shown),
                "error_count": error_count,
                "warning_count": len(shown) - error_count,
                "files_checked": len(files),
                "healthy": not any(i.severity == SEVERITY_ERROR for i in all_issues),
            },
        )

    @traced
    def fix(
        self,
        *,
        level: str = "safe",
        include_drafts: bool = False,
        paths: list[Path] | None = None,
    ) -> ServiceResult:
        """Repair front matter. Level: 'safe' or 'aggressive'.

        Safe reorders keys canonically. Aggressive also fills a missing
        date from the file name, a missing layout from the site default,
        and folds ``category`` into ``categories``. When *paths* is given
        only those files (or the posts under those directories) are touched.
        """
        files, missing = self._select_files(paths, include_drafts=include_drafts)
        if missing is not None:
            return _not_found("fix", missing)

        fixes: list[str] = []
        warnings: list[str] = []

        for file_path in files:
            rel = self._site.relative(file_path)
            try:
                text = read_text(file_path)
            except UnicodeDecodeError:
                warnings.append(f"Skipped {rel}: not valid UTF-8")
                continue

            block = split_frontmatter(text)
            if not block.present or not block.closed:
                warnings.append(f"Skipped {rel}: no complete front matter block")
                continue
            try:
                fm = dict(load_frontmatter_yaml(block.yaml_text))
            except FrontmatterError as exc:
                warnings.append(f"Skipped {rel}: {exc}")
                continue

            actions: list[str] = []
            if level == "aggressive":
                actions.extend(self._aggressive_repairs(file_path, fm))

            if list(order_frontmatter(fm)) != list(fm):
                actions.append("reorder_frontmatter")

            if not actions:
                continue
            write_post_file(file_path, fm, block.body)
            fixes.extend(f"{rel}: {action}" for action in actions)
            logger.debug("Fixed %s: %s", rel, ", ".join(actions))

        return ServiceResult(
            ok=True,
            op="fix",
            data={"fixes": fixes, "count": len(fixes)},
            warnings=warnings,
        )

    def rules(self) -> ServiceResult:
        """List the rule catalog with effective severities."""
        config = self._site.settings.lint
        items = [
            {
                "code": rule.code,
                "category": rule.category,
                "severity": config.severity.get(rule.code, rule.severity),
                "enabled": rule.code not in config.disable,
                "summary": rule.summary,
            }
            for rule in RULES.values()
        ]
        return ServiceResult(ok=True, op="rules", data={"items": items, "count": len(items)})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _select_files(
        self, paths: list[Path] | None, *, include_drafts: bool
    ) -> tuple[list[Path], Path | None]:
        """Expand *paths* into post files. The second item is the first missing path."""
        if not paths:
            return self._site.find_posts(include_drafts=include_drafts), None

        files: list[Path] = []
        for p in paths:
            if p.is_dir():
                files.extend(find_post_files(p))
            elif p.is_file():
                files.append(p)
            else:
                return [], p
        return files, None

    def _lint_file(self, file_path: Path) -> PostReport:
        rel = self._site.relative(file_path)
        config = self._site.settings.lint
        try:
            text = read_text(file_path)
        except UnicodeDecodeError as exc:
            emit = _Emitter(config, rel)
            emit("FM003", f"File is not valid UTF-8: {exc.reason}")
            return PostReport(path=rel, issues=emit.issues)

        return lint_post_text(
            text,
            name=file_path.name,
            path=rel,
            config=config,
            draft=self._site.is_draft(file_path),
        )

    def _check_duplicate_slugs(self, reports: list[PostReport]) -> list[Issue]:
        """ST001: two dated posts resolving to the same date and slug."""
        groups: dict[tuple[date, str], list[str]] = defaultdict(list)
        for report in reports:
            if report.published is not None and report.slug is not None:
                groups[(report.published, report.slug.lower())].append(report.path)

        issues: list[Issue] = []
        config = self._site.settings.lint
        for (published, slug), paths in groups.items():
            if len(paths) < 2:
                continue
            for path in paths:
                others = ", ".join(p for p in paths if p != path)
                emit = _Emitter(config, path)
                emit("ST001", f"{published.isoformat()}/{slug} is also used by {others}")
                issues.extend(emit.issues)
        return issues

    def _aggressive_repairs(self, file_path: Path, fm: dict[str, Any]) -> list[str]:
        actions: list[str] = []

        if fm.get("date") is None and not self._site.is_draft(file_path):
            try:
                fm["date"] = parse_post_filename(file_path.name).date
                actions.append("date_from_filename")
            except ValueError:
                pass

        if "layout" not in fm:
            fm["layout"] = self._site.settings.site.default_layout
            actions.append("set_default_layout")

        if "category" in fm:
            try:
                single = normalize_terms(fm["category"], split=False)
                many = normalize_terms(fm.get("categories"), split=True)
            except ValueError:
                return actions
            fm.pop("category")
            fm["categories"] = single + [c for c in many if c not in single]
            actions.append("merge_categories")

        return actions
