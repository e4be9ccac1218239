"""Site — the folder of posts a command operates on."""

from __future__ import annotations

from typing import TYPE_CHECKING

from postlint.infrastructure.filesystem import find_post_files, resolve_post_path

if TYPE_CHECKING:
    from pathlib import Path

    from postlint.config.settings import PostlintSettings


class Site:
    """Resolved site layout built from settings.

    Every service receives one at construction time and reaches the
    filesystem only through it.
    """

    def __init__(self, settings: PostlintSettings) -> None:
        self.settings = settings
        self.root: Path = settings.site_root

    @property
    def posts_dir(self) -> Path:
        return self.root / self.settings.site.posts_dir

    @property
    def drafts_dir(self) -> Path:
        return self.root / self.settings.site.drafts_dir

    def find_posts(self, *, include_drafts: bool = False) -> list[Path]:
        """Dated posts first, then drafts when requested."""
        files = find_post_files(self.posts_dir)
        if include_drafts:
            files.extend(find_post_files(self.drafts_dir))
        return files

    def is_draft(self, path: Path) -> bool:
        return path.resolve().is_relative_to(self.drafts_dir.resolve())

    def relative(self, path: Path) -> str:
        """Path relative to the site root when possible, POSIX separators."""
        try:
            return path.resolve().relative_to(self.root.resolve()).as_posix()
        except ValueError:
            return path.as_posix()

    def post_path(self, name: str, *, draft: bool = False) -> Path:
        directory = self.settings.site.drafts_dir if draft else self.settings.site.posts_dir
        return resolve_post_path(self.root, directory, name)
