"""Tests for filesystem operations — file I/O, path resolution, discovery."""

from datetime import date
from pathlib import Path

import pytest

from postlint.infrastructure.filesystem import (
    find_post_files,
    read_post_file,
    read_text,
    resolve_post_path,
    write_post_file,
)


class TestWriteAndRead:
    def test_write_creates_parents(self, tmp_path: Path) -> None:
        path = tmp_path / "_posts" / "2021" / "2021-03-04-hello.md"
        write_post_file(path, {"title": "Hello", "layout": "post"}, "Body.\n")
        assert path.is_file()

    def test_written_file_orders_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "post.md"
        write_post_file(
            path,
            {"categories": ["kotlin"], "title": "Hello", "layout": "post"},
            "Body.\n",
        )
        text = read_text(path)
        assert text.startswith("---\nlayout: post\ntitle: Hello\ncategories:\n")
        assert text.endswith("---\n\nBody.\n")

    def test_read_returns_frontmatter_and_body(self, tmp_path: Path) -> None:
        path = tmp_path / "post.md"
        write_post_file(path, {"title": "Hello", "date": date(2021, 3, 4)}, "Body.\n")
        fm, body = read_post_file(path)
        assert fm["title"] == "Hello"
        assert fm["date"] == date(2021, 3, 4)
        assert body == "Body.\n"

    def test_read_rejects_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.md"
        path.write_bytes(b"---\ntitle: \xff\n---\n")
        with pytest.raises(UnicodeDecodeError):
            read_text(path)


class TestResolvePostPath:
    def test_inside_root(self, tmp_path: Path) -> None:
        result = resolve_post_path(tmp_path, "_posts", "2021-03-04-hello.md")
        assert result == tmp_path / "_posts" / "2021-03-04-hello.md"

    def test_escape_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="escapes site root"):
            resolve_post_path(tmp_path, "../elsewhere", "post.md")


class TestFindPostFiles:
    def test_missing_directory(self, tmp_path: Path) -> None:
        assert find_post_files(tmp_path / "nope") == []

    def test_finds_markdown_recursively_sorted(self, tmp_path: Path) -> None:
        (tmp_path / "2021").mkdir()
        (tmp_path / "2021" / "2021-03-04-b.md").write_text("")
        (tmp_path / "2020-01-01-a.markdown").write_text("")
        (tmp_path / "notes.txt").write_text("")
        found = find_post_files(tmp_path)
        assert [p.name for p in found] == ["2020-01-01-a.markdown", "2021-03-04-b.md"]

    def test_skips_hidden(self, tmp_path: Path) -> None:
        (tmp_path / ".cache").mkdir()
        (tmp_path / ".cache" / "2021-03-04-x.md").write_text("")
        (tmp_path / ".2021-03-04-y.md").write_text("")
        (tmp_path / "2021-03-04-z.md").write_text("")
        assert [p.name for p in find_post_files(tmp_path)] == ["2021-03-04-z.md"]

    def test_suffix_is_case_insensitive(self, tmp_path: Path) -> None:
        (tmp_path / "2021-03-04-upper.MD").write_text("")
        assert len(find_post_files(tmp_path)) == 1
