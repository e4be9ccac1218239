"""Tests for PostService — listing, lookup, and category counts."""

from __future__ import annotations

from pathlib import Path

import pytest

from postlint.infrastructure.site import Site
from postlint.services.check import CheckService
from postlint.services.posts import PostService
from tests.conftest import GOOD_POST, make_post, write_post


@pytest.fixture
def blog(site_root: Path) -> Path:
    """A small site: two dated posts, one undated post, and one draft."""
    write_post(site_root, "2021-03-04-kotlin-channels.md", GOOD_POST)
    write_post(
        site_root,
        "2020-05-01-older.md",
        make_post(title="Older", date="2020-05-01", categories="[kotlin]"),
    )
    write_post(
        site_root,
        "2019-11-20-compose.md",
        "---\nlayout: post\ntitle: Compose\ncategory: Android Basics\n---\n\nText.\n",
    )
    write_post(site_root, "idea.md", "---\nlayout: post\ntitle: Idea\n---\n", draft=True)
    return site_root


@pytest.mark.usefixtures("blog")
class TestListPosts:
    def test_newest_first(self, site: Site) -> None:
        result = PostService(site).list_posts()
        assert result.ok
        assert result.op == "list_posts"
        assert [i["slug"] for i in result.data["items"]] == ["kotlin-channels", "older", "compose"]
        assert result.data["count"] == 3

    def test_summary_fields(self, site: Site) -> None:
        item = PostService(site).list_posts(limit=1).data["items"][0]
        assert item == {
            "path": "_posts/2021-03-04-kotlin-channels.md",
            "slug": "kotlin-channels",
            "title": "Kotlin Channels and Backpressure",
            "date": "2021-03-04",
            "layout": "post",
            "categories": ["kotlin", "coroutines"],
            "tags": [],
            "draft": False,
        }

    def test_date_falls_back_to_filename(self, site: Site) -> None:
        items = PostService(site).list_posts(year=2019).data["items"]
        assert [(i["slug"], i["date"]) for i in items] == [("compose", "2019-11-20")]
        assert items[0]["categories"] == ["Android Basics"]

    def test_category_filter_ignores_case(self, site: Site) -> None:
        items = PostService(site).list_posts(category="KOTLIN").data["items"]
        assert [i["slug"] for i in items] == ["kotlin-channels", "older"]

    def test_limit(self, site: Site) -> None:
        assert PostService(site).list_posts(limit=2).data["count"] == 2

    def test_drafts_sort_last(self, site: Site) -> None:
        items = PostService(site).list_posts(include_drafts=True).data["items"]
        assert items[-1]["slug"] == "idea"
        assert items[-1]["draft"] is True
        assert items[-1]["date"] is None

    def test_unreadable_posts_become_warnings(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "2021-06-01-broken.md", "---\ntitle: [oops\n---\n")
        write_post(site_root, "2021-06-02-untitled.md", "no front matter\n")
        result = PostService(site).list_posts()
        assert result.data["count"] == 3
        assert len(result.warnings) == 2
        assert result.warnings[0].startswith("Skipped _posts/2021-06-01-broken.md:")

    def test_scalar_titles_listed(self, site: Site, site_root: Path) -> None:
        release = make_post(title="2021-06-01", date="2021-06-01")
        paths = [
            write_post(site_root, "2021-06-01-release.md", release),
            write_post(site_root, "2021-06-02-yes.md", make_post(title="true", date="2021-06-02")),
        ]
        assert CheckService(site).check(paths=paths).data["count"] == 0
        result = PostService(site).list_posts(limit=2)
        assert result.warnings == []
        assert [i["title"] for i in result.data["items"]] == ["true", "2021-06-01"]
        assert PostService(site).get_post("release").data["title"] == "2021-06-01"


@pytest.mark.usefixtures("blog")
class TestGetPost:
    def test_by_slug(self, site: Site) -> None:
        result = PostService(site).get_post("kotlin-channels")
        assert result.ok
        assert result.op == "get_post"
        assert result.data["title"] == "Kotlin Channels and Backpressure"
        assert result.data["headings"] == [
            {"level": 2, "text": "Rendezvous channels", "line": 10},
            {"level": 3, "text": "Buffered channels", "line": 18},
            {"level": 2, "text": "Conflated channels", "line": 22},
        ]
        assert result.data["code_blocks"] == 1
        assert result.data["languages"] == ["kotlin"]

    def test_by_file_name(self, site: Site) -> None:
        result = PostService(site).get_post("2020-05-01-older.md")
        assert result.data["slug"] == "older"

    def test_by_relative_path(self, site: Site) -> None:
        result = PostService(site).get_post("_posts/2019-11-20-compose.md")
        assert result.data["title"] == "Compose"
        assert result.data["headings"] == []

    def test_draft_by_slug(self, site: Site) -> None:
        result = PostService(site).get_post("idea")
        assert result.data["draft"] is True
        assert result.data["path"] == "_drafts/idea.md"

    def test_not_found(self, site: Site) -> None:
        result = PostService(site).get_post("missing")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_ambiguous_slug(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "2021-07-01-older.md", make_post(date="2021-07-01"))
        result = PostService(site).get_post("older")
        assert result.error is not None
        assert result.error.code == "AMBIGUOUS"
        assert sorted(result.error.detail["matches"]) == [
            "_posts/2020-05-01-older.md",
            "_posts/2021-07-01-older.md",
        ]

    def test_invalid_post(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "2021-06-01-broken.md", "---\ntitle: [oops\n---\n")
        result = PostService(site).get_post("broken")
        assert result.error is not None
        assert result.error.code == "INVALID_POST"
        assert result.error.detail["path"] == "_posts/2021-06-01-broken.md"


@pytest.mark.usefixtures("blog")
class TestCategories:
    def test_counts_most_used_first(self, site: Site) -> None:
        result = PostService(site).categories()
        assert result.op == "categories"
        assert result.data["items"] == [
            {"category": "kotlin", "posts": 2},
            {"category": "Android Basics", "posts": 1},
            {"category": "coroutines", "posts": 1},
        ]

    def test_drafts_counted_when_asked(self, site: Site, site_root: Path) -> None:
        write_post(
            site_root,
            "notes.md",
            "---\nlayout: post\ntitle: Notes\ncategories: drafts\n---\n",
            draft=True,
        )
        names = [r["category"] for r in PostService(site).categories().data["items"]]
        assert "drafts" not in names
        items = PostService(site).categories(include_drafts=True).data["items"]
        assert {"category": "drafts", "posts": 1} in items


def test_empty_site(site: Site) -> None:
    svc = PostService(site)
    assert svc.list_posts().data == {"items": [], "count": 0}
    assert svc.categories().data == {"items": [], "count": 0}
