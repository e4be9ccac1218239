"""Tests for the PostFrontmatter model and its normalizers."""

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from postlint.domain.frontmatter import (
    RECOGNIZED_KEYS,
    PostFrontmatter,
    normalize_terms,
    parse_post_date,
)


class TestParsePostDate:
    @pytest.mark.parametrize(
        "value",
        [
            "2021-03-04",
            "2021-03-04 10:30",
            "2021-03-04 10:30:00",
            "2021-03-04 10:30:00 +0900",
            "2021-03-04T10:30:00",
            "2021-03-04T10:30:00+09:00",
        ],
    )
    def test_string_forms(self, value: str) -> None:
        assert parse_post_date(value) == date(2021, 3, 4)

    def test_date_object(self) -> None:
        assert parse_post_date(date(2020, 1, 2)) == date(2020, 1, 2)

    def test_datetime_object(self) -> None:
        value = datetime(2020, 1, 2, 23, 0, tzinfo=timezone(timedelta(hours=9)))
        assert parse_post_date(value) == date(2020, 1, 2)

    @pytest.mark.parametrize("value", ["", "yesterday", "2021-02-30", 20210304, None])
    def test_rejects(self, value: object) -> None:
        with pytest.raises(ValueError):
            parse_post_date(value)


class TestNormalizeTerms:
    def test_none(self) -> None:
        assert normalize_terms(None, split=True) == []

    def test_split_string(self) -> None:
        assert normalize_terms("kotlin coroutines", split=True) == ["kotlin", "coroutines"]

    def test_whole_string(self) -> None:
        assert normalize_terms("Android Basics", split=False) == ["Android Basics"]

    def test_list(self) -> None:
        assert normalize_terms(["a", 2], split=True) == ["a", "2"]

    def test_nested_list_rejected(self) -> None:
        with pytest.raises(ValueError):
            normalize_terms([["a"]], split=True)

    def test_mapping_rejected(self) -> None:
        with pytest.raises(ValueError):
            normalize_terms({"a": 1}, split=True)


class TestPostFrontmatter:
    def test_minimal(self) -> None:
        fm = PostFrontmatter.from_mapping({"title": "T", "date": "2021-03-04"})
        assert fm.title == "T"
        assert fm.date == date(2021, 3, 4)
        assert fm.categories == []
        assert fm.layout is None
        assert fm.published is True

    def test_category_and_categories_merge(self) -> None:
        fm = PostFrontmatter.from_mapping(
            {"title": "T", "category": "Android", "categories": "Android Kotlin"}
        )
        assert fm.categories == ["Android", "Kotlin"]

    def test_tags_string_split(self) -> None:
        fm = PostFrontmatter.from_mapping({"title": "T", "tags": "flutter fastlane"})
        assert fm.tags == ["flutter", "fastlane"]

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (2048, "2048"),
            (3.5, "3.5"),
            (date(2021, 3, 4), "2021-03-04"),
            (datetime(2021, 3, 4, 9, 30), "2021-03-04 09:30:00"),
            (True, "true"),
            (False, "false"),
        ],
    )
    def test_scalar_title_coerced(self, raw: object, expected: str) -> None:
        assert PostFrontmatter.from_mapping({"title": raw}).title == expected

    @pytest.mark.parametrize("raw", [["a"], {"a": 1}])
    def test_container_title_rejected(self, raw: object) -> None:
        with pytest.raises(ValidationError):
            PostFrontmatter.from_mapping({"title": raw})

    def test_blank_title_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PostFrontmatter.from_mapping({"title": "   "})

    def test_missing_title_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PostFrontmatter.from_mapping({"date": "2021-03-04"})

    def test_bad_date_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PostFrontmatter.from_mapping({"title": "T", "date": "someday"})

    def test_extra_keys_kept(self) -> None:
        fm = PostFrontmatter.from_mapping({"title": "T", "mood": "happy", "author": "x"})
        assert fm.extra_keys == ["author", "mood"]

    def test_frozen(self) -> None:
        fm = PostFrontmatter.from_mapping({"title": "T"})
        with pytest.raises(ValidationError):
            fm.title = "Changed"  # type: ignore[misc]

    def test_recognized_keys_cover_core_record(self) -> None:
        assert {"layout", "title", "date", "category", "categories"} <= RECOGNIZED_KEYS
