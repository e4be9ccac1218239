"""Tests for the format_result dispatcher and OutputSettings."""

import json

from postlint.output.formatters import OutputSettings, format_result
from postlint.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError(code="ERR", message=msg))


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(
            _ok("create_post", path="_posts/2021-03-04-a.md"),
            settings=OutputSettings(json_output=True),
        )
        data = json.loads(output)
        assert data["ok"] is True
        assert data["op"] == "create_post"
        assert data["data"]["path"] == "_posts/2021-03-04-a.md"

    def test_json_mode_error(self) -> None:
        output = format_result(_err("get_post", "Bad"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is False
        assert data["error"]["code"] == "ERR"
        assert data["error"]["message"] == "Bad"

    def test_json_beats_quiet(self) -> None:
        output = format_result(_ok(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["ok"] is True


class TestFormatResultQuiet:
    def test_quiet_path(self) -> None:
        output = format_result(
            _ok("create_post", path="_posts/2021-03-04-a.md", title="A"),
            settings=OutputSettings(quiet=True),
        )
        assert output == "_posts/2021-03-04-a.md"

    def test_quiet_error(self) -> None:
        output = format_result(_err("get_post", "Nope"), settings=OutputSettings(quiet=True))
        assert output.startswith("ERROR: get_post")
        assert "Nope" in output


class TestFormatResultDefault:
    def test_defaults_to_rich_rendering(self) -> None:
        output = format_result(_ok("something", key="val"))
        assert "OK" in output
        assert "something" in output
        assert "key" in output
