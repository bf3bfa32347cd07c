"""Tests for the format_result dispatcher and OutputSettings."""

import json

from micropress.output.console import MICROPRESS_THEME, create_console, get_output
from micropress.output.formatters import OutputSettings, format_result
from micropress.services.result import ServiceError, ServiceResult


def _ok(op: str = "create", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "create", msg: str = "fail") -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="file_conflict", message=msg, detail={"path": "/x.md"}),
    )


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_theme_styles(self) -> None:
        assert "mp.ok" in MICROPRESS_THEME.styles
        assert "mp.url" in MICROPRESS_THEME.styles


class TestFormatResultJSON:
    def test_valid_json(self) -> None:
        result = _ok(url="https://example.com/p/")
        output = format_result(result, settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["op"] == "create"
        assert data["data"]["url"] == "https://example.com/p/"

    def test_error_json(self) -> None:
        data = json.loads(format_result(_err(), settings=OutputSettings(json_output=True)))
        assert data["ok"] is False
        assert data["error"]["code"] == "file_conflict"


class TestFormatResultQuiet:
    def test_url_only(self) -> None:
        result = _ok(url="https://example.com/p/")
        output = format_result(result, settings=OutputSettings(quiet=True))
        assert output == "https://example.com/p/"

    def test_without_url(self) -> None:
        assert format_result(_ok("update"), settings=OutputSettings(quiet=True)) == "OK: update"

    def test_error(self) -> None:
        output = format_result(_err(msg="exists"), settings=OutputSettings(quiet=True))
        assert output.startswith("ERROR: create")
        assert "exists" in output


class TestFormatResultHuman:
    def test_success_lists_data(self) -> None:
        output = format_result(_ok(slug="hello", fields_changed=["name", "published"]))
        assert output.startswith("OK")
        assert "slug: hello" in output
        assert 'fields_changed: ["name","published"]' in output

    def test_error_message(self) -> None:
        output = format_result(_err(msg="The specified file exists"))
        assert "ERROR" in output
        assert "The specified file exists" in output
        assert "code:" not in output

    def test_verbose_error_detail(self) -> None:
        output = format_result(_err(), settings=OutputSettings(verbose=True))
        assert "code: file_conflict" in output
        assert "path: /x.md" in output
