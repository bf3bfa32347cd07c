"""Tests for SourceService."""

from micropress.services.source import SourceService
from tests.conftest import BASE_URL, write_post


class TestSource:
    def test_all_properties(self, site) -> None:
        write_post(site, "hello.md", {"name": "Hello", "category": ["a", "b"]}, "Body")
        result = SourceService(site).source(f"{BASE_URL}hello/")
        assert result.ok
        assert result.data["properties"] == {
            "category": ["a", "b"],
            "content": ["Body"],
            "name": ["Hello"],
        }

    def test_filtered(self, site) -> None:
        write_post(site, "hello.md", {"name": "Hello", "category": ["a"]}, "Body")
        result = SourceService(site).source(
            f"{BASE_URL}hello/", properties=["name", "content", "missing"]
        )
        assert result.data["properties"] == {"name": ["Hello"], "content": ["Body"]}

    def test_not_found(self, site) -> None:
        result = SourceService(site).source(f"{BASE_URL}nope/")
        assert not result.ok
        assert result.error.code == "not_found"

    def test_invalid_url(self, site) -> None:
        result = SourceService(site).source("https://elsewhere.example/hello/")
        assert not result.ok
        assert result.error.code == "invalid_url"
