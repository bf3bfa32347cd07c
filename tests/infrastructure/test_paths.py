"""Tests for URL <-> path resolution."""

from pathlib import Path

import pytest

from micropress.config.models import SiteConfig
from micropress.domain.errors import InvalidURL
from micropress.infrastructure.paths import post_location, url_to_artifact, url_to_path


@pytest.fixture
def site_config(tmp_path: Path) -> SiteConfig:
    return SiteConfig(
        base_url="https://example.com/",
        source_path=tmp_path,
        content_paths={"note": "notes"},
    )


class TestUrlToPath:
    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/my-post/index.html",
            "https://example.com/my-post/",
            "https://example.com/my-post",
        ],
    )
    def test_url_forms(self, site_config: SiteConfig, url: str) -> None:
        assert url_to_path(url, site_config) == site_config.content_root / "my-post.md"

    def test_nested(self, site_config: SiteConfig) -> None:
        path = url_to_path("https://example.com/notes/101530/index.html", site_config)
        assert path == site_config.content_root / "notes" / "101530.md"

    def test_foreign_host(self, site_config: SiteConfig) -> None:
        with pytest.raises(InvalidURL) as exc_info:
            url_to_path("https://other.example/my-post/", site_config)
        assert exc_info.value.code == "invalid_url"

    def test_site_root_is_not_a_post(self, site_config: SiteConfig) -> None:
        with pytest.raises(InvalidURL):
            url_to_path("https://example.com/", site_config)

    def test_traversal_rejected(self, site_config: SiteConfig) -> None:
        with pytest.raises(InvalidURL):
            url_to_path("https://example.com/../../etc/passwd", site_config)

    def test_base_url_without_trailing_slash(self, tmp_path: Path) -> None:
        config = SiteConfig(base_url="https://example.com", source_path=tmp_path)
        assert url_to_path("https://example.com/p/", config) == config.content_root / "p.md"


class TestUrlToArtifact:
    def test_index_html(self, site_config: SiteConfig) -> None:
        path = url_to_artifact("https://example.com/my-post/index.html", site_config)
        assert path == site_config.public_root / "my-post" / "index.html"

    def test_directory_url(self, site_config: SiteConfig) -> None:
        path = url_to_artifact("https://example.com/my-post/", site_config)
        assert path == site_config.public_root / "my-post" / "index.html"

    def test_custom_public_path(self, tmp_path: Path) -> None:
        config = SiteConfig(
            base_url="https://example.com/",
            source_path=tmp_path,
            public_path=tmp_path / "www",
        )
        path = url_to_artifact("https://example.com/p/", config)
        assert path == tmp_path / "www" / "p" / "index.html"

    def test_foreign_host(self, site_config: SiteConfig) -> None:
        with pytest.raises(InvalidURL):
            url_to_artifact("https://other.example/p/", site_config)


class TestPostLocation:
    def test_default_type_at_root(self, site_config: SiteConfig) -> None:
        path, url = post_location("article", "my-first-post", site_config)
        assert path == site_config.content_root / "my-first-post.md"
        assert url == "https://example.com/my-first-post/index.html"

    def test_type_subdirectory(self, site_config: SiteConfig) -> None:
        path, url = post_location("note", "101530", site_config)
        assert path == site_config.content_root / "notes" / "101530.md"
        assert url == "https://example.com/notes/101530/index.html"

    def test_location_inverts_to_same_path(self, site_config: SiteConfig) -> None:
        path, url = post_location("note", "abc", site_config)
        assert url_to_path(url, site_config) == path
