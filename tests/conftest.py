"""Shared pytest fixtures and test helpers for micropress tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import pluggy
import pytest
from click.testing import CliRunner

from micropress.config.models import BuildConfig, PluginsConfig, SiteConfig
from micropress.config.settings import MicropressSettings
from micropress.domain.document import encode
from micropress.infrastructure.site import Site

hookimpl = pluggy.HookimplMarker("micropress")

BASE_URL = "https://example.com/"
FIXED_NOW = datetime(2024, 5, 6, 10, 15, 30)


class RecordingPlugin:
    """Captures lifecycle hook calls instead of building anything."""

    def __init__(self) -> None:
        self.builds: list[str] = []
        self.created: list[dict[str, Any]] = []
        self.updated: list[dict[str, Any]] = []

    @hookimpl
    def build_site(self, source_path: str) -> None:
        self.builds.append(source_path)

    @hookimpl
    def post_create(self, path: str, url: str, properties: dict[str, Any]) -> None:
        self.created.append({"path": path, "url": url, "properties": properties})

    @hookimpl
    def post_update(self, path: str, url: str, fields_changed: list[str]) -> None:
        self.updated.append({"path": path, "url": url, "fields_changed": fields_changed})


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary Hugo source tree with ``content/`` and ``public/``."""
    (tmp_path / "content").mkdir()
    (tmp_path / "public").mkdir()
    return tmp_path


@pytest.fixture
def settings(site_root: Path) -> MicropressSettings:
    """Settings for the temp site; notes live under ``content/notes``."""
    return MicropressSettings(
        site=SiteConfig(
            base_url=BASE_URL,
            source_path=site_root,
            content_paths={"note": "notes"},
        ),
        build=BuildConfig(enabled=False),
        plugins=PluginsConfig(entry_points=False),
        syndication={"mastodon": {"instance": "https://social.example"}},
    )


@pytest.fixture
def cli_config(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A micropress.toml for the temp site, for ``micropress -c``."""
    monkeypatch.delenv("MICROPRESS_CONFIG", raising=False)
    path = site_root / "micropress.toml"
    path.write_text(
        f'[site]\nbase_url = "{BASE_URL}"\nsource_path = "."\n'
        '[site.content_paths]\nnote = "notes"\n'
        "[build]\nenabled = false\n"
        "[plugins]\nentry_points = false\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def recorder() -> RecordingPlugin:
    return RecordingPlugin()


@pytest.fixture
def site(settings: MicropressSettings, recorder: RecordingPlugin) -> Site:
    """Site with the built-in plugins plus a hook recorder, no discovery."""
    s = Site(settings)
    s.plugin_manager.register_plugin(recorder, name="recorder")
    s.init_plugins(discover=False)
    return s


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def write_post(site: Site, relative: str, properties: dict[str, Any], body: str = "") -> Path:
    """Store a post under the content root, returning its path."""
    path = site.content_root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode(properties, body), encoding="utf-8")
    return path
