"""Tests for HugoBuildPlugin — subprocess-based site builds."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from micropress.config.models import BuildConfig
from micropress.domain.operations import UpdateRequest
from micropress.infrastructure.site import Site
from micropress.plugins.builtins.hugo import HugoBuildPlugin
from micropress.services.update import UpdateService
from tests.conftest import BASE_URL, write_post


class TestHugoBuildPlugin:
    def test_runs_command_in_source_dir(self, tmp_path: Path) -> None:
        plugin = HugoBuildPlugin(BuildConfig(command=["hugo", "--minify"], timeout=5))
        with patch("micropress.plugins.builtins.hugo.subprocess.run") as run:
            run.return_value = subprocess.CompletedProcess(["hugo"], 0, stdout="", stderr="")
            plugin.build_site(source_path=str(tmp_path))
        run.assert_called_once_with(
            ["hugo", "--minify"],
            cwd=str(tmp_path),
            capture_output=True,
            text=True,
            check=True,
            timeout=5,
        )

    def test_disabled(self, tmp_path: Path) -> None:
        plugin = HugoBuildPlugin(BuildConfig(enabled=False))
        with patch("micropress.plugins.builtins.hugo.subprocess.run") as run:
            plugin.build_site(source_path=str(tmp_path))
        run.assert_not_called()

    def test_empty_command(self, tmp_path: Path) -> None:
        plugin = HugoBuildPlugin(BuildConfig(command=[]))
        with patch("micropress.plugins.builtins.hugo.subprocess.run") as run:
            plugin.build_site(source_path=str(tmp_path))
        run.assert_not_called()

    def test_failure_propagates(self, tmp_path: Path) -> None:
        plugin = HugoBuildPlugin(BuildConfig())
        error = subprocess.CalledProcessError(1, ["hugo"], stderr="bad template")
        with patch("micropress.plugins.builtins.hugo.subprocess.run", side_effect=error):
            with pytest.raises(subprocess.CalledProcessError):
                plugin.build_site(source_path=str(tmp_path))


class TestBuildThroughServices:
    @pytest.fixture
    def building_site(self, settings) -> Site:
        s = Site(settings.model_copy(update={"build": BuildConfig(enabled=True)}))
        s.init_plugins(discover=False)
        return s

    def test_build_failure_becomes_warning(self, building_site: Site) -> None:
        write_post(building_site, "p.md", {"name": "P"})
        error = subprocess.CalledProcessError(1, ["hugo"])
        with patch("micropress.plugins.builtins.hugo.subprocess.run", side_effect=error):
            result = UpdateService(building_site).update(
                f"{BASE_URL}p/", UpdateRequest(add={"category": ["x"]})
            )
        assert result.ok
        assert any(w.startswith("Hook build_site failed") for w in result.warnings)

    def test_missing_hugo_becomes_warning(self, building_site: Site) -> None:
        write_post(building_site, "p.md", {"name": "P"})
        with patch(
            "micropress.plugins.builtins.hugo.subprocess.run",
            side_effect=FileNotFoundError("hugo"),
        ):
            result = UpdateService(building_site).update(
                f"{BASE_URL}p/", UpdateRequest(add={"category": ["x"]})
            )
        assert result.ok
        assert result.warnings
