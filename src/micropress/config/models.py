"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, micropress.toml only contains
overrides. A working site needs only ``[site] base_url`` and
``[site] source_path``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class SiteConfig(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    base_url: str = "http://localhost:1313/"
    source_path: Path = Field(default_factory=Path.cwd)
    content_dir: str = "content"
    public_path: Path | None = None
    # Post type -> subdirectory of the content root (e.g. note = "notes").
    content_paths: dict[str, str] = Field(default_factory=dict)

    @field_validator("base_url")
    @classmethod
    def _trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else f"{value}/"

    @property
    def content_root(self) -> Path:
        return self.source_path / self.content_dir

    @property
    def public_root(self) -> Path:
        return self.public_path if self.public_path is not None else self.source_path / "public"


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    command: list[str] = Field(default_factory=lambda: ["hugo", "--quiet"])
    timeout: float = 120.0


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    local_dir: Path | None = None
    entry_points: bool = True
