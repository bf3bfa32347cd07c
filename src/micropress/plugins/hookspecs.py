"""Pluggy hook specifications for micropress.

Two setup-time hooks let plugins contribute reply/repost enrichers and
syndicators to the :class:`~micropress.plugins.registry.HandlerRegistry`.
Three lifecycle hooks fire around writes; ``build_site`` is the one the
built-in Hugo plugin implements.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from micropress.plugins.registry import Enricher, Syndicator

hookspec = pluggy.HookspecMarker("micropress")


class MicropressHookSpec:
    """Hook specifications for the micropress plugin system."""

    @hookspec
    def register_enrichers(self) -> list[Enricher] | None:
        """Return reply/repost enrichers keyed by their ``(host, relation)``."""

    @hookspec
    def register_syndicators(self) -> list[Syndicator] | None:
        """Return syndicators keyed by their target ``name``."""

    @hookspec
    def build_site(self, source_path: str) -> None:
        """Rebuild the rendered site after content changed."""

    @hookspec
    def post_create(self, path: str, url: str, properties: dict[str, Any]) -> None:
        """Called after a new post is written."""

    @hookspec
    def post_update(self, path: str, url: str, fields_changed: list[str]) -> None:
        """Called after an existing post is rewritten."""
