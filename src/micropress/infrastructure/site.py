"""Site — the single dependency injected into every service.

Bundles the frozen settings with the plugin manager and the handler
registry. Nothing here is mutable per request: the registry is filled
once by :meth:`Site.init_plugins` and only read afterwards.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from micropress.plugins.builtins.hugo import HugoBuildPlugin
from micropress.plugins.manager import PluginManager
from micropress.plugins.registry import HandlerRegistry

if TYPE_CHECKING:
    from pathlib import Path

    from micropress.config.models import SiteConfig
    from micropress.config.settings import MicropressSettings

logger = logging.getLogger(__name__)


class Site:
    """A Hugo source tree plus the hooks that act on it."""

    def __init__(self, settings: MicropressSettings) -> None:
        self.settings = settings
        self.plugin_manager = PluginManager()
        self.registry = HandlerRegistry()

    @property
    def config(self) -> SiteConfig:
        return self.settings.site

    @property
    def content_root(self) -> Path:
        return self.settings.site.content_root

    def syndication_config(self, target: str) -> dict[str, Any] | None:
        """Silo settings for *target*, or None when it is not configured."""
        return self.settings.syndication.get(target)

    def init_plugins(self, *, discover: bool = True) -> list[str]:
        """Register the Hugo build plugin, discover the rest, fill the registry.

        Returns the names of all registered plugins.
        """
        self.plugin_manager.register_plugin(HugoBuildPlugin(self.settings.build), name="hugo")
        if discover:
            self.plugin_manager.discover_and_load(
                local_dir=self.settings.plugins.local_dir,
                entry_points=self.settings.plugins.entry_points,
            )
        self.plugin_manager.populate_registry(self.registry)
        names = self.plugin_manager.list_plugin_names()
        logger.debug(
            "Plugins loaded: %s (enrichers=%s, syndicators=%s)",
            names,
            self.registry.enrichers,
            self.registry.syndicators,
        )
        return names
