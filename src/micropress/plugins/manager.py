"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus local directory discovery from a configured plugin directory.
Capabilities: silo enrichers, syndicators, build and lifecycle hooks.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path

import pluggy

from micropress.plugins.hookspecs import MicropressHookSpec
from micropress.plugins.registry import Enricher, HandlerRegistry, Syndicator

PROJECT_NAME = "micropress"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(MicropressHookSpec)

    def discover_and_load(
        self,
        *,
        local_dir: Path | None = None,
        entry_points: bool = True,
    ) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Uses pluggy's native setuptools entry_point discovery for the
        ``micropress.plugins`` group, then scans *local_dir* for single-file
        Python plugins.

        Returns a list of loaded plugin names.
        """
        if entry_points:
            self._pm.load_setuptools_entrypoints("micropress.plugins")
            self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Handler registry
    # ------------------------------------------------------------------

    def populate_registry(self, registry: HandlerRegistry) -> HandlerRegistry:
        """Collect enrichers and syndicators from every registered plugin.

        A plugin that raises or returns malformed handlers is skipped with a
        warning; the rest still load.
        """
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            for handler in self._collect(plugin, plugin_name, "register_enrichers"):
                if not isinstance(handler, Enricher):
                    logger.warning("Plugin %s returned a non-enricher: %r", plugin_name, handler)
                    continue
                try:
                    registry.add_enricher(handler)
                except ValueError:
                    logger.warning("Skipping enricher from %s", plugin_name, exc_info=True)
            for handler in self._collect(plugin, plugin_name, "register_syndicators"):
                if not isinstance(handler, Syndicator):
                    logger.warning("Plugin %s returned a non-syndicator: %r", plugin_name, handler)
                    continue
                try:
                    registry.add_syndicator(handler)
                except ValueError:
                    logger.warning("Skipping syndicator from %s", plugin_name, exc_info=True)
        return registry

    @staticmethod
    def _collect(plugin: object, plugin_name: str, hook_name: str) -> list[object]:
        hook = getattr(plugin, hook_name, None)
        if hook is None:
            return []
        try:
            handlers = hook()
        except Exception:
            logger.warning(
                "Failed to collect %s from plugin %s",
                hook_name,
                plugin_name,
                exc_info=True,
            )
            return []
        if handlers is None:
            return []
        if not isinstance(handlers, (list, tuple)):
            logger.warning("Plugin %s returned non-list from %s", plugin_name, hook_name)
            return []
        return list(handlers)

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes inside the module that carry pluggy hookimpl-decorated
        methods are instantiated and registered.

        Errors are logged as warnings but never raised — a broken local plugin
        must not prevent the rest of the system from starting.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"micropress_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue  # skip imported classes
                if not self._has_hook_impls(obj):
                    continue
                try:
                    instance = obj()
                    self.register_plugin(instance, name=f"{module_name}.{obj.__name__}")
                    logger.debug("Loaded local plugin %s from %s", obj.__name__, py_file)
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("micropress")`` sets a ``micropress_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "micropress_impl", None):
                return True
        return False
