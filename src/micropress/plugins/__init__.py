"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from micropress.plugins.manager import PluginManager
from micropress.plugins.registry import Enricher, HandlerRegistry, Syndicator

__all__ = ["Enricher", "HandlerRegistry", "PluginManager", "Syndicator"]
