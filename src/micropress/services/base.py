"""BaseService — abstract foundation for all micropress services.

Every service receives a :class:`Site` at construction time. The Site
provides configuration, path roots, the plugin hook relay and the silo
handler registry.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from micropress.infrastructure.site import Site

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class CreateService(BaseService):
            def create(self, operation: CreateOperation) -> ServiceResult:
                ...
    """

    def __init__(self, site: Site) -> None:
        self._site = site

    def _call_hook(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a plugin hook synchronously.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        hook_fn = getattr(self._site.plugin_manager.hook, hook_name)
        try:
            hook_fn(**payload)
        except Exception as exc:
            logger.warning("Hook %s failed: %s", hook_name, exc, exc_info=True)
            warnings.append(f"Hook {hook_name} failed: {exc}")

    def _build_site(self, warnings: list[str]) -> None:
        """Rebuild the rendered site; returns once the build has finished."""
        self._call_hook(
            "build_site",
            {"source_path": str(self._site.config.source_path)},
            warnings,
        )
