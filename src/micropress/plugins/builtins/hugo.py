"""Built-in Hugo plugin: rebuilds the site after content changes.

Runs the configured build command (``hugo --quiet`` by default) inside the
Hugo source directory and waits for it to finish, so that once a request
is acknowledged its page is already rendered.

Failures propagate to the caller, which records them as warnings; a
broken build never undoes a successful write.
"""

from __future__ import annotations

import logging
import subprocess

import pluggy

from micropress.config.models import BuildConfig

hookimpl = pluggy.HookimplMarker("micropress")

logger = logging.getLogger(__name__)


class HugoBuildPlugin:
    """Invoke the static-site builder on ``build_site``."""

    def __init__(self, config: BuildConfig | None = None) -> None:
        self._config = config or BuildConfig()

    @hookimpl
    def build_site(self, source_path: str) -> None:
        """Run the build command in *source_path*. Raises on failure."""
        if not self._config.enabled or not self._config.command:
            logger.debug("Site build disabled")
            return
        result = subprocess.run(
            self._config.command,
            cwd=source_path,
            capture_output=True,
            text=True,
            check=True,
            timeout=self._config.timeout,
        )
        logger.debug("Site build finished: %s", result.stdout.strip())
