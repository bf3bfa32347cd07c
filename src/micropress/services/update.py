"""UpdateService — rewriting, deleting, and restoring stored posts.

Pipeline: RESOLVE → READ → APPLY → NORMALIZE → WRITE → UNLINK → BUILD → RESPOND

Delete and undelete are updates of ``published``; delete additionally
removes the rendered page so it disappears before the next build.
"""

from __future__ import annotations

import logging
from typing import Any

from micropress.domain.document import encode
from micropress.domain.errors import PublishError
from micropress.domain.operations import UpdateRequest
from micropress.domain.properties import normalize
from micropress.domain.update import apply_update
from micropress.infrastructure.filesystem import read_document, remove_artifact, write_file
from micropress.infrastructure.paths import url_to_artifact, url_to_path
from micropress.services.base import BaseService
from micropress.services.result import ServiceResult

logger = logging.getLogger(__name__)


def _changed_fields(request: UpdateRequest) -> list[str]:
    names = set(request.replace) | set(request.add) | set(request.delete)
    return sorted(names)


class UpdateService(BaseService):
    """Handles update, delete, and undelete of existing posts."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update(self, url: str, request: UpdateRequest) -> ServiceResult:
        """Apply *request* to the post published at *url*."""
        return self._rewrite("update", url, request)

    def delete(self, url: str) -> ServiceResult:
        """Unpublish the post at *url*, then remove its rendered page.

        The source is rewritten first. If the page cannot be removed the
        post stays unpublished and a repeated delete retries the unlink.
        """
        return self._rewrite(
            "delete", url, UpdateRequest(replace={"published": [False]}), remove_page=True
        )

    def undelete(self, url: str) -> ServiceResult:
        """Republish the post at *url*; the next build regenerates its page."""
        return self._rewrite("undelete", url, UpdateRequest(replace={"published": [True]}))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _rewrite(
        self, op: str, url: str, request: UpdateRequest, *, remove_page: bool = False
    ) -> ServiceResult:
        warnings: list[str] = []
        if request.is_empty():
            warnings.append("No changes requested")

        # ── RESOLVE / READ ───────────────────────────────────
        try:
            path = url_to_path(url, self._site.config)
            document = read_document(path)

            # ── APPLY / NORMALIZE / WRITE ────────────────────
            properties = normalize(apply_update(document.properties, request))
            write_file(path, encode(properties, document.body), overwrite=True)

            # ── UNLINK ───────────────────────────────────────
            removed = remove_page and remove_artifact(url_to_artifact(url, self._site.config))
        except PublishError as exc:
            logger.info("%s of %s failed: %s", op, url, exc.message)
            return ServiceResult.failure(op, exc, warnings)

        fields_changed = _changed_fields(request)
        logger.info("%s %s (%s)", op, path, ", ".join(fields_changed))

        # ── BUILD ────────────────────────────────────────────
        self._build_site(warnings)
        self._call_hook(
            "post_update",
            {"path": str(path), "url": url, "fields_changed": fields_changed},
            warnings,
        )

        # ── RESPOND ──────────────────────────────────────────
        data: dict[str, Any] = {"url": url, "path": str(path), "fields_changed": fields_changed}
        if remove_page:
            data["artifact_removed"] = removed
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
