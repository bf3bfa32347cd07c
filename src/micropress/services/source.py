"""SourceService — the Micropub ``q=source`` read path."""

from __future__ import annotations

from micropress.domain.errors import PublishError
from micropress.infrastructure.filesystem import read_document
from micropress.infrastructure.paths import url_to_path
from micropress.services.base import BaseService
from micropress.services.result import ServiceResult


class SourceService(BaseService):
    """Returns the stored properties of a post, list-valued."""

    def source(self, url: str, properties: list[str] | None = None) -> ServiceResult:
        """Decode the post at *url*.

        The body is exposed as ``content`` alongside the front matter. When
        *properties* is given, only those names are returned; names the post
        does not have are skipped.
        """
        op = "source"
        try:
            document = read_document(url_to_path(url, self._site.config))
        except PublishError as exc:
            return ServiceResult.failure(op, exc)

        props = dict(document.properties)
        props["content"] = [document.body]
        if properties:
            props = {name: props[name] for name in properties if name in props}
        return ServiceResult(ok=True, op=op, data={"properties": props})
