"""CreateService — new post pipeline.

Pipeline: TYPE → ENRICH → SLUG → LOCATE → PERSIST → BUILD → SYNDICATE → RESPOND

The post is written once with overwrite disabled, the site is rebuilt,
and only then are syndication targets contacted. Syndicated URLs are
folded back into the front matter with a second write that does not
trigger another build.
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime
from typing import Any

from micropress.domain.document import encode
from micropress.domain.errors import InvalidSlug, PublishError
from micropress.domain.operations import CreateOperation
from micropress.domain.properties import normalize, slugify
from micropress.infrastructure.filesystem import write_file
from micropress.infrastructure.paths import post_location
from micropress.plugins.registry import RELATION_PROPERTIES, target_host
from micropress.services.base import BaseService
from micropress.services.result import ServiceResult

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
NOTE_SLUG_FORMAT = "%H%M%S"


def _first(value: Any) -> Any:
    if isinstance(value, list):
        return value[0] if value else ""
    return value


def extract_content(properties: dict[str, Any]) -> str:
    """Pop ``content`` off normalized *properties* and return the body text.

    MF2 content is either a plain string or an object carrying ``html``
    (preferred) or ``value``. No content yields an empty body.
    """
    content = _first(properties.pop("content", ""))
    if isinstance(content, dict):
        if "html" in content:
            return str(content["html"])
        return str(content.get("value", ""))
    return str(content)


class CreateService(BaseService):
    """Turns a Micropub create into a stored post."""

    def create(
        self,
        operation: CreateOperation,
        *,
        now: datetime | None = None,
    ) -> ServiceResult:
        """Create a post from *operation*.

        Args:
            operation: The validated create request.
            now: Clock override for the default date and note slugs.
        """
        op = "create"
        warnings: list[str] = []
        now = now or datetime.now()

        # ── TYPE ─────────────────────────────────────────────
        post_type = operation.post_type
        properties = normalize(operation.properties)
        content = extract_content(properties)
        # Everything starts as an article and is revised as we learn more.
        properties["posttype"] = "article"

        # ── ENRICH ───────────────────────────────────────────
        properties, content = self._enrich(properties, content, warnings)

        if operation.photos:
            existing = properties.get("photo", [])
            if not isinstance(existing, list):
                existing = [existing]
            properties["photo"] = existing + list(operation.photos)

        properties.setdefault("date", now.strftime(DATE_FORMAT))

        status = properties.pop("post-status", None)
        properties["published"] = _first(status) != "draft"

        # ── SLUG ─────────────────────────────────────────────
        if "slug" not in properties and operation.requested_slug:
            properties["slug"] = operation.requested_slug

        if post_type == "entry" and "name" not in properties and "slug" not in properties:
            # Untitled, unslugged entries are notes.
            post_type = "note"
            properties["slug"] = now.strftime(NOTE_SLUG_FORMAT)
            if properties["posttype"] == "article":
                properties["posttype"] = "note"

        if "name" in properties and "slug" not in properties:
            properties["slug"] = _first(properties["name"])
        if "slug" in properties:
            properties["slug"] = slugify(_first(properties["slug"]))

        slug = properties.get("slug", "")
        try:
            if not slug:
                msg = "A post needs a title or a slug"
                raise InvalidSlug(msg)

            # ── LOCATE / PERSIST ─────────────────────────────
            path, url = post_location(post_type, slug, self._site.config)
            write_file(path, encode(properties, content), overwrite=False)
        except PublishError as exc:
            logger.info("Create failed: %s", exc.message)
            return ServiceResult.failure(op, exc, warnings)

        logger.info("Created %s post %s", properties["posttype"], path)

        # ── BUILD ────────────────────────────────────────────
        self._build_site(warnings)
        self._call_hook(
            "post_create",
            {"path": str(path), "url": url, "properties": dict(properties)},
            warnings,
        )

        # ── SYNDICATE ────────────────────────────────────────
        syndicated = self._syndicate(operation.syndicate_to, properties, content, url, warnings)
        if syndicated:
            properties.update(syndicated)
            try:
                write_file(path, encode(properties, content), overwrite=True)
            except PublishError as exc:
                logger.warning("Could not record syndication URLs: %s", exc.message)
                warnings.append(f"Syndication URLs not saved: {exc.message}")

        # ── RESPOND ──────────────────────────────────────────
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "url": url,
                "path": str(path),
                "slug": slug,
                "posttype": properties["posttype"],
                "published": properties["published"],
                "syndication": syndicated,
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _enrich(
        self,
        properties: dict[str, Any],
        content: str,
        warnings: list[str],
    ) -> tuple[dict[str, Any], str]:
        """Hand a reply or repost to the enricher for its silo, if any.

        A post is a reply or a repost, never both: only the first relation
        found (repost, then reply) is enriched.
        """
        present = [prop for prop in RELATION_PROPERTIES if prop in properties]
        if not present:
            return properties, content
        if len(present) > 1:
            warnings.append(f"Post has {' and '.join(present)}; only {present[0]} is enriched")

        prop = present[0]
        relation = RELATION_PROPERTIES[prop]
        host = target_host(properties[prop])
        enricher = self._site.registry.enricher_for(host, relation)
        if enricher is None:
            return properties, content

        try:
            new_properties, new_content = enricher.apply(copy.deepcopy(properties), content)
        except Exception as exc:
            logger.warning("Enricher for %s %s failed: %s", host, relation, exc, exc_info=True)
            warnings.append(f"{relation} enrichment for {host} failed: {exc}")
            return properties, content
        logger.debug("Enriched %s of %s", relation, host)
        return dict(new_properties), str(new_content)

    def _syndicate(
        self,
        targets: list[str],
        properties: dict[str, Any],
        content: str,
        url: str,
        warnings: list[str],
    ) -> dict[str, str]:
        """Send the post to each requested target; collect ``<target>-url``."""
        syndicated: dict[str, str] = {}
        for target in targets:
            syndicator = self._site.registry.syndicator_for(target)
            if syndicator is None:
                warnings.append(f"No syndicator registered for {target!r}")
                continue
            config = self._site.syndication_config(target) or {}
            try:
                result = syndicator.syndicate(config, copy.deepcopy(properties), content, url)
            except Exception as exc:
                logger.warning("Syndication to %s failed: %s", target, exc, exc_info=True)
                warnings.append(f"Syndication to {target} failed: {exc}")
                continue
            if result:
                syndicated[f"{target}-url"] = str(result)
        return syndicated
