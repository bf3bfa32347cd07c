"""Explicit registry of silo handlers.

Reply/repost enrichers are looked up by the host of the post being
replied to or reposted plus the relation; syndicators by target name.
The registry is filled once at startup (see
:meth:`micropress.plugins.manager.PluginManager.populate_registry`) and
is read-only afterwards.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Protocol, runtime_checkable
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

Relation = Literal["reply", "repost"]

# MF2 property -> relation, in lookup order.
RELATION_PROPERTIES: dict[str, Relation] = {
    "repost-of": "repost",
    "in-reply-to": "reply",
}


@runtime_checkable
class Enricher(Protocol):
    """Rewrites a reply or repost using context fetched from the silo."""

    host: str
    relation: Relation

    def apply(
        self, properties: dict[str, Any], content: str
    ) -> tuple[dict[str, Any], str]: ...


@runtime_checkable
class Syndicator(Protocol):
    """Copies a published post to a silo, returning the copy's URL."""

    name: str

    def syndicate(
        self,
        config: dict[str, Any],
        properties: dict[str, Any],
        content: str,
        url: str,
    ) -> str | None | Literal[False]: ...


def target_host(url: object) -> str:
    """Lower-cased host of *url*, or ``""`` when it has none."""
    if isinstance(url, list):
        url = url[0] if url else ""
    if isinstance(url, dict):
        # MF2 h-cite objects carry the URL in their own properties.
        url = url.get("properties", {}).get("url", [""])[0]
    return (urlsplit(str(url)).hostname or "").lower()


class HandlerRegistry:
    """Enrichers by ``(host, relation)`` and syndicators by name."""

    def __init__(self) -> None:
        self._enrichers: dict[tuple[str, Relation], Enricher] = {}
        self._syndicators: dict[str, Syndicator] = {}

    def add_enricher(self, enricher: Enricher) -> None:
        key = (enricher.host.lower(), enricher.relation)
        if key in self._enrichers and self._enrichers[key] is not enricher:
            msg = f"Enricher for {key[1]} on {key[0]!r} is already registered"
            raise ValueError(msg)
        self._enrichers[key] = enricher

    def add_syndicator(self, syndicator: Syndicator) -> None:
        existing = self._syndicators.get(syndicator.name)
        if existing is not None and existing is not syndicator:
            msg = f"Syndicator {syndicator.name!r} is already registered"
            raise ValueError(msg)
        self._syndicators[syndicator.name] = syndicator

    def enricher_for(self, host: str, relation: Relation) -> Enricher | None:
        return self._enrichers.get((host.lower(), relation))

    def syndicator_for(self, name: str) -> Syndicator | None:
        return self._syndicators.get(name)

    @property
    def enrichers(self) -> list[tuple[str, Relation]]:
        return sorted(self._enrichers)

    @property
    def syndicators(self) -> list[str]:
        return sorted(self._syndicators)
