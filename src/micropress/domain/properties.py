"""Property sets — the MF2 ``name -> [values]`` shape and its boundaries.

Internally every property value is a list, even singletons. Two boundaries
convert between that shape and the looser one found in the wild:

- :func:`as_property_set` wraps scalars into singleton lists (ingress,
  decoding stored front matter).
- :func:`normalize` collapses singleton lists to scalars (egress, the shape
  the Hugo templates expect).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

PropertySet = dict[str, list[Any]]

# Hugo templates iterate over photos, so they stay a list even when single.
ALWAYS_LIST: frozenset[str] = frozenset({"photo"})

_SLUG_STRIP = re.compile(r"[^-\w]", re.ASCII)


def as_property_set(mapping: Mapping[str, Any]) -> PropertySet:
    """Return *mapping* with every value wrapped in a list.

    Values that are already lists are copied, so callers may mutate the
    result without touching the source.
    """
    props: PropertySet = {}
    for key, value in mapping.items():
        if isinstance(value, list):
            props[str(key)] = list(value)
        else:
            props[str(key)] = [value]
    return props


def normalize(properties: Mapping[str, Any]) -> dict[str, Any]:
    """Collapse single-element lists into scalars.

    ``photo`` is left untouched. MF2 calls the title ``name``; Hugo wants
    ``title``, so it is copied over when (and only when) ``name`` exists.
    Applying this twice yields the same result as applying it once.
    """
    props: dict[str, Any] = {}
    for key, value in properties.items():
        if key in ALWAYS_LIST:
            props[key] = value
        elif isinstance(value, list) and len(value) == 1:
            props[key] = value[0]
        else:
            props[key] = value
    if "name" in props:
        props["title"] = props["name"]
    return props


def slugify(text: str) -> str:
    """Turn *text* into a URL-safe slug.

    Spaces become hyphens; anything outside ``[A-Za-z0-9_-]`` is dropped.
    Non-ASCII input is not transliterated.

        >>> slugify("Hello World!")
        'hello-world'
    """
    return _SLUG_STRIP.sub("", str(text).replace(" ", "-")).lower()
