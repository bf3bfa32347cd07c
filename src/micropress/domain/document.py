"""Stored document codec — YAML front matter + body.

On-disk format (UTF-8)::

    ---
    <yaml mapping, keys sorted>
    ---
    <body>

Pure parsing utilities only; file I/O lives in
:mod:`micropress.infrastructure.filesystem` (infrastructure -> domain,
never the reverse).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from micropress.domain.errors import DecodeError
from micropress.domain.properties import PropertySet, as_property_set

_FRONTMATTER_DELIMITER = "---"
_DELIMITER_LINE = re.compile(r"^---$\n?", re.MULTILINE)


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    A new instance per call avoids corrupted internal emitter state from
    propagating across operations (ruamel.yaml's YAML object is stateful
    and a failed dump can leave it in a broken state).
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    # Long titles and URLs stay on one line.
    y.width = 4096
    return y


def _to_plain(value: Any) -> Any:
    """Strip ruamel's Commented* containers down to dict/list."""
    if isinstance(value, Mapping):
        return {str(k): _to_plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_plain(v) for v in value]
    return value


@dataclass
class Document:
    """A stored post: list-valued front matter plus an opaque body."""

    properties: PropertySet = field(default_factory=dict)
    body: str = ""


def decode(raw: str) -> Document:
    """Parse stored text into a :class:`Document`.

    The text is split on the first two lines that are exactly ``---``; the
    segment between them is YAML, everything after is the body (trimmed).
    Every front matter value is wrapped in a list.

    Raises:
        DecodeError: Fewer than two delimiter lines, invalid YAML, or
            front matter that is not a mapping.
    """
    normalized = raw.replace("\r\n", "\n")
    parts = _DELIMITER_LINE.split(normalized, maxsplit=2)
    if len(parts) < 3:
        msg = "Front matter delimiters not found"
        raise DecodeError(msg)

    try:
        loaded = _new_yaml().load(parts[1])
    except YAMLError as exc:
        msg = f"Invalid YAML front matter: {exc}"
        raise DecodeError(msg) from exc

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, Mapping):
        msg = f"Front matter must be a mapping, got {type(loaded).__name__}"
        raise DecodeError(msg)

    return Document(properties=as_property_set(_to_plain(loaded)), body=parts[2].strip())


def encode(properties: Mapping[str, Any], body: str) -> str:
    """Render front matter and body into the stored text form.

    Keys are sorted so rewriting unchanged data produces identical bytes.
    Accepts list-valued or normalized (scalar) properties.
    """
    ordered = {key: properties[key] for key in sorted(properties)}
    buf = StringIO()
    _new_yaml().dump(ordered, buf)
    return "".join(
        [
            _FRONTMATTER_DELIMITER,
            "\n",
            buf.getvalue(),
            _FRONTMATTER_DELIMITER,
            "\n",
            body,
            "\n",
        ]
    )
