"""Filesystem operations for the Hugo content tree.

INVARIANT: Files are truth. There is no in-memory cache; every request
reads the document it needs and writes the result back.

Pure parsing/rendering utilities live in :mod:`micropress.domain.document`
(correct dependency direction: infrastructure -> domain). This module
handles the actual file I/O.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from micropress.domain.document import Document, decode
from micropress.domain.errors import (
    DirectoryCreateFailed,
    FileConflict,
    FileWriteFailed,
    NotFound,
    UnlinkFailed,
)

logger = logging.getLogger(__name__)

# Hugo only lists a directory as a section when it has an _index.md.
SECTION_INDEX = "_index.md"


def read_document(path: Path) -> Document:
    """Read and decode a stored post.

    Raises:
        NotFound: *path* does not exist.
        DecodeError: The file has no valid front matter.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"No post source at {path}"
        raise NotFound(msg, path=str(path)) from exc
    return decode(raw)


def ensure_directory(directory: Path) -> None:
    """Create *directory* (and parents), seeding each new one with ``_index.md``.

    Raises:
        DirectoryCreateFailed: Any directory could not be created.
    """
    missing: list[Path] = []
    current = directory
    while not current.exists():
        missing.append(current)
        if current.parent == current:
            break
        current = current.parent

    if not current.is_dir():
        msg = "The content directory could not be created."
        raise DirectoryCreateFailed(msg, path=str(current))

    for new_dir in reversed(missing):
        try:
            new_dir.mkdir()
            (new_dir / SECTION_INDEX).touch()
        except OSError as exc:
            msg = "The content directory could not be created."
            raise DirectoryCreateFailed(msg, path=str(new_dir)) from exc
        logger.debug("Created content directory %s", new_dir)


def write_file(path: Path, content: str, *, overwrite: bool = False) -> None:
    """Persist *content* at *path*.

    The text is written to a temporary sibling and renamed into place, so a
    failed write never leaves a truncated post behind.

    Raises:
        DirectoryCreateFailed: The parent directory could not be created.
        FileConflict: *path* exists and *overwrite* is False.
        FileWriteFailed: Any other I/O failure.
    """
    ensure_directory(path.parent)
    if path.exists() and not overwrite:
        msg = "The specified file exists"
        raise FileConflict(msg, path=str(path))

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        if overwrite:
            os.replace(tmp_name, path)
        else:
            # Hard-link claims the name atomically: a concurrent create of
            # the same slug loses with FileExistsError instead of clobbering.
            os.link(tmp_name, path)
            os.unlink(tmp_name)
        tmp_name = None
    except FileExistsError as exc:
        msg = "The specified file exists"
        raise FileConflict(msg, path=str(path)) from exc
    except OSError as exc:
        msg = "Unable to write the Markdown file"
        raise FileWriteFailed(msg, path=str(path)) from exc
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)

    logger.debug("Wrote %s (overwrite=%s)", path, overwrite)


def remove_artifact(path: Path) -> bool:
    """Delete a rendered file. Returns False when there was nothing to delete.

    Raises:
        UnlinkFailed: The file exists but could not be removed.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        logger.debug("No rendered artifact at %s", path)
        return False
    except OSError as exc:
        msg = "Unable to delete the rendered file."
        raise UnlinkFailed(msg, path=str(path)) from exc
    return True
