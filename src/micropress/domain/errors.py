"""Error taxonomy for post operations.

Every failure that terminates a request is a :class:`PublishError` subclass
carrying a machine-readable ``code``. Domain and infrastructure code raise
these; the service layer converts them into ``ServiceResult(ok=False)``.
None of them are retried.
"""

from __future__ import annotations

from typing import Any


class PublishError(Exception):
    """Base class for terminal request failures."""

    code: str = "error"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidURL(PublishError):
    code = "invalid_url"


class NotFound(PublishError):
    code = "not_found"


class DecodeError(PublishError):
    code = "malformed_front_matter"


class InvalidSlug(PublishError):
    code = "invalid_slug"


class DirectoryCreateFailed(PublishError):
    code = "cannot_mkdir"


class FileConflict(PublishError):
    code = "file_conflict"


class FileWriteFailed(PublishError):
    code = "file_error"


class UnlinkFailed(PublishError):
    code = "unlink_failed"
