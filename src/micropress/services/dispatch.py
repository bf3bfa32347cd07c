"""Route a parsed Micropub operation to the service that handles it."""

from __future__ import annotations

from typing import TYPE_CHECKING

from micropress.config.logging import operation_context
from micropress.domain.operations import (
    CreateOperation,
    DeleteOperation,
    Operation,
    UndeleteOperation,
    UpdateOperation,
)
from micropress.services.create import CreateService
from micropress.services.update import UpdateService

if TYPE_CHECKING:
    from micropress.infrastructure.site import Site
    from micropress.services.result import ServiceResult


def handle_operation(site: Site, operation: Operation) -> ServiceResult:
    """Run *operation* against *site*."""
    url = None if isinstance(operation, CreateOperation) else operation.url
    with operation_context(operation.action, url):
        if isinstance(operation, CreateOperation):
            return CreateService(site).create(operation)
        if isinstance(operation, UpdateOperation):
            return UpdateService(site).update(operation.url, operation.request)
        if isinstance(operation, DeleteOperation):
            return UpdateService(site).delete(operation.url)
        if isinstance(operation, UndeleteOperation):
            return UpdateService(site).undelete(operation.url)
    msg = f"Unsupported operation: {operation!r}"
    raise TypeError(msg)
