"""Command: show the stored source of a post (Micropub ``q=source``)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from micropress.commands._base import MicropressCommand
from micropress.config.logging import operation_context
from micropress.services.source import SourceService

if TYPE_CHECKING:
    from micropress.commands._context import AppContext


@click.command(
    cls=MicropressCommand,
    examples="""\
  micropress --json source https://example.com/my-post/
  micropress source https://example.com/my-post/ --property name --property category""",
)
@click.argument("url")
@click.option("--property", "properties", multiple=True, help="Only return NAME (repeatable).")
@click.pass_obj
def source(app: AppContext, url: str, properties: tuple[str, ...]) -> None:
    """Print the properties stored for the post at URL."""
    with operation_context("source", url):
        result = SourceService(app.site).source(url, list(properties) or None)
    app.emit(result)
