"""Command: create a post from MF2 JSON or command-line properties."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click
from pydantic import ValidationError

from micropress.commands._base import MicropressCommand, invalid_request, load_json_payload
from micropress.config.logging import operation_context
from micropress.domain.operations import parse_create
from micropress.services.create import CreateService

if TYPE_CHECKING:
    from micropress.commands._context import AppContext


def _options_payload(
    name: str | None,
    content: str | None,
    categories: tuple[str, ...],
    slug: str | None,
    draft: bool,
) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    if name is not None:
        properties["name"] = [name]
    if content is not None:
        properties["content"] = [content]
    if categories:
        properties["category"] = list(categories)
    if slug is not None:
        properties["slug"] = [slug]
    if draft:
        properties["post-status"] = ["draft"]
    return {"type": ["h-entry"], "properties": properties}


@click.command(
    cls=MicropressCommand,
    examples="""\
  micropress create --name "My First Post" --content "Hello there."
  micropress create --content "Just a quick note" --category life
  micropress create post.json --syndicate-to mastodon
  cat post.json | micropress --json create -
  micropress create --content "Sunset" --photo /img/sunset.jpg""",
)
@click.argument("payload", required=False)
@click.option("--name", default=None, help="Post title (MF2 name).")
@click.option("--content", default=None, help="Post body.")
@click.option("--category", "categories", multiple=True, help="Category (repeatable).")
@click.option("--slug", default=None, help="Explicit slug.")
@click.option("--draft", is_flag=True, help="Store as unpublished (post-status: draft).")
@click.option("--photo", "photos", multiple=True, help="Uploaded photo URL (repeatable).")
@click.option(
    "--syndicate-to",
    "syndicate_to",
    multiple=True,
    help="Syndication target (repeatable).",
)
@click.pass_obj
def create(
    app: AppContext,
    payload: str | None,
    name: str | None,
    content: str | None,
    categories: tuple[str, ...],
    slug: str | None,
    draft: bool,
    photos: tuple[str, ...],
    syndicate_to: tuple[str, ...],
) -> None:
    """Create a post.

    PAYLOAD is an MF2 JSON file (``-`` for stdin). Without it, the post is
    built from the options.
    """
    op = "create"
    if payload is not None:
        data = load_json_payload(payload, op)
        if not isinstance(data, dict):
            app.emit(data)
            return
    else:
        if name is None and content is None:
            click.echo("Nothing to post. Pass a PAYLOAD or --name/--content.", err=True)
            raise SystemExit(1)
        data = _options_payload(name, content, categories, slug, draft)

    try:
        operation = parse_create(data)
    except ValidationError as exc:
        app.emit(invalid_request(op, exc))
        return

    if photos or syndicate_to:
        commands = dict(operation.commands)
        if syndicate_to:
            commands["mp-syndicate-to"] = [
                *commands.get("mp-syndicate-to", []),
                *syndicate_to,
            ]
        operation = operation.model_copy(
            update={"photos": [*operation.photos, *photos], "commands": commands}
        )

    with operation_context(op):
        result = CreateService(app.site).create(operation)
    app.emit(result)
