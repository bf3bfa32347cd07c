"""Commands: update, delete, and undelete existing posts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click
from pydantic import ValidationError

from micropress.commands._base import MicropressCommand, invalid_request, load_json_payload
from micropress.config.logging import operation_context
from micropress.domain.operations import UpdateRequest
from micropress.services.update import UpdateService

if TYPE_CHECKING:
    from micropress.commands._context import AppContext


def _split_pair(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}")
    return key, value


def _collect(pairs: tuple[str, ...]) -> dict[str, list[Any]]:
    collected: dict[str, list[Any]] = {}
    for raw in pairs:
        key, value = _split_pair(raw)
        collected.setdefault(key, []).append(value)
    return collected


def _collect_deletes(entries: tuple[str, ...]) -> list[str] | dict[str, list[Any] | None]:
    """Bare names become a name list; any NAME=VALUE switches to a mapping."""
    if all("=" not in entry for entry in entries):
        return list(entries)
    deletes: dict[str, list[Any] | None] = {}
    for entry in entries:
        if "=" not in entry:
            deletes[entry] = None
            continue
        key, value = _split_pair(entry)
        existing = deletes.get(key)
        deletes[key] = [*(existing or []), value]
    return deletes


@click.command(
    cls=MicropressCommand,
    examples="""\
  micropress update https://example.com/my-post/ --replace name="New title"
  micropress update https://example.com/my-post/ --add category=indieweb
  micropress update https://example.com/my-post/ --delete category=old
  micropress update https://example.com/my-post/ --delete syndication
  micropress update https://example.com/my-post/ --payload edits.json""",
)
@click.argument("url")
@click.option("--replace", "replace", multiple=True, help="NAME=VALUE to overwrite (repeatable).")
@click.option("--add", "add", multiple=True, help="NAME=VALUE to append (repeatable).")
@click.option(
    "--delete",
    "delete",
    multiple=True,
    help="NAME to remove, or NAME=VALUE to remove one value (repeatable).",
)
@click.option(
    "--payload",
    default=None,
    help="JSON file with replace/add/delete objects (- for stdin).",
)
@click.pass_obj
def update(
    app: AppContext,
    url: str,
    replace: tuple[str, ...],
    add: tuple[str, ...],
    delete: tuple[str, ...],
    payload: str | None,
) -> None:
    """Apply replace, add, and delete edits to the post at URL."""
    op = "update"
    if payload is not None:
        data = load_json_payload(payload, op)
        if not isinstance(data, dict):
            app.emit(data)
            return
        fields = {k: data[k] for k in ("replace", "add", "delete") if k in data}
    else:
        fields = {
            "replace": _collect(replace),
            "add": _collect(add),
            "delete": _collect_deletes(delete),
        }

    try:
        request = UpdateRequest.model_validate(fields)
    except ValidationError as exc:
        app.emit(invalid_request(op, exc))
        return

    if request.is_empty():
        click.echo("No changes specified. Use --help for options.", err=True)
        raise SystemExit(1)

    with operation_context(op, url):
        result = UpdateService(app.site).update(url, request)
    app.emit(result)


@click.command(
    cls=MicropressCommand,
    examples="""\
  micropress delete https://example.com/my-post/
  micropress --json delete https://example.com/notes/101500/index.html""",
)
@click.argument("url")
@click.pass_obj
def delete(app: AppContext, url: str) -> None:
    """Unpublish the post at URL and remove its rendered page."""
    with operation_context("delete", url):
        result = UpdateService(app.site).delete(url)
    app.emit(result)


@click.command(
    cls=MicropressCommand,
    examples="""\
  micropress undelete https://example.com/my-post/""",
)
@click.argument("url")
@click.pass_obj
def undelete(app: AppContext, url: str) -> None:
    """Republish a deleted post."""
    with operation_context("undelete", url):
        result = UpdateService(app.site).undelete(url)
    app.emit(result)
