"""Command: run a raw Micropub JSON operation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from pydantic import ValidationError

from micropress.commands._base import MicropressCommand, invalid_request, load_json_payload
from micropress.domain.operations import parse_operation
from micropress.services.dispatch import handle_operation

if TYPE_CHECKING:
    from micropress.commands._context import AppContext


@click.command(
    cls=MicropressCommand,
    examples="""\
  micropress apply request.json
  echo '{"action": "undelete", "url": "https://example.com/p/"}' | micropress apply -""",
)
@click.argument("payload")
@click.pass_obj
def apply(app: AppContext, payload: str) -> None:
    """Run the Micropub operation in PAYLOAD (a JSON file, or - for stdin).

    The ``action`` key selects create (the default), update, delete, or
    undelete.
    """
    data = load_json_payload(payload, "apply")
    if not isinstance(data, dict):
        app.emit(data)
        return
    try:
        operation = parse_operation(data)
    except ValidationError as exc:
        app.emit(invalid_request(str(data.get("action", "create")), exc))
        return
    app.emit(handle_operation(app.site, operation))
