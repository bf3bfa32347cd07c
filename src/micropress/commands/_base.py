"""Custom Click base class with --examples support.

When ``--examples`` is passed, the command prints usage examples and exits.
This keeps ``--help`` concise while making examples available on demand.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from micropress.services.result import ServiceError, ServiceResult


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class MicropressCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def load_json_payload(source: str, op: str) -> dict[str, Any] | ServiceResult:
    """Read a JSON object from *source* (a path, or ``-`` for stdin).

    Returns the parsed object, or a failed ServiceResult to emit.
    """
    try:
        if source == "-":
            payload = json.loads(click.get_text_stream("stdin").read())
        else:
            payload = json.loads(Path(source).read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code="invalid_file", message=f"Error reading {source}: {exc}"),
        )
    if not isinstance(payload, dict):
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code="invalid_format", message="Payload must be a JSON object."),
        )
    return payload


def invalid_request(op: str, exc: Exception) -> ServiceResult:
    """Wrap a payload validation failure as a ServiceResult."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="invalid_request", message=str(exc)),
    )
