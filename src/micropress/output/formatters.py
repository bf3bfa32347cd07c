"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich key-value output) or
machines (--json). The formatter layer adapts ServiceResult to the
requested output mode.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.text import Text

from micropress.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from micropress.services.result import ServiceResult

_KEY_STYLES: dict[str, str] = {
    "url": "mp.url",
    "path": "mp.path",
}


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags taken from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def _render_human(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    if result.ok:
        console.print(Text("OK", style="mp.ok"), Text(f"  {result.op}", style="mp.op"))
        for key, value in result.data.items():
            line = Text(f"  {key}: ", style="mp.key")
            line.append(_format_value(value), style=_KEY_STYLES.get(key, ""))
            console.print(line)
        return

    error = result.error
    console.print(
        Text("ERROR", style="mp.error"),
        Text(f"  {result.op}", style="mp.op"),
        Text(f" — {error.message if error else 'Unknown error'}"),
    )
    if error is not None and verbose:
        console.print(Text(f"  code: {error.code}", style="mp.key"))
        for key, value in error.detail.items():
            console.print(Text(f"  {key}: {_format_value(value)}", style="mp.key"))


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output mode; defaults to human-readable.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        if result.ok:
            return str(result.data.get("url", f"OK: {result.op}"))
        error_msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {error_msg}"

    console = create_console()
    _render_human(result, console, verbose=settings.verbose)
    return get_output(console).rstrip("\n")
