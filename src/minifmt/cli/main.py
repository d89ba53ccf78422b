"""Cyclopts CLI entry point for minifmt."""

from __future__ import annotations

import sys
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

import structlog
from cyclopts import App, Parameter

from minifmt import __version__
from minifmt.cli.config_cmd import register_config_commands
from minifmt.cli.output import OutputConfig, normalize_output_format
from minifmt.cli.output import emit as emit_output
from minifmt.cli.render_cmd import register_render_commands
from minifmt.lib.errors import FormatArgumentError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Top-level options that apply to all commands."""

    output: OutputConfig


_GLOBAL_OPTIONS: ContextVar[GlobalOptions | None] = ContextVar("_GLOBAL_OPTIONS", default=None)


def get_global_options() -> GlobalOptions:
    """Return parsed global options for current command."""

    default = GlobalOptions(output=OutputConfig(format="text"))
    return _GLOBAL_OPTIONS.get() or default


def emit(payload: object) -> None:
    """Write command output using current output format settings."""

    emit_output(payload, get_global_options().output)


def _text_mode() -> bool:
    return get_global_options().output.format == "text"


def _extract_global_options(argv: Sequence[str]) -> tuple[list[str], GlobalOptions]:
    """Pull global flags out of ``argv``.

    Flags are recognized anywhere before `--`, so a format argument such as a
    literal `-v` must follow `--`.
    """

    json_mode = False
    porcelain_mode = False
    output_format: str | None = None
    verbosity = 0
    cleaned: list[str] = []

    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            cleaned.extend(argv[i:])
            break
        if arg == "--json":
            json_mode = True
            i += 1
            continue
        if arg == "--no-json":
            i += 1
            continue
        if arg == "--porcelain":
            porcelain_mode = True
            i += 1
            continue
        if arg == "--no-porcelain":
            i += 1
            continue
        if arg == "--format":
            if i + 1 >= len(argv):
                raise SystemExit("--format requires a value")
            output_format = argv[i + 1]
            i += 2
            continue
        if arg.startswith("--format="):
            output_format = arg.partition("=")[2]
            i += 1
            continue
        if arg in {"-v", "--verbose"}:
            verbosity += 1
            i += 1
            continue

        cleaned.append(arg)
        i += 1

    resolved = normalize_output_format(
        requested=output_format,
        json_mode=json_mode,
        porcelain_mode=porcelain_mode,
    )
    return cleaned, GlobalOptions(output=OutputConfig(format=resolved, verbosity=verbosity))


app = App(
    name="minifmt",
    help=(
        "Minimal printf-style formatter. Global flags are recognized anywhere before "
        "'--'; pass format arguments that start with '-' after it."
    ),
    version=__version__,
    help_formatter="plain",
)


@app.default
def root(
    json_mode: Annotated[
        bool,
        Parameter(name="--json", help="Emit command output as JSON."),
    ] = False,
    output_format: Annotated[
        str | None,
        Parameter(name="--format", help="Set output format: text, json, or porcelain."),
    ] = None,
    porcelain: Annotated[
        bool,
        Parameter(name="--porcelain", help="Emit stable tab-separated key/value output."),
    ] = False,
    verbose: Annotated[
        bool,
        Parameter(name=["--verbose", "-v"], help="Increase log verbosity (repeatable)."),
    ] = False,
) -> None:
    """minifmt root command with global options."""

    _ = (json_mode, output_format, porcelain, verbose)
    app.help_print()


render_app = App(name="render", help="Format rendering commands", help_formatter="plain")
config_app = App(name="config", help="Formatter config commands", help_formatter="plain")

app.command(render_app, name="render")
app.command(config_app, name="config")


def _operation_error_message(exc: Exception) -> str:
    if isinstance(exc, KeyError) and exc.args:
        return str(exc.args[0])
    message = str(exc).strip()
    if message:
        return message
    return exc.__class__.__name__


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point used by `minifmt` and `python -m minifmt`."""

    from minifmt.lib.logging import configure_logging

    args = list(sys.argv[1:] if argv is None else argv)
    cleaned_args, options = _extract_global_options(args)

    # Configure logging early so warnings go to stderr, not stdout.
    output = options.output
    configure_logging(json_mode=output.format == "json", verbosity=output.verbosity)

    token = _GLOBAL_OPTIONS.set(options)
    try:
        try:
            app(cleaned_args)
        except FormatArgumentError as exc:
            logger.debug("format argument rejected", index=exc.index)
            print(f"error: {_operation_error_message(exc)}", file=sys.stderr)
            raise SystemExit(1) from None
        except (KeyError, ValueError, OSError) as exc:
            print(f"error: {_operation_error_message(exc)}", file=sys.stderr)
            raise SystemExit(1) from None
    finally:
        _GLOBAL_OPTIONS.reset(token)


register_render_commands(render_app, emit, _text_mode)
register_config_commands(config_app, emit)
