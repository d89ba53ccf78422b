"""CLI commands under ``minifmt config``."""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Annotated, Any

from cyclopts import Parameter

from minifmt.lib.ops.config import ConfigShowInput, config_show

if TYPE_CHECKING:
    from cyclopts import App

Emitter = Callable[[Any], None]


def _config_show(
    emit: Emitter,
    *,
    root: Annotated[
        str | None,
        Parameter(name="--root", help="Directory holding .minifmt/config.toml."),
    ] = None,
) -> None:
    emit(config_show(ConfigShowInput(root=root)))


def register_config_commands(app: App, emit: Emitter) -> None:
    handler = partial(_config_show, emit)
    handler.__name__ = "cmd_config_show"
    app.command(
        handler,
        name="show",
        help="Show resolved formatter config with source annotations.",
    )
