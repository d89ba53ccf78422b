"""Config inspection operations."""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, cast

from minifmt.lib.config import load_config, resolve_root
from minifmt.lib.config.settings import config_path
from minifmt.lib.serialization import to_jsonable

if TYPE_CHECKING:
    from minifmt.lib.formatting import FormatContext


@dataclass(frozen=True, slots=True)
class _ConfigKeySpec:
    canonical_key: str
    section: str
    file_key: str
    field_name: str
    env_var: str


_CONFIG_KEY_SPECS: tuple[_ConfigKeySpec, ...] = (
    _ConfigKeySpec(
        canonical_key="integers.long_bits",
        section="integers",
        file_key="long_bits",
        field_name="long_bits",
        env_var="MINIFMT_LONG_BITS",
    ),
    _ConfigKeySpec(
        canonical_key="floats.enabled",
        section="floats",
        file_key="enabled",
        field_name="float_support",
        env_var="MINIFMT_FLOAT_SUPPORT",
    ),
    _ConfigKeySpec(
        canonical_key="strings.encoding",
        section="strings",
        file_key="encoding",
        field_name="encoding",
        env_var="MINIFMT_ENCODING",
    ),
)


@dataclass(frozen=True, slots=True)
class ConfigShowInput:
    root: str | None = None


@dataclass(frozen=True, slots=True)
class ConfigResolvedValue:
    key: str
    value: object
    source: str
    env_var: str | None = None


@dataclass(frozen=True, slots=True)
class ConfigShowOutput:
    path: str
    values: tuple[ConfigResolvedValue, ...]

    def format_text(self, ctx: FormatContext | None = None) -> str:
        _ = ctx
        lines = [f"path: {self.path}"]
        for item in self.values:
            source_note = item.source
            if item.env_var is not None:
                source_note = f"{source_note} ({item.env_var})"
            lines.append(
                f"{item.key}: {_format_value_for_text(item.value)} [source: {source_note}]"
            )
        return "\n".join(lines)

    def porcelain_rows(self) -> list[dict[str, object]]:
        return [
            {"key": item.key, "value": item.value, "source": item.source}
            for item in self.values
        ]


def _format_value_for_text(value: object) -> str:
    payload = to_jsonable(value)
    if isinstance(payload, str):
        return payload
    return json.dumps(payload, sort_keys=True)


def _read_file_payload(path: Path) -> dict[str, object]:
    if not path.is_file():
        return {}
    return cast("dict[str, object]", tomllib.loads(path.read_text(encoding="utf-8")))


def _in_file(spec: _ConfigKeySpec, payload: dict[str, object]) -> bool:
    section = payload.get(spec.section)
    if isinstance(section, dict) and spec.file_key in section:
        return True
    return spec.field_name in payload


def _source_for_key(spec: _ConfigKeySpec, payload: dict[str, object]) -> tuple[str, str | None]:
    if os.getenv(spec.env_var) is not None:
        return "env var", spec.env_var
    if _in_file(spec, payload):
        return "file", None
    return "default", None


def config_show(payload: ConfigShowInput) -> ConfigShowOutput:
    root = resolve_root(Path(payload.root) if payload.root is not None else None)
    path = config_path(root)
    file_payload = _read_file_payload(path)
    resolved = load_config(root)

    values: list[ConfigResolvedValue] = []
    for spec in _CONFIG_KEY_SPECS:
        source, env_var = _source_for_key(spec, file_payload)
        values.append(
            ConfigResolvedValue(
                key=spec.canonical_key,
                value=getattr(resolved, spec.field_name),
                source=source,
                env_var=env_var,
            )
        )
    return ConfigShowOutput(path=path.as_posix(), values=tuple(values))
