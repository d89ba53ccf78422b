"""Formatter configuration loader."""

from __future__ import annotations

import codecs
import logging
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import cast

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".minifmt"
CONFIG_FILENAME = "config.toml"


@dataclass(frozen=True, slots=True)
class FormatterConfig:
    """Resolved formatting options shared by every engine call."""

    long_bits: int = 64
    float_support: bool = True
    encoding: str = "utf-8"


_SECTION_KEY_MAP: dict[str, dict[str, str]] = {
    "integers": {
        "long_bits": "long_bits",
    },
    "floats": {
        "enabled": "float_support",
        "float_support": "float_support",
    },
    "strings": {
        "encoding": "encoding",
    },
}

_TOP_LEVEL_KEY_MAP: dict[str, str] = {
    "long_bits": "long_bits",
    "float_support": "float_support",
    "encoding": "encoding",
}

_ENV_OVERRIDE_MAP: dict[str, str] = {
    "MINIFMT_LONG_BITS": "long_bits",
    "MINIFMT_FLOAT_SUPPORT": "float_support",
    "MINIFMT_ENCODING": "encoding",
}

_LONG_BITS_CHOICES = frozenset({32, 64})
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def config_path(root: Path) -> Path:
    return root / CONFIG_DIRNAME / CONFIG_FILENAME


def _expected_type_name(field_name: str) -> str:
    if field_name == "long_bits":
        return "int"
    if field_name == "float_support":
        return "bool"
    return "str"


def _validate(field_name: str, value: object, source: str) -> object:
    if field_name == "long_bits" and value not in _LONG_BITS_CHOICES:
        raise ValueError(
            f"Invalid value for '{source}': expected one of "
            f"{sorted(_LONG_BITS_CHOICES)}, got {value!r}."
        )
    if field_name == "encoding":
        try:
            codecs.lookup(cast("str", value))
        except LookupError as error:
            raise ValueError(f"Invalid value for '{source}': unknown encoding {value!r}.") from error
    return value


def _coerce_file_value(*, field_name: str, raw_value: object, source: str) -> object:
    expected = _expected_type_name(field_name)
    if expected == "int":
        if isinstance(raw_value, bool) or not isinstance(raw_value, int):
            raise ValueError(
                f"Invalid value for '{source}': expected int, got "
                f"{type(raw_value).__name__} ({raw_value!r})."
            )
        return _validate(field_name, raw_value, source)

    if expected == "bool":
        if not isinstance(raw_value, bool):
            raise ValueError(
                f"Invalid value for '{source}': expected bool, got "
                f"{type(raw_value).__name__} ({raw_value!r})."
            )
        return raw_value

    if not isinstance(raw_value, str):
        raise ValueError(
            f"Invalid value for '{source}': expected str, got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    normalized = raw_value.strip()
    if not normalized:
        raise ValueError(f"Invalid value for '{source}': expected non-empty string.")
    return _validate(field_name, normalized, source)


def _coerce_env_value(*, field_name: str, raw_value: str, env_name: str) -> object:
    expected = _expected_type_name(field_name)
    normalized = raw_value.strip()
    if expected == "int":
        try:
            value: object = int(normalized)
        except ValueError as error:
            raise ValueError(
                f"Invalid environment override '{env_name}': expected int, got {raw_value!r}."
            ) from error
        return _validate(field_name, value, env_name)

    if expected == "bool":
        lowered = normalized.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(
            f"Invalid environment override '{env_name}': expected bool, got {raw_value!r}."
        )

    if not normalized:
        raise ValueError(
            f"Invalid environment override '{env_name}': expected non-empty string."
        )
    return _validate(field_name, normalized, env_name)


def _default_values() -> dict[str, object]:
    defaults = FormatterConfig()
    return {field.name: getattr(defaults, field.name) for field in fields(FormatterConfig)}


def _apply_toml_payload(
    *,
    values: dict[str, object],
    payload: dict[str, object],
    path: Path,
) -> None:
    for key, raw_value in payload.items():
        section_map = _SECTION_KEY_MAP.get(key)
        if section_map is not None:
            if not isinstance(raw_value, dict):
                raise ValueError(f"Invalid value for '{key}' in '{path}': expected table.")
            for section_key, section_value in cast("dict[str, object]", raw_value).items():
                field_name = section_map.get(section_key)
                if field_name is None:
                    logger.warning(
                        "Ignoring unknown minifmt config key '%s.%s'.",
                        key,
                        section_key,
                    )
                    continue
                values[field_name] = _coerce_file_value(
                    field_name=field_name,
                    raw_value=section_value,
                    source=f"{key}.{section_key}",
                )
            continue

        field_name = _TOP_LEVEL_KEY_MAP.get(key)
        if field_name is None:
            logger.warning("Ignoring unknown minifmt config key '%s'.", key)
            continue
        values[field_name] = _coerce_file_value(
            field_name=field_name,
            raw_value=raw_value,
            source=key,
        )


def _apply_env_overrides(values: dict[str, object]) -> None:
    for env_name, field_name in _ENV_OVERRIDE_MAP.items():
        raw_value = os.getenv(env_name)
        if raw_value is None:
            continue
        values[field_name] = _coerce_env_value(
            field_name=field_name,
            raw_value=raw_value,
            env_name=env_name,
        )


def load_config(root: Path) -> FormatterConfig:
    """Load `.minifmt/config.toml` under ``root`` and apply environment overrides."""

    values = _default_values()
    path = config_path(root)
    if path.is_file():
        payload_obj = tomllib.loads(path.read_text(encoding="utf-8"))
        payload = cast("dict[str, object]", payload_obj)
        _apply_toml_payload(values=values, payload=payload, path=path)

    _apply_env_overrides(values)
    return FormatterConfig(
        long_bits=cast("int", values["long_bits"]),
        float_support=cast("bool", values["float_support"]),
        encoding=cast("str", values["encoding"]),
    )
