"""Build configuration record and its JSON loader."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from fxbuild.errors import ConfigurationError

# Update whenever the bundled FaceFX runtime is replaced.
DEFAULT_RUNTIME_FOLDER = "facefx-runtime-1.1.1/facefx"


@dataclass(frozen=True, slots=True)
class BuildConfiguration:
    debug_builds_use_debug_artifacts: bool = False
    compile_facefx: bool = True
    compile_with_wwise: bool = False
    runtime_folder: str = DEFAULT_RUNTIME_FOLDER


def is_feature_enabled(config: BuildConfiguration) -> bool:
    """Whether the FaceFX integration is part of the build at all."""
    return config.compile_facefx


def parse_build_configuration(raw: str) -> BuildConfiguration:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError("Invalid build configuration JSON.", hint=str(exc)) from exc

    if not isinstance(payload, dict):
        raise ConfigurationError("Invalid build configuration payload type.")
    return build_configuration_from(payload)


def build_configuration_from(payload: dict[str, Any]) -> BuildConfiguration:
    known = {item.name: item for item in fields(BuildConfiguration)}
    unknown = sorted(key for key in payload if key not in known)
    if unknown:
        raise ConfigurationError(
            "Unknown build configuration keys.",
            hint=f"Supported keys: {', '.join(sorted(known))}.",
            context={"keys": ", ".join(unknown)},
        )

    values: dict[str, Any] = {}
    for key, value in payload.items():
        if key == "runtime_folder":
            values[key] = _required_str(payload, key)
        else:
            values[key] = _required_bool(payload, key)
    return BuildConfiguration(**values)


def read_build_configuration(path: str | Path) -> BuildConfiguration:
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationError(
            "Build configuration file does not exist.",
            hint="Create the file or omit it to use the defaults.",
            context={"path": str(config_path)},
        ) from exc
    return parse_build_configuration(raw)


def write_build_configuration(config: BuildConfiguration, path: str | Path) -> Path:
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {item.name: getattr(config, item.name) for item in fields(BuildConfiguration)}
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return config_path


def _required_str(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"Invalid build configuration `{key}` value.")
    return value


def _required_bool(payload: dict[str, Any], key: str) -> bool:
    value = payload.get(key)
    if not isinstance(value, bool):
        raise ConfigurationError(f"Invalid build configuration `{key}` value.")
    return value
