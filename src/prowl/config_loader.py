"""Load ProwlConfig from prowl.yaml / prowl.toml and the environment.

Precedence, lowest first: config file, environment, explicit overrides.
The environment is read here and nowhere else.
"""

from __future__ import annotations

import os
import shlex
import tomllib
from collections.abc import Mapping
from pathlib import Path

import yaml

from prowl._errors import ConfigError
from prowl.config import ProwlConfig

# Keys accepted from a config file
_CONFIG_KEYS = frozenset({
    "output", "base_url", "sub_path", "default_locale", "manifest",
    "assets_dir", "database", "detail_route", "timeout", "workers",
    "strict_rewrite", "server_command", "startup_timeout",
})

# Environment variable -> config key
_ENV_KEYS = {
    "BASE_PATH": "sub_path",
    "DEFAULT_CULTURE": "default_locale",
}


def load_config(
    root: Path,
    env: Mapping[str, str] | None = None,
    **overrides: object,
) -> ProwlConfig:
    """Build a ProwlConfig for *root*.

    Args:
        root: Site content root.
        env: Environment mapping; defaults to ``os.environ``.
        **overrides: Explicit values (typically CLI flags).  ``None`` values
            are ignored so unset flags do not mask file or environment values.

    Raises:
        ConfigError: If a config file exists but cannot be parsed.

    """
    merged: dict[str, object] = {}
    merged.update(_read_prowl_config(root))
    merged.update(_read_env(os.environ if env is None else env))
    merged.update({k: v for k, v in overrides.items() if v is not None})

    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    command = merged.get("server_command")
    if isinstance(command, str):
        merged["server_command"] = tuple(shlex.split(command))
    elif isinstance(command, list):
        merged["server_command"] = tuple(str(part) for part in command)

    try:
        return ProwlConfig(root=root, **merged)  # type: ignore[arg-type]
    except TypeError as exc:
        msg = f"Invalid configuration for {root}: {exc}"
        raise ConfigError(msg) from exc


def _read_env(env: Mapping[str, str]) -> dict[str, object]:
    """Pick the supported variables out of *env*, skipping empty ones."""
    return {key: env[name] for name, key in _ENV_KEYS.items() if env.get(name)}


def _read_prowl_config(root: Path) -> dict[str, object]:
    """Read prowl config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("prowl.yaml", "prowl.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "prowl.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Cannot parse {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_prowl_section(path, data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Cannot parse {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_prowl_section(path, data)


def _flatten_prowl_section(path: Path, data: object) -> dict[str, object]:
    """Extract known keys from the top level and the ``prowl`` section."""
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    result: dict[str, object] = {k: v for k, v in data.items() if k in _CONFIG_KEYS}
    section = data.get("prowl")
    if isinstance(section, dict):
        result.update((k, v) for k, v in section.items() if k in _CONFIG_KEYS)
    return result
