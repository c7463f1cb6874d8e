"""Config manager — load JSON/YAML → apply env overrides → validate → StatusLedsConfig."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from status_leds.core.exceptions import ConfigurationError
from status_leds.core.models.config import StatusLedsConfig, default_config

_log = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "status_leds_config.json"
_YAML_SUFFIXES = (".yaml", ".yml")
_NUMERIC_TAGS = ("tag:yaml.org,2002:int", "tag:yaml.org,2002:float")


class _ConfigLoader(yaml.SafeLoader):
    """SafeLoader that leaves numbers as strings.

    Colours such as ``01010101`` would otherwise load as octal integers.
    Pydantic coerces the numeric fields back from their string form.
    """


_ConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMERIC_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

# Environment variable → config field mapping.
# Keys are env-var names; values are ``(section, field, type)`` tuples.
_ENV_OVERRIDES: dict[str, tuple[str, str, type]] = {
    "STATUS_LEDS_LOG_LEVEL": ("system", "log_level", str),
    "STATUS_LEDS_DEV_MODE": ("system", "dev_mode", bool),
    "STATUS_LEDS_SPIDEV": ("strip", "spidev", str),
    "STATUS_LEDS_HERTZ": ("strip", "hertz", int),
}


def _coerce(value: str, target_type: type) -> object:
    """Coerce a string env-var value to the expected Python type."""
    if target_type is bool:
        return value.strip().lower() in ("1", "true", "yes")
    return target_type(value)


def load_config(config_path: Path | str | None = None) -> StatusLedsConfig:
    """Load, override, and validate the configuration.

    Args:
        config_path: Path to a ``.json`` or ``.yaml`` file.  When *None*,
            falls back to ``STATUS_LEDS_CONFIG_FILE`` and then the default
            file next to this module.

    Returns:
        A fully-validated :class:`StatusLedsConfig` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigurationError: Syntax error or invalid values.
    """
    path = _resolve_config_path(config_path)
    _log.info("Loading config from %s", path)

    raw = _read_raw(path)

    for env_key, (section, field, typ) in _ENV_OVERRIDES.items():
        env_val = os.environ.get(env_key)
        if env_val is not None:
            try:
                raw.setdefault(section, {})[field] = _coerce(env_val, typ)
            except ValueError as exc:
                raise ConfigurationError(f"Invalid value {env_val!r} for {env_key}: {exc}") from exc
            _log.debug("Env override: %s → %s.%s = %r", env_key, section, field, env_val)

    try:
        return StatusLedsConfig(**raw)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid configuration in {path}: {_describe(exc)}",
            hint=f"Edit {path}",
        ) from exc
    except TypeError as exc:
        raise ConfigurationError(f"Invalid configuration in {path}: {exc}") from exc


def write_default_config(config_path: Path | str) -> StatusLedsConfig:
    """Write :func:`default_config` to *config_path* as JSON and return it."""
    config = default_config()
    _atomic_write_json(Path(config_path), config.model_dump(exclude={"system"}))
    _log.info("Wrote default config to %s", config_path)
    return config


def _read_raw(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            raw = yaml.load(text, Loader=_ConfigLoader)  # noqa: S506
        else:
            raw = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(
            f"Configuration file {path} has invalid syntax: {exc}",
            hint="Check for trailing commas, unclosed brackets and bad indentation",
        ) from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping at top level")
    return raw


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def _atomic_write_json(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f"{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with open(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
            handle.write("\n")
        Path(tmp_name).replace(path)
    finally:
        tmp_path = Path(tmp_name)
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def _resolve_config_path(config_path: Path | str | None) -> Path:
    if config_path is not None:
        p = Path(config_path)
    else:
        env = os.environ.get("STATUS_LEDS_CONFIG_FILE")
        p = Path(env) if env else _DEFAULT_CONFIG_PATH
    if not p.is_file():
        raise FileNotFoundError(
            f"Config file not found: {p}\n"
            "Create one with --write-default-config or set STATUS_LEDS_CONFIG_FILE."
        )
    return p
