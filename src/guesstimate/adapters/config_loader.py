"""YAML-backed configuration loader with upward config-file discovery."""

from __future__ import annotations

import logging
from importlib.resources import as_file, files
from pathlib import Path

import yaml
from pydantic import ValidationError

from guesstimate.core.models import Config

DEFAULT_CONFIG_FILENAME = "default_config.yaml"
CONFIG_FILENAME = ".guesstimate.yml"

logger = logging.getLogger("guesstimate")


def load_config(path: str | Path) -> Config:
    """Load and validate a configuration file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        raw_data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse YAML config at {config_path}: {exc}") from exc
    except OSError as exc:
        raise OSError(f"Failed to read config file {config_path}: {exc}") from exc

    if raw_data is None:
        raw_data = {}
    if not isinstance(raw_data, dict):
        raise ValueError(f"Invalid config file at {config_path}: root must be a YAML mapping")

    try:
        return Config.model_validate(raw_data)
    except ValidationError as exc:
        detail_text = format_validation_errors(exc)
        raise ValueError(f"Invalid config file at {config_path}:\n{detail_text}") from exc


def load_default_config() -> Config:
    """Load the packaged default configuration."""
    resource = files("guesstimate").joinpath(DEFAULT_CONFIG_FILENAME)
    with as_file(resource) as default_path:
        return load_config(default_path)


def find_config_file(
    start: str | Path | None = None, filename: str = CONFIG_FILENAME
) -> Path | None:
    """Search ``start`` (default: cwd) and its parents for ``filename``."""
    directory = Path(start) if start is not None else Path.cwd()
    directory = directory.resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / filename
        if candidate.is_file():
            return candidate
    return None


def resolve_config(path: str | Path | None = None) -> Config:
    """Load the configuration the CLI should use.

    An explicit ``path`` is loaded when it exists and stands for the packaged
    defaults when it does not, so that a first edit can create it. Without
    one, the nearest ``.guesstimate.yml`` from the current directory upward is
    used, and the packaged defaults when there is none.
    """
    if path is not None:
        if not Path(path).exists():
            logger.debug("Config file %s does not exist yet; using packaged defaults", path)
            return load_default_config()
        return load_config(path)
    discovered = find_config_file()
    if discovered is None:
        logger.debug("No %s found; using packaged defaults", CONFIG_FILENAME)
        return load_default_config()
    logger.debug("Using configuration file %s", discovered)
    return load_config(discovered)


def config_to_dict(config: Config) -> dict[str, object]:
    """Return the YAML/JSON shape of ``config`` (camelCase keys)."""
    return config.model_dump(mode="json", by_alias=True, exclude_none=True)


def save_config(config: Config, path: str | Path) -> Path:
    """Write ``config`` to ``path`` as YAML and return the path."""
    config_path = Path(path)
    text = yaml.safe_dump(config_to_dict(config), sort_keys=False, allow_unicode=True)
    try:
        config_path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OSError(f"Failed to write config file {config_path}: {exc}") from exc
    return config_path


def format_validation_errors(exc: ValidationError) -> str:
    details: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        details.append(f"{location}: {error['msg']}")
    return "\n".join(f"- {line}" for line in details)
