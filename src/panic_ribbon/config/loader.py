"""YAML config loader with environment variable interpolation and fallbacks."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from panic_ribbon.config.models import RibbonConfig, default_config, placeholder_service
from panic_ribbon.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "services.yaml"
LEGACY_FILENAME = "services.json"
CONFIG_ENV_VAR = "PANIC_RIBBON_CONFIG"

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def _interpolate_env(value: str) -> str:
    """Replace ${VAR} and ${VAR:-default} patterns with environment values."""

    def _replace(match: re.Match[str]) -> str:
        expr = match.group(1)
        if ":-" in expr:
            var_name, default = expr.split(":-", 1)
            return os.environ.get(var_name.strip(), default)
        return os.environ.get(expr.strip(), match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _interpolate_recursive(data: Any) -> Any:
    """Walk a nested data structure and interpolate env vars in strings."""
    if isinstance(data, str):
        return _interpolate_env(data)
    if isinstance(data, dict):
        return {k: _interpolate_recursive(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_interpolate_recursive(item) for item in data]
    return data


def resolve_config_path(path: Path | None = None, cwd: Path | None = None) -> Path:
    """Pick the config file: explicit path, then $PANIC_RIBBON_CONFIG, then cwd.

    In the working directory ``services.yaml`` wins over a legacy
    ``services.json``; when neither exists the ``services.yaml`` path is
    returned so a default can be created there.
    """
    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    base = cwd or Path.cwd()
    for name in (CONFIG_FILENAME, LEGACY_FILENAME):
        candidate = base / name
        if candidate.exists():
            return candidate
    return base / CONFIG_FILENAME


def load_config(path: Path) -> RibbonConfig:
    """Load and validate a service config file, applying env-var interpolation.

    JSON documents are accepted too, since ``yaml.safe_load`` parses them.
    """
    if not path.exists():
        raise FileNotFoundError(f"Could not find {path}.")
    try:
        # Read bytes so undecodable input surfaces as yaml.ReaderError
        with path.open("rb") as fh:
            raw = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Could not parse {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Invalid configuration in {path}: expected a mapping at top level")
    if any(not isinstance(key, str) for key in raw):
        raise ConfigurationError(f"Invalid configuration in {path}: top-level keys must be strings")
    data = _interpolate_recursive(raw)
    try:
        return RibbonConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {path}: {exc}") from exc


def write_default_config(path: Path) -> RibbonConfig:
    """Write the single-entry default configuration to *path*."""
    config = default_config()
    with path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(config.model_dump(), fh, sort_keys=False)
    return config


def load_or_default(path: Path | None = None) -> RibbonConfig:
    """Load the configuration, never failing.

    A missing file is created with the default content. A malformed file is
    logged and left untouched, and the default is used in its place. An empty
    service list is replaced by the placeholder service.
    """
    config_path = resolve_config_path(path)

    if not config_path.exists():
        logger.info("%s not found, creating default configuration", config_path.name)
        try:
            write_default_config(config_path)
            logger.info("Created default %s", config_path.name)
        except OSError as exc:
            logger.error("Error creating default %s: %s", config_path.name, exc)

    try:
        config = load_config(config_path)
    except (FileNotFoundError, ConfigurationError) as exc:
        logger.error("Error loading %s: %s", config_path.name, exc)
        config = default_config()

    if not config.services:
        logger.warning("No services configured, using placeholder service")
        config = config.model_copy(update={"services": [placeholder_service()]})

    logger.info("Loaded %d service(s)", len(config.services))
    return config
