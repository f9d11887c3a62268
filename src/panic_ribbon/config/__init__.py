"""Panic Ribbon configuration system."""

from panic_ribbon.config.loader import load_config, load_or_default, resolve_config_path, write_default_config
from panic_ribbon.config.models import RibbonConfig, ServiceSpec, default_config

__all__ = [
    "RibbonConfig",
    "ServiceSpec",
    "default_config",
    "load_config",
    "load_or_default",
    "resolve_config_path",
    "write_default_config",
]
