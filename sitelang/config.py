"""Loading of config/site.yaml."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ConfigError
from .models import SiteConfig

DEFAULT_CONFIG_PATH = Path("config/site.yaml")


def load_site_config(path: Path | None = None) -> SiteConfig:
    """Load and validate site configuration.

    ``None`` means "use config/site.yaml if present, otherwise defaults".
    An explicit path that does not exist is an error.
    """

    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return SiteConfig()
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping.")
    try:
        return SiteConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid site config in {path}: {exc}") from exc


__all__ = ["DEFAULT_CONFIG_PATH", "load_site_config"]
