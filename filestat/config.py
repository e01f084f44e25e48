from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
import yaml

from filestat.core.errors import ConfigError, ValidationError
from filestat.resources import config_schema_path

logger = logging.getLogger(__name__)

CONFIG_ENV = "FILESTAT_CONFIG"
DISABLE_CONFIG_ENV = "FILESTAT_DISABLE_CONFIG"


@dataclass(frozen=True)
class FilestatConfig:
    """
    User defaults read from the YAML config file. Unset keys stay None so the
    CLI can fall back to its built-in defaults.
    """

    units: Optional[str] = None
    format: Optional[str] = None
    trace: Optional[str] = None
    source: Optional[Path] = None


def config_disabled() -> bool:
    return str(os.environ.get(DISABLE_CONFIG_ENV, "")).strip().lower() in ("1", "true", "yes")


def default_config_path() -> Path:
    """
    Default per-user config location.

    - If FILESTAT_CONFIG is set, use it.
    - Else if XDG_CONFIG_HOME is set, use $XDG_CONFIG_HOME/filestat/config.yml.
    - Else use ~/.config/filestat/config.yml
    """
    explicit = os.environ.get(CONFIG_ENV)
    if isinstance(explicit, str) and explicit.strip():
        return Path(explicit.strip()).expanduser()
    base = os.environ.get("XDG_CONFIG_HOME")
    if isinstance(base, str) and base.strip():
        root = Path(base).expanduser()
    else:
        root = Path.home() / ".config"
    return root / "filestat" / "config.yml"


def _load_schema() -> Dict[str, Any]:
    return json.loads(config_schema_path().read_text(encoding="utf-8"))


def validate_config(raw: Any) -> Dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValidationError(code="config.invalid", message="Config must be a YAML mapping/object at top-level")
    validator = jsonschema.Draft202012Validator(_load_schema())
    errors = sorted(validator.iter_errors(raw), key=str)
    if errors:
        raise ValidationError(
            code="config.invalid",
            message=errors[0].message,
            data={"errors": [e.message for e in errors]},
        )
    return raw


def load_config(path: Path | None = None) -> FilestatConfig:
    """
    Load and validate the config file.

    An explicit `path` must exist. The default location is optional: when it
    is missing an empty config is returned.
    """
    explicit = path is not None
    p = (path if explicit else default_config_path()).expanduser()
    if not p.exists():
        if explicit:
            raise ConfigError(code="config.not_found", message=f"Config file not found: {p}")
        logger.debug("no config file at %s", p)
        return FilestatConfig()

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(code="config.unreadable", message=f"Cannot read config file {p}: {e}") from e
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValidationError(code="config.invalid", message=f"Config is not valid YAML: {p}", data={"error": str(e)}) from e

    values = validate_config(raw)
    logger.debug("loaded config from %s: %s", p, values)
    return FilestatConfig(
        units=values.get("units"),
        format=values.get("format"),
        trace=values.get("trace"),
        source=p,
    )
