"""Project configuration for Folio.

Configuration lives in an optional ``folio.yaml`` at the project root and is
merged over DEFAULT_CONFIG.

Key functions:
- load_config: Load and validate folio.yaml.
- resolve_timezone: Turn a configured timezone string into a tzinfo.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from .errors import ConfigError

CONFIG_FILENAME = "folio.yaml"

DEFAULT_CONFIG = {
    "content_dir": "content",
    "timezone": "UTC",
    "default_section": "posts",
}

OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def resolve_timezone(value: str) -> tzinfo:
    """Resolve a timezone setting.

    Accepts ``UTC``, ``local``, a fixed offset such as ``+02:00`` or an
    IANA zone name such as ``Europe/Berlin``.

    Args:
        value: Configured timezone string.

    Returns:
        tzinfo instance.

    Raises:
        ConfigError: If the value cannot be resolved.
    """
    text = str(value).strip()
    if text.upper() in ("UTC", "Z"):
        return timezone.utc
    if text.lower() == "local":
        return datetime.now().astimezone().tzinfo or timezone.utc
    match = OFFSET_RE.match(text)
    if match:
        sign, hours, minutes = match.groups()
        delta = timedelta(hours=int(hours), minutes=int(minutes))
        if delta >= timedelta(hours=24):
            raise ConfigError(f"Timezone offset out of range: {text}")
        return timezone(-delta if sign == "-" else delta)
    try:
        return ZoneInfo(text)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Unknown timezone: {text}") from exc


def load_config(project_root: Path) -> dict[str, Any]:
    """Load project configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary of configuration values with defaults applied. The
        ``tzinfo`` key holds the resolved timezone.

    Raises:
        ConfigError: If the file is not a mapping or holds invalid values.
    """
    config_path = project_root / CONFIG_FILENAME
    config: dict[str, Any] = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Cannot parse {config_path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"{config_path} must contain a mapping")
        config.update(loaded)

    for key in ("content_dir", "default_section"):
        if not isinstance(config[key], str) or not config[key].strip():
            raise ConfigError(f"'{key}' must be a non-empty string")
    config["tzinfo"] = resolve_timezone(config["timezone"])
    return config


def content_root(project_root: Path, config: dict[str, Any]) -> Path:
    """Return the content directory for a project."""
    return project_root / config["content_dir"]
