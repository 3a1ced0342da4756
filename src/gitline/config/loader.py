"""Load and merge configuration from gitline.toml and env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from gitline.config.schema import GitlineConfig, GitStatusConfig, OutputConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GITLINE_CONFIG"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def default_config_path() -> Path:
    return Path.home() / ".config" / "gitline.toml"


def find_config_file(override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence, then $GITLINE_CONFIG."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        p = Path(env_path)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {env_path} (from ${CONFIG_ENV_VAR})")
        return p
    candidate = default_config_path()
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table, got {type(raw).__name__}")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    for key in raw.keys() - valid_fields:
        logger.debug("Ignoring unknown config key %s.%s", section, key)
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _merge_env_overrides(cfg: GitlineConfig) -> None:
    """Apply GITLINE_* environment variable overrides."""
    if val := os.environ.get("GITLINE_FORMAT"):
        cfg.git_status.format = val
    if val := os.environ.get("GITLINE_STYLE"):
        cfg.git_status.style = val
    if os.environ.get("GITLINE_DISABLED") == "1":
        cfg.git_status.disabled = True


def load_config(config_override: Optional[str] = None) -> GitlineConfig:
    """Load, validate, and return a GitlineConfig."""
    config_path = find_config_file(config_override)

    if config_path is None:
        cfg = GitlineConfig()
    else:
        logger.debug("Loading config from %s", config_path)
        raw = _parse_toml(config_path)
        cfg = GitlineConfig(
            version=str(raw.get("version", "1.0")),
            git_status=_build_section(raw, GitStatusConfig, "git_status"),
            output=_build_section(raw, OutputConfig, "output"),
        )

    _merge_env_overrides(cfg)
    return cfg
