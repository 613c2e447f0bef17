"""Load and merge configuration from .relnotes.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from relnotes.config.schema import (
    CommitsConfig,
    GitHubConfig,
    ReleaseConfig,
    RelnotesConfig,
    RenderConfig,
)

CONFIG_FILENAME = ".relnotes.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
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
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _merge_env_overrides(cfg: RelnotesConfig) -> None:
    """Apply RELNOTES_* environment variable overrides."""
    if val := os.environ.get("RELNOTES_MAX_BODY_LENGTH"):
        try:
            cfg.release.max_body_length = int(val)
        except ValueError:
            pass
    if val := os.environ.get("RELNOTES_CHANGELOG"):
        cfg.release.changelog_file = val
    if val := os.environ.get("RELNOTES_API_URL"):
        cfg.github.api_url = val


def _validate(cfg: RelnotesConfig) -> None:
    if cfg.render.indent_width <= 0:
        raise ConfigError("render.indent_width must be positive")
    if cfg.release.max_body_length <= 20:
        raise ConfigError("release.max_body_length must be greater than 20")
    if cfg.commits.collapse_after < 0:
        raise ConfigError("commits.collapse_after must not be negative")


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> RelnotesConfig:
    """Load, validate, and return a RelnotesConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = RelnotesConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = RelnotesConfig(
                version=raw.get("version", "1.0"),
                release=_build_section(raw, ReleaseConfig, "release"),
                render=_build_section(raw, RenderConfig, "render"),
                commits=_build_section(raw, CommitsConfig, "commits"),
                github=_build_section(raw, GitHubConfig, "github"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc

    _merge_env_overrides(cfg)
    _validate(cfg)
    return cfg
