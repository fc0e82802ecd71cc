"""Configuration management built on top of the policy primitives."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Literal

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .policies import Policies, load_policies

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "default.yaml"

_SETTINGS_ENV_PREFIX = "COMPANY_DEDUP_SETTINGS__"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return *base* updated recursively with *override*; inputs are untouched."""

    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _read_yaml_mapping(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping, treating a missing or empty file as ``{}``."""

    if not path.is_file():
        return {}
    loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration file '{path}' must contain a mapping")
    return loaded


def _apply_env_overrides(base: Dict[str, Any]) -> Dict[str, Any]:
    """Layer ``COMPANY_DEDUP_SETTINGS__SECTION__KEY=value`` variables onto *base*."""

    result = dict(base)
    for name in sorted(os.environ):
        if not name.startswith(_SETTINGS_ENV_PREFIX):
            continue
        *parents, leaf = name[len(_SETTINGS_ENV_PREFIX) :].lower().split("__")
        cursor = result
        for part in parents:
            nested = cursor.get(part)
            nested = dict(nested) if isinstance(nested, dict) else {}
            cursor[part] = nested
            cursor = nested
        cursor[leaf] = os.environ[name]
    return result


def _anchor(path: Path) -> Path:
    path = Path(path).expanduser()
    return path if path.is_absolute() else PROJECT_ROOT / path


class PathsConfig(BaseModel):
    """Filesystem locations for logs and exported groups.

    Relative locations are anchored at the project root.
    """

    output_dir: Path = Field(default=PROJECT_ROOT / "output")
    logs_dir: Path = Field(default=PROJECT_ROOT / "logs")

    def resolve_output(self, path: str | Path) -> Path:
        """Place a relative export path under ``output_dir``; absolute paths pass through."""

        target = Path(path).expanduser()
        if target.is_absolute():
            return target
        return _anchor(self.output_dir) / target

    def ensure_exists(self) -> None:
        """Create the output and log directories."""

        for directory in (self.output_dir, self.logs_dir):
            _anchor(directory).mkdir(parents=True, exist_ok=True)


class LoggingConfig(BaseModel):
    """Loguru sink configuration."""

    level: str = Field(default="WARNING", description="Minimum level emitted to stderr.")
    log_to_file: bool = Field(default=False, description="Also write a rotating log file.")


class Settings(BaseSettings):
    """Primary configuration object for the deduplication tool.

    Precedence (highest first): explicit kwargs or CLI overrides, environment
    variables prefixed with ``COMPANY_DEDUP_`` (handled by
    :class:`BaseSettings`), nested overrides via ``COMPANY_DEDUP_SETTINGS__``
    variables, environment-specific YAML (e.g. ``production.yaml``), the
    default YAML file, and finally the class defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="COMPANY_DEDUP_",
        validate_assignment=True,
        extra="allow",
    )

    environment: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Active runtime environment",
    )
    config_dir: Path = Field(default=DEFAULT_CONFIG_DIR)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    create_dirs: bool = Field(
        default=False,
        description="Create filesystem directories declared in `paths` during initialisation.",
    )
    policies: Policies

    @model_validator(mode="before")
    @classmethod
    def _bootstrap_from_files(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Load YAML files and merge with provided overrides."""

        config_dir = Path(values.get("config_dir") or DEFAULT_CONFIG_DIR)
        environment = values.get("environment") or os.getenv("COMPANY_DEDUP_ENV", "development")
        base_config = _read_yaml_mapping(config_dir / "default.yaml")
        env_config = _read_yaml_mapping(config_dir / f"{environment}.yaml")
        merged = _deep_merge(base_config, env_config)
        hydrated = _apply_env_overrides(merged)

        combined = _deep_merge(hydrated, {k: v for k, v in values.items() if v is not None})

        policies_data = combined.pop("policies", None)
        if isinstance(policies_data, Policies):
            combined["policies"] = policies_data
            return combined
        combined["policies"] = load_policies(policies_data or {})
        return combined

    @model_validator(mode="after")
    def _ensure_paths(self) -> "Settings":
        """Ensure filesystem paths exist when directory creation is enabled."""

        if self.create_dirs:
            self.paths.ensure_exists()
        return self

    @property
    def policy_version(self) -> str:
        return self.policies.policy_version

    @property
    def log_file(self) -> Path:
        return _anchor(self.paths.logs_dir) / "company_dedup.log"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a singleton settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings", "PathsConfig", "LoggingConfig"]
