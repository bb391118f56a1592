"""Configuration for strapigen.

Two layers: ``Settings`` reads the process environment and ``.env`` (connection
secrets, log level, config file location) and ``Configuration`` is the
validated content of ``strapi.config.yaml`` that the generators consume.
"""
from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from strapigen.core.errors import ConfigError

CONFIG_FILES = ("strapi.config.yaml", "strapi.config.yml")

log = logging.getLogger(__name__)

_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    strapi_url: str | None = None
    strapi_token: str | None = None
    strapigen_config: str | None = None
    log_level: str = "INFO"


class _ConfigModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class OutputConfig(_ConfigModel):
    path: str = "src/strapi"
    types: str = "types"
    services: str = "services"
    actions: str = "actions/strapi"
    schemas: str = "schemas"
    upload: str = "upload"
    structure: Literal["by-layer", "by-feature"] = "by-feature"


class FeaturesConfig(_ConfigModel):
    types: bool = True
    services: bool = True
    actions: bool = True
    # None means "on for typescript, off for jsdoc"
    schemas: bool | None = None
    upload: bool = False


class SchemaOptions(_ConfigModel):
    advanced_relations: bool = False


class AdvancedOptions(_ConfigModel):
    blocks_renderer_installed: bool = False
    detect_version: bool = True
    format: bool = True


class Configuration(_ConfigModel):
    url: str
    token: str | None = None
    api_prefix: str = "/api"
    strapi_version: Literal["v4", "v5"] = "v5"
    output_format: Literal["typescript", "jsdoc"] = "typescript"
    module_type: Literal["esm", "commonjs"] = "esm"
    output: OutputConfig = Field(default_factory=OutputConfig)
    features: FeaturesConfig = Field(default_factory=FeaturesConfig)
    schema_options: SchemaOptions = Field(default_factory=SchemaOptions)
    options: AdvancedOptions = Field(default_factory=AdvancedOptions)

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("url must be a valid http(s) URL")
        return value.rstrip("/")

    @field_validator("token")
    @classmethod
    def _empty_token_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip().strip("/")
        return f"/{value}" if value else ""

    @property
    def schemas_enabled(self) -> bool:
        if self.features.schemas is None:
            return self.output_format == "typescript"
        return self.features.schemas

    @property
    def file_extension(self) -> str:
        return "ts" if self.output_format == "typescript" else "js"


def find_config_file(cwd: Path, settings: Settings | None = None) -> Path | None:
    """Locate the YAML config file for a project directory."""
    if settings is not None and settings.strapigen_config:
        candidate = Path(settings.strapigen_config)
        if not candidate.is_absolute():
            candidate = cwd / candidate
        return candidate if candidate.exists() else None
    for name in CONFIG_FILES:
        candidate = cwd / name
        if candidate.exists():
            return candidate
    return None


def _expand_env(value: Any, env: dict[str, str], missing: set[str]) -> Any:
    if isinstance(value, str):
        def resolve(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in env:
                missing.add(name)
            return env.get(name, "")
        return _ENV_REF.sub(resolve, value)
    if isinstance(value, dict):
        return {key: _expand_env(item, env, missing) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env(item, env, missing) for item in value]
    return value


def load_config(cwd: Path | str | None = None, config_path: Path | str | None = None) -> Configuration:
    """
    Load and validate the project configuration.

    Args:
        cwd: Project directory holding the config file and ``.env``
        config_path: Explicit config file path (overrides discovery)

    Returns:
        Validated Configuration

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    cwd = Path(cwd or Path.cwd())
    settings = Settings(_env_file=cwd / ".env")

    path = Path(config_path) if config_path else find_config_file(cwd, settings)
    if path is not None and not path.is_absolute():
        path = cwd / path
    if path is None or not path.exists():
        raise ConfigError(
            f"Could not find strapi.config.yaml in {cwd}. Create one or pass --config."
        )

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")

    # the process environment overrides .env
    env = {key: value for key, value in dotenv_values(cwd / ".env").items() if value is not None}
    env.update(os.environ)
    missing: set[str] = set()
    resolved = _expand_env(raw, env, missing)
    if missing:
        log.warning("Unset variables in %s expand to empty strings: %s", path, ", ".join(sorted(missing)))

    if not resolved.get("url") and settings.strapi_url:
        resolved["url"] = settings.strapi_url
    if not resolved.get("token") and settings.strapi_token:
        resolved["token"] = settings.strapi_token

    try:
        return Configuration.model_validate(resolved)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration in {path}: {problems}") from e
