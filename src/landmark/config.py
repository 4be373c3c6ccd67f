"""Configuration management using Pydantic Settings.

Loads configuration from multiple sources with the following priority (highest first):
0. Keyword arguments passed to Settings
1. Environment variables (LANDMARK_* prefix)
2. .env file
3. config.local.yaml (if exists)
4. config.yaml
5. Default values
"""

from contextvars import ContextVar
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_BASE_URL = "https://e2f5f5319d36.ngrok-free.app"
DEFAULT_MODEL = "google/gemini-2.0-flash-001"


class ApiSettings(BaseModel):
    """Backend API configuration."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Client-side timeout for a single request in seconds",
    )
    # Headers required by the tunnel in front of the backend, not by the chat protocol
    extra_headers: dict[str, str] = Field(
        default_factory=lambda: {"ngrok-skip-browser-warning": "true"}
    )


class ChatSettings(BaseModel):
    """Chat completion configuration."""

    model: str = DEFAULT_MODEL
    preview_length: int = Field(
        default=200,
        ge=1,
        description="Number of characters shown in a response preview",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"
    include_request_body: bool = False
    include_response_body: bool = False


class StoreSettings(BaseModel):
    """Local item store configuration."""

    path: Path = Field(default_factory=lambda: Path.home() / ".landmark" / "items.json")


def _load_yaml_config(config_dir: Path) -> dict:
    """Load configuration from YAML files.

    Loads config.yaml and optionally overlays config.local.yaml.
    """
    config = {}

    config_file = config_dir / "config.yaml"
    if config_file.exists():
        with open(config_file) as f:
            config = yaml.safe_load(f) or {}

    local_config_file = config_dir / "config.local.yaml"
    if local_config_file.exists():
        with open(local_config_file) as f:
            local_config = yaml.safe_load(f) or {}
            config = _deep_merge(config, local_config)

    return config


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


# YAML values for the Settings instance currently being built
_yaml_config_var: ContextVar[dict] = ContextVar("yaml_config", default={})


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source backed by the merged config.yaml / config.local.yaml."""

    def __init__(self, settings_cls: type[BaseSettings], config: dict) -> None:
        super().__init__(settings_cls)
        self._config = config

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._config.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        fields = self.settings_cls.model_fields
        return {key: value for key, value in self._config.items() if key in fields}


class Settings(BaseSettings):
    """Application settings loaded from environment, .env, and config files."""

    model_config = SettingsConfigDict(
        env_prefix="LANDMARK_",
        env_nested_delimiter="__",
        env_file=Path.home() / "landmark.env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api: ApiSettings = Field(default_factory=ApiSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)

    def __init__(self, config_dir: Path | None = None, **data):
        """Initialize settings, loading from YAML if config_dir provided."""
        yaml_config = _load_yaml_config(config_dir) if config_dir is not None else {}
        token = _yaml_config_var.set(yaml_config)
        try:
            super().__init__(**data)
        finally:
            _yaml_config_var.reset(token)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Place YAML below environment and .env, above defaults."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSource(settings_cls, _yaml_config_var.get()),
            file_secret_settings,
        )

    def validate_required(self) -> None:
        """Validate that required settings are present.

        Raises:
            ValueError: If required settings are missing.
        """
        if not self.api.base_url.strip():
            raise ValueError("api.base_url is required (LANDMARK_API__BASE_URL)")

        if not self.chat.model.strip():
            raise ValueError("chat.model is required (LANDMARK_CHAT__MODEL)")


@lru_cache
def get_settings(config_dir: Path | None = None) -> Settings:
    """Get cached settings instance.

    Args:
        config_dir: Optional path to config directory. If None, the project's
                   config/ directory is used when it exists.

    Returns:
        Settings instance.
    """
    if config_dir is None:
        project_root = Path(__file__).parent.parent.parent
        default_config_dir = project_root / "config"
        if default_config_dir.exists():
            config_dir = default_config_dir

    return Settings(config_dir=config_dir)
