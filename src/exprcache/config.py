from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from exprcache.constants import (
    DEFAULT_MAX_EXPRESSION_LENGTH,
    ENV_PREFIX,
    PROJECT_CONFIG_FILENAME,
)
from exprcache.exceptions import ConfigError
from exprcache.logging import get_logger

__all__ = [
    "ExprCacheConfig",
    "ParserConfig",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)


class ParserConfig(BaseModel):
    """Settings for the default expression parser.

    Attributes:
        max_expression_length: Longest expression text accepted (characters).
        strip_template_wrapper: Accept ``#{ ... }`` wrapped expressions and
            parse only the inner text.
    """

    model_config = ConfigDict(frozen=True)

    max_expression_length: int = Field(default=DEFAULT_MAX_EXPRESSION_LENGTH, gt=0)
    strip_template_wrapper: bool = True


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Config file {yaml_file} must contain a mapping",
                    value=loaded,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class ExprCacheConfig(BaseSettings):
    """Root configuration object containing all exprcache settings."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        extra="ignore",
    )

    parser: ParserConfig = Field(default_factory=ParserConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init values (an explicit file handed to load_config())
        2. Environment variables (EXPRCACHE_*)
        3. Project YAML config (./exprcache.yaml)
        4. User YAML config (~/.config/exprcache/config.yaml)
        """
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, Path.cwd() / PROJECT_CONFIG_FILENAME),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/exprcache/config.yaml
    """
    return Path.home() / ".config" / "exprcache" / "config.yaml"


def load_config(config_path: Path | None = None) -> ExprCacheConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env -> file.

    Args:
        config_path: Optional explicit config file. Its values take precedence
            over every other source.

    Returns:
        ExprCacheConfig instance with merged configuration.

    Raises:
        ConfigError: If a file holds invalid YAML or a value fails validation.
    """
    overrides: dict[str, Any] = {}
    if config_path is not None:
        if config_path.exists():
            overrides = YamlConfigSource(ExprCacheConfig, config_path)()
        else:
            logger.info("config_file_not_found", path=str(config_path))

    try:
        return ExprCacheConfig(**overrides)
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
