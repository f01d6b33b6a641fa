"""Service settings.

Values come from layered YAML files (``config/base`` overlaid with
``config/environments/<APP_ENV>``), then ``.env``, then the process
environment, then explicit keyword arguments, each layer winning over the
previous one. Nested sections map to environment variables with ``__``, for
example ``DATABASE__MAX_POOL_SIZE=20``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, BeforeValidator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


NON_PRODUCTION_ENVIRONMENTS = frozenset({"local", "test", "development"})


def split_comma_list(value: str | list[str]) -> list[str]:
    """Accept ``"a, b"`` from the environment as well as a YAML list."""
    if not isinstance(value, str):
        return value
    return [item.strip() for item in value.split(",") if item.strip()]


class AppSettings(BaseModel):
    name: str = "Recipe Catalog Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    v1_prefix: str = "/api/v1"
    cors_origins: Annotated[list[str], BeforeValidator(split_comma_list)] = []


class DatabaseSettings(BaseModel):
    """Connection and pool parameters for PostgreSQL."""

    host: str = "localhost"
    port: int = 5432
    name: str = "recipe_catalog"
    user: str | None = None
    min_pool_size: int = 2
    # Callers beyond max_pool_size wait for a connection to be released.
    max_pool_size: int = 10
    command_timeout: float = 30.0
    ssl: bool = False
    # e.g. "und-x-icu"; unset sorts titles with the database default collation.
    title_collation: str | None = None


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "json"


class Settings(BaseSettings):
    """Root settings object, one nested model per YAML section."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    database: DatabaseSettings = DatabaseSettings()
    logging: LoggingSettings = LoggingSettings()

    # Only ever set through the environment or .env.
    DATABASE_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        yaml_settings = MultiYamlConfigSettingsSource(settings_cls)
        return (init_settings, env_settings, dotenv_settings, yaml_settings, file_secret_settings)

    @property
    def database_url(self) -> str:
        """``postgresql://`` URL for tools that take a DSN (password included)."""
        db = self.database
        credentials = ""
        if db.user:
            credentials = db.user
            if self.DATABASE_PASSWORD:
                credentials += f":{self.DATABASE_PASSWORD}"
            credentials += "@"
        return f"postgresql://{credentials}{db.host}:{db.port}/{db.name}"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def docs_enabled(self) -> bool:
        """OpenAPI docs are served everywhere except production-like environments."""
        return self.APP_ENV in NON_PRODUCTION_ENVIRONMENTS


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    return Settings()
