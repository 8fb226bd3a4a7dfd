from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

ALLOWED_ENV_FIELD_NAMES = frozenset(
    {
        "app_name",
        "app_env",
        "app_version",
        "api_prefix",
        "allowed_origins",
        "agenda_store",
        "mongodb_uri",
        "mongodb_db_name",
        "mongodb_agenda_items_collection",
        "mongodb_agenda_executions_collection",
        "mongodb_connect_timeout_ms",
        "default_tz_offset_minutes",
        "notify_minutes_before",
    },
)


class Settings(BaseSettings):
    app_name: str = "Agenda Command Parser API"
    app_env: str = "development"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    allowed_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]
    agenda_store: str = "mongodb"
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "agenda_commands"
    mongodb_agenda_items_collection: str = "agenda_items"
    mongodb_agenda_executions_collection: str = "agenda_item_executions"
    mongodb_connect_timeout_ms: int = 2000
    default_tz_offset_minutes: int = 180
    notify_minutes_before: int = 15

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        def _filter_allowed_env_fields(source):
            return {
                field_name: raw_value
                for field_name, raw_value in source().items()
                if field_name in ALLOWED_ENV_FIELD_NAMES
            }

        return (
            init_settings,
            lambda: _filter_allowed_env_fields(env_settings),
            lambda: _filter_allowed_env_fields(dotenv_settings),
            file_secret_settings,
        )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("agenda_store", mode="before")
    @classmethod
    def normalize_agenda_store(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("default_tz_offset_minutes", mode="before")
    @classmethod
    def normalize_tz_offset(cls, value: int | str) -> int:
        parsed_value = int(value)
        # Real offsets range from UTC-12 to UTC+14.
        if not -840 <= parsed_value <= 720:
            return 180
        return parsed_value

    @field_validator("notify_minutes_before", mode="before")
    @classmethod
    def normalize_notify_minutes_before(cls, value: int | str) -> int:
        parsed_value = int(value)
        if parsed_value < 0:
            return 15
        return parsed_value

    @field_validator("mongodb_connect_timeout_ms", mode="before")
    @classmethod
    def normalize_mongodb_connect_timeout(cls, value: int | str) -> int:
        parsed_value = int(value)
        if parsed_value <= 0:
            return 2000
        return parsed_value


@lru_cache
def get_settings() -> Settings:
    return Settings()
