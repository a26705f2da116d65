from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="Immunization Data Quality API", alias="APP_NAME")
    app_env: str = Field(default="local", alias="APP_ENV")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    database_url: str = Field(
        default="sqlite+pysqlite:///./vaxdq.db",
        alias="DATABASE_URL",
    )
    auto_create_schema: bool = Field(default=True, alias="AUTO_CREATE_SCHEMA")
    records_source: str = Field(default="immunization_data.json", alias="RECORDS_SOURCE")
    records_fetch_timeout_s: float = Field(default=30.0, alias="RECORDS_FETCH_TIMEOUT_S")
    recompute_debounce_ms: int = Field(default=300, alias="RECOMPUTE_DEBOUNCE_MS")
    export_filename: str = Field(
        default="immunization_data_quality_export.csv",
        alias="EXPORT_FILENAME",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
