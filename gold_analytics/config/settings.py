"""
Gold Analytics Reporting Layer
Centralized Configuration Management

Configuration is loaded with Pydantic settings from environment variables and
an optional ``.env`` file, validated once and cached for the process.
"""

from datetime import date
from functools import lru_cache
from typing import Optional
from pydantic import Field, field_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Gold warehouse database configuration"""

    model_config = SettingsConfigDict(env_prefix="POSTGRES_")

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    db: str = Field(default="data_warehouse", alias="POSTGRES_DB", description="Database name")
    user: str = Field(default="analytics", description="Database user")
    password: SecretStr = Field(default="analytics", description="Database password")
    echo: bool = Field(default=False, description="Echo SQL queries")
    url: Optional[str] = Field(
        default=None,
        alias="DATABASE_URL",
        description="Full SQLAlchemy async URL (overrides host/port)",
    )

    @property
    def async_url(self) -> str:
        """Async database URL, DATABASE_URL wins over the individual fields"""
        if self.url:
            return self.url
        return f"postgresql+asyncpg://{self.user}:{self.password.get_secret_value()}@{self.host}:{self.port}/{self.db}"


class ReportingSettings(BaseSettings):
    """Report evaluation and export configuration"""

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    as_of_date: Optional[date] = Field(
        default=None,
        description="Evaluation date for age and recency (defaults to today)",
    )
    data_dir: str = Field(default="./data/gold", description="Directory holding gold CSV exports")
    output_dir: str = Field(default="./data/reports", description="Directory for exported reports")
    export_format: str = Field(default="parquet", description="Export format: parquet or csv")

    @field_validator("export_format")
    @classmethod
    def validate_export_format(cls, v: str) -> str:
        allowed = ["parquet", "csv"]
        if v.lower() not in allowed:
            raise ValueError(f"Export format must be one of: {allowed}")
        return v.lower()

    def resolve_as_of(self, as_of: Optional[date] = None) -> date:
        """Evaluation date: explicit argument, then configured override, then today"""
        return as_of or self.as_of_date or date.today()


class MonitoringSettings(BaseSettings):
    """Logging configuration"""

    model_config = SettingsConfigDict(env_prefix="")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="json", description="Log format: json or text")


class Settings(BaseSettings):
    """
    Main Application Settings

    Aggregates all configuration sections and provides a single entry point
    for accessing application configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="gold-analytics", alias="APP_NAME", description="Application name")
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")
    debug: bool = Field(default=False, alias="DEBUG", description="Debug mode")

    # API Server
    api_host: str = Field(default="0.0.0.0", alias="API_HOST", description="API host")
    api_port: int = Field(default=8000, alias="API_PORT", description="API port")

    # Version
    version: str = Field(default="1.0.0", description="Application version")

    # Subsystem configurations
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    reporting: ReportingSettings = Field(default_factory=ReportingSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.app_env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
