"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class EngineConfig(BaseModel):
    """Execution engine configuration."""

    step_duration_seconds: float = Field(
        default=3.5,
        ge=0,
        alias="OPSAGENT_STEP_DURATION_SECONDS",
        description="Duration of the simulated work phase of each step",
    )
    log_sink_capacity: int = Field(
        default=100,
        gt=0,
        alias="OPSAGENT_LOG_SINK_CAPACITY",
        description="Number of most recent operator log lines to retain",
    )

    model_config = {"populate_by_name": True}


class PlannerConfig(BaseModel):
    """Planner gateway configuration."""

    model: str = Field(
        default="gemini-2.5-flash",
        alias="OPSAGENT_PLANNER_MODEL",
        description="Google Gemini model name used for planning",
    )
    api_key: Optional[str] = Field(
        default=None, alias="GOOGLE_API_KEY", description="Google API key for the planning model"
    )

    model_config = {"populate_by_name": True}

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


class LoggingConfig(BaseModel):
    """Application logging configuration."""

    level: str = Field(default="INFO", alias="OPSAGENT_LOG_LEVEL", description="Console log level")
    format: Literal["simple", "detailed"] = Field(
        default="detailed", alias="OPSAGENT_LOG_FORMAT", description="Console and file log line format"
    )
    file_dir: Optional[str] = Field(
        default=None,
        alias="OPSAGENT_LOG_FILE_DIR",
        description="Directory for opsagent.log; file logging is off when unset",
    )

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Grouped configurations are derived from the same values via the properties below.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # OpsAgent Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="OpsAgent server host address to bind to",
        alias="OPSAGENT_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="OpsAgent server port number",
        alias="OPSAGENT_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="OpsAgent logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="OPSAGENT_LOG_LEVEL",
    )
    log_format: Literal["simple", "detailed"] = Field(default="detailed", alias="OPSAGENT_LOG_FORMAT")
    log_file_dir: Optional[str] = Field(default=None, alias="OPSAGENT_LOG_FILE_DIR")

    # =====================================================================
    # Engine Configuration
    # =====================================================================
    step_duration_seconds: float = Field(default=3.5, ge=0, alias="OPSAGENT_STEP_DURATION_SECONDS")
    log_sink_capacity: int = Field(default=100, gt=0, alias="OPSAGENT_LOG_SINK_CAPACITY")

    # =====================================================================
    # Planner Configuration
    # =====================================================================
    planner_model: str = Field(default="gemini-2.5-flash", alias="OPSAGENT_PLANNER_MODEL")
    google_api_key: Optional[str] = Field(default=None, alias="GOOGLE_API_KEY")

    # =====================================================================
    # CORS Configuration
    # =====================================================================
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def engine(self) -> EngineConfig:
        """Get execution engine configuration from environment variables."""
        return EngineConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def planner(self) -> PlannerConfig:
        """Get planner configuration from environment variables."""
        return PlannerConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration from environment variables."""
        return LoggingConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
