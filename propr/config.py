"""
Configuration Management for the PROPR Risk Service

Environment-based configuration using Pydantic Settings. Only the service
shell is configurable; the regression model itself is a fixed constant.
"""
from typing import Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROPR_",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Application
    app_name: str = "PROPR Recurrence Risk API"
    app_version: str = "1.0.0"
    debug: bool = Field(default=False, description="Enable debug mode")
    
    # Logging
    log_level: str = Field(default="INFO", description="Root logging level")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")
    
    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"
    cors_origins: List[str] = ["*"]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
