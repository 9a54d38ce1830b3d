"""
Settings module
Environment-specific settings for the paper generator, validated on load
"""
import os
from typing import Optional, List
from functools import cached_property

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class BaseConfig(BaseSettings):
    """
    Base settings shared by every environment
    """
    # ===========================================
    # Application
    # ===========================================
    SERVICE_NAME: str = Field(default="exam-paper-generator")
    ENV: str = Field(default="development")
    LOG_LEVEL: str = Field(default="INFO")

    # ===========================================
    # Generation
    # ===========================================
    # Extra attempts the generator makes when a random draw dead-ends.
    GENERATE_MAX_RETRIES: int = Field(default=0, ge=0)
    RANDOM_SEED: Optional[int] = None
    # Overrides the catalog-derived minimum pool size when set.
    MIN_POOL_SIZE: Optional[int] = Field(default=None, ge=1)

    # ===========================================
    # Upload metadata
    # ===========================================
    REQUIRED_METADATA_FIELDS: str = Field(
        default="subject_code,subject,branch,regulation,year,semester"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v_upper

    @cached_property
    def required_metadata_fields(self) -> List[str]:
        """Metadata fields every uploaded pool must carry, as a list"""
        if not self.REQUIRED_METADATA_FIELDS:
            return []
        return [f.strip() for f in self.REQUIRED_METADATA_FIELDS.split(",") if f.strip()]


class DevelopmentConfig(BaseConfig):
    """Development settings"""
    ENV: str = Field(default="development")
    LOG_LEVEL: str = Field(default="DEBUG")


class StagingConfig(BaseConfig):
    """Staging settings"""
    ENV: str = Field(default="staging")
    LOG_LEVEL: str = Field(default="INFO")


class ProductionConfig(BaseConfig):
    """Production settings"""
    ENV: str = Field(default="production")
    LOG_LEVEL: str = Field(default="WARNING")


class TestConfig(BaseConfig):
    """Test settings"""
    ENV: str = Field(default="test")
    LOG_LEVEL: str = Field(default="DEBUG")
    RANDOM_SEED: Optional[int] = Field(default=1234)


def get_settings() -> BaseConfig:
    """
    Return the settings object for the current environment

    The settings class is picked from the ENV environment variable.
    """
    env = os.getenv("ENV", "development").lower()

    config_map = {
        "development": DevelopmentConfig,
        "dev": DevelopmentConfig,
        "local": DevelopmentConfig,
        "staging": StagingConfig,
        "stage": StagingConfig,
        "production": ProductionConfig,
        "prod": ProductionConfig,
        "test": TestConfig,
        "testing": TestConfig,
    }

    config_class = config_map.get(env, DevelopmentConfig)
    return config_class()


# Global settings instance
settings = get_settings()
