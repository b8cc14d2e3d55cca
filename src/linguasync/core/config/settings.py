"""
Core configuration management for LinguaSync.

This module provides centralized configuration management using Pydantic settings
with support for environment variables, type validation, and computed properties.
All application settings are defined here with sensible defaults and validation.

Classes:
    Settings: Main configuration class with all application settings

Environment Variables:
    Application settings can be overridden using environment variables with the
    same names as the class attributes (case-sensitive).

Example:
    >>> from linguasync.core.config.settings import Settings
    >>> settings = Settings()
    >>> print(settings.DETECTOR_ALPHA)
    0.5

Configuration Sections:
    - Application: Basic app configuration (name, version, environment)
    - Logging: Application logging configuration
    - Profiles: Locations of the bundled default profile sets
    - Detector: Defaults for detection sessions (smoothing, trials, thresholds)
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables using the
    same name as the attribute. For example, DETECTOR_ALPHA=0.3 changes
    the default smoothing of every detector created afterwards.

    Attributes:
        APP_NAME: Application name identifier
        APP_VERSION: Current application version
        ENVIRONMENT: Deployment environment (development/testing/production)
        DEBUG: Enable debug mode with rich console logging

        LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        LOG_FORMAT: Log format (json/text)
        LOG_FILE_PATH: Path for log file output (optional)

        DEFAULT_PROFILE_DIR: Override for the standard profile set directory
        SHORT_PROFILE_DIR: Directory holding the short-text profile set

        DETECTOR_ALPHA: Base smoothing parameter
        DETECTOR_ALPHA_WIDTH: Half-width of the per-trial alpha jitter
        DETECTOR_MAX_TEXT_LENGTH: Normalized characters kept per session
        DETECTOR_N_TRIAL: Number of randomized trials averaged per estimate
        DETECTOR_ITERATION_LIMIT: Hard cap on updates within one trial
        DETECTOR_CONV_THRESHOLD: Leading probability that ends a trial early
        DETECTOR_PROB_THRESHOLD: Minimum probability reported in results
        DETECTOR_MIN_CONFIDENCE: Minimum top probability for detect()
        DETECTOR_MAX_REPEAT: Longest run of one repeated character kept
        DETECTOR_SEED: Optional seed applied to every new detector
    """

    # Application
    APP_NAME: str = "LinguaSync"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    LOG_FILE_PATH: Optional[str] = None

    # Profile Sets
    DEFAULT_PROFILE_DIR: Optional[str] = None
    SHORT_PROFILE_DIR: Optional[str] = None

    # Detector Defaults
    DETECTOR_ALPHA: float = 0.5
    DETECTOR_ALPHA_WIDTH: float = 0.05
    DETECTOR_MAX_TEXT_LENGTH: int = 10000
    DETECTOR_N_TRIAL: int = 7
    DETECTOR_ITERATION_LIMIT: int = 1000
    DETECTOR_CONV_THRESHOLD: float = 0.99999
    DETECTOR_PROB_THRESHOLD: float = 0.1
    DETECTOR_MIN_CONFIDENCE: float = 0.1
    DETECTOR_MAX_REPEAT: int = 3
    DETECTOR_SEED: Optional[int] = Field(default=None, ge=0)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate logging level is a supported value.

        Ensures the log level is one of the standard Python logging
        levels. Converts to uppercase for consistency.

        Args:
            v (str): The log level value to validate

        Returns:
            str: The validated and normalized log level

        Raises:
            ValueError: If log level is not supported
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("DETECTOR_ALPHA", "DETECTOR_CONV_THRESHOLD")
    @classmethod
    def validate_unit_interval(cls, v: float) -> float:
        """Reject values outside the closed interval [0, 1]."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("value must be within [0, 1]")
        return v

    @field_validator(
        "DETECTOR_MAX_TEXT_LENGTH",
        "DETECTOR_N_TRIAL",
        "DETECTOR_ITERATION_LIMIT",
        "DETECTOR_MAX_REPEAT",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # This will ignore extra fields from environment
    )


def get_settings() -> Settings:
    """Get application settings instance"""
    return Settings()


settings = Settings()
