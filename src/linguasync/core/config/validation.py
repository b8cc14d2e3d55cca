"""
Detector option validation for LinguaSync.

Detection sessions accept a number of tuning options. This module defines
their schema with Pydantic so that every option is range-checked once,
when a detector is created, instead of failing deep inside an estimation.

Classes:
    PriorityMode: How a priority map is combined with estimated probabilities
    DetectorConfig: Validated detector option set
    ConfigValidator: Loads option files and turns validation failures into
        ConfigurationError

Defaults are taken from the application settings at construction time, so
an environment variable such as DETECTOR_ALPHA changes the default of every
new detector.

Example Usage:
    >>> config = ConfigValidator.validate_config({"alpha": 0.3, "seed": 42})
    >>> config.n_trial
    7
    >>> ConfigValidator.validate_config({"alpha": 2})
    Traceback (most recent call last):
    ...
    ConfigurationError: Detector configuration validation failed: ...
"""

import json
import math
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from linguasync.core.config.settings import settings
from linguasync.core.exceptions.custom_exceptions import ConfigurationError


class PriorityMode(str, Enum):
    """Combination rule for a caller-supplied priority map."""

    ADDITIVE = "additive"
    REPLACE = "replace"


class DetectorConfig(BaseModel):
    """Detection session options"""

    model_config = ConfigDict(extra="forbid")

    alpha: float = Field(
        default_factory=lambda: settings.DETECTOR_ALPHA, ge=0.0, le=1.0
    )
    alpha_width: float = Field(
        default_factory=lambda: settings.DETECTOR_ALPHA_WIDTH, ge=0.0, le=1.0
    )
    max_text_length: int = Field(
        default_factory=lambda: settings.DETECTOR_MAX_TEXT_LENGTH, gt=0
    )
    n_trial: int = Field(default_factory=lambda: settings.DETECTOR_N_TRIAL, gt=0)
    iteration_limit: int = Field(
        default_factory=lambda: settings.DETECTOR_ITERATION_LIMIT, gt=0
    )
    conv_threshold: float = Field(
        default_factory=lambda: settings.DETECTOR_CONV_THRESHOLD, gt=0.0, le=1.0
    )
    prob_threshold: float = Field(
        default_factory=lambda: settings.DETECTOR_PROB_THRESHOLD, ge=0.0, lt=1.0
    )
    min_confidence: float = Field(
        default_factory=lambda: settings.DETECTOR_MIN_CONFIDENCE, ge=0.0, lt=1.0
    )
    max_repeat: int = Field(default_factory=lambda: settings.DETECTOR_MAX_REPEAT, gt=0)
    seed: Optional[int] = Field(
        default_factory=lambda: settings.DETECTOR_SEED, ge=0
    )
    time_budget: Optional[float] = Field(default=None, gt=0.0)
    priority_map: Optional[Dict[str, float]] = None
    priority_mode: PriorityMode = PriorityMode.ADDITIVE

    @field_validator("priority_map")
    @classmethod
    def validate_priority_weights(cls, v):
        if v is None:
            return v
        if not v:
            raise ValueError("priority_map cannot be empty")
        for lang, weight in v.items():
            if not math.isfinite(weight):
                raise ValueError(f"priority weight for '{lang}' must be finite")
            if weight < 0:
                raise ValueError(f"priority weight for '{lang}' must be >= 0")
        return v


class ConfigValidator:
    """Configuration validator for detector option sets"""

    @staticmethod
    def load_config(file_path: str) -> Dict[str, Any]:
        """Load detector options from a YAML or JSON file"""
        path = Path(file_path)

        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {file_path}")

        if path.suffix.lower() not in [".yaml", ".yml", ".json"]:
            raise ConfigurationError(f"Unsupported file format: {path.suffix}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                details={"file_path": str(path)},
            )
        return data

    @staticmethod
    def validate_config(config: Dict[str, Any]) -> DetectorConfig:
        """Validate detector options"""
        try:
            return DetectorConfig(**config)
        except ValidationError as e:
            raise ConfigurationError(
                f"Detector configuration validation failed: {e}",
                error_code="DETECTOR_CONFIG_ERROR",
                details={"options": sorted(config)},
            ) from e

    @staticmethod
    def validate_file(file_path: str) -> DetectorConfig:
        """Load and validate a detector option file"""
        config = ConfigValidator.load_config(file_path)
        return ConfigValidator.validate_config(config)
