"""Configuration management for curveforge.

This module provides configuration management using Pydantic models.
Every operation that needs a tolerance or a resolution accepts an optional
settings object and falls back to the defaults.

Key classes:
- FittingConfig: Tension and curl defaults and clamps
- SamplingConfig: Approximation resolutions
- ToleranceConfig: Coincidence and boundary tolerances
- LoggingConfig: Logging settings
- CurveForgeSettings: Main settings
"""

from curveforge.config.settings import (
    CurveForgeSettings,
    FittingConfig,
    LoggingConfig,
    LogLevel,
    SamplingConfig,
    ToleranceConfig,
    get_default_settings,
)

__all__ = [
    "CurveForgeSettings",
    "FittingConfig",
    "LoggingConfig",
    "LogLevel",
    "SamplingConfig",
    "ToleranceConfig",
    "get_default_settings",
]
