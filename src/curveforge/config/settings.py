"""Configuration settings for curveforge."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class FittingConfig(BaseModel):
    """Configuration for Hobby curve fitting.

    Tension and curl values passed to the fitter are clamped into the ranges
    given here rather than rejected, so randomly perturbed inputs never fail.
    """

    tension: float = Field(
        default=1.0,
        ge=0.5,
        le=2.0,
        description="Default tension applied to every chord",
    )
    min_tension: float = Field(
        default=0.5,
        gt=0.0,
        description="Lower clamp for tension values",
    )
    max_tension: float = Field(
        default=2.0,
        gt=0.0,
        description="Upper clamp for tension values",
    )
    curl: float = Field(
        default=1.0,
        ge=0.0,
        le=4.0,
        description="Curl at the endpoints of open curves",
    )
    max_curl: float = Field(
        default=4.0,
        ge=0.0,
        description="Upper clamp for curl values",
    )

    def clamp_tension(self, value: float) -> float:
        """Clamp a tension value into the configured range."""
        return max(self.min_tension, min(self.max_tension, value))

    def clamp_curl(self, value: float) -> float:
        """Clamp a curl value into [0, max_curl]."""
        return max(0.0, min(self.max_curl, value))


class SamplingConfig(BaseModel):
    """Resolution used by approximation-based operations."""

    length_samples: int = Field(
        default=32,
        ge=2,
        le=1024,
        description="Polyline steps per segment when measuring arc length",
    )
    intersection_resolution: int = Field(
        default=64,
        ge=4,
        le=1024,
        description="Polyline steps per segment for intersection tests",
    )
    containment_resolution: int = Field(
        default=32,
        ge=2,
        le=1024,
        description="Polyline steps per segment for containment tests",
    )
    ribbon_samples: int = Field(
        default=200,
        ge=2,
        le=100_000,
        description="Default sample count for ribbons and offsets",
    )


class ToleranceConfig(BaseModel):
    """Distances below which geometry is considered coincident."""

    coincident_points: float = Field(
        default=1e-9,
        ge=0.0,
        le=1.0,
        description="Consecutive input points closer than this are merged",
    )
    intersection_merge: float = Field(
        default=1e-6,
        ge=0.0,
        le=1.0,
        description="Intersections closer than this are reported once",
    )
    boundary: float = Field(
        default=1e-9,
        ge=0.0,
        le=1.0,
        description="Points this close to a boundary count as outside",
    )
    continuity: float = Field(
        default=1e-6,
        ge=0.0,
        le=1.0,
        description="Maximum gap between joined segment endpoints",
    )
    flatten: float = Field(
        default=0.25,
        gt=0.0,
        le=10.0,
        description="Maximum deviation when flattening curves adaptively",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: LogLevel = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )

    @field_validator("log_level", "file_log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class CurveForgeSettings(BaseModel):
    """Main library settings."""

    fitting: FittingConfig = Field(default_factory=FittingConfig)
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    tolerance: ToleranceConfig = Field(default_factory=ToleranceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


_DEFAULT_SETTINGS = CurveForgeSettings()


def get_default_settings() -> CurveForgeSettings:
    """Get the shared default settings instance.

    Settings models are treated as read-only once built, so the same
    instance is handed to every caller that does not supply its own.
    """
    return _DEFAULT_SETTINGS
