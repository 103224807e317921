"""Utility functions for curveforge.

This module provides logging setup and batch statistics tracking.
"""

from curveforge.utils.logging import (
    FitLogger,
    FitStats,
    configure_logging,
)

__all__ = [
    "FitLogger",
    "FitStats",
    "configure_logging",
]
