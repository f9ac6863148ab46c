"""Mini README: Centralised configuration models and helpers for Canopyscan.

Structure:
    * CanopyscanSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables (prefixed with
    ``CANOPYSCAN_``), pick the service port, and tune the plot and canopy
    limits enforced when estates and trees are registered. The configuration
    is cached so validation runs once per process.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, validator
from pydantic_settings import BaseSettings

from .survey_planning.grid import MAX_PLOT_DIMENSION, MAX_TREE_HEIGHT


class CanopyscanSettings(BaseSettings):
    """Runtime configuration for the Canopyscan survey service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8080,
        description="Default port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level name (DEBUG, INFO, WARNING, ...).",
    )
    max_plot_dimension: int = Field(
        MAX_PLOT_DIMENSION,
        description="Largest accepted estate width or length, in grid cells.",
        ge=1,
    )
    max_tree_height: int = Field(
        MAX_TREE_HEIGHT,
        description="Tallest canopy accepted when registering a tree.",
        ge=1,
    )

    class Config:
        env_prefix = "CANOPYSCAN_"
        env_file = ".env"
        case_sensitive = False

    @validator("log_level")
    def _normalise_level(cls, value: str) -> str:
        """Reject level names the logging module does not know."""

        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache()
def get_settings() -> CanopyscanSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return CanopyscanSettings()
