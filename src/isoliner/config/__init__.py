"""Configuration management for isoliner.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ContourConfig: Contour level and closing settings
- RenderConfig: SVG rendering settings
- ProcessingConfig: Image sampling and worker settings
- LoggingConfig: Logging settings
- IsolinerSettings: Main application settings
"""

from isoliner.config.settings import (
    ContourConfig,
    IsolinerSettings,
    LoggingConfig,
    ProcessingConfig,
    RenderConfig,
    SampleMode,
    get_default_settings,
)

__all__ = [
    "ContourConfig",
    "IsolinerSettings",
    "LoggingConfig",
    "ProcessingConfig",
    "RenderConfig",
    "SampleMode",
    "get_default_settings",
]
