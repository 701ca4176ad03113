"""Configuration settings for Isoliner."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class SampleMode(str, Enum):
    """Pixel format an input image is decoded to before sampling."""

    LUMA16 = "luma16"
    LUMA8 = "luma8"


class ContourConfig(BaseModel):
    """Configuration for contour extraction."""

    levels: int = Field(
        default=15,
        ge=1,
        le=1000,
        description="Number of evenly spaced contour levels",
    )
    thresholds: list[float] | None = Field(
        default=None,
        description="Explicit contour levels (overrides levels)",
    )
    close_boundaries: bool = Field(
        default=True,
        description="Close paths that run from border to border into polygons",
    )
    min_points: int = Field(
        default=3,
        ge=2,
        description="Minimum points for a path to be rendered",
    )


class RenderConfig(BaseModel):
    """Configuration for SVG rendering."""

    stroke_width: float = Field(
        default=1.0,
        gt=0.0,
        le=100.0,
        description="Stroke width in sample units",
    )
    use_interpolated: bool = Field(
        default=True,
        description="Render interpolated crossings instead of raw edge midpoints",
    )
    colored: bool = Field(
        default=False,
        description="Color each level from the palette instead of plain black",
    )
    fill: str = Field(
        default="none",
        description="Fill for rendered paths",
    )


class ProcessingConfig(BaseModel):
    """Configuration for field processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    sample_mode: SampleMode = Field(
        default=SampleMode.LUMA16,
        description="Pixel format used to sample the input image",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class IsolinerSettings(BaseModel):
    """Main application settings."""

    contour: ContourConfig = Field(default_factory=ContourConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> IsolinerSettings:
    """Get default application settings."""
    return IsolinerSettings()
