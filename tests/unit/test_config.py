"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from isoliner.config import (
    ContourConfig,
    IsolinerSettings,
    ProcessingConfig,
    RenderConfig,
    SampleMode,
    get_default_settings,
)


class TestSettings:
    """Tests for the settings models."""

    def test_defaults(self):
        """Test default settings values."""
        settings = get_default_settings()
        assert isinstance(settings, IsolinerSettings)
        assert settings.contour.levels == 15
        assert settings.contour.thresholds is None
        assert settings.contour.close_boundaries is True
        assert settings.contour.min_points == 3
        assert settings.render.use_interpolated is True
        assert settings.render.fill == "none"
        assert settings.processing.sample_mode is SampleMode.LUMA16
        assert settings.logging.log_level == "WARNING"

    def test_sample_mode_from_string(self):
        """Sample modes parse from their CLI spelling."""
        assert ProcessingConfig(sample_mode="luma8").sample_mode is SampleMode.LUMA8

    @pytest.mark.parametrize("levels", [0, 1001])
    def test_levels_range(self, levels):
        """Level counts are bounded."""
        with pytest.raises(ValidationError):
            ContourConfig(levels=levels)

    def test_min_points_lower_bound(self):
        """A renderable path needs at least two points."""
        with pytest.raises(ValidationError):
            ContourConfig(min_points=1)

    def test_stroke_width_positive(self):
        """Stroke width must be positive."""
        with pytest.raises(ValidationError):
            RenderConfig(stroke_width=0.0)
