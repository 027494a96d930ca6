"""
Tests for settings, validation and batch models.
"""

import pytest
from pydantic import ValidationError

from src.models import (
    REFERENCE_RESOLUTION,
    BatchResult,
    BatchRow,
    ExportSettings,
    OutputFormat,
    RenderSettings,
    RowOutcome,
    RowStatus,
    Symbology,
    ValidationOutcome,
)


class TestBatchRow:
    """Tests for BatchRow."""

    def test_label_defaults_to_code(self):
        """Missing, None and empty labels fall back to the code."""
        assert BatchRow(code="ABC").label == "ABC"
        assert BatchRow(code="ABC", label=None).label == "ABC"
        assert BatchRow(code="ABC", label="").label == "ABC"

    def test_explicit_label(self):
        """Explicit labels are kept."""
        assert BatchRow(code="ABC", label="Shoes").label == "Shoes"

    def test_immutable(self):
        """Rows cannot change once created."""
        row = BatchRow(code="ABC")
        with pytest.raises(ValidationError):
            row.code = "XYZ"


class TestRenderSettings:
    """Tests for RenderSettings."""

    def test_defaults(self):
        """Defaults match the form's initial state."""
        settings = RenderSettings()
        assert settings.symbology == Symbology.CODE128
        assert settings.module_width == 2
        assert settings.bar_height == 100
        assert settings.show_label is True
        assert settings.font_size == 20
        assert settings.background_color == "#ffffff"
        assert settings.bar_color == "#000000"

    def test_scaled(self):
        """Scaling multiplies widths, height and font size only."""
        scaled = RenderSettings(bar_color="#112233").scaled(2)
        assert scaled.module_width == 4
        assert scaled.bar_height == 200
        assert scaled.font_size == 40
        assert scaled.bar_color == "#112233"

    def test_scale_of_one_is_identity(self):
        settings = RenderSettings()
        assert settings.scaled(1) is settings

    def test_invalid_values(self):
        """Sizes must be positive and colors #rrggbb."""
        with pytest.raises(ValidationError):
            RenderSettings(module_width=0)
        with pytest.raises(ValidationError):
            RenderSettings(background_color="white")
        with pytest.raises(ValidationError):
            RenderSettings(symbology="QR")


class TestExportSettings:
    """Tests for ExportSettings."""

    def test_raster_scale_ratio(self):
        """Raster output scales by resolution over the reference resolution."""
        assert ExportSettings(format="png", resolution=1000).scale_ratio == 2
        assert ExportSettings(format="jpg", resolution=250).scale_ratio == 0.5
        assert ExportSettings().scale_ratio == 1
        assert ExportSettings().resolution == REFERENCE_RESOLUTION

    def test_vector_never_scaled(self):
        """SVG output ignores the resolution."""
        assert ExportSettings(format="svg", resolution=1500).scale_ratio == 1

    def test_resolution_bounds(self):
        """Resolution must stay between 100 and 2000."""
        with pytest.raises(ValidationError):
            ExportSettings(resolution=50)
        with pytest.raises(ValidationError):
            ExportSettings(resolution=2500)

    def test_output_format_properties(self):
        assert OutputFormat.PNG.is_raster
        assert OutputFormat.JPG.is_raster
        assert not OutputFormat.SVG.is_raster
        assert OutputFormat.JPG.media_type == "image/jpeg"
        assert OutputFormat.SVG.media_type == "image/svg+xml"
        assert OutputFormat.JPG.pil_format == "JPEG"


class TestValidationOutcome:
    """Tests for ValidationOutcome."""

    def test_admit_and_reject(self):
        assert ValidationOutcome.admit().admitted is True
        assert ValidationOutcome.admit().reason is None

        rejected = ValidationOutcome.reject("empty input")
        assert rejected.admitted is False
        assert rejected.reason == "empty input"


class TestBatchResult:
    """Tests for BatchResult counters."""

    def test_counts_and_filenames(self):
        """Counts follow the row statuses and filenames keep order."""
        result = BatchResult(
            outcomes=[
                RowOutcome(index=0, code="A", status=RowStatus.EXPORTED, filename="A.png"),
                RowOutcome(index=1, code="b", status=RowStatus.SKIPPED, reason="bad"),
                RowOutcome(index=2, code="C", status=RowStatus.FAILED, reason="boom"),
                RowOutcome(index=3, code="D", status=RowStatus.EXPORTED, filename="D.png"),
            ]
        )
        assert result.exported == 2
        assert result.skipped == 1
        assert result.failed == 1
        assert result.filenames == ["A.png", "D.png"]
        assert result.cancelled is False
