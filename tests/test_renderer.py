"""
Tests for the python-barcode renderer.
"""

from io import BytesIO

import pytest
from PIL import Image

from src.barcode.renderer import MM_PER_PIXEL, BarcodeRenderer, RenderError
from src.models import ExportSettings, OutputFormat, RenderSettings, Symbology

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
JPEG_MAGIC = b"\xff\xd8"


@pytest.fixture
def renderer():
    return BarcodeRenderer()


class TestRenderFormats:
    """Tests for each output format."""

    def test_svg(self, renderer):
        """SVG output is an XML document."""
        data = renderer.render("ABCD1234", RenderSettings(), OutputFormat.SVG)
        assert b"<svg" in data

    def test_png(self, renderer):
        """PNG output is a decodable PNG."""
        data = renderer.render("ABCD1234", RenderSettings(), OutputFormat.PNG)
        assert data.startswith(PNG_MAGIC)
        assert Image.open(BytesIO(data)).format == "PNG"

    def test_jpg(self, renderer):
        """JPG output is a decodable JPEG."""
        data = renderer.render("ABCD1234", RenderSettings(), OutputFormat.JPG)
        assert data.startswith(JPEG_MAGIC)
        assert Image.open(BytesIO(data)).format == "JPEG"

    def test_label_in_svg(self, renderer):
        """The label replaces the code under the bars."""
        data = renderer.render("ABCD1234", RenderSettings(), OutputFormat.SVG, label="Codice Speciale")
        assert b"Codice Speciale" in data

    def test_hidden_label(self, renderer):
        """No text element is written when the label is hidden."""
        data = renderer.render(
            "ABCD1234",
            RenderSettings(show_label=False),
            OutputFormat.SVG,
            label="Codice Speciale",
        )
        assert b"Codice Speciale" not in data

    def test_colors_in_svg(self, renderer):
        """Background and bar colors reach the writer."""
        settings = RenderSettings(background_color="#fafafa", bar_color="#123456")
        data = renderer.render("ABCD1234", settings, OutputFormat.SVG)
        assert b"#fafafa" in data
        assert b"#123456" in data


class TestSymbologies:
    """Tests for each supported symbology."""

    @pytest.mark.parametrize(
        "symbology,code",
        [
            (Symbology.CODE128, "Hello-128"),
            (Symbology.CODE39, "ABC-123"),
            (Symbology.EAN13, "4006381333931"),
            (Symbology.EAN8, "96385074"),
            (Symbology.UPC, "036000291452"),
        ],
    )
    def test_renders(self, renderer, symbology, code):
        """Valid codes render for every symbology."""
        data = renderer.render(code, RenderSettings(symbology=symbology), OutputFormat.SVG)
        assert b"<svg" in data

    @pytest.mark.parametrize(
        "symbology,code",
        [
            (Symbology.EAN13, "4006381333932"),
            (Symbology.EAN8, "96385075"),
            (Symbology.UPC, "036000291453"),
        ],
    )
    def test_wrong_check_digit(self, renderer, symbology, code):
        """A wrong check digit is a rendering error."""
        with pytest.raises(RenderError, match="check digit"):
            renderer.render(code, RenderSettings(symbology=symbology), OutputFormat.SVG)

    def test_malformed_gtin(self, renderer):
        """Unvalidated garbage is reported as a rendering error."""
        with pytest.raises(RenderError):
            renderer.render("", RenderSettings(symbology=Symbology.EAN13), OutputFormat.SVG)

    def test_code39_invalid_character(self, renderer):
        """Characters Code 39 cannot encode fail at render time."""
        with pytest.raises(RenderError):
            renderer.render("A*B", RenderSettings(symbology=Symbology.CODE39), OutputFormat.SVG)


class TestWriterOptions:
    """Tests for pixel to library unit conversion."""

    def test_millimetres(self, renderer):
        """Logical pixels become millimetres at 96 dpi."""
        options = renderer._writer_options(RenderSettings(), OutputFormat.SVG)
        assert options["module_width"] == pytest.approx(2 * MM_PER_PIXEL)
        assert options["module_height"] == pytest.approx(100 * MM_PER_PIXEL)
        assert options["font_size"] == pytest.approx(15)
        assert "dpi" not in options

    def test_raster_options(self, renderer):
        """Raster output pins dpi so one logical pixel is one image pixel."""
        options = renderer._writer_options(RenderSettings(font="/fonts/mono.ttf"), OutputFormat.PNG)
        assert options["dpi"] == 96
        assert options["format"] == "PNG"
        assert options["font_path"] == "/fonts/mono.ttf"


class TestRenderArtifact:
    """Tests for export-ready artifacts."""

    def test_filename(self, renderer):
        """Artifacts are named prefix + code + suffix + extension."""
        artifact = renderer.render_artifact(
            "ABCD1234",
            None,
            RenderSettings(),
            ExportSettings(format="svg", prefix="IT_", suffix="_v1"),
        )
        assert artifact.filename == "IT_ABCD1234_v1.svg"
        assert artifact.media_type == "image/svg+xml"
        assert artifact.code == "ABCD1234"

    def test_raster_scaled_by_resolution(self, renderer):
        """Doubling the resolution makes a larger raster image."""
        settings = RenderSettings(show_label=False)
        small = renderer.render_artifact("ABCD1234", None, settings, ExportSettings(resolution=500))
        large = renderer.render_artifact("ABCD1234", None, settings, ExportSettings(resolution=1000))

        small_size = Image.open(BytesIO(small.data)).size
        large_size = Image.open(BytesIO(large.data)).size
        assert large_size[0] > small_size[0]
        assert large_size[1] > small_size[1]

    def test_vector_not_scaled(self, renderer):
        """SVG output is identical whatever the resolution."""
        settings = RenderSettings()
        low = renderer.render_artifact("ABCD1234", None, settings, ExportSettings(format="svg", resolution=100))
        high = renderer.render_artifact("ABCD1234", None, settings, ExportSettings(format="svg", resolution=2000))
        assert low.data == high.data
