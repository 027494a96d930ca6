"""
Barcode renderer built on python-barcode.

Converts logical pixel settings to python-barcode writer options and returns
encoded image bytes (PNG, JPEG or SVG).
"""

from dataclasses import dataclass
from io import BytesIO
from typing import Any

import barcode
import structlog
from barcode.writer import ImageWriter, SVGWriter
from PIL import Image

from src.barcode.checksum import GTIN_LENGTHS, has_valid_check_digit
from src.barcode.symbology import get_rule
from src.export.filenames import OutputNames
from src.models.settings import ExportSettings, OutputFormat, RenderSettings, Symbology

logger = structlog.get_logger(__name__)

# Logical pixels are CSS pixels: 96 per inch
PIXELS_PER_INCH = 96
MM_PER_PIXEL = 25.4 / PIXELS_PER_INCH
POINTS_PER_PIXEL = 72 / PIXELS_PER_INCH


class RenderError(Exception):
    """Raised when content cannot be drawn even though it passed validation."""


@dataclass
class RenderedArtifact:
    """A rendered barcode ready for export."""

    code: str
    filename: str
    data: bytes
    output_format: OutputFormat

    @property
    def media_type(self) -> str:
        return self.output_format.media_type


class BarcodeRenderer:
    """
    Renders barcodes with python-barcode writers.

    Supports:
    - Code 128
    - Code 39 (no check character appended)
    - EAN-13, EAN-8, UPC-A (check digit must be correct)
    """

    def __init__(self, jpeg_quality: int = 90):
        """
        Initialize renderer.

        Args:
            jpeg_quality: Pillow quality used for jpg output
        """
        self.jpeg_quality = jpeg_quality

    def render(
        self,
        code: str,
        settings: RenderSettings,
        output_format: OutputFormat,
        label: str | None = None,
    ) -> bytes:
        """
        Render a barcode to encoded image bytes.

        Args:
            code: Content to encode
            settings: Rendering settings, already scaled for the output
            output_format: png, jpg or svg
            label: Text printed under the bars (default: the code)

        Returns:
            Encoded image bytes

        Raises:
            RenderError: If the library cannot encode the content
        """
        rule = get_rule(settings.symbology)
        if rule is None:
            raise RenderError(f"Unsupported symbology: {settings.symbology}")

        content, extra = self._library_arguments(code, settings.symbology)
        writer = SVGWriter() if output_format is OutputFormat.SVG else ImageWriter()
        options = self._writer_options(settings, output_format)
        text = (label or code) if settings.show_label else None

        try:
            barcode_class = barcode.get_barcode_class(rule.library_name)
            symbol = barcode_class(content, writer=writer, **extra)
            rendered = symbol.render(options, text=text)
        except Exception as e:
            raise RenderError(f"Could not render {code!r} as {rule.label}: {e}") from e

        if output_format is OutputFormat.SVG:
            return rendered.encode("utf-8") if isinstance(rendered, str) else rendered
        return self._encode_raster(rendered, output_format)

    def render_artifact(
        self,
        code: str,
        label: str | None,
        render_settings: RenderSettings,
        export_settings: ExportSettings,
    ) -> RenderedArtifact:
        """
        Render a code with export scaling and name it for download.

        Raster output scales the render settings by the export resolution;
        vector output uses them unscaled.
        """
        output_format = export_settings.format
        data = self.render(
            code,
            render_settings.scaled(export_settings.scale_ratio),
            output_format,
            label=label,
        )
        filename = OutputNames.build(
            export_settings.prefix,
            code,
            export_settings.suffix,
            output_format.value,
        )
        return RenderedArtifact(
            code=code,
            filename=filename,
            data=data,
            output_format=output_format,
        )

    def _library_arguments(self, code: str, symbology: Symbology) -> tuple[str, dict[str, Any]]:
        """Get content and constructor keywords for the python-barcode class."""
        if symbology in GTIN_LENGTHS:
            if not has_valid_check_digit(code, symbology):
                raise RenderError(f"Invalid check digit for {code!r} as {symbology.value}")
            # The library appends the check digit itself
            return code[:-1], {}

        if symbology is Symbology.CODE39:
            return code, {"add_checksum": False}

        return code, {}

    def _writer_options(
        self,
        settings: RenderSettings,
        output_format: OutputFormat,
    ) -> dict[str, Any]:
        """Convert logical pixel settings to python-barcode writer options (mm, pt)."""
        options: dict[str, Any] = {
            "module_width": settings.module_width * MM_PER_PIXEL,
            "module_height": settings.bar_height * MM_PER_PIXEL,
            "font_size": settings.font_size * POINTS_PER_PIXEL,
            "background": settings.background_color,
            "foreground": settings.bar_color,
            "write_text": settings.show_label,
        }
        if output_format.is_raster:
            options["dpi"] = PIXELS_PER_INCH
            options["format"] = output_format.pil_format
            if settings.font:
                options["font_path"] = settings.font
        return options

    def _encode_raster(self, image: Image.Image, output_format: OutputFormat) -> bytes:
        """Encode a rendered Pillow image."""
        buffer = BytesIO()
        if output_format is OutputFormat.JPG:
            image.convert("RGB").save(buffer, format="JPEG", quality=self.jpeg_quality)
        else:
            image.save(buffer, format="PNG")
        return buffer.getvalue()
