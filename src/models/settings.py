"""
Rendering and export settings models.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Resolution at which raster output uses the logical sizes unscaled
REFERENCE_RESOLUTION = 500

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


class Symbology(str, Enum):
    """Supported barcode symbologies."""

    CODE128 = "CODE128"
    CODE39 = "CODE39"
    EAN13 = "EAN13"
    EAN8 = "EAN8"
    UPC = "UPC"


class OutputFormat(str, Enum):
    """Output image formats."""

    PNG = "png"
    JPG = "jpg"
    SVG = "svg"

    @property
    def is_raster(self) -> bool:
        """Check if the format is a pixel-grid format."""
        return self is not OutputFormat.SVG

    @property
    def media_type(self) -> str:
        """Get MIME type for the format."""
        return {
            OutputFormat.PNG: "image/png",
            OutputFormat.JPG: "image/jpeg",
            OutputFormat.SVG: "image/svg+xml",
        }[self]

    @property
    def pil_format(self) -> str:
        """Get the Pillow encoder name for raster formats."""
        return "JPEG" if self is OutputFormat.JPG else "PNG"


class RenderSettings(BaseModel):
    """
    User-chosen rendering parameters.

    Sizes are logical pixels (module width and bar height as on screen,
    font size in pixels). The renderer converts them to library units.
    """

    model_config = ConfigDict(frozen=True)

    symbology: Symbology = Symbology.CODE128
    module_width: float = Field(2.0, gt=0, description="Width of the narrowest bar")
    bar_height: float = Field(100.0, gt=0, description="Height of the bars")
    show_label: bool = Field(True, description="Print the label below the bars")
    font: str | None = Field(None, description="TrueType font file for the label")
    font_size: float = Field(20.0, gt=0)
    background_color: str = Field("#ffffff", pattern=HEX_COLOR_PATTERN)
    bar_color: str = Field("#000000", pattern=HEX_COLOR_PATTERN)

    def scaled(self, ratio: float) -> "RenderSettings":
        """Return a copy with module width, bar height and font size multiplied by ratio."""
        if ratio == 1:
            return self
        return self.model_copy(
            update={
                "module_width": self.module_width * ratio,
                "bar_height": self.bar_height * ratio,
                "font_size": self.font_size * ratio,
            }
        )


class ExportSettings(BaseModel):
    """User-chosen output parameters."""

    model_config = ConfigDict(frozen=True)

    format: OutputFormat = OutputFormat.PNG
    resolution: int = Field(REFERENCE_RESOLUTION, ge=100, le=2000, description="Raster resolution")
    prefix: str = ""
    suffix: str = ""

    @property
    def scale_ratio(self) -> float:
        """Scale applied to render settings; vector output is never scaled."""
        if not self.format.is_raster:
            return 1.0
        return self.resolution / REFERENCE_RESOLUTION
