"""
Single-mode generation: live preview and one-off downloads.
"""

from src.barcode.renderer import BarcodeRenderer, RenderedArtifact
from src.barcode.validator import validate
from src.models.settings import ExportSettings, OutputFormat, RenderSettings


class InvalidBarcodeError(ValueError):
    """Raised when single-mode input fails validation."""

    def __init__(self, code: str, symbology: str, reason: str):
        self.code = code
        self.symbology = symbology
        self.reason = reason
        super().__init__(f"Invalid format for {symbology}: {reason}")


def _check(code: str, render_settings: RenderSettings) -> None:
    outcome = validate(code, render_settings.symbology)
    if not outcome.admitted:
        raise InvalidBarcodeError(code, render_settings.symbology.value, outcome.reason or "")


def render_preview(
    code: str,
    render_settings: RenderSettings,
    renderer: BarcodeRenderer | None = None,
) -> bytes:
    """
    Render an unscaled SVG preview.

    Raises:
        InvalidBarcodeError: If the code fails validation
        RenderError: If the library cannot draw it
    """
    _check(code, render_settings)
    renderer = renderer or BarcodeRenderer()
    return renderer.render(code, render_settings, OutputFormat.SVG)


def generate_single(
    code: str,
    render_settings: RenderSettings,
    export_settings: ExportSettings,
    renderer: BarcodeRenderer | None = None,
) -> RenderedArtifact:
    """
    Render one barcode for download.

    Raises:
        InvalidBarcodeError: If the code fails validation
        RenderError: If the library cannot draw it
    """
    _check(code, render_settings)
    renderer = renderer or BarcodeRenderer()
    return renderer.render_artifact(code, None, render_settings, export_settings)
