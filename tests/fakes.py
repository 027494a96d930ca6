"""
Test doubles for the renderer and exporters.
"""

from src.barcode.renderer import RenderedArtifact, RenderError
from src.export.filenames import OutputNames


class FakeRenderer:
    """Records render calls and returns small placeholder artifacts."""

    def __init__(self, fail_codes: set[str] | None = None):
        self.fail_codes = fail_codes or set()
        self.calls: list[tuple] = []

    def render_artifact(self, code, label, render_settings, export_settings):
        self.calls.append((code, label, render_settings, export_settings))
        if code in self.fail_codes:
            raise RenderError(f"cannot draw {code}")
        fmt = export_settings.format
        return RenderedArtifact(
            code=code,
            filename=OutputNames.build(export_settings.prefix, code, export_settings.suffix, fmt.value),
            data=code.encode("utf-8"),
            output_format=fmt,
        )


class RecordingExporter:
    """Keeps exported artifacts in memory."""

    def __init__(self, fail_codes: set[str] | None = None):
        self.fail_codes = fail_codes or set()
        self.artifacts: list[RenderedArtifact] = []

    def export(self, artifact):
        if artifact.code in self.fail_codes:
            raise OSError(f"disk full while writing {artifact.filename}")
        self.artifacts.append(artifact)
        return artifact.filename

    @property
    def filenames(self) -> list[str]:
        return [a.filename for a in self.artifacts]
