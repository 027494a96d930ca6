"""
Exporters that deliver rendered barcodes as files.
"""

import zipfile
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import structlog

from src.export.filenames import OutputNames

if TYPE_CHECKING:
    from src.barcode.renderer import RenderedArtifact

logger = structlog.get_logger(__name__)


class Exporter(Protocol):
    """Anything that can take a rendered artifact and store it under a name."""

    def export(self, artifact: "RenderedArtifact") -> str:
        """Store the artifact and return the name actually used."""
        ...


class DirectoryExporter:
    """
    Writes artifacts as files in a local directory.

    Repeated names within one exporter get a numbered fallback
    ("ABC (1).png") instead of overwriting the earlier file.
    """

    def __init__(self, output_dir: str | Path, overwrite: bool = False):
        self.output_dir = Path(output_dir)
        self.overwrite = overwrite
        self._written: set[str] = set()

    def ensure_directory_exists(self) -> None:
        """Create the output directory if it doesn't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export(self, artifact: "RenderedArtifact") -> str:
        """
        Write an artifact to the output directory.

        Returns:
            Filename written (relative to the output directory)
        """
        self.ensure_directory_exists()
        name = OutputNames.safe(artifact.filename)
        taken = set(self._written)
        if not self.overwrite:
            taken.update(p.name for p in self.output_dir.iterdir())
        name = OutputNames.unique(name, taken)

        path = self.output_dir / name
        path.write_bytes(artifact.data)
        self._written.add(name)

        logger.debug("Wrote barcode file", path=str(path), size=len(artifact.data))
        return name


class ZipExporter:
    """
    Collects artifacts into an in-memory ZIP archive.

    Used by the web form to deliver a whole batch as one download.
    """

    def __init__(self):
        self._buffer = BytesIO()
        self._archive = zipfile.ZipFile(self._buffer, mode="w", compression=zipfile.ZIP_DEFLATED)
        self._names: list[str] = []

    @property
    def names(self) -> list[str]:
        """Entry names in the order they were added."""
        return list(self._names)

    def export(self, artifact: "RenderedArtifact") -> str:
        """Add an artifact as an archive entry and return the entry name."""
        if self._archive.fp is None:
            raise ValueError("Archive already finalized")
        name = OutputNames.unique(OutputNames.safe(artifact.filename), set(self._names))
        self._archive.writestr(name, artifact.data)
        self._names.append(name)
        return name

    def getvalue(self) -> bytes:
        """Finalize the archive and return its bytes."""
        if self._archive.fp is not None:
            self._archive.close()
        return self._buffer.getvalue()
