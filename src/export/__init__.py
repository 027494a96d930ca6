"""
Output naming and file export.
"""

from src.export.exporters import DirectoryExporter, Exporter, ZipExporter
from src.export.filenames import OutputNames

__all__ = [
    "DirectoryExporter",
    "Exporter",
    "OutputNames",
    "ZipExporter",
]
