"""Feature modules."""

from .exporter import HEADER, TabularRecord, TemplateExporter
from .ingestor import IngestResult, IngestSummary, PatchIngestor, build_batch, read_rows

__all__ = [
    'HEADER',
    'TabularRecord',
    'TemplateExporter',
    'IngestResult',
    'IngestSummary',
    'PatchIngestor',
    'build_batch',
    'read_rows',
]
