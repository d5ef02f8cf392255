"""Core audit engine: parsing, extraction, history, comparison, reports."""

from .comparator import ComparisonRecord, TranslationComparator, TranslationStatus
from .document import LineIndex, Node, NodeKind, TranslationDocument, parse_tree
from .errors import (
    AuditError,
    HistoryLookupError,
    IngestRowError,
    MalformedDocumentError,
    MissingSourceArtifactError,
    PatchApplicationError,
    UnknownNamespaceError,
)
from .extractor import Entry, extract_document_entries, extract_entries
from .history import AnnotatedEntry, CommitInfo, GitHistory, HistoryAnnotator, HistoryOracle
from .json_edit import set_value
from .report import AuditReport, LocaleReport, NamespaceReport, ReportAssembler

__all__ = [
    'ComparisonRecord',
    'TranslationComparator',
    'TranslationStatus',
    'LineIndex',
    'Node',
    'NodeKind',
    'TranslationDocument',
    'parse_tree',
    'AuditError',
    'HistoryLookupError',
    'IngestRowError',
    'MalformedDocumentError',
    'MissingSourceArtifactError',
    'PatchApplicationError',
    'UnknownNamespaceError',
    'Entry',
    'extract_document_entries',
    'extract_entries',
    'AnnotatedEntry',
    'CommitInfo',
    'GitHistory',
    'HistoryAnnotator',
    'HistoryOracle',
    'set_value',
    'AuditReport',
    'LocaleReport',
    'NamespaceReport',
    'ReportAssembler',
]
