"""
Translation Audit
=================

Finds missing and out-of-date translations by comparing every key of a
source-language document with its translations, using git history to tell
whether a translation predates the latest change of its source string.

Usage:
    from translation_audit import Config, GitHistory, HistoryAnnotator, ReportAssembler

    config = Config.from_file()
    annotator = HistoryAnnotator(GitHistory(config.root), config.root)
    report = ReportAssembler(config, annotator).assemble()

CLI:
    translation-audit generate
    translation-audit ingest de translation-templates/de.csv
"""

from .__version__ import __version__, __author__, __description__

# Core
from .core.comparator import ComparisonRecord, TranslationComparator, TranslationStatus
from .core.document import LineIndex, TranslationDocument, parse_tree
from .core.extractor import Entry, extract_entries
from .core.history import AnnotatedEntry, CommitInfo, GitHistory, HistoryAnnotator, HistoryOracle
from .core.report import AuditReport, LocaleReport, NamespaceReport, ReportAssembler

# Features
from .features.exporter import TabularRecord, TemplateExporter
from .features.ingestor import PatchIngestor

from .utils.config import Config

__all__ = [
    '__version__',
    '__author__',
    '__description__',
    'ComparisonRecord',
    'TranslationComparator',
    'TranslationStatus',
    'LineIndex',
    'TranslationDocument',
    'parse_tree',
    'Entry',
    'extract_entries',
    'AnnotatedEntry',
    'CommitInfo',
    'GitHistory',
    'HistoryAnnotator',
    'HistoryOracle',
    'AuditReport',
    'LocaleReport',
    'NamespaceReport',
    'ReportAssembler',
    'TabularRecord',
    'TemplateExporter',
    'PatchIngestor',
    'Config',
]
