"""Audit report model and assembly across locales and namespaces."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List

from ..utils.config import Config
from ..utils.logging import get_logger
from .comparator import ComparisonRecord, TranslationComparator, TranslationStatus
from .errors import MissingSourceArtifactError
from .history import AnnotatedEntry, HistoryAnnotator


@dataclass
class NamespaceReport:
    """Comparison records for one (locale, namespace) pair."""
    locale: str
    namespace: str
    records: List[ComparisonRecord] = field(default_factory=list)

    def by_status(self, status: TranslationStatus) -> List[ComparisonRecord]:
        return [record for record in self.records if record.status is status]

    @property
    def missing(self) -> List[ComparisonRecord]:
        return self.by_status(TranslationStatus.MISSING)

    @property
    def stale(self) -> List[ComparisonRecord]:
        return self.by_status(TranslationStatus.STALE)

    @property
    def current(self) -> List[ComparisonRecord]:
        return self.by_status(TranslationStatus.CURRENT)

    @property
    def total(self) -> int:
        return len(self.records)


@dataclass
class LocaleReport:
    """All namespace reports of one locale, in configuration order."""
    locale: str
    namespaces: Dict[str, NamespaceReport] = field(default_factory=dict)

    def records(self) -> Iterator[ComparisonRecord]:
        for namespace_report in self.namespaces.values():
            yield from namespace_report.records

    def count(self, status: TranslationStatus) -> int:
        return sum(len(report.by_status(status)) for report in self.namespaces.values())

    @property
    def total(self) -> int:
        return sum(report.total for report in self.namespaces.values())


@dataclass
class AuditReport:
    """Root of an audit run: locale -> LocaleReport."""
    source_locale: str
    locales: Dict[str, LocaleReport] = field(default_factory=dict)

    def count(self, status: TranslationStatus) -> int:
        return sum(report.count(status) for report in self.locales.values())

    @property
    def total(self) -> int:
        return sum(report.total for report in self.locales.values())

    @property
    def has_work(self) -> bool:
        return self.count(TranslationStatus.MISSING) + self.count(TranslationStatus.STALE) > 0


class ReportAssembler:
    """
    Runs the comparison for every configured (locale, namespace) pair.

    Fails fast: a missing or malformed source document, or a malformed target
    document, aborts the whole run. A missing target document simply yields
    MISSING for every key.
    """

    def __init__(self, config: Config, annotator: HistoryAnnotator):
        self.config = config
        self.annotator = annotator
        self.comparator = TranslationComparator()
        self.logger = get_logger()

    def assemble(self) -> AuditReport:
        """Build the full audit report."""
        source_locale = self.config.languages.source
        report = AuditReport(source_locale=source_locale)

        sources: Dict[str, List[AnnotatedEntry]] = {}
        for namespace in self.config.namespaces:
            sources[namespace] = self._annotate_source(namespace)

        for locale in self.config.languages.targets:
            locale_report = LocaleReport(locale=locale)
            for namespace in self.config.namespaces:
                target_path = self.config.document_path(locale, namespace)
                self.logger.debug(f"Comparing {namespace} ({source_locale} -> {locale})")
                targets = self.annotator.annotate(target_path)
                locale_report.namespaces[namespace] = NamespaceReport(
                    locale=locale,
                    namespace=namespace,
                    records=self.comparator.compare(sources[namespace], targets),
                )
            report.locales[locale] = locale_report

        return report

    def _annotate_source(self, namespace: str) -> List[AnnotatedEntry]:
        source_path: Path = self.config.document_path(self.config.languages.source, namespace)
        if not (self.config.root / source_path).exists():
            raise MissingSourceArtifactError(source_path)

        entries = self.annotator.annotate(source_path)
        if not entries:
            self.logger.warning(f"Source document {source_path} has no keys or no history")
        return entries
