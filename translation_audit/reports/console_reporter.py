"""Console summaries for audit and ingest runs."""

from typing import List

from ..core.comparator import ComparisonRecord, TranslationStatus
from ..core.report import AuditReport, LocaleReport
from ..features.ingestor import IngestSummary
from ..utils.colors import Colors


class ConsoleReporter:
    """Prints grouped missing / stale / current summaries."""

    @staticmethod
    def print_audit(report: AuditReport, show_details: bool = True, limit: int = 50):
        """
        Print the audit summary for every locale.

        Args:
            report: Assembled audit report
            show_details: List missing and stale keys per namespace
            limit: Maximum keys listed per group
        """
        print("\n" + "=" * 70)
        print(Colors.bold(f"TRANSLATION AUDIT (source: {report.source_locale})"))
        print("=" * 70)

        for locale, locale_report in report.locales.items():
            ConsoleReporter._print_locale(locale, locale_report, show_details, limit)

        print("=" * 70)
        ConsoleReporter._print_counts("Total", report.total,
                                      report.count(TranslationStatus.CURRENT),
                                      report.count(TranslationStatus.STALE),
                                      report.count(TranslationStatus.MISSING))

    @staticmethod
    def _print_locale(locale: str, locale_report: LocaleReport, show_details: bool, limit: int):
        print(f"\n{Colors.bold(locale.upper())}")
        print("-" * 70)

        if show_details:
            for namespace, namespace_report in locale_report.namespaces.items():
                ConsoleReporter._print_group("Missing Translations", namespace,
                                             namespace_report.missing, TranslationStatus.MISSING, limit)
                ConsoleReporter._print_group("Out of Date Translations", namespace,
                                             namespace_report.stale, TranslationStatus.STALE, limit)

        ConsoleReporter._print_counts(f"Checked {locale}", locale_report.total,
                                      locale_report.count(TranslationStatus.CURRENT),
                                      locale_report.count(TranslationStatus.STALE),
                                      locale_report.count(TranslationStatus.MISSING))

    @staticmethod
    def _print_group(title: str, namespace: str, records: List[ComparisonRecord],
                     status: TranslationStatus, limit: int):
        if not records:
            return
        print(f"  {Colors.status(status.value, title)} [{namespace}] ({len(records)})")
        for record in records[:limit]:
            print(f"    - {record.full_id}")
        if len(records) > limit:
            print(f"    ... and {len(records) - limit} more")

    @staticmethod
    def _print_counts(label: str, total: int, current: int, stale: int, missing: int):
        print(f"{label}: {total} translations: "
              f"{Colors.status('CURRENT', f'up to date: {current}')}, "
              f"{Colors.status('STALE', f'out of date: {stale}')}, "
              f"{Colors.status('MISSING', f'missing: {missing}')}")

    @staticmethod
    def print_ingest(summary: IngestSummary):
        """Print per-namespace ingest outcome."""
        mode = " [DRY RUN]" if summary.dry_run else ""
        print(f"\n{Colors.bold(f'INGEST {summary.locale}')}{mode}")
        print("-" * 70)

        for result in summary.results:
            if result.ok:
                print(f"  {Colors.success('✓')} {result.namespace}: "
                      f"{len(result.applied)} updated, {len(result.unchanged)} unchanged"
                      + (f", {len(result.skipped)} skipped" if result.skipped else ""))
            else:
                print(f"  {Colors.error('✗')} {result.namespace}: {result.error}")

        if summary.skipped_rows:
            print(f"  {Colors.warning('!')} {summary.skipped_rows} malformed row(s) skipped")

        if not summary.results:
            print("  Nothing to apply")
