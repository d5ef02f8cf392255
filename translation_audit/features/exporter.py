"""Translation template export (one CSV per locale)."""

import csv
from dataclasses import astuple, dataclass
from pathlib import Path
from typing import Dict, List

from ..core.report import AuditReport, LocaleReport
from ..utils.colors import Colors
from ..utils.logging import get_logger

# Column titles, in wire order. Ingest reads columns by position.
HEADER = [
    'namespace',
    'key',
    'status',
    'Source String',
    'Translated String',
    'Translator Notes',
    'Last Commit to Source',
]


@dataclass
class TabularRecord:
    """One row of a translation template."""
    namespace: str
    full_id: str
    status: str
    source_text: str
    target_text: str = ''
    translator_notes: str = ''
    last_change_id: str = ''

    def to_row(self) -> List[str]:
        return list(astuple(self))


class TemplateExporter:
    """Flattens audit reports into translator-facing CSV templates."""

    def __init__(self):
        self.logger = get_logger()

    def to_records(self, locale_report: LocaleReport) -> List[TabularRecord]:
        """One record per comparison, in namespace then source order."""
        records = []
        for namespace, namespace_report in locale_report.namespaces.items():
            for comparison in namespace_report.records:
                records.append(TabularRecord(
                    namespace=namespace,
                    full_id=comparison.source.full_id,
                    status=comparison.status.value,
                    source_text=comparison.source.value,
                    target_text=comparison.target.value if comparison.target else '',
                    translator_notes='',
                    last_change_id=comparison.source.last_change_id or '',
                ))
        return records

    @staticmethod
    def write_csv(records: List[TabularRecord], output_path: Path) -> Path:
        """Write records with a header row as UTF-8 CSV."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(HEADER)
            writer.writerows(record.to_row() for record in records)
        return output_path

    def export_report(self, report: AuditReport, output_dir: Path) -> Dict[str, Path]:
        """
        Write ``<locale>.csv`` for every locale of the report.

        Returns:
            Mapping of locale to written file
        """
        written = {}
        for locale, locale_report in report.locales.items():
            records = self.to_records(locale_report)
            path = self.write_csv(records, Path(output_dir) / f'{locale}.csv')
            written[locale] = path
            self.logger.info(f"{Colors.success('✓')} {locale}: {len(records)} rows -> {path}")
        return written
