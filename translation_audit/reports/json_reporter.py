"""JSON audit report."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from ..__version__ import __version__
from ..core.comparator import TranslationStatus
from ..core.history import AnnotatedEntry
from ..core.report import AuditReport
from ..utils.colors import Colors
from ..utils.logging import get_logger


class JSONReporter:
    """Serializes an AuditReport for CI and dashboards."""

    @staticmethod
    def build(report: AuditReport) -> Dict[str, Any]:
        """Return the report as plain JSON-compatible data."""
        return {
            'metadata': {
                'generated_at': datetime.now().isoformat(),
                'version': __version__,
                'source_locale': report.source_locale,
            },
            'summary': JSONReporter._counts(report),
            'locales': {
                locale: {
                    'summary': JSONReporter._counts(locale_report),
                    'namespaces': {
                        namespace: [
                            {
                                'key': record.full_id,
                                'status': record.status.value,
                                'source': JSONReporter._entry(record.source),
                                'target': JSONReporter._entry(record.target),
                            }
                            for record in namespace_report.records
                        ]
                        for namespace, namespace_report in locale_report.namespaces.items()
                    },
                }
                for locale, locale_report in report.locales.items()
            },
        }

    @staticmethod
    def _counts(report) -> Dict[str, int]:
        return {
            'total': report.total,
            'missing': report.count(TranslationStatus.MISSING),
            'stale': report.count(TranslationStatus.STALE),
            'current': report.count(TranslationStatus.CURRENT),
        }

    @staticmethod
    def _entry(entry: Optional[AnnotatedEntry]) -> Optional[Dict[str, Any]]:
        if entry is None:
            return None
        timestamp = entry.last_change_timestamp
        return {
            'value': entry.value,
            'line': entry.line,
            'commit': entry.last_change_id,
            'committed_at': timestamp.isoformat() if timestamp else None,
            'author': entry.last_change_author,
            'message': entry.last_change_message,
        }

    @staticmethod
    def generate(report: AuditReport, output_path: Path, pretty: bool = True) -> Path:
        """Write the JSON report and return its path."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(JSONReporter.build(report), f, indent=2 if pretty else None, ensure_ascii=False)

        get_logger().info(f"{Colors.success('✓')} JSON report saved to: {output_path}")
        return output_path
