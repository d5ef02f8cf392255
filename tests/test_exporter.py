"""Tests for translation template export."""

import csv

import pytest

from translation_audit.core.comparator import ComparisonRecord, TranslationStatus
from translation_audit.core.extractor import Entry
from translation_audit.core.history import AnnotatedEntry, CommitInfo
from translation_audit.core.report import AuditReport, LocaleReport, NamespaceReport
from translation_audit.features.exporter import HEADER, TabularRecord, TemplateExporter

from conftest import ts


def record(full_id, source, target=None, status=TranslationStatus.MISSING, commit='abc123'):
    path = tuple(full_id.split('.'))
    source_entry = AnnotatedEntry(
        Entry(path, full_id, 1, source),
        CommitInfo(commit, ts(100), 'dev', 'update') if commit else None,
    )
    target_entry = AnnotatedEntry(Entry(path, full_id, 1, target)) if target is not None else None
    return ComparisonRecord(source_entry, target_entry, status)


@pytest.fixture
def report():
    de = LocaleReport('de', {
        'common': NamespaceReport('de', 'common', [
            record('greeting.hello', 'Hello', 'Hallo', TranslationStatus.STALE),
            record('title', 'Title, "quoted"'),
        ]),
        'errors': NamespaceReport('de', 'errors', [
            record('notFound', 'Not found', 'Nicht gefunden', TranslationStatus.CURRENT, commit=None),
        ]),
    })
    fr = LocaleReport('fr', {
        'common': NamespaceReport('fr', 'common', [record('title', 'Title')]),
    })
    return AuditReport('en', {'de': de, 'fr': fr})


class TestTabularRecord:
    """Test cases for TabularRecord."""

    def test_to_row_in_column_order(self):
        row = TabularRecord('common', 'a.b', 'MISSING', 'Hello', 'Hallo', 'note', 'abc').to_row()
        assert row == ['common', 'a.b', 'MISSING', 'Hello', 'Hallo', 'note', 'abc']
        assert len(row) == len(HEADER)

    def test_defaults(self):
        row = TabularRecord('common', 'a', 'MISSING', 'Hello').to_row()
        assert row[4:] == ['', '', '']


class TestTemplateExporter:
    """Test cases for TemplateExporter."""

    def test_to_records(self, report):
        records = TemplateExporter().to_records(report.locales['de'])

        assert records == [
            TabularRecord('common', 'greeting.hello', 'STALE', 'Hello', 'Hallo', '', 'abc123'),
            TabularRecord('common', 'title', 'MISSING', 'Title, "quoted"', '', '', 'abc123'),
            TabularRecord('errors', 'notFound', 'CURRENT', 'Not found', 'Nicht gefunden', '', ''),
        ]

    def test_write_csv(self, tmp_path, report):
        exporter = TemplateExporter()
        path = exporter.write_csv(exporter.to_records(report.locales['de']), tmp_path / 'out' / 'de.csv')

        with open(path, encoding='utf-8', newline='') as f:
            rows = list(csv.reader(f))

        assert rows[0] == HEADER
        assert rows[1] == ['common', 'greeting.hello', 'STALE', 'Hello', 'Hallo', '', 'abc123']
        assert rows[2][3] == 'Title, "quoted"'
        assert len(rows) == 4

    def test_header_titles(self):
        assert HEADER == [
            'namespace',
            'key',
            'status',
            'Source String',
            'Translated String',
            'Translator Notes',
            'Last Commit to Source',
        ]

    def test_export_report_writes_one_file_per_locale(self, tmp_path, report):
        written = TemplateExporter().export_report(report, tmp_path)

        assert set(written) == {'de', 'fr'}
        assert written['fr'] == tmp_path / 'fr.csv'
        with open(written['fr'], encoding='utf-8', newline='') as f:
            rows = list(csv.reader(f))
        assert rows == [HEADER, ['common', 'title', 'MISSING', 'Title', '', '', 'abc123']]

    def test_empty_locale_writes_header_only(self, tmp_path):
        report = AuditReport('en', {'de': LocaleReport('de', {})})

        written = TemplateExporter().export_report(report, tmp_path)

        assert written['de'].read_text(encoding='utf-8').splitlines() == [','.join(HEADER)]
