"""Tests for source/target classification."""

import pytest

from translation_audit.core.comparator import TranslationComparator, TranslationStatus
from translation_audit.core.extractor import Entry
from translation_audit.core.history import AnnotatedEntry, CommitInfo

from conftest import ts


def annotated(full_id, value='text', seconds=None, line=1):
    entry = Entry(tuple(full_id.split('.')), full_id, line, value)
    if seconds is None:
        return AnnotatedEntry(entry)
    return AnnotatedEntry(entry, CommitInfo(f'c{seconds}', ts(seconds), 'dev', 'update'))


@pytest.fixture
def comparator():
    return TranslationComparator()


class TestClassify:
    """Test cases for single pair classification."""

    def test_missing_when_target_absent(self, comparator):
        source = annotated('greeting.hello', seconds=100)
        records = comparator.compare([source], [])

        assert records[0].status is TranslationStatus.MISSING
        assert records[0].target is None

    def test_stale_when_target_older(self, comparator):
        records = comparator.compare(
            [annotated('greeting.hello', seconds=200)],
            [annotated('greeting.hello', 'Hallo', seconds=150)],
        )
        assert records[0].status is TranslationStatus.STALE

    def test_equal_timestamps_are_current(self, comparator):
        records = comparator.compare(
            [annotated('greeting.hello', seconds=200)],
            [annotated('greeting.hello', 'Hallo', seconds=200)],
        )
        assert records[0].status is TranslationStatus.CURRENT

    def test_newer_target_is_current(self, comparator):
        status = TranslationComparator.classify(
            annotated('a', seconds=100), annotated('a', seconds=300)
        )
        assert status is TranslationStatus.CURRENT

    @pytest.mark.parametrize('source_time,target_time', [
        (None, 100),
        (100, None),
        (None, None),
    ])
    def test_without_history_is_current(self, source_time, target_time):
        status = TranslationComparator.classify(
            annotated('a', seconds=source_time), annotated('a', seconds=target_time)
        )
        assert status is TranslationStatus.CURRENT

    def test_missing_wins_over_absent_history(self):
        status = TranslationComparator.classify(annotated('a'), None)
        assert status is TranslationStatus.MISSING


class TestCompare:
    """Test cases for comparing whole entry sets."""

    def test_one_record_per_source_key_in_source_order(self, comparator):
        sources = [annotated('b', seconds=1), annotated('a', seconds=1), annotated('c.d', seconds=1)]
        targets = [annotated('a', seconds=2), annotated('c.d', seconds=2)]

        records = comparator.compare(sources, targets)

        assert [r.full_id for r in records] == ['b', 'a', 'c.d']
        assert [r.status for r in records] == [
            TranslationStatus.MISSING,
            TranslationStatus.CURRENT,
            TranslationStatus.CURRENT,
        ]

    def test_target_only_keys_ignored(self, comparator):
        records = comparator.compare(
            [annotated('a', seconds=1)],
            [annotated('a', seconds=1), annotated('obsolete', seconds=1)],
        )
        assert [r.full_id for r in records] == ['a']

    def test_target_attached_to_record(self, comparator):
        target = annotated('a', 'Hallo', seconds=5)
        record = comparator.compare([annotated('a', 'Hello', seconds=1)], [target])[0]

        assert record.target is target
        assert record.source.value == 'Hello'

    def test_deterministic(self, comparator):
        sources = [annotated(f'k{i}', seconds=i * 10) for i in range(20)]
        targets = [annotated(f'k{i}', seconds=i * 7) for i in range(0, 20, 2)]

        first = comparator.compare(sources, targets)
        second = comparator.compare(sources, targets)

        assert first == second

    def test_touching_source_makes_stale(self, comparator):
        """A later source edit can only move a current key to stale."""
        target = annotated('a', seconds=150)

        before = comparator.compare([annotated('a', seconds=100)], [target])[0]
        after = comparator.compare([annotated('a', seconds=200)], [target])[0]

        assert before.status is TranslationStatus.CURRENT
        assert after.status is TranslationStatus.STALE

    def test_empty_source(self, comparator):
        assert comparator.compare([], [annotated('a', seconds=1)]) == []
