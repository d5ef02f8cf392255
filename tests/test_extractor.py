"""Tests for key extraction."""

import pytest

from translation_audit.core.document import LineIndex, TranslationDocument, parse_tree
from translation_audit.core.errors import MalformedDocumentError
from translation_audit.core.extractor import Entry, extract_document_entries, extract_entries


def extract(text):
    return extract_entries(parse_tree(text), LineIndex(text))


SAMPLE = """{
  "title": "Settings",
  "greeting": {
    "hello": "Hello",
    "bye": "Goodbye"
  },
  // comments do not affect line numbers
  "nested": {
    "deeper": {
      "leaf": "Leaf"
    }
  },
  "last": "Last"
}
"""


class TestExtractEntries:
    """Test cases for extract_entries."""

    def test_depth_first_declaration_order(self):
        entries = extract(SAMPLE)

        assert [e.full_id for e in entries] == [
            'title',
            'greeting.hello',
            'greeting.bye',
            'nested.deeper.leaf',
            'last',
        ]

    def test_paths_and_values(self):
        entries = {e.full_id: e for e in extract(SAMPLE)}

        leaf = entries['nested.deeper.leaf']
        assert leaf.path == ('nested', 'deeper', 'leaf')
        assert leaf.full_id == '.'.join(leaf.path)
        assert leaf.value == 'Leaf'

    def test_line_numbers(self):
        entries = {e.full_id: e.line for e in extract(SAMPLE)}

        assert entries == {
            'title': 2,
            'greeting.hello': 4,
            'greeting.bye': 5,
            'nested.deeper.leaf': 10,
            'last': 13,
        }

    def test_line_of_value_not_key(self):
        """A value on its own line is attributed to that line."""
        entries = extract('{\n  "key":\n    "value"\n}')
        assert entries[0].line == 3

    def test_full_ids_unique(self):
        entries = extract(SAMPLE)
        ids = [e.full_id for e in entries]
        assert len(ids) == len(set(ids))

    def test_empty_object(self):
        assert extract('{}') == []
        assert extract('{"a": {}}') == []

    def test_entries_are_immutable(self):
        entry = extract('{"a": "x"}')[0]
        assert entry == Entry(path=('a',), full_id='a', line=1, value='x')
        with pytest.raises(AttributeError):
            entry.value = 'y'

    @pytest.mark.parametrize('text,kind,key,line', [
        ('{"a": 1}', 'number', 'a', 1),
        ('{\n"a": {\n"b": ["x"]\n}\n}', 'array', 'a.b', 3),
        ('{"a": {"b": true}}', 'boolean', 'a.b', 1),
        ('{"a": null}', 'null', 'a', 1),
    ])
    def test_non_string_leaf_is_malformed(self, text, kind, key, line):
        with pytest.raises(MalformedDocumentError) as exc:
            extract(text)

        assert kind in exc.value.message
        assert exc.value.key == key
        assert exc.value.line == line

    def test_root_must_be_object(self):
        with pytest.raises(MalformedDocumentError):
            extract('["a"]')

    def test_duplicate_key_is_malformed(self):
        with pytest.raises(MalformedDocumentError) as exc:
            extract('{"a": "x",\n "a": "y"}')
        assert exc.value.key == 'a'
        assert exc.value.line == 2

    def test_dotted_key_colliding_with_nested_path(self):
        with pytest.raises(MalformedDocumentError) as exc:
            extract('{"a.b": "flat", "a": {"b": "nested"}}')
        assert exc.value.key == 'a.b'


class TestExtractDocumentEntries:
    """Test cases for extract_document_entries."""

    def test_errors_name_the_document(self, tmp_path):
        path = tmp_path / 'common.json'
        path.write_text('{"a": {"b": 3}}', encoding='utf-8')

        with pytest.raises(MalformedDocumentError) as exc:
            extract_document_entries(TranslationDocument.load(path))

        assert exc.value.document == str(path)
        assert exc.value.key == 'a.b'

    def test_reads_document(self, tmp_path):
        path = tmp_path / 'common.json'
        path.write_text(SAMPLE, encoding='utf-8')

        entries = extract_document_entries(TranslationDocument.load(path))
        assert len(entries) == 5
