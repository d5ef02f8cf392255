"""JSONC translation documents: parsing with offsets and line lookup."""

import json
import re
from bisect import bisect_left
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

from .errors import MalformedDocumentError


class NodeKind(Enum):
    """Kind of a parsed JSON node."""
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass
class Node:
    """
    A parsed JSON value.

    ``offset`` and ``length`` span the value in the source text (quotes and
    braces included). Scalars carry their decoded ``value``; objects carry
    ordered ``properties``; arrays carry ``items``.
    """
    kind: NodeKind
    offset: int
    length: int = 0
    value: Any = None
    properties: List['Property'] = field(default_factory=list)
    items: List['Node'] = field(default_factory=list)

    @property
    def end(self) -> int:
        return self.offset + self.length

    def get(self, key: str) -> Optional['Property']:
        """Return the last property named ``key`` (JSON semantics), if any."""
        found = None
        for prop in self.properties:
            if prop.key == key:
                found = prop
        return found


@dataclass
class Property:
    """An object member: key, where the key starts, and its value node."""
    key: str
    key_offset: int
    value: Node


class LineIndex:
    """
    Maps character offsets to 1-based line numbers.

    Line terminator offsets are collected once; lookups are a binary search.
    """

    def __init__(self, text: str):
        self.length = len(text)
        self._newlines: List[int] = []
        for offset, char in enumerate(text):
            if char == '\n':
                self._newlines.append(offset)

    @property
    def line_count(self) -> int:
        return len(self._newlines) + 1

    def line_of(self, offset: int) -> int:
        """Return the line containing ``offset``."""
        if offset < 0 or offset > self.length:
            raise ValueError(f"Offset {offset} outside document of length {self.length}")
        return bisect_left(self._newlines, offset) + 1


class JsoncParser:
    """
    Recursive-descent parser for JSON with comments.

    Accepts ``//`` and ``/* */`` comments and trailing commas. Offsets in the
    resulting tree refer to the exact input text.
    """

    NUMBER_PATTERN = re.compile(r'-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?')
    LITERALS = {
        'true': (NodeKind.BOOLEAN, True),
        'false': (NodeKind.BOOLEAN, False),
        'null': (NodeKind.NULL, None),
    }

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.lines = LineIndex(text)

    def parse(self) -> Node:
        """Parse the whole text and return the root node."""
        self._skip_trivia()
        if self.pos >= len(self.text):
            raise self._error("Empty document")
        root = self._parse_value()
        self._skip_trivia()
        if self.pos < len(self.text):
            raise self._error("Unexpected content after end of document")
        return root

    def _error(self, message: str, offset: Optional[int] = None) -> MalformedDocumentError:
        if offset is None:
            offset = min(self.pos, len(self.text))
        return MalformedDocumentError(message, line=self.lines.line_of(offset))

    def _skip_trivia(self):
        text = self.text
        while self.pos < len(text):
            char = text[self.pos]
            if char in ' \t\r\n\ufeff':
                self.pos += 1
            elif text.startswith('//', self.pos):
                end = text.find('\n', self.pos)
                self.pos = len(text) if end == -1 else end + 1
            elif text.startswith('/*', self.pos):
                end = text.find('*/', self.pos + 2)
                if end == -1:
                    raise self._error("Unterminated block comment")
                self.pos = end + 2
            else:
                return

    def _parse_value(self) -> Node:
        char = self.text[self.pos]
        if char == '{':
            return self._parse_object()
        if char == '[':
            return self._parse_array()
        if char == '"':
            return self._parse_string()

        match = self.NUMBER_PATTERN.match(self.text, self.pos)
        if match and match.end() > self.pos:
            raw = match.group(0)
            start = self.pos
            self.pos = match.end()
            value = float(raw) if any(c in raw for c in '.eE') else int(raw)
            return Node(NodeKind.NUMBER, start, len(raw), value=value)

        for literal, (kind, value) in self.LITERALS.items():
            if self.text.startswith(literal, self.pos):
                start = self.pos
                self.pos += len(literal)
                return Node(kind, start, len(literal), value=value)

        raise self._error(f"Unexpected character {char!r}")

    def _parse_string(self) -> Node:
        start = self.pos
        text = self.text
        pos = start + 1
        while pos < len(text):
            char = text[pos]
            if char == '\\':
                pos += 2
                continue
            if char == '"':
                break
            if char == '\n':
                raise self._error("Unterminated string", start)
            pos += 1
        else:
            raise self._error("Unterminated string", start)

        raw = text[start:pos + 1]
        try:
            value = json.loads(raw, strict=False)
        except json.JSONDecodeError as e:
            raise self._error(f"Invalid string literal: {e.msg}", start)
        self.pos = pos + 1
        return Node(NodeKind.STRING, start, len(raw), value=value)

    def _parse_object(self) -> Node:
        node = Node(NodeKind.OBJECT, self.pos)
        self.pos += 1
        while True:
            self._skip_trivia()
            if self.pos >= len(self.text):
                raise self._error("Unterminated object", node.offset)
            if self.text[self.pos] == '}':
                self.pos += 1
                break
            if self.text[self.pos] != '"':
                raise self._error("Expected property name")

            key_node = self._parse_string()
            self._skip_trivia()
            if self.pos >= len(self.text) or self.text[self.pos] != ':':
                raise self._error("Expected ':' after property name")
            self.pos += 1
            self._skip_trivia()
            if self.pos >= len(self.text):
                raise self._error("Expected value")
            value = self._parse_value()
            node.properties.append(Property(key_node.value, key_node.offset, value))

            self._skip_trivia()
            if self.pos < len(self.text) and self.text[self.pos] == ',':
                self.pos += 1
            elif self.pos < len(self.text) and self.text[self.pos] == '}':
                continue
            else:
                raise self._error("Expected ',' or '}'")
        node.length = self.pos - node.offset
        return node

    def _parse_array(self) -> Node:
        node = Node(NodeKind.ARRAY, self.pos)
        self.pos += 1
        while True:
            self._skip_trivia()
            if self.pos >= len(self.text):
                raise self._error("Unterminated array", node.offset)
            if self.text[self.pos] == ']':
                self.pos += 1
                break
            node.items.append(self._parse_value())
            self._skip_trivia()
            if self.pos < len(self.text) and self.text[self.pos] == ',':
                self.pos += 1
            elif self.pos < len(self.text) and self.text[self.pos] == ']':
                continue
            else:
                raise self._error("Expected ',' or ']'")
        node.length = self.pos - node.offset
        return node


def parse_tree(text: str) -> Node:
    """Parse JSONC text into a node tree."""
    return JsoncParser(text).parse()


class TranslationDocument:
    """One (locale, namespace) translation file as raw text."""

    def __init__(self, path: Path, text: str):
        self.path = Path(path)
        self.text = text
        self._tree: Optional[Node] = None
        self._lines: Optional[LineIndex] = None

    @classmethod
    def load(cls, path: Path) -> 'TranslationDocument':
        """Read a document from disk (UTF-8)."""
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return cls(path, f.read())

    @property
    def tree(self) -> Node:
        if self._tree is None:
            try:
                self._tree = parse_tree(self.text)
            except MalformedDocumentError as e:
                raise e.with_document(self.path) from None
        return self._tree

    @property
    def lines(self) -> LineIndex:
        if self._lines is None:
            self._lines = LineIndex(self.text)
        return self._lines

