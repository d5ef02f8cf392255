"""Flatten nested translation trees into dotted-key entries."""

from dataclasses import dataclass
from typing import List, Set, Tuple

from .document import LineIndex, Node, NodeKind, TranslationDocument
from .errors import MalformedDocumentError


@dataclass(frozen=True)
class Entry:
    """A single translatable string and where it lives in its document."""
    path: Tuple[str, ...]
    full_id: str
    line: int
    value: str


def extract_entries(tree: Node, lines: LineIndex) -> List[Entry]:
    """
    Walk a parsed document depth-first in declaration order.

    Args:
        tree: Root node of the document (must be an object)
        lines: Line index built over the same text the tree was parsed from

    Returns:
        One Entry per string leaf

    Raises:
        MalformedDocumentError: A value is neither a string nor an object,
            or two leaves resolve to the same dotted key
    """
    if tree.kind is not NodeKind.OBJECT:
        raise MalformedDocumentError(
            f"Root must be an object, found {tree.kind.value}",
            line=lines.line_of(tree.offset),
        )

    entries: List[Entry] = []
    _collect(tree, lines, (), entries, set())
    return entries


def _collect(
    node: Node,
    lines: LineIndex,
    prefix: Tuple[str, ...],
    entries: List[Entry],
    seen: Set[str],
):
    for prop in node.properties:
        path = prefix + (prop.key,)
        value = prop.value

        if value.kind is NodeKind.STRING:
            full_id = '.'.join(path)
            line = lines.line_of(value.offset)
            if full_id in seen:
                raise MalformedDocumentError("Duplicate key", key=full_id, line=line)
            seen.add(full_id)
            entries.append(Entry(path=path, full_id=full_id, line=line, value=value.value))
        elif value.kind is NodeKind.OBJECT:
            _collect(value, lines, path, entries, seen)
        else:
            raise MalformedDocumentError(
                f"Unexpected node type: {value.kind.value}",
                key='.'.join(path),
                line=lines.line_of(value.offset),
            )


def extract_document_entries(document: TranslationDocument) -> List[Entry]:
    """Extract entries from a document, tagging errors with its path."""
    try:
        return extract_entries(document.tree, document.lines)
    except MalformedDocumentError as e:
        if e.document:
            raise
        raise e.with_document(document.path) from None
