"""Minimal in-place edits of JSONC documents."""

import json
from typing import Optional, Sequence

from ..utils.config import FormattingConfig
from .document import Node, NodeKind, parse_tree
from .errors import PatchApplicationError


def set_value(
    text: str,
    segments: Sequence[str],
    value: str,
    formatting: Optional[FormattingConfig] = None,
) -> str:
    """
    Set the string at a dotted path, creating intermediate objects.

    Only the edited span of ``text`` changes: an existing string is replaced
    where it stands, a new key is appended after the last member of its
    parent object. Setting a string to its current value returns ``text``
    unchanged.

    Args:
        text: Current document text
        segments: Path segments, e.g. ``['greeting', 'hello']``
        value: New string value
        formatting: Indentation and line ending for inserted members

    Returns:
        The edited document text

    Raises:
        MalformedDocumentError: ``text`` does not parse
        PatchApplicationError: The path runs through a non-object value, or
            ends on a value that is not a string
    """
    if not segments or any(not segment for segment in segments):
        raise PatchApplicationError(f"Invalid key path: {'.'.join(segments)!r}")

    formatting = formatting or FormattingConfig()
    eol = '\r\n' if '\r\n' in text else formatting.eol

    node = parse_tree(text)
    if node.kind is not NodeKind.OBJECT:
        raise PatchApplicationError("Document root is not an object")

    depth = 0
    for index, segment in enumerate(segments):
        prop = node.get(segment)
        walked = '.'.join(segments[:index + 1])
        is_last = index == len(segments) - 1

        if prop is None:
            return _insert_member(text, node, depth, segments[index:], value, formatting, eol)

        if is_last:
            if prop.value.kind is not NodeKind.STRING:
                raise PatchApplicationError(
                    f"Cannot set '{walked}': existing value is {prop.value.kind.value}, not string"
                )
            if prop.value.value == value:
                return text
            return text[:prop.value.offset] + _encode(value) + text[prop.value.end:]

        if prop.value.kind is not NodeKind.OBJECT:
            raise PatchApplicationError(
                f"Cannot create '{'.'.join(segments)}': '{walked}' holds a {prop.value.kind.value}"
            )
        node = prop.value
        depth += 1

    return text


def _encode(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _line_indent(text: str, offset: int) -> Optional[str]:
    """Leading whitespace of the line holding ``offset``, if only whitespace precedes it."""
    line_start = text.rfind('\n', 0, offset) + 1
    prefix = text[line_start:offset]
    if prefix.strip():
        return None
    return prefix


def _leading_whitespace(text: str, offset: int) -> str:
    line_start = text.rfind('\n', 0, offset) + 1
    line = text[line_start:offset]
    return line[:len(line) - len(line.lstrip())]


def _render(segments: Sequence[str], value: str, indent: str, unit: str, eol: str) -> str:
    """Render ``"a": {"b": "value"}`` style nesting for the remaining segments."""
    key = _encode(segments[0])
    if len(segments) == 1:
        return f"{key}: {_encode(value)}"
    inner = _render(segments[1:], value, indent + unit, unit, eol)
    return f"{key}: {{{eol}{indent}{unit}{inner}{eol}{indent}}}"


def _insert_member(
    text: str,
    parent: Node,
    depth: int,
    segments: Sequence[str],
    value: str,
    formatting: FormattingConfig,
    eol: str,
) -> str:
    unit = formatting.indent_unit

    if parent.properties:
        last = parent.properties[-1]
        indent = _line_indent(text, last.key_offset)
        if indent is None:
            indent = unit * (depth + 1)
        member = _render(segments, value, indent, unit, eol)
        position = last.value.end
        return text[:position] + ',' + eol + indent + member + text[position:]

    base = _leading_whitespace(text, parent.offset)
    indent = base + unit
    member = _render(segments, value, indent, unit, eol)
    open_brace = parent.offset
    close_brace = parent.end - 1
    interior = text[open_brace + 1:close_brace]

    if not interior.strip():
        return text[:open_brace + 1] + eol + indent + member + eol + base + text[close_brace:]

    # Object holds only comments: keep them after the new member.
    return text[:open_brace + 1] + eol + indent + member + text[open_brace + 1:]
