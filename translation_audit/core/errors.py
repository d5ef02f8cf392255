"""Error taxonomy for the audit engine."""

from pathlib import Path
from typing import Optional, Union


class AuditError(Exception):
    """Base class for all audit and ingest errors."""


class MalformedDocumentError(AuditError):
    """
    A translation document is not a nested tree of strings.

    Carries enough context (document, key, line) to fix the file by hand.
    """

    def __init__(
        self,
        message: str,
        document: Optional[Union[str, Path]] = None,
        key: Optional[str] = None,
        line: Optional[int] = None,
    ):
        self.message = message
        self.document = str(document) if document is not None else None
        self.key = key
        self.line = line
        super().__init__(self._describe())

    def _describe(self) -> str:
        location = []
        if self.document:
            location.append(self.document)
        if self.line is not None:
            location.append(f"line {self.line}")
        text = self.message
        if self.key:
            text = f"{text} (key '{self.key}')"
        if location:
            text = f"{':'.join(location)}: {text}"
        return text

    def with_document(self, document: Union[str, Path]) -> 'MalformedDocumentError':
        """Return a copy of this error that names the offending document."""
        return MalformedDocumentError(self.message, document=document, key=self.key, line=self.line)


class MissingSourceArtifactError(AuditError):
    """A source-language document required by the audit does not exist."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Source document not found: {self.path}")


class HistoryLookupError(AuditError):
    """The history oracle could not attribute a line to a commit."""


class IngestRowError(AuditError):
    """A CSV row cannot be applied (missing namespace/key, bad path)."""


class PatchApplicationError(AuditError):
    """Setting a value at a dotted path would overwrite existing structure."""


class UnknownNamespaceError(AuditError):
    """An ingest file references a namespace that is not configured."""

    def __init__(self, namespaces):
        self.namespaces = sorted(namespaces)
        super().__init__(f"Unknown namespace(s): {', '.join(self.namespaces)}")
