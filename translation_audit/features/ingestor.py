"""Apply filled-out translation templates to locale documents."""

import csv
import os
import stat
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..core.errors import (
    IngestRowError,
    MalformedDocumentError,
    PatchApplicationError,
    UnknownNamespaceError,
)
from ..core.document import LineIndex, parse_tree
from ..core.extractor import extract_entries
from ..core.json_edit import set_value
from ..utils.backup import create_backup
from ..utils.config import Config
from ..utils.logging import get_logger
from .exporter import HEADER, TabularRecord

# namespace -> full_id -> record
IngestBatch = Dict[str, Dict[str, TabularRecord]]

EMPTY_DOCUMENT = '{}\n'


@dataclass
class IngestResult:
    """Outcome of patching one namespace document."""
    namespace: str
    path: Path
    applied: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    error: Optional[str] = None
    written: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class IngestSummary:
    """All namespace results of one ingest run."""
    locale: str
    results: List[IngestResult] = field(default_factory=list)
    skipped_rows: int = 0
    dry_run: bool = False
    backup_path: Optional[Path] = None

    @property
    def failed(self) -> List[IngestResult]:
        return [result for result in self.results if not result.ok]

    @property
    def succeeded(self) -> bool:
        return not self.failed

    @property
    def total_applied(self) -> int:
        return sum(len(result.applied) for result in self.results if result.ok)


def read_rows(csv_path: Path) -> Iterator[TabularRecord]:
    """
    Read template rows by column position, skipping the header row.

    Rows too short to carry a translation are skipped with a warning.
    """
    logger = get_logger()
    with open(csv_path, 'r', encoding='utf-8-sig', newline='') as f:
        reader = csv.reader(f)
        next(reader, None)
        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            if len(row) < 5:
                logger.warning(f"{csv_path}:{reader.line_num}: expected {len(HEADER)} columns, got {len(row)}; row skipped")
                continue
            row = row + [''] * (len(HEADER) - len(row))
            yield TabularRecord(*row[:len(HEADER)])


def build_batch(rows: Iterable[TabularRecord]) -> Tuple[IngestBatch, int]:
    """
    Group rows by namespace and key.

    Rows without a translation are ignored; rows missing namespace or key are
    skipped with a warning. A later row for the same key wins.

    Returns:
        Tuple of (batch, number of malformed rows skipped)
    """
    logger = get_logger()
    batch: IngestBatch = {}
    skipped = 0

    for record in rows:
        if not record.target_text:
            continue
        try:
            _check_row(record)
        except IngestRowError as e:
            logger.warning(f"Skipping row: {e}")
            skipped += 1
            continue
        batch.setdefault(record.namespace, {})[record.full_id] = record

    return batch, skipped


def _check_row(record: TabularRecord):
    if not record.namespace:
        raise IngestRowError(f"no namespace for key '{record.full_id}'")
    if not record.full_id:
        raise IngestRowError(f"no key in namespace '{record.namespace}'")


class PatchIngestor:
    """
    Writes translations from template rows into target documents.

    Each namespace document is edited in memory key by key, then replaced on
    disk in one atomic rename. A failing namespace is left untouched and does
    not stop the others.
    """

    def __init__(self, config: Config, backup: Optional[bool] = None):
        self.config = config
        self.backup = config.ingest.backup if backup is None else backup
        self.logger = get_logger()

    def ingest_file(self, locale: str, csv_path: Path, dry_run: bool = False) -> IngestSummary:
        """Read a template file and ingest it for ``locale``."""
        return self.ingest(locale, read_rows(Path(csv_path)), dry_run=dry_run)

    def ingest(self, locale: str, rows: Iterable[TabularRecord], dry_run: bool = False) -> IngestSummary:
        """
        Apply rows to the documents of ``locale``.

        Raises:
            UnknownNamespaceError: A row names a namespace that is not
                configured; nothing is written in that case
        """
        batch, skipped = build_batch(rows)
        summary = IngestSummary(locale=locale, skipped_rows=skipped, dry_run=dry_run)

        unknown = set(batch) - set(self.config.namespaces)
        if unknown:
            raise UnknownNamespaceError(unknown)

        if self.backup and not dry_run and batch:
            summary.backup_path = self._backup(locale, batch)

        for namespace, records in batch.items():
            summary.results.append(self.apply_namespace(locale, namespace, records, dry_run=dry_run))

        return summary

    def apply_namespace(
        self,
        locale: str,
        namespace: str,
        records: Dict[str, TabularRecord],
        dry_run: bool = False,
    ) -> IngestResult:
        """Patch one namespace document; errors are reported in the result."""
        path = self.config.root / self.config.document_path(locale, namespace)
        result = IngestResult(namespace=namespace, path=path)

        try:
            original = self._read(path)
            known_paths = self._source_paths(namespace)
            known_paths.update(self._key_paths(original))

            text = original
            for full_id, record in records.items():
                # Literal dotted keys ("a.b") keep their own path; only new keys are split.
                segments = known_paths.get(full_id) or tuple(full_id.split('.'))
                if any(not segment for segment in segments):
                    self.logger.warning(f"{namespace}: invalid key '{full_id}', row skipped")
                    result.skipped.append(full_id)
                    continue

                updated = set_value(text, segments, record.target_text, self.config.formatting)
                if updated == text:
                    result.unchanged.append(full_id)
                else:
                    result.applied.append(full_id)
                text = updated
        except MalformedDocumentError as e:
            return self._fail(result, e if e.document else e.with_document(path))
        except PatchApplicationError as e:
            return self._fail(result, e)

        if text != original and not dry_run:
            self._write_atomic(path, text)
            result.written = True

        return result

    def _fail(self, result: IngestResult, error: Exception) -> IngestResult:
        result.error = str(error)
        self.logger.error(f"{result.namespace}: {error}; {result.path} left unchanged")
        return result

    @staticmethod
    def _key_paths(text: str) -> Dict[str, Tuple[str, ...]]:
        """Map each full_id of a document to its key path."""
        entries = extract_entries(parse_tree(text), LineIndex(text))
        return {entry.full_id: entry.path for entry in entries}

    def _source_paths(self, namespace: str) -> Dict[str, Tuple[str, ...]]:
        source = self.config.root / self.config.document_path(self.config.languages.source, namespace)
        if not source.exists():
            return {}
        try:
            return self._key_paths(self._read(source))
        except MalformedDocumentError as e:
            raise e.with_document(source) from None

    @staticmethod
    def _read(path: Path) -> str:
        if not path.exists():
            return EMPTY_DOCUMENT
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return f.read()

    @staticmethod
    def _new_file_mode() -> int:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    @staticmethod
    def _write_atomic(path: Path, text: str):
        path.parent.mkdir(parents=True, exist_ok=True)
        mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else PatchIngestor._new_file_mode()
        fd, tmp_name = tempfile.mkstemp(prefix=f'.{path.name}.', suffix='.tmp', dir=path.parent)
        try:
            # mkstemp creates 0600; keep the document's permissions across the rename
            os.chmod(tmp_name, mode)
            with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _backup(self, locale: str, namespaces: Iterable[str]) -> Optional[Path]:
        """Copy the existing documents about to be patched, keeping their project-relative paths."""
        documents = [
            self.config.document_path(locale, namespace)
            for namespace in namespaces
            if (self.config.root / self.config.document_path(locale, namespace)).exists()
        ]
        if not documents:
            return None
        return create_backup(
            source_dir=self.config.root,
            backup_root=self.config.root / self.config.ingest.backup_dir,
            prefix=locale,
            files=documents,
        )
