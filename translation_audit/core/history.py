"""Version-control history lookups and per-entry annotation."""

import re
import subprocess
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Dict, List, Optional, Tuple

from ..utils.logging import get_logger
from ..utils.progress import progress_bar
from .document import TranslationDocument
from .errors import HistoryLookupError
from .extractor import Entry, extract_document_entries


@dataclass(frozen=True)
class CommitInfo:
    """The commit that last touched a line."""
    commit_id: str
    timestamp: datetime
    author: str
    message: str


@dataclass(frozen=True)
class AnnotatedEntry:
    """An Entry plus its last-change metadata (``commit`` is None if unknown)."""
    entry: Entry
    commit: Optional[CommitInfo] = None

    @property
    def path(self) -> Tuple[str, ...]:
        return self.entry.path

    @property
    def full_id(self) -> str:
        return self.entry.full_id

    @property
    def line(self) -> int:
        return self.entry.line

    @property
    def value(self) -> str:
        return self.entry.value

    @property
    def has_history(self) -> bool:
        return self.commit is not None

    @property
    def last_change_id(self) -> Optional[str]:
        return self.commit.commit_id if self.commit else None

    @property
    def last_change_timestamp(self) -> Optional[datetime]:
        return self.commit.timestamp if self.commit else None

    @property
    def last_change_author(self) -> Optional[str]:
        return self.commit.author if self.commit else None

    @property
    def last_change_message(self) -> Optional[str]:
        return self.commit.message if self.commit else None


class HistoryOracle(ABC):
    """Read-only view of who last changed each line of a tracked document."""

    @abstractmethod
    def is_tracked(self, document_path: Path) -> bool:
        """Return True if the document is under version control."""
        pass

    @abstractmethod
    def blame(self, document_path: Path) -> Dict[int, str]:
        """Return a mapping of 1-based line number to commit id."""
        pass

    @abstractmethod
    def resolve(self, commit_id: str) -> CommitInfo:
        """Return timestamp, author and message of a commit."""
        pass


class GitHistory(HistoryOracle):
    """
    History oracle backed by the ``git`` executable.

    Document paths are relative to ``repo_dir``. Resolved commits are cached;
    the cache is shared by annotation worker threads.
    """

    BLAME_HEADER = re.compile(r'^([0-9a-f]{40}|[0-9a-f]{64}) (\d+) (\d+)(?: \d+)?$')
    UNCOMMITTED = re.compile(r'^0+$')

    # Exit status of ``ls-files --error-unmatch`` for paths git does not know
    UNMATCHED_STATUS = 1

    def __init__(self, repo_dir: Path, git: str = 'git'):
        self.repo_dir = Path(repo_dir)
        self.git = git
        self._commits: Dict[str, CommitInfo] = {}
        self._lock = Lock()

    def _exec(self, *args: str) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                [self.git, '-C', str(self.repo_dir), *args],
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
            )
        except FileNotFoundError:
            raise HistoryLookupError(f"git executable not found: {self.git}")

    def _run(self, *args: str) -> str:
        result = self._exec(*args)
        if result.returncode != 0:
            raise HistoryLookupError(f"git {args[0]} failed: {result.stderr.strip()}")
        return result.stdout

    def is_tracked(self, document_path: Path) -> bool:
        """
        Raises:
            HistoryLookupError: git is missing or the root is not inside a repository
        """
        result = self._exec('ls-files', '--error-unmatch', '--', str(document_path))
        if result.returncode == self.UNMATCHED_STATUS:
            return False
        if result.returncode != 0:
            raise HistoryLookupError(f"git ls-files failed: {result.stderr.strip()}")
        return True

    def blame(self, document_path: Path) -> Dict[int, str]:
        output = self._run('blame', '--porcelain', '--', str(document_path))
        return self.parse_porcelain(output)

    @classmethod
    def parse_porcelain(cls, output: str) -> Dict[int, str]:
        """Extract ``{final_line: commit_id}`` from ``git blame --porcelain`` output."""
        lines: Dict[int, str] = {}
        for raw in output.splitlines():
            if raw.startswith('\t'):
                continue
            match = cls.BLAME_HEADER.match(raw)
            if match:
                lines[int(match.group(3))] = match.group(1)
        return lines

    def resolve(self, commit_id: str) -> CommitInfo:
        if self.UNCOMMITTED.match(commit_id):
            raise HistoryLookupError("Line has uncommitted changes")

        with self._lock:
            cached = self._commits.get(commit_id)
        if cached is not None:
            return cached

        output = self._run('show', '-s', '--format=%H%x00%ct%x00%cn%x00%B', commit_id)
        parts = output.split('\x00', 3)
        if len(parts) != 4:
            raise HistoryLookupError(f"Unexpected git show output for {commit_id}")

        sha, committed_at, committer, message = parts
        info = CommitInfo(
            commit_id=sha.strip(),
            timestamp=datetime.fromtimestamp(int(committed_at), tz=timezone.utc),
            author=committer,
            message=message.strip(),
        )
        with self._lock:
            self._commits[commit_id] = info
        return info


class HistoryAnnotator:
    """
    Attaches last-change metadata to every entry of a document.

    The document is blamed once; each entry's commit is then resolved on a
    bounded thread pool. Output order always matches declaration order.
    """

    def __init__(
        self,
        oracle: HistoryOracle,
        root: Path,
        workers: int = 8,
        show_progress: bool = False,
    ):
        self.oracle = oracle
        self.root = Path(root)
        self.workers = max(1, workers)
        self.show_progress = show_progress
        self.logger = get_logger()

    def annotate(self, document_path: Path) -> List[AnnotatedEntry]:
        """
        Annotate the entries of one document.

        Args:
            document_path: Document path relative to the project root

        Returns:
            Annotated entries, or an empty list when the document does not
            exist or has never been committed

        Raises:
            MalformedDocumentError: The document is not a nested string tree
            HistoryLookupError: History is unavailable (no git, no repository)
        """
        absolute = self.root / document_path
        if not absolute.exists():
            self.logger.debug(f"No document at {document_path}, nothing to annotate")
            return []

        if not self.oracle.is_tracked(document_path):
            self.logger.warning(f"{document_path} is not under version control, treating it as absent")
            return []

        entries = extract_document_entries(TranslationDocument.load(absolute))
        if not entries:
            return []

        try:
            blame = self.oracle.blame(document_path)
        except HistoryLookupError as e:
            self.logger.warning(f"Could not read history of {document_path}: {e}")
            return [AnnotatedEntry(entry) for entry in entries]

        return self.annotate_entries(entries, blame, label=str(document_path))

    def annotate_entries(
        self,
        entries: List[Entry],
        blame: Dict[int, str],
        label: str = '',
    ) -> List[AnnotatedEntry]:
        """Resolve each entry's commit concurrently, keeping entry order."""
        results: List[Optional[AnnotatedEntry]] = [None] * len(entries)

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {
                executor.submit(self._lookup, entry, blame): index
                for index, entry in enumerate(entries)
            }

            for future in progress_bar(
                as_completed(futures),
                desc=label or 'history',
                total=len(futures),
                disable=not self.show_progress,
                unit='keys',
            ):
                index = futures[future]
                entry = entries[index]
                try:
                    commit = future.result()
                except HistoryLookupError as e:
                    self.logger.warning(f"{label}:{entry.line}: no history for '{entry.full_id}' ({e})")
                    commit = None
                results[index] = AnnotatedEntry(entry, commit)

        return results

    def _lookup(self, entry: Entry, blame: Dict[int, str]) -> CommitInfo:
        commit_id = blame.get(entry.line)
        if commit_id is None:
            raise HistoryLookupError(f"line {entry.line} missing from blame output")
        return self.oracle.resolve(commit_id)
