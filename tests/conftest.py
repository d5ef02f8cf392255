"""Shared fixtures: an in-memory history oracle and temporary projects."""

import json
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

import pytest

from translation_audit.core.errors import HistoryLookupError
from translation_audit.core.history import CommitInfo, HistoryOracle
from translation_audit.utils.colors import Colors
from translation_audit.utils.config import Config
from translation_audit.utils.logging import reset_logger


def ts(seconds: int) -> datetime:
    """UTC datetime from a small integer, for readable timestamps in tests."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


class FakeHistory(HistoryOracle):
    """History oracle backed by dictionaries."""

    def __init__(self):
        self.blames: Dict[str, Dict[int, str]] = {}
        self.commits: Dict[str, CommitInfo] = {}
        self.blame_calls = []
        self.resolve_calls = []
        self._lock = Lock()

    def add_commit(self, commit_id: str, seconds: int, author: str = 'dev', message: str = 'update'):
        self.commits[commit_id] = CommitInfo(commit_id, ts(seconds), author, message)

    def track(self, path, lines: Dict[int, str]):
        """Record blame output for ``path`` (``{line: commit_id}``)."""
        self.blames[str(Path(path))] = dict(lines)

    def track_all(self, root: Path, path, commit_id: str):
        """Attribute every line of a file to one commit."""
        text = (Path(root) / path).read_text(encoding='utf-8')
        count = text.count('\n') + 1
        self.track(path, {line: commit_id for line in range(1, count + 1)})

    def is_tracked(self, document_path) -> bool:
        return str(Path(document_path)) in self.blames

    def blame(self, document_path) -> Dict[int, str]:
        self.blame_calls.append(str(Path(document_path)))
        return dict(self.blames[str(Path(document_path))])

    def resolve(self, commit_id: str) -> CommitInfo:
        with self._lock:
            self.resolve_calls.append(commit_id)
        if commit_id not in self.commits:
            raise HistoryLookupError(f"unknown commit {commit_id}")
        return self.commits[commit_id]


def write_document(root: Path, locale: str, namespace: str, data=None, text: Optional[str] = None) -> Path:
    """Write ``locales/<locale>/<namespace>.json`` and return its relative path."""
    relative = Path('locales') / locale / f'{namespace}.json'
    path = Path(root) / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if text is None:
        text = json.dumps(data, indent=2, ensure_ascii=False) + '\n'
    path.write_text(text, encoding='utf-8')
    return relative


def make_config(root: Path, targets=('de',), namespaces=('common',)) -> Config:
    config = Config()
    config.project.root = str(root)
    config.languages.source = 'en'
    config.languages.targets = list(targets)
    config.namespaces = list(namespaces)
    config.history.progress = False
    config.ingest.backup = False
    return config


@pytest.fixture
def history():
    return FakeHistory()


@pytest.fixture
def project(tmp_path):
    return tmp_path


@pytest.fixture(autouse=True)
def fresh_logger():
    reset_logger()
    Colors.enabled = True
    yield
    reset_logger()
    Colors.enabled = True
