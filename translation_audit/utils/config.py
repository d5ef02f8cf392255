"""Configuration management for translation-audit."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

CONFIG_FILENAME = '.translation-audit.yml'


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class ConfigValidationWarning:
    """Represents a configuration warning (non-fatal)."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


@dataclass
class ProjectConfig:
    """Project configuration."""
    name: str = "Unnamed Project"
    root: str = "."


@dataclass
class LanguagesConfig:
    """Source language and the locales audited against it."""
    source: str = "en"
    targets: List[str] = field(default_factory=lambda: ["de", "es"])


@dataclass
class PathsConfig:
    """Where documents live and where templates go (relative to project root)."""
    documents: str = "locales/{locale}/{namespace}.json"
    templates: str = "translation-templates"


@dataclass
class HistoryConfig:
    """Version-control history lookups."""
    workers: int = 8
    progress: bool = True


@dataclass
class FormattingConfig:
    """Formatting used for keys inserted by ingest."""
    tab_size: int = 2
    insert_spaces: bool = True
    eol: str = "\n"

    @property
    def indent_unit(self) -> str:
        return ' ' * self.tab_size if self.insert_spaces else '\t'


@dataclass
class IngestConfig:
    """Ingest configuration."""
    backup: bool = True
    backup_dir: str = ".translation_backups"


@dataclass
class Config:
    """Main configuration class."""
    project: ProjectConfig = field(default_factory=ProjectConfig)
    languages: LanguagesConfig = field(default_factory=LanguagesConfig)
    namespaces: List[str] = field(default_factory=lambda: ["common"])
    paths: PathsConfig = field(default_factory=PathsConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    formatting: FormattingConfig = field(default_factory=FormattingConfig)
    ingest: IngestConfig = field(default_factory=IngestConfig)
    # Directory the config file was loaded from; relative roots resolve against it
    base_dir: Optional[str] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from YAML file (defaults when absent)."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILENAME

            if not config_path.exists():
                return cls()

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        return cls(
            project=ProjectConfig(**data.get('project', {})),
            languages=LanguagesConfig(**data.get('languages', {})),
            namespaces=list(data.get('namespaces', ["common"])),
            paths=PathsConfig(**data.get('paths', {})),
            history=HistoryConfig(**data.get('history', {})),
            formatting=FormattingConfig(**data.get('formatting', {})),
            ingest=IngestConfig(**data.get('ingest', {})),
            base_dir=str(Path(config_path).parent),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'project': {
                'name': self.project.name,
                'root': self.project.root,
            },
            'languages': {
                'source': self.languages.source,
                'targets': self.languages.targets,
            },
            'namespaces': self.namespaces,
            'paths': {
                'documents': self.paths.documents,
                'templates': self.paths.templates,
            },
            'history': {
                'workers': self.history.workers,
                'progress': self.history.progress,
            },
            'formatting': {
                'tab_size': self.formatting.tab_size,
                'insert_spaces': self.formatting.insert_spaces,
                'eol': self.formatting.eol,
            },
            'ingest': {
                'backup': self.ingest.backup,
                'backup_dir': self.ingest.backup_dir,
            },
        }

    def save(self, config_path: Optional[Path] = None):
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILENAME

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @property
    def root(self) -> Path:
        root = Path(self.project.root)
        if self.base_dir and not root.is_absolute():
            return Path(self.base_dir) / root
        return root

    def document_path(self, locale: str, namespace: str) -> Path:
        """Path of the document for ``(locale, namespace)`` relative to the project root."""
        return Path(self.paths.documents.format(locale=locale, namespace=namespace))

    def templates_dir(self) -> Path:
        return self.root / self.paths.templates

    def validate(self, raise_on_error: bool = False) -> Tuple[List[str], List[ConfigValidationWarning]]:
        """
        Validate configuration and return errors and warnings.

        Args:
            raise_on_error: If True, raise ConfigValidationError on validation errors

        Returns:
            Tuple of (errors, warnings) lists
        """
        errors = []
        warnings = []

        if not self.root.exists():
            errors.append(f"Project root does not exist: {self.project.root}")

        if not self._is_valid_locale(self.languages.source):
            errors.append(f"Invalid source locale: '{self.languages.source}'")

        if not self.languages.targets:
            errors.append("languages.targets must list at least one locale")

        for locale in self.languages.targets:
            if not self._is_valid_locale(locale):
                errors.append(f"Invalid target locale: '{locale}'")

        if self.languages.source in self.languages.targets:
            errors.append(
                f"Source locale '{self.languages.source}' cannot also be a target locale"
            )

        if len(set(self.languages.targets)) != len(self.languages.targets):
            warnings.append(ConfigValidationWarning("Duplicate target locales in languages.targets"))

        if not self.namespaces:
            errors.append("namespaces must list at least one namespace")

        for namespace in self.namespaces:
            if not namespace or not isinstance(namespace, str):
                errors.append(f"Invalid namespace: {namespace!r}")
            elif '/' in namespace or '\\' in namespace:
                errors.append(f"Namespace must not contain path separators: '{namespace}'")

        if len(set(self.namespaces)) != len(self.namespaces):
            warnings.append(ConfigValidationWarning("Duplicate namespaces in namespaces list"))

        for placeholder in ('{locale}', '{namespace}'):
            if placeholder not in self.paths.documents:
                errors.append(f"paths.documents must contain {placeholder}")

        if self.history.workers < 1:
            errors.append(f"history.workers must be at least 1, got {self.history.workers}")

        if self.formatting.tab_size < 1:
            errors.append(f"formatting.tab_size must be at least 1, got {self.formatting.tab_size}")

        if self.formatting.eol not in ('\n', '\r\n'):
            errors.append(f"formatting.eol must be '\\n' or '\\r\\n', got {self.formatting.eol!r}")

        if raise_on_error and errors:
            raise ConfigValidationError(errors)

        return errors, warnings

    LOCALE_PATTERN = re.compile(r'^[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{2,8})*$')

    @classmethod
    def _is_valid_locale(cls, code: str) -> bool:
        """Accept ISO 639 codes with optional region/script variants (pt-BR, zh_Hans)."""
        if not code or not isinstance(code, str):
            return False
        return bool(cls.LOCALE_PATTERN.match(code))


def create_default_config(root: str = ".") -> Config:
    """Create a default configuration for a project root."""
    config = Config()
    config.project.root = root
    config.project.name = Path(root).resolve().name or config.project.name
    return config
