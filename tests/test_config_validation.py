"""Tests for configuration loading and validation."""

import pytest
from pathlib import Path
import yaml

from translation_audit.utils.config import (
    CONFIG_FILENAME,
    Config,
    ConfigValidationError,
    ConfigValidationWarning,
    FormattingConfig,
    create_default_config,
)


class TestConfigValidation:
    """Test cases for Config.validate() method."""

    def test_valid_default_config(self):
        """Default config should pass validation."""
        errors, warnings = Config().validate()
        assert errors == []
        assert warnings == []

    def test_missing_root(self, tmp_path):
        config = Config()
        config.project.root = str(tmp_path / 'nowhere')
        errors, _ = config.validate()
        assert any('Project root does not exist' in e for e in errors)

    @pytest.mark.parametrize('code', ['en', 'de', 'pt-BR', 'zh_Hans', 'sr-Latn-RS', 'fil'])
    def test_valid_locale_codes(self, code):
        config = Config()
        config.languages.targets = [code]
        errors, _ = config.validate()
        assert errors == []

    @pytest.mark.parametrize('code', ['', 'e', 'english', 'en/US', '12'])
    def test_invalid_target_locale(self, code):
        config = Config()
        config.languages.targets = ['de', code]
        errors, _ = config.validate()
        assert len(errors) == 1
        assert 'Invalid target locale' in errors[0]

    def test_invalid_source_locale(self):
        config = Config()
        config.languages.source = 'not a locale'
        errors, _ = config.validate()
        assert 'Invalid source locale' in errors[0]

    def test_no_targets(self):
        config = Config()
        config.languages.targets = []
        errors, _ = config.validate()
        assert any('at least one locale' in e for e in errors)

    def test_source_also_target(self):
        config = Config()
        config.languages.targets = ['en', 'de']
        errors, _ = config.validate()
        assert any("'en' cannot also be a target" in e for e in errors)

    def test_duplicate_targets_warn(self):
        config = Config()
        config.languages.targets = ['de', 'de']
        errors, warnings = config.validate()
        assert errors == []
        assert len(warnings) == 1
        assert isinstance(warnings[0], ConfigValidationWarning)
        assert 'Duplicate target locales' in str(warnings[0])

    def test_duplicate_namespaces_warn(self):
        config = Config()
        config.namespaces = ['common', 'common']
        _, warnings = config.validate()
        assert 'Duplicate namespaces' in str(warnings[0])

    @pytest.mark.parametrize('namespaces,message', [
        ([], 'at least one namespace'),
        ([''], 'Invalid namespace'),
        (['a/b'], 'path separators'),
    ])
    def test_invalid_namespaces(self, namespaces, message):
        config = Config()
        config.namespaces = namespaces
        errors, _ = config.validate()
        assert any(message in e for e in errors)

    def test_documents_path_placeholders(self):
        config = Config()
        config.paths.documents = 'i18n/{locale}.json'
        errors, _ = config.validate()
        assert errors == ['paths.documents must contain {namespace}']

    def test_numeric_limits(self):
        config = Config()
        config.history.workers = 0
        config.formatting.tab_size = 0
        config.formatting.eol = '\r'
        errors, _ = config.validate()
        assert len(errors) == 3

    def test_raise_on_error(self):
        config = Config()
        config.languages.targets = []
        with pytest.raises(ConfigValidationError) as exc:
            config.validate(raise_on_error=True)
        assert exc.value.errors


class TestConfigFile:
    """Test cases for loading and saving the YAML file."""

    def test_defaults_when_no_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = Config.from_file()
        assert config == Config()

    def test_round_trip(self, tmp_path):
        config = create_default_config(str(tmp_path))
        config.languages.targets = ['fr', 'pt-BR']
        config.namespaces = ['common', 'errors']
        config.formatting.tab_size = 4
        path = tmp_path / CONFIG_FILENAME

        config.save(path)
        loaded = Config.from_file(path)

        assert loaded == config
        assert loaded.formatting.indent_unit == '    '

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text(yaml.safe_dump({'languages': {'targets': ['ja']}}), encoding='utf-8')

        config = Config.from_file(path)

        assert config.languages.source == 'en'
        assert config.languages.targets == ['ja']
        assert config.namespaces == ['common']
        assert config.history.workers == 8

    def test_empty_file(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text('', encoding='utf-8')
        assert Config.from_file(path) == Config()

    def test_relative_root_resolves_against_config_dir(self, tmp_path):
        path = tmp_path / 'sub' / CONFIG_FILENAME
        path.parent.mkdir()
        path.write_text(yaml.safe_dump({'project': {'root': '..'}}), encoding='utf-8')

        config = Config.from_file(path)

        assert config.root == tmp_path / 'sub' / '..'
        assert config.validate()[0] == []

    def test_document_path_and_templates_dir(self, tmp_path):
        config = create_default_config(str(tmp_path))
        assert config.document_path('de', 'common') == Path('locales/de/common.json')
        assert config.templates_dir() == tmp_path / 'translation-templates'

    def test_default_project_name(self, tmp_path):
        assert create_default_config(str(tmp_path)).project.name == tmp_path.name


class TestFormattingConfig:
    """Test cases for FormattingConfig."""

    def test_indent_unit(self):
        assert FormattingConfig().indent_unit == '  '
        assert FormattingConfig(tab_size=4, insert_spaces=False).indent_unit == '\t'
