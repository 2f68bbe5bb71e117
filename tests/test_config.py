"""Tests for docwiki.config: models and YAML loader."""

import pytest
import yaml
from pydantic import ValidationError

from docwiki.config.loader import DB_PATH_ENV, DEFAULT_CONFIG_TEMPLATE, _expand_env_vars, load_config
from docwiki.config.models import ConversionConfig, DocWikiConfig, PdfConfig, StoreConfig


# ── DocWikiConfig defaults ─────────────────────────────────────────


class TestDocWikiConfigDefaults:
    def test_default_log_level(self, sample_config):
        assert sample_config.log_level == "info"

    def test_default_log_format(self, sample_config):
        assert sample_config.log_format == "text"

    def test_default_db_path(self, sample_config):
        assert sample_config.store.db_path == "wiki.db"

    def test_default_limits(self, sample_config):
        assert sample_config.conversion.max_file_size_mb == 10
        assert sample_config.conversion.pdf.max_pages == 25
        assert sample_config.store.max_html_bytes == 500_000
        assert sample_config.store.preview_chars == 300

    def test_fallback_disabled_by_default(self, sample_config):
        assert sample_config.conversion.fallback_to_text is False


# ── Individual config model validations ─────────────────────────────


class TestConversionConfig:
    def test_max_file_size_bytes(self):
        assert ConversionConfig(max_file_size_mb=2).max_file_size_bytes == 2 * 1024 * 1024

    def test_zero_size_rejected(self):
        with pytest.raises(ValidationError):
            ConversionConfig(max_file_size_mb=0)


class TestPdfConfig:
    def test_defaults(self):
        cfg = PdfConfig()
        assert cfg.scale == 1.5
        assert cfg.max_pages == 25

    def test_negative_scale_rejected(self):
        with pytest.raises(ValidationError):
            PdfConfig(scale=-1)


class TestStoreConfig:
    def test_zero_preview_rejected(self):
        with pytest.raises(ValidationError):
            StoreConfig(preview_chars=0)


class TestDocWikiConfig:
    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            DocWikiConfig(log_level="verbose")

    def test_template_parses_to_defaults(self):
        cfg = DocWikiConfig(**yaml.safe_load(DEFAULT_CONFIG_TEMPLATE))
        assert cfg == DocWikiConfig()


# ── Env var expansion ───────────────────────────────────────────────


class TestExpandEnvVars:
    def test_expands_string_variable(self, monkeypatch):
        monkeypatch.setenv("WIKI_DIR", "/data")
        assert _expand_env_vars("${WIKI_DIR}/wiki.db") == "/data/wiki.db"

    def test_missing_var_becomes_empty(self, monkeypatch):
        monkeypatch.delenv("DOCWIKI_NOPE", raising=False)
        assert _expand_env_vars("a${DOCWIKI_NOPE}b") == "ab"

    def test_expands_nested_structures(self, monkeypatch):
        monkeypatch.setenv("X", "1")
        assert _expand_env_vars({"a": ["${X}", {"b": "${X}"}]}) == {"a": ["1", {"b": "1"}]}

    def test_non_string_passthrough(self):
        assert _expand_env_vars(42) == 42
        assert _expand_env_vars(None) is None


# ── load_config ─────────────────────────────────────────────────────


class TestLoadConfig:
    @pytest.fixture(autouse=True)
    def _isolate(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        monkeypatch.delenv(DB_PATH_ENV, raising=False)

    def test_returns_defaults_when_no_file_exists(self):
        assert load_config() == DocWikiConfig()

    def test_loads_valid_yaml(self, tmp_path):
        (tmp_path / "docwiki.yaml").write_text("log_level: debug\nconversion:\n  pdf:\n    max_pages: 5\n")
        cfg = load_config()
        assert cfg.log_level == "debug"
        assert cfg.conversion.pdf.max_pages == 5

    def test_raises_on_invalid_yaml(self, tmp_path):
        (tmp_path / "docwiki.yaml").write_text("conversion: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config()

    def test_raises_on_invalid_config_values(self, tmp_path):
        (tmp_path / "docwiki.yaml").write_text("log_format: xml\n")
        with pytest.raises(ValueError, match="Invalid config"):
            load_config()

    def test_cli_path_takes_priority(self, tmp_path):
        (tmp_path / "docwiki.yaml").write_text("log_level: warn\n")
        custom = tmp_path / "custom.yaml"
        custom.write_text("log_level: error\n")
        assert load_config(str(custom)).log_level == "error"

    def test_user_global_config_used_as_fallback(self, tmp_path):
        global_dir = tmp_path / "fakehome" / ".docwiki"
        global_dir.mkdir(parents=True)
        (global_dir / "config.yaml").write_text("log_format: json\n")
        assert load_config().log_format == "json"

    def test_empty_yaml_file_returns_defaults(self, tmp_path):
        (tmp_path / "docwiki.yaml").write_text("")
        assert load_config() == DocWikiConfig()

    def test_env_vars_expanded_in_loaded_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WIKI_DIR", "/srv/wiki")
        (tmp_path / "docwiki.yaml").write_text('store:\n  db_path: "${WIKI_DIR}/docs.db"\n')
        assert load_config().store.db_path == "/srv/wiki/docs.db"

    def test_db_path_env_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / "docwiki.yaml").write_text('store:\n  db_path: "from-file.db"\n')
        monkeypatch.setenv(DB_PATH_ENV, "/tmp/override.db")
        assert load_config().store.db_path == "/tmp/override.db"
