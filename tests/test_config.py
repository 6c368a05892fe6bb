"""Tests for unified configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError
from quire.config import (
    CONFIG_FILENAME,
    QuireConfig,
    load_config,
    merge_cli_overrides,
)
from quire.errors import ConfigError
from quire.pages.publishers import OutputFormat

_ENV_VARS = (
    "QUIRE_CONTENT_DIR",
    "QUIRE_OUTPUT_DIR",
    "QUIRE_INCLUDE_DRAFTS",
    "QUIRE_FORMATS",
    "QUIRE_WORKERS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("quire.config.GLOBAL_CONFIG", tmp_path / "no-global.toml")
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_defaults(self):
        config = QuireConfig()
        assert config.content.directory == "content"
        assert config.content.include_drafts is False
        assert config.output.directory == "build"
        assert config.output.formats == [OutputFormat.JSON]
        assert config.build.workers == 1
        assert config.build.dry_run is False

    def test_paths(self):
        config = QuireConfig()
        assert config.content_dir == Path("content")
        assert config.output_dir == Path("build")

    def test_workers_must_be_positive(self):
        with pytest.raises(ValidationError):
            QuireConfig.model_validate({"build": {"workers": 0}})

    def test_unknown_format_rejected(self):
        with pytest.raises(ValidationError):
            QuireConfig.model_validate({"output": {"formats": ["html"]}})


class TestLoadConfig:
    def test_no_file_gives_defaults(self):
        assert load_config() == QuireConfig()

    def test_cwd_file(self, tmp_path: Path):
        (tmp_path / CONFIG_FILENAME).write_text(
            '[content]\ndirectory = "posts"\ninclude_drafts = true\n\n'
            '[output]\nformats = ["json", "markdown"]\n',
            encoding="utf-8",
        )
        config = load_config()
        assert config.content.directory == "posts"
        assert config.content.include_drafts is True
        assert config.output.formats == [OutputFormat.JSON, OutputFormat.MARKDOWN]

    def test_explicit_path(self, tmp_path: Path):
        path = tmp_path / "site.toml"
        path.write_text('[build]\nworkers = 4\n', encoding="utf-8")
        assert load_config(path).build.workers == 4

    def test_missing_explicit_path_warns(self, tmp_path: Path, caplog):
        config = load_config(tmp_path / "missing.toml")
        assert config == QuireConfig()
        assert "Config file not found" in caplog.text

    def test_invalid_toml_falls_back(self, tmp_path: Path, caplog):
        path = tmp_path / "broken.toml"
        path.write_text("[content\n", encoding="utf-8")
        assert load_config(path) == QuireConfig()
        assert "Failed to parse" in caplog.text

    def test_global_config(self, tmp_path: Path, monkeypatch):
        global_path = tmp_path / "global.toml"
        global_path.write_text('[output]\ndirectory = "dist"\n', encoding="utf-8")
        monkeypatch.setattr("quire.config.GLOBAL_CONFIG", global_path)
        assert load_config().output.directory == "dist"


class TestEnvVars:
    def test_directories(self, monkeypatch):
        monkeypatch.setenv("QUIRE_CONTENT_DIR", "/srv/posts")
        monkeypatch.setenv("QUIRE_OUTPUT_DIR", "/srv/site")
        config = load_config()
        assert config.content.directory == "/srv/posts"
        assert config.output.directory == "/srv/site"

    @pytest.mark.parametrize(("raw", "expected"), [("true", True), ("1", True), ("no", False)])
    def test_include_drafts(self, monkeypatch, raw: str, expected: bool):
        monkeypatch.setenv("QUIRE_INCLUDE_DRAFTS", raw)
        assert load_config().content.include_drafts is expected

    def test_formats(self, monkeypatch):
        monkeypatch.setenv("QUIRE_FORMATS", "markdown, json")
        assert load_config().output.formats == [OutputFormat.MARKDOWN, OutputFormat.JSON]

    def test_workers(self, monkeypatch):
        monkeypatch.setenv("QUIRE_WORKERS", "3")
        assert load_config().build.workers == 3

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch):
        (tmp_path / CONFIG_FILENAME).write_text('[content]\ndirectory = "posts"\n', encoding="utf-8")
        monkeypatch.setenv("QUIRE_CONTENT_DIR", "from-env")
        assert load_config().content.directory == "from-env"


class TestMergeCliOverrides:
    def test_none_values_ignored(self):
        config = QuireConfig()
        assert merge_cli_overrides(config, content_directory=None, workers=None) == config

    def test_overrides_applied(self):
        config = merge_cli_overrides(
            QuireConfig(),
            content_directory="posts",
            output_directory="dist",
            output_formats=["markdown"],
            include_drafts=True,
            workers=2,
            dry_run=True,
        )
        assert config.content.directory == "posts"
        assert config.output.directory == "dist"
        assert config.output.formats == [OutputFormat.MARKDOWN]
        assert config.content.include_drafts is True
        assert config.build.workers == 2
        assert config.build.dry_run is True

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            merge_cli_overrides(QuireConfig(), colour="blue")

    def test_invalid_override_raises_config_error(self):
        with pytest.raises(ConfigError, match="CLI options"):
            merge_cli_overrides(QuireConfig(), workers=0)


class TestInvalidValues:
    def test_unknown_env_format(self, monkeypatch):
        monkeypatch.setenv("QUIRE_FORMATS", "html")
        with pytest.raises(ConfigError, match="environment"):
            load_config()

    def test_non_integer_env_workers(self, monkeypatch):
        monkeypatch.setenv("QUIRE_WORKERS", "abc")
        with pytest.raises(ConfigError, match="QUIRE_WORKERS"):
            load_config()

    def test_invalid_file_value(self, tmp_path: Path):
        path = tmp_path / "site.toml"
        path.write_text("[build]\nworkers = 0\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="config file") as exc_info:
            load_config(path)
        assert "build.workers" in str(exc_info.value)
