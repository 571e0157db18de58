"""Tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from loctrans import __version__
from loctrans.cli import app
from loctrans.translate.base import DummyTranslator

runner = CliRunner()


class OfflineTranslator(DummyTranslator):
    def check_availability(self) -> bool:
        return False


@pytest.fixture
def dummy_backend(monkeypatch):
    monkeypatch.setattr("loctrans.cli.create_translator", lambda backend, config: DummyTranslator())


@pytest.fixture
def offline_backend(monkeypatch):
    monkeypatch.setattr("loctrans.cli.create_translator", lambda backend, config: OfflineTranslator())


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "fr.json"
    path.write_text(json.dumps({"app": {"title": "Bonjour"}}), encoding="utf-8")
    return path


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


class TestTranslateCommand:
    
    def test_translates_files(self, dummy_backend, source_file, tmp_path):
        output = tmp_path / "out"
        result = runner.invoke(app, [
            "translate", "--pattern", str(source_file), "--langs", "en,es", "--output", str(output),
        ])
        
        assert result.exit_code == 0, result.stdout
        assert "Translation complete" in result.stdout
        en = json.loads((output / "en" / "fr.json").read_text(encoding="utf-8"))
        assert en == {"app": {"title": "[en] Bonjour"}}
        assert (output / "es" / "fr.json").exists()
    
    def test_ollama_unavailable(self, offline_backend, source_file, tmp_path):
        output = tmp_path / "out"
        result = runner.invoke(app, ["translate", "-p", str(source_file), "-o", str(output)])
        
        assert result.exit_code == 1
        assert "not available" in result.stdout
        assert not output.exists()
    
    def test_no_files(self, dummy_backend, tmp_path):
        result = runner.invoke(app, ["translate", "-p", str(tmp_path / "*.json"), "-o", str(tmp_path / "out")])
        assert result.exit_code == 1
        assert "No files found" in result.stdout
    
    def test_invalid_utf8_file(self, dummy_backend, tmp_path):
        source = tmp_path / "fr.json"
        source.write_bytes(b'{"a": "caf\xe9"}')
        output = tmp_path / "out"
        result = runner.invoke(app, ["translate", "-p", str(source), "-o", str(output)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert "Error:" in result.stdout
        assert not output.exists()

    def test_invalid_concurrency(self, dummy_backend, source_file):
        result = runner.invoke(app, ["translate", "-p", str(source_file), "--concurrency", "50"])
        assert result.exit_code == 1
        assert "MAX_CONCURRENT_REQUESTS" in result.stdout
    
    def test_defaults_to_translations_dir(self, dummy_backend, source_file, tmp_path, monkeypatch):
        monkeypatch.setenv("TRANSLATIONS_DIR", str(source_file.parent))
        output = tmp_path / "out"
        result = runner.invoke(app, ["translate", "--langs", "en", "--output", str(output)])
        
        assert result.exit_code == 0, result.stdout
        assert (output / "en" / "fr.json").exists()


class TestCheckCommand:
    
    def test_available(self, dummy_backend):
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 0
        assert "Configuration valid" in result.stdout
        assert "Ollama connected" in result.stdout
    
    def test_unavailable_is_reported_not_fatal(self, offline_backend):
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 0
        assert "Cannot connect to Ollama" in result.stdout
    
    def test_invalid_configuration(self, dummy_backend, monkeypatch):
        monkeypatch.setenv("TRANSLATION_TIMEOUT", "10")
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout


class TestTestCommand:
    
    def test_translates_text(self, dummy_backend):
        result = runner.invoke(app, ["test", "--text", "Bonjour", "--to", "de"])
        assert result.exit_code == 0
        assert "[de] Bonjour" in result.stdout
    
    def test_unavailable(self, offline_backend):
        result = runner.invoke(app, ["test", "-t", "Bonjour"])
        assert result.exit_code == 1
