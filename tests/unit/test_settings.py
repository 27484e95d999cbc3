"""Unit tests for environment settings."""

import importlib

import pytest

import runstream.settings
from runstream.settings import LLMSettings, ServerSettings


@pytest.fixture
def reload_settings(monkeypatch):
    """Reload settings after the test with the original env and cwd."""
    yield lambda: importlib.reload(runstream.settings)
    monkeypatch.undo()
    importlib.reload(runstream.settings)


class TestServerSettings:
    def test_cors_origin_list_splits_commas(self):
        server = ServerSettings(cors_origins="http://a.test, http://b.test,")
        assert server.cors_origin_list == ["http://a.test", "http://b.test"]

    def test_cors_origin_list_defaults_to_wildcard(self):
        assert ServerSettings(cors_origins=" ").cors_origin_list == ["*"]


class TestLLMSettings:
    def test_fields(self):
        assert set(LLMSettings.model_fields) == {"default_model", "temperature", "request_limit"}


class TestDotenv:
    def test_env_file_overrides_shell_vars(self, tmp_path, monkeypatch, reload_settings):
        (tmp_path / ".env").write_text("PORT=4010\nWORKFLOW__REF=pkg.mod:wf\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PORT", "9999")
        monkeypatch.setenv("WORKFLOW__REF", "")

        reloaded = reload_settings()

        assert reloaded.settings.server.port == 4010
        assert reloaded.settings.workflow.ref == "pkg.mod:wf"
