"""Tests for FormsConfig resolution."""

from pathlib import Path

from formguard.config import FormsConfig


class TestFormsConfig:
    def test_env_var_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FORMGUARD_FORMS_PATH", str(tmp_path / "custom"))
        config = FormsConfig.from_env(base_path=Path("/ignored"))
        assert config.forms_path == tmp_path / "custom"

    def test_base_path(self, monkeypatch, tmp_path):
        monkeypatch.delenv("FORMGUARD_FORMS_PATH", raising=False)
        assert FormsConfig.from_env(base_path=tmp_path).forms_path == tmp_path / "forms"

    def test_defaults_to_cwd(self, monkeypatch, tmp_path):
        monkeypatch.delenv("FORMGUARD_FORMS_PATH", raising=False)
        monkeypatch.chdir(tmp_path)
        assert FormsConfig.from_env().forms_path == tmp_path / "forms"
