"""
Tests for dotenv_vault_diff.doctor: individual checks and exit codes.
"""

from __future__ import annotations

from dotenv_vault_diff import doctor
from dotenv_vault_diff.config import load_settings


def _settings(tmp_path, **env):
    base = {"VAULT_DIFF_CONFIG": str(tmp_path / "absent.yaml")}
    base.update(env)
    return load_settings(base)


def test_check_git(capsys):
    assert doctor.check_git(which=lambda name: "/usr/bin/git") is True
    assert doctor.check_git(which=lambda name: None) is False
    assert "[FAIL] git" in capsys.readouterr().out


def test_check_vault_command(tmp_path, capsys):
    settings = _settings(tmp_path, VAULT_DIFF_VAULT_COMMAND="dotenv-vault")
    assert doctor.check_vault_command(settings, which=lambda name: None) is False
    assert "dotenv-vault" in capsys.readouterr().out
    assert doctor.check_vault_command(settings, which=lambda name: f"/usr/bin/{name}") is True


def test_check_secrets(tmp_path):
    assert doctor.check_secrets(_settings(tmp_path)) is False
    ok = _settings(tmp_path, GITHUB_TOKEN="t", DOTENV_ME="me", GITHUB_REPOSITORY="acme/app")
    assert doctor.check_secrets(ok) is True


def test_main_returns_two_when_secrets_missing(monkeypatch, tmp_path):
    for name in ("GITHUB_TOKEN", "INPUT_GITHUB-TOKEN", "INPUT_GITHUB_TOKEN", "DOTENV_ME",
                 "INPUT_DOTENV-ME", "INPUT_DOTENV_ME"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("VAULT_DIFF_CONFIG", str(tmp_path / "absent.yaml"))
    monkeypatch.setattr(doctor, "check_git", lambda: True)
    monkeypatch.setattr(doctor, "check_vault_command", lambda settings: True)
    assert doctor.main() == 2


def test_main_reports_unreadable_config(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("VAULT_DIFF_CONFIG", str(tmp_path))
    assert doctor.main() == 2
    assert "[FAIL] config" in capsys.readouterr().out


def test_main_reports_unexpected_config_error(monkeypatch, capsys):
    def boom(*args, **kwargs):
        raise RuntimeError("settings exploded")

    monkeypatch.setattr(doctor, "load_settings", boom)
    assert doctor.main() == 2
    assert "settings exploded" in capsys.readouterr().out
