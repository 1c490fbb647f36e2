"""
Tests for the dotenv-vault CLI provider with subprocess mocked.
"""
from __future__ import annotations

import os
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from dotenv_vault_diff.core.errors import VaultToolError
from dotenv_vault_diff.core.types import Stage
from dotenv_vault_diff.providers.vault_cli import VaultCliProvider

RUN = "dotenv_vault_diff.providers.vault_cli.subprocess.run"


def _completed(stdout: str = "", stderr: str = "", returncode: int = 0) -> MagicMock:
    proc = MagicMock()
    proc.stdout = stdout
    proc.stderr = stderr
    proc.returncode = returncode
    return proc


class TestVaultCliProvider:
    @patch(RUN)
    def test_argv_and_stdout(self, mock_run):
        mock_run.return_value = _completed(stdout="header\nheader\nv1  A  a now\n")
        provider = VaultCliProvider(dotenv_me="me_123", command=["dotenv-vault"], timeout_s=5)

        out = provider.list_versions(Stage.STAGING)

        assert out.endswith("v1  A  a now\n")
        args, kwargs = mock_run.call_args
        assert args[0] == ["dotenv-vault", "versions", "staging"]
        assert kwargs["timeout"] == 5
        assert kwargs["env"]["DOTENV_ME"] == "me_123"

    @patch(RUN)
    def test_parent_environment_untouched(self, mock_run, monkeypatch):
        monkeypatch.delenv("DOTENV_ME", raising=False)
        mock_run.return_value = _completed(stdout="")
        VaultCliProvider(dotenv_me="me_abc").list_versions(Stage.CI)
        assert "DOTENV_ME" not in os.environ

    def test_child_env_from_explicit_base(self):
        provider = VaultCliProvider(dotenv_me="me_x", base_env={"PATH": "/bin"})
        assert provider.child_env() == {"PATH": "/bin", "DOTENV_ME": "me_x"}

    @patch(RUN)
    def test_nonzero_exit_raises(self, mock_run):
        mock_run.return_value = _completed(stderr="Not logged in", returncode=1)
        with pytest.raises(VaultToolError) as exc_info:
            VaultCliProvider(dotenv_me="me").list_versions(Stage.PRODUCTION)
        assert exc_info.value.returncode == 1
        assert exc_info.value.stage == "PRODUCTION"
        assert "Not logged in" in str(exc_info.value)

    @patch(RUN, side_effect=FileNotFoundError("npx"))
    def test_missing_binary_raises(self, _mock_run):
        with pytest.raises(VaultToolError, match="not found"):
            VaultCliProvider(dotenv_me="me").list_versions(Stage.CI)

    @patch(RUN, side_effect=subprocess.TimeoutExpired(cmd="npx", timeout=1))
    def test_timeout_raises(self, _mock_run):
        with pytest.raises(VaultToolError, match="timed out"):
            VaultCliProvider(dotenv_me="me", timeout_s=1).list_versions(Stage.CI)

    def test_empty_command_rejected(self):
        with pytest.raises(ValueError):
            VaultCliProvider(dotenv_me="me", command=[])
