"""
dotenv-vault CLI provider.

Runs `<command> versions <stage>` (default command: npx dotenv-vault@latest).
DOTENV_ME is handed to the child through an explicit env mapping; the parent
process environment is read, never modified.
"""
from __future__ import annotations

import logging
import os
import subprocess
from typing import Mapping, Optional, Sequence

from ..core.errors import VaultToolError
from ..core.types import Stage

logger = logging.getLogger(__name__)

DEFAULT_VAULT_COMMAND = ("npx", "dotenv-vault@latest")
VAULT_TIMEOUT_S = 60.0


class VaultCliProvider:
    """Fetch per-stage version listings from the dotenv-vault CLI."""

    def __init__(
        self,
        dotenv_me: str,
        command: Sequence[str] = DEFAULT_VAULT_COMMAND,
        timeout_s: float = VAULT_TIMEOUT_S,
        cwd: Optional[str] = None,
        base_env: Optional[Mapping[str, str]] = None,
    ) -> None:
        if not command:
            raise ValueError("vault command must not be empty")
        self._dotenv_me = dotenv_me
        self._command = tuple(command)
        self._timeout_s = timeout_s
        self._cwd = cwd
        self._base_env = base_env

    @property
    def provider_name(self) -> str:
        return "dotenv-vault"

    def child_env(self) -> dict:
        """Environment for the child process: the parent's plus DOTENV_ME."""
        env = dict(os.environ if self._base_env is None else self._base_env)
        env["DOTENV_ME"] = self._dotenv_me
        return env

    def argv(self, stage: Stage) -> list:
        return [*self._command, "versions", stage.cli_name]

    def list_versions(self, stage: Stage) -> str:
        argv = self.argv(stage)
        logger.debug("Running %s", " ".join(argv))
        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                env=self.child_env(),
                cwd=self._cwd,
                timeout=self._timeout_s,
            )
        except FileNotFoundError as e:
            raise VaultToolError(
                f"vault command not found: {self._command[0]}", stage=stage.value
            ) from e
        except subprocess.TimeoutExpired as e:
            raise VaultToolError(
                f"versions {stage.cli_name} timed out after {self._timeout_s:g}s",
                stage=stage.value,
            ) from e

        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()
            raise VaultToolError(
                f"versions {stage.cli_name} exited {proc.returncode}: {stderr[:500]}",
                stage=stage.value,
                returncode=proc.returncode,
            )
        return proc.stdout or ""
