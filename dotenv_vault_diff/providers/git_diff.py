"""
git diff source for the vault file.

Diffs the working tree against `<remote>/<base_ref>`, restricted to one path.
"""
from __future__ import annotations

import logging
import subprocess
from typing import Optional

from ..core.errors import GitDiffError

logger = logging.getLogger(__name__)

GIT_TIMEOUT_S = 60.0


class GitDiffSource:
    """Unified diff of `path` between the PR base branch and the working tree."""

    def __init__(
        self,
        base_ref: str,
        path: str = ".env.vault",
        remote: str = "origin",
        timeout_s: float = GIT_TIMEOUT_S,
        cwd: Optional[str] = None,
    ) -> None:
        self.base_ref = base_ref
        self.path = path
        self.remote = remote
        self._timeout_s = timeout_s
        self._cwd = cwd

    def argv(self) -> list:
        base = f"{self.remote}/{self.base_ref}" if self.remote else self.base_ref
        return ["git", "diff", base, "--", self.path]

    def get_diff(self) -> str:
        if not self.base_ref:
            raise GitDiffError("No base ref to diff against (GITHUB_BASE_REF is empty)")
        argv = self.argv()
        logger.debug("Running %s", " ".join(argv))
        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                cwd=self._cwd,
                timeout=self._timeout_s,
            )
        except FileNotFoundError as e:
            raise GitDiffError("git executable not found") from e
        except subprocess.TimeoutExpired as e:
            raise GitDiffError(f"git diff timed out after {self._timeout_s:g}s") from e

        if proc.returncode != 0:
            raise GitDiffError(
                f"git diff {argv[2]} -- {self.path} exited {proc.returncode}: "
                f"{(proc.stderr or '').strip()[:500]}"
            )
        return proc.stdout or ""


class FileDiffSource:
    """Diff text read from a file, for local runs and replays."""

    def __init__(self, path: str) -> None:
        self.path = path

    def get_diff(self) -> str:
        try:
            with open(self.path, encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise GitDiffError(f"Cannot read diff file {self.path}: {e}") from e
