"""
Shared exception types for dotenv_vault_diff.
Stable surface; extend only.
"""

from __future__ import annotations


class VaultDiffError(Exception):
    """Base exception for dotenv_vault_diff; catch this for any package-raised error."""

    pass


class ConfigurationError(VaultDiffError):
    """Required configuration or secret material is missing or malformed. Fatal before any work."""

    pass


class PullRequestResolutionError(VaultDiffError):
    """The pull request to comment on could not be determined."""

    pass


class GitDiffError(VaultDiffError):
    """git diff of the vault file failed."""

    pass


class VaultToolError(VaultDiffError):
    """The dotenv-vault CLI failed for one stage (non-zero exit, missing binary, timeout)."""

    def __init__(self, message: str, stage: str = "", returncode: int | None = None) -> None:
        super().__init__(message)
        self.stage = stage
        self.returncode = returncode


class GitHubApiError(VaultDiffError):
    """GitHub REST call failed after retries."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "ConfigurationError",
    "GitDiffError",
    "GitHubApiError",
    "PullRequestResolutionError",
    "VaultDiffError",
    "VaultToolError",
]
