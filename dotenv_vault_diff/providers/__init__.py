"""
External collaborators: dotenv-vault CLI, git diff, GitHub REST API.

Each wraps one process or HTTP boundary; retry/backoff lives in resilience.
"""

from __future__ import annotations

from .base import DiffSource, VersionsProvider
from .git_diff import FileDiffSource, GitDiffSource
from .github import GitHubClient
from .resilience import RetryConfig, resilient_call
from .vault_cli import VaultCliProvider

__all__ = [
    "DiffSource",
    "FileDiffSource",
    "GitDiffSource",
    "GitHubClient",
    "RetryConfig",
    "VaultCliProvider",
    "VersionsProvider",
    "resilient_call",
]
