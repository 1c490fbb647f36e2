"""
Stable facade: domain types and exceptions only. No providers, cli or I/O.
Do not add exports without updating __all__.
"""

from __future__ import annotations

from .errors import (
    ConfigurationError,
    GitDiffError,
    GitHubApiError,
    PullRequestResolutionError,
    VaultDiffError,
    VaultToolError,
)
from .types import STAGES, Stage, StageVersionRange, VersionRecord

# Do not add exports without updating __all__.
__all__ = [
    "ConfigurationError",
    "GitDiffError",
    "GitHubApiError",
    "PullRequestResolutionError",
    "STAGES",
    "Stage",
    "StageVersionRange",
    "VaultDiffError",
    "VaultToolError",
    "VersionRecord",
]
