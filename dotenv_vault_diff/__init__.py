"""
Top-level public API surface. Stable facades only.
Summarizes .env.vault version changes on a pull request.
Does not import cli.
"""

from __future__ import annotations

from ._version import __version__
from .core import (
    STAGES,
    ConfigurationError,
    GitDiffError,
    GitHubApiError,
    PullRequestResolutionError,
    Stage,
    StageVersionRange,
    VaultDiffError,
    VaultToolError,
    VersionRecord,
)
from .diff_range import extract_ranges
from .listing import fetch_versions, parse_versions_listing
from .reconcile import reconcile
from .render import render_summary

# Do not add exports without updating __all__.
__all__ = [
    "__version__",
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
    "extract_ranges",
    "fetch_versions",
    "parse_versions_listing",
    "reconcile",
    "render_summary",
]
