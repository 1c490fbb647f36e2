"""
Provider interfaces for the external collaborators.

- VersionsProvider: raw `versions <stage>` listing from the vault CLI.
- DiffSource: unified diff of the vault file against the PR base.

Implementations raise VaultToolError / GitDiffError; deciding whether a failure
is fatal is the caller's job.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.types import Stage


@runtime_checkable
class VersionsProvider(Protocol):
    """Protocol for sources of per-stage version listings."""

    @property
    def provider_name(self) -> str: ...

    def list_versions(self, stage: Stage) -> str:
        """Return the raw columnar listing text for a stage."""
        ...


@runtime_checkable
class DiffSource(Protocol):
    """Protocol for sources of the vault file diff."""

    def get_diff(self) -> str:
        """Return unified diff text restricted to the vault file."""
        ...
