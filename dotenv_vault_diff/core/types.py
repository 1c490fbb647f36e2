"""
Domain types shared by the diff, listing and reconcile stages.

Data is carried in frozen dataclasses; nothing here performs I/O.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple

VERSION_KEY_PREFIX = "DOTENV_VAULT_"

# Placeholder for rows that carry no field columns.
FIELDS_NOT_APPLICABLE = "N/A"


class Stage(enum.Enum):
    """Deployment stage tracked in .env.vault. Member order is the output order."""

    CI = "CI"
    DEVELOPMENT = "DEVELOPMENT"
    STAGING = "STAGING"
    PRODUCTION = "PRODUCTION"

    @property
    def marker(self) -> str:
        """Key prefix of every line the vault writes for this stage, e.g. DOTENV_VAULT_CI."""
        return f"{VERSION_KEY_PREFIX}{self.value}"

    @property
    def version_key(self) -> str:
        return f"{self.marker}_VERSION"

    @property
    def cli_name(self) -> str:
        """Environment name as the dotenv-vault CLI spells it."""
        return self.value.lower()

    def __str__(self) -> str:
        return self.value


STAGES: Tuple[Stage, ...] = tuple(Stage)


@dataclass(frozen=True)
class VersionRecord:
    """One row of `dotenv-vault versions <stage>`."""

    version: int
    fields: str
    user: str
    time: str


@dataclass(frozen=True)
class StageVersionRange:
    """
    Versions introduced for one stage by the diff.

    `versions` runs from min(removed)+1 to max(added) inclusive. It is empty when
    either marker side is missing or the bounds are inverted; the stage still
    changed, but no version could be resolved.
    """

    stage: Stage
    versions: range
    removed_versions: Tuple[int, ...] = ()
    added_versions: Tuple[int, ...] = ()

    @property
    def is_resolved(self) -> bool:
        return len(self.versions) > 0

    def __contains__(self, version: object) -> bool:
        return version in self.versions


__all__ = [
    "FIELDS_NOT_APPLICABLE",
    "STAGES",
    "Stage",
    "StageVersionRange",
    "VERSION_KEY_PREFIX",
    "VersionRecord",
]
