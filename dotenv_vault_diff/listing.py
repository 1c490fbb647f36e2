"""
Parse `dotenv-vault versions <stage>` output into VersionRecord rows.

The listing is free text: two header lines, then one row per version with
columns separated by two or more spaces:

    Environment variables (staging):
    Ver   Change               By     When
    field-a  field-b   v7  alice 2024-01-01 10:00

The last column holds "<user> <time...>" separated by single spaces. The version
column is `v<N>`; any other columns are the changed-fields label.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from .core.errors import VaultToolError
from .core.types import FIELDS_NOT_APPLICABLE, Stage, VersionRecord
from .providers.base import VersionsProvider
from .providers.resilience import RetryConfig, resilient_call

logger = logging.getLogger(__name__)

HEADER_LINES = 2
_COLUMN_SEP_RE = re.compile(r" {2,}")
_VERSION_RE = re.compile(r"^v(\d+)$")


def _parse_version(token: str) -> Optional[int]:
    text = token[1:] if token.startswith("v") else token
    try:
        version = int(text)
    except ValueError:
        return None
    return version if version >= 1 else None


def _version_index(groups: Sequence[str]) -> Optional[int]:
    """Index of the version column: first `v<N>` group, else the first group if it parses."""
    for i, group in enumerate(groups):
        if _VERSION_RE.match(group):
            return i
    if groups and _parse_version(groups[0]) is not None:
        return 0
    return None


def parse_listing_row(line: str) -> Optional[VersionRecord]:
    """Parse one data row; None if it has no usable version."""
    groups = [g for g in _COLUMN_SEP_RE.split(line.strip()) if g]
    if len(groups) < 2:
        return None

    user, _, time_text = groups[-1].partition(" ")
    rest = groups[:-1]

    idx = _version_index(rest)
    if idx is None:
        return None
    version = _parse_version(rest[idx])
    if version is None:
        return None

    field_groups = rest[:idx] + rest[idx + 1:]
    fields = "  ".join(field_groups) if field_groups else FIELDS_NOT_APPLICABLE
    return VersionRecord(
        version=version,
        fields=fields,
        user=user,
        time=" ".join(time_text.split()),
    )


def parse_versions_listing(raw_listing: str, stage: Stage) -> List[VersionRecord]:
    """
    Parse the full listing for a stage.

    Header lines and blank lines are skipped; rows without a positive integer
    version are dropped. Row order is preserved.
    """
    records: List[VersionRecord] = []
    lines = raw_listing.splitlines()[HEADER_LINES:]
    for line in lines:
        if not line.strip():
            continue
        record = parse_listing_row(line)
        if record is None:
            logger.debug("Dropping unparseable %s listing row: %r", stage, line)
            continue
        records.append(record)
    return records


def fetch_versions(
    provider: VersionsProvider,
    stage: Stage,
    retry_config: Optional[RetryConfig] = None,
) -> List[VersionRecord]:
    """
    Fetch and parse one stage's listing.

    Returns [] when the provider fails after retries, so one stage being
    unavailable never aborts the run.
    """
    try:
        raw = resilient_call(
            provider.list_versions,
            stage,
            retry_config=retry_config or RetryConfig(max_retries=1),
            retry_on=(VaultToolError,),
        )
    except VaultToolError as e:
        logger.warning("Could not list %s versions from %s: %s", stage, provider.provider_name, e)
        return []
    return parse_versions_listing(raw, stage)
