"""
Extract per-stage version ranges from a .env.vault diff.

The vault file is encrypted, but each stage also commits a plaintext counter:

    -DOTENV_VAULT_STAGING_VERSION=3
    +DOTENV_VAULT_STAGING_VERSION=6

Every version after the removed counter up to the added counter was introduced
by the change (4, 5, 6 above), including ones squashed away in between.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Pattern

from .core.types import STAGES, Stage, StageVersionRange

logger = logging.getLogger(__name__)


def _marker_re(stage: Stage) -> Pattern[str]:
    return re.compile(rf"^[+-]{re.escape(stage.marker)}", re.MULTILINE)


def _version_re(sign: str, stage: Stage) -> Pattern[str]:
    return re.compile(
        rf"^{re.escape(sign)}{re.escape(stage.version_key)}=[\"']?(\d+)[\"']?\s*$",
        re.MULTILINE,
    )


_MARKERS: Dict[Stage, Pattern[str]] = {s: _marker_re(s) for s in STAGES}
_ADDED: Dict[Stage, Pattern[str]] = {s: _version_re("+", s) for s in STAGES}
_REMOVED: Dict[Stage, Pattern[str]] = {s: _version_re("-", s) for s in STAGES}


def changed_stages(diff_text: str) -> List[Stage]:
    """Stages with at least one added or removed line, in stage order."""
    return [s for s in STAGES if _MARKERS[s].search(diff_text)]


def version_range(removed: List[int], added: List[int]) -> range:
    """
    min(removed)+1 .. max(added), inclusive.

    Empty when either side is missing or the bounds are inverted.
    """
    if not removed or not added:
        return range(0)
    low = min(removed)
    high = max(added)
    if high <= low:
        return range(0)
    return range(low + 1, high + 1)


def stage_range(diff_text: str, stage: Stage) -> StageVersionRange:
    removed = [int(m) for m in _REMOVED[stage].findall(diff_text)]
    added = [int(m) for m in _ADDED[stage].findall(diff_text)]
    versions = version_range(removed, added)
    if not versions:
        logger.info(
            "%s changed but no version range resolved (removed=%s added=%s)",
            stage, removed, added,
        )
    return StageVersionRange(
        stage=stage,
        versions=versions,
        removed_versions=tuple(removed),
        added_versions=tuple(added),
    )


def extract_ranges(diff_text: str) -> Dict[Stage, StageVersionRange]:
    """Map each changed stage to the versions the diff introduced. Never raises on odd input."""
    text = diff_text or ""
    return {stage: stage_range(text, stage) for stage in changed_stages(text)}
