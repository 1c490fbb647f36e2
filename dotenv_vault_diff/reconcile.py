"""
Join diff-derived version ranges with the vault's versions listing.

One fragment (or one line per matching version) per stage, always in stage
order. Listings for changed stages are fetched concurrently; all fetches finish
before any fragment is built, so completion order never leaks into the output.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Mapping, Optional

from .core.types import STAGES, Stage, StageVersionRange, VersionRecord
from .listing import fetch_versions
from .providers.base import VersionsProvider
from .providers.resilience import RetryConfig

logger = logging.getLogger(__name__)

NO_CHANGES = "No changes"
NO_VERSIONS_CHANGED = "No versions changed"


def fetch_stage_versions(
    ranges: Mapping[Stage, StageVersionRange],
    provider: VersionsProvider,
    retry_config: Optional[RetryConfig] = None,
    max_workers: int = 4,
) -> Dict[Stage, List[VersionRecord]]:
    """
    Fan out one listing fetch per stage with a resolvable range.

    Stages whose range is empty are not fetched. A failed fetch yields [].
    """
    wanted = [s for s in STAGES if s in ranges and ranges[s].is_resolved]
    results: Dict[Stage, List[VersionRecord]] = {}
    if not wanted:
        return results

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(wanted)))) as executor:
        futures = {
            executor.submit(fetch_versions, provider, stage, retry_config): stage
            for stage in wanted
        }
        for future in as_completed(futures):
            stage = futures[future]
            try:
                results[stage] = future.result()
            except Exception as e:
                # fetch_versions absorbs tool failures; this catches parser bugs per stage.
                logger.warning("Listing for %s failed: %s: %s", stage, type(e).__name__, e)
                results[stage] = []
    return results


def stage_fragments(
    stage: Stage,
    stage_range: Optional[StageVersionRange],
    records: List[VersionRecord],
) -> List[str]:
    if stage_range is None:
        return [f"{stage}: {NO_CHANGES}"]
    matching = [r for r in records if r.version in stage_range]
    if not matching:
        return [f"{stage}: {NO_VERSIONS_CHANGED}"]
    return [f"{stage} ({r.version}): {r.fields}" for r in matching]


def reconcile(
    ranges: Mapping[Stage, StageVersionRange],
    provider: VersionsProvider,
    retry_config: Optional[RetryConfig] = None,
    max_workers: int = 4,
) -> List[str]:
    """Text fragments for every stage, in stage order."""
    fetched = fetch_stage_versions(ranges, provider, retry_config, max_workers)
    fragments: List[str] = []
    for stage in STAGES:
        fragments.extend(stage_fragments(stage, ranges.get(stage), fetched.get(stage, [])))
    return fragments
