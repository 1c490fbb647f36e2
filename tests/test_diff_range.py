"""
Tests for per-stage version range extraction from a .env.vault diff.

Verifies that:
- removed/added counters bracket the introduced versions
- all occurrences are collected (multi-commit diffs)
- untouched stages are omitted
- degenerate bounds resolve to an empty range, never raise
"""
from __future__ import annotations

from dotenv_vault_diff.core.types import Stage
from dotenv_vault_diff.diff_range import changed_stages, extract_ranges, version_range

DIFF_HEADER = """\
diff --git a/.env.vault b/.env.vault
index 3f1c2aa..9b0de41 100644
--- a/.env.vault
+++ b/.env.vault
@@ -10,8 +10,8 @@
 #/--------------------------------------------------/
"""


def _diff(*lines: str) -> str:
    return DIFF_HEADER + "\n".join(lines) + "\n"


class TestVersionRange:
    def test_exclusive_low_inclusive_high(self):
        assert list(version_range([3], [6])) == [4, 5, 6]

    def test_uses_min_removed_and_max_added(self):
        assert list(version_range([3, 4], [5, 8])) == [4, 5, 6, 7, 8]

    def test_missing_side_is_empty(self):
        assert len(version_range([], [6])) == 0
        assert len(version_range([3], [])) == 0

    def test_inverted_or_equal_bounds_are_empty(self):
        assert len(version_range([6], [3])) == 0
        assert len(version_range([5], [5])) == 0


class TestExtractRanges:
    def test_staging_range(self):
        diff = _diff(
            "-DOTENV_VAULT_STAGING=\"encrypted:old\"",
            "-DOTENV_VAULT_STAGING_VERSION=3",
            "+DOTENV_VAULT_STAGING=\"encrypted:new\"",
            "+DOTENV_VAULT_STAGING_VERSION=6",
        )
        ranges = extract_ranges(diff)
        assert list(ranges) == [Stage.STAGING]
        assert list(ranges[Stage.STAGING].versions) == [4, 5, 6]
        assert ranges[Stage.STAGING].is_resolved

    def test_multiple_added_markers(self):
        diff = _diff(
            "-DOTENV_VAULT_STAGING_VERSION=3",
            "+DOTENV_VAULT_STAGING_VERSION=5",
            " ",
            "+DOTENV_VAULT_STAGING_VERSION=8",
        )
        rng = extract_ranges(diff)[Stage.STAGING]
        assert list(rng.versions) == [4, 5, 6, 7, 8]
        assert rng.removed_versions == (3,)
        assert rng.added_versions == (5, 8)

    def test_untouched_stage_absent(self):
        diff = _diff(
            "-DOTENV_VAULT_DEVELOPMENT_VERSION=1",
            "+DOTENV_VAULT_DEVELOPMENT_VERSION=2",
            " DOTENV_VAULT_PRODUCTION_VERSION=9",
        )
        ranges = extract_ranges(diff)
        assert Stage.PRODUCTION not in ranges
        assert list(ranges[Stage.DEVELOPMENT].versions) == [2]

    def test_add_only_marker_is_empty_range(self):
        diff = _diff("+DOTENV_VAULT_CI=\"encrypted:new\"", "+DOTENV_VAULT_CI_VERSION=1")
        rng = extract_ranges(diff)[Stage.CI]
        assert len(rng.versions) == 0
        assert not rng.is_resolved
        assert all(0 < v < 10_000 for v in rng.versions)

    def test_remove_only_marker_is_empty_range(self):
        diff = _diff("-DOTENV_VAULT_CI_VERSION=4")
        assert len(extract_ranges(diff)[Stage.CI].versions) == 0

    def test_payload_change_without_version_lines(self):
        diff = _diff("-DOTENV_VAULT_PRODUCTION=\"a\"", "+DOTENV_VAULT_PRODUCTION=\"b\"")
        rng = extract_ranges(diff)[Stage.PRODUCTION]
        assert len(rng.versions) == 0

    def test_inverted_bounds_do_not_raise(self):
        diff = _diff("-DOTENV_VAULT_STAGING_VERSION=9", "+DOTENV_VAULT_STAGING_VERSION=2")
        assert len(extract_ranges(diff)[Stage.STAGING].versions) == 0

    def test_quoted_and_crlf_values(self):
        diff = (
            "-DOTENV_VAULT_DEVELOPMENT_VERSION=\"7\"\r\n"
            "+DOTENV_VAULT_DEVELOPMENT_VERSION=\"9\"\r\n"
        )
        assert list(extract_ranges(diff)[Stage.DEVELOPMENT].versions) == [8, 9]

    def test_context_lines_are_ignored(self):
        diff = _diff(
            " DOTENV_VAULT_STAGING_VERSION=1",
            "-DOTENV_VAULT_CI_VERSION=1",
            "+DOTENV_VAULT_CI_VERSION=2",
        )
        assert list(extract_ranges(diff)) == [Stage.CI]

    def test_file_headers_never_match(self):
        assert extract_ranges(DIFF_HEADER) == {}

    def test_empty_and_none_input(self):
        assert extract_ranges("") == {}
        assert extract_ranges(None) == {}  # type: ignore[arg-type]

    def test_stage_order_follows_enumeration(self):
        diff = _diff(
            "-DOTENV_VAULT_PRODUCTION_VERSION=1",
            "+DOTENV_VAULT_PRODUCTION_VERSION=2",
            "-DOTENV_VAULT_CI_VERSION=1",
            "+DOTENV_VAULT_CI_VERSION=2",
            "-DOTENV_VAULT_STAGING_VERSION=1",
            "+DOTENV_VAULT_STAGING_VERSION=2",
        )
        assert changed_stages(diff) == [Stage.CI, Stage.STAGING, Stage.PRODUCTION]
        assert list(extract_ranges(diff)) == [Stage.CI, Stage.STAGING, Stage.PRODUCTION]

    def test_huge_counter_gap_stays_lazy(self):
        diff = _diff(
            "-DOTENV_VAULT_PRODUCTION_VERSION=1",
            "+DOTENV_VAULT_PRODUCTION_VERSION=1000000000001",
        )
        rng = extract_ranges(diff)[Stage.PRODUCTION]
        assert rng.is_resolved
        assert len(rng.versions) == 10**12
        assert 2 in rng
        assert 10**12 + 1 in rng
        assert 1 not in rng
        assert 10**12 + 2 not in rng
