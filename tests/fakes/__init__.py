"""Fake vault providers, diff sources and GitHub client for tests (no subprocess, no network)."""

from .providers import (
    FakeDiffSource,
    FakeGitHubClient,
    FakeVersionsProvider,
    FakeVersionsProviderAlwaysFail,
    FakeVersionsProviderFailNThenSucceed,
    make_listing,
)

__all__ = [
    "FakeDiffSource",
    "FakeGitHubClient",
    "FakeVersionsProvider",
    "FakeVersionsProviderAlwaysFail",
    "FakeVersionsProviderFailNThenSucceed",
    "make_listing",
]
