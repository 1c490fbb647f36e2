"""
One full pass: secrets -> pull request -> diff -> ranges -> listings -> body -> comment.

The comment is written last, after the body is complete, so a failure anywhere
earlier never leaves a partial comment behind.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .comment import CommentResult, upsert_summary_comment
from .config import Settings
from .core.types import Stage, StageVersionRange
from .diff_range import extract_ranges
from .pull_request import PullRequestRef, resolve_pull_request
from .providers.base import DiffSource, VersionsProvider
from .providers.git_diff import FileDiffSource, GitDiffSource
from .providers.github import GitHubClient
from .providers.resilience import RetryConfig
from .providers.vault_cli import VaultCliProvider
from .reconcile import reconcile
from .render import render_summary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Summary:
    body: str
    ranges: Dict[Stage, StageVersionRange] = field(default_factory=dict)
    fragments: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RunResult:
    summary: Summary
    pull_request: Optional[PullRequestRef] = None
    comment: Optional[CommentResult] = None

    @property
    def body(self) -> str:
        return self.summary.body


def build_summary(
    diff_source: DiffSource,
    provider: VersionsProvider,
    header: str,
    retry_config: Optional[RetryConfig] = None,
    max_workers: int = 4,
) -> Summary:
    """Diff extraction strictly precedes any listing fetch."""
    diff_text = diff_source.get_diff()
    ranges = extract_ranges(diff_text)
    if ranges:
        logger.info("Changed stages: %s", ", ".join(str(s) for s in ranges))
    else:
        logger.info("No stage markers changed in the vault diff")
    fragments = reconcile(ranges, provider, retry_config=retry_config, max_workers=max_workers)
    return Summary(body=render_summary(fragments, header), ranges=ranges, fragments=fragments)


def make_github_client(settings: Settings) -> GitHubClient:
    owner, repo = settings.owner_repo()
    return GitHubClient(
        token=settings.github_token,
        owner=owner,
        repo=repo,
        base_url=settings.github_api_url,
        timeout_s=settings.github_timeout_s,
        retry_config=RetryConfig(max_retries=settings.github_max_retries),
    )


def make_vault_provider(settings: Settings) -> VaultCliProvider:
    return VaultCliProvider(
        dotenv_me=settings.dotenv_me,
        command=settings.vault_command,
        timeout_s=settings.vault_timeout_s,
    )


def make_diff_source(settings: Settings, base_ref: str, diff_file: Optional[str] = None) -> DiffSource:
    if diff_file:
        return FileDiffSource(diff_file)
    return GitDiffSource(
        base_ref=base_ref,
        path=settings.vault_path,
        remote=settings.git_remote,
        timeout_s=settings.git_timeout_s,
    )


def run(
    settings: Settings,
    *,
    dry_run: bool = False,
    diff_file: Optional[str] = None,
    pr_number: Optional[int] = None,
    client: Optional[GitHubClient] = None,
    provider: Optional[VersionsProvider] = None,
    diff_source: Optional[DiffSource] = None,
) -> RunResult:
    """
    Run the whole pass. Raises VaultDiffError subclasses for fatal conditions.

    With dry_run the body is computed but the GitHub API is never touched.
    """
    settings.require_secrets(need_token=not dry_run)

    pr: Optional[PullRequestRef] = None
    base_ref = settings.base_ref
    if not dry_run:
        client = client or make_github_client(settings)
        pr = resolve_pull_request(
            settings.event_path, base_ref=settings.base_ref, client=client, number=pr_number
        )
        base_ref = pr.base_ref

    summary = build_summary(
        diff_source or make_diff_source(settings, base_ref, diff_file),
        provider or make_vault_provider(settings),
        header=settings.comment_header,
        retry_config=RetryConfig(max_retries=settings.vault_max_retries),
        max_workers=settings.max_workers,
    )

    if dry_run or client is None or pr is None:
        return RunResult(summary=summary, pull_request=pr)

    result = upsert_summary_comment(
        client, pr.number, summary.body, settings.comment_header, settings.bot_login
    )
    return RunResult(summary=summary, pull_request=pr, comment=result)
