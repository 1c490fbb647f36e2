"""
Work out which pull request to comment on.

Sources, in order: an explicit number (looked up through the API), then the
Actions event payload at $GITHUB_EVENT_PATH (pull_request, pull_request_target
and issue_comment-on-a-PR events).
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .core.errors import GitHubApiError, PullRequestResolutionError
from .providers.github import GitHubClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PullRequestRef:
    number: int
    base_ref: str


def load_event(path: str) -> Dict[str, Any]:
    if not path:
        raise PullRequestResolutionError("GITHUB_EVENT_PATH is not set; pass --pr-number")
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        raise PullRequestResolutionError(f"Cannot read event payload {path}: {e}") from e
    if not isinstance(payload, dict):
        raise PullRequestResolutionError(f"Event payload {path} is not a JSON object")
    return payload


def _ref_from_pr(pr: Dict[str, Any]) -> PullRequestRef:
    try:
        number = int(pr["number"])
    except (KeyError, TypeError, ValueError) as e:
        raise PullRequestResolutionError(f"Pull request payload has no usable number: {e}") from e
    base = pr.get("base") or {}
    return PullRequestRef(number=number, base_ref=str(base.get("ref") or ""))


def ref_from_event(payload: Dict[str, Any]) -> Optional[PullRequestRef]:
    """PullRequestRef from an event payload, or None if the event is not about a PR."""
    pr = payload.get("pull_request")
    if isinstance(pr, dict):
        return _ref_from_pr(pr)
    issue = payload.get("issue")
    if isinstance(issue, dict) and issue.get("pull_request") and issue.get("number") is not None:
        try:
            number = int(issue["number"])
        except (TypeError, ValueError) as e:
            raise PullRequestResolutionError(f"Issue payload has no usable number: {e}") from e
        # issue_comment events carry no base ref
        return PullRequestRef(number=number, base_ref="")
    return None


def fetch_pull_request(client: GitHubClient, number: int) -> PullRequestRef:
    try:
        pr = client.get_pull_request(number)
    except GitHubApiError as e:
        raise PullRequestResolutionError(f"Cannot fetch pull request #{number}: {e}") from e
    return _ref_from_pr(pr)


def resolve_pull_request(
    event_path: str,
    base_ref: str = "",
    client: Optional[GitHubClient] = None,
    number: Optional[int] = None,
) -> PullRequestRef:
    """
    Resolve the PR and its base branch.

    An explicit `base_ref` (GITHUB_BASE_REF) wins over the payload's base.
    """
    if number is not None:
        if client is None:
            raise PullRequestResolutionError("A GitHub client is required to look up a PR by number")
        ref = fetch_pull_request(client, number)
    else:
        ref = ref_from_event(load_event(event_path))
        if ref is None:
            raise PullRequestResolutionError(
                "Event payload does not reference a pull request; pass --pr-number"
            )
        if not ref.base_ref and not base_ref and client is not None:
            ref = fetch_pull_request(client, ref.number)

    if base_ref:
        ref = PullRequestRef(number=ref.number, base_ref=base_ref)
    if not ref.base_ref:
        raise PullRequestResolutionError(f"Cannot determine base branch of pull request #{ref.number}")
    logger.info("Resolved pull request #%d (base %s)", ref.number, ref.base_ref)
    return ref
