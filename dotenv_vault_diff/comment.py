"""
Single summary comment per pull request: update it if it exists, else create it.

The existing comment is the first one authored by the bot login whose body
starts with the summary header.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from .providers.github import GitHubClient

logger = logging.getLogger(__name__)

CREATED = "created"
UPDATED = "updated"
UNCHANGED = "unchanged"


@dataclass(frozen=True)
class CommentResult:
    action: str
    comment_id: Optional[int]


def find_summary_comment(
    comments: Iterable[Dict[str, Any]],
    header: str,
    bot_login: str,
) -> Optional[Dict[str, Any]]:
    for comment in comments:
        login = (comment.get("user") or {}).get("login")
        body = comment.get("body") or ""
        if login == bot_login and body.startswith(header):
            return comment
    return None


def upsert_summary_comment(
    client: GitHubClient,
    pr_number: int,
    body: str,
    header: str,
    bot_login: str,
) -> CommentResult:
    existing = find_summary_comment(client.list_issue_comments(pr_number), header, bot_login)
    if existing is None:
        created = client.create_issue_comment(pr_number, body)
        logger.info("Created new comment on #%d", pr_number)
        return CommentResult(action=CREATED, comment_id=created.get("id"))

    comment_id = existing.get("id")
    if existing.get("body") == body:
        logger.info("Existing comment %s already up to date", comment_id)
        return CommentResult(action=UNCHANGED, comment_id=comment_id)
    client.update_issue_comment(comment_id, body)
    logger.info("Updated existing comment %s", comment_id)
    return CommentResult(action=UPDATED, comment_id=comment_id)
