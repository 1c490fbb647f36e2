"""
GitHub REST client for pull requests and issue comments.

Only the handful of endpoints the summary comment needs:
  GET   /repos/{owner}/{repo}/pulls/{number}
  GET   /repos/{owner}/{repo}/issues/{number}/comments   (paginated via Link)
  POST  /repos/{owner}/{repo}/issues/{number}/comments
  PATCH /repos/{owner}/{repo}/issues/comments/{comment_id}
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import requests

from .._version import __version__
from ..core.errors import GitHubApiError
from .resilience import RetryConfig

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
HTTP_TIMEOUT_S = 30.0
COMMENTS_PER_PAGE = 100


class GitHubClient:
    """
    GitHub API client with retry on 429/5xx and transport errors.
    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        base_url: str = GITHUB_API_URL,
        timeout_s: float = HTTP_TIMEOUT_S,
        retry_config: Optional[RetryConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.owner = owner
        self.repo = repo
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.retry_config = retry_config or RetryConfig()
        self._token = token
        self._sleep = sleep

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": f"dotenv-vault-diff/{__version__}",
        }

    def _repo_path(self, suffix: str) -> str:
        return f"{self.base_url}/repos/{self.owner}/{self.repo}{suffix}"

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        cfg = self.retry_config
        for attempt in range(1, cfg.max_retries + 1):
            try:
                resp = requests.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=self._headers(),
                    timeout=self.timeout_s,
                )
            except requests.RequestException as e:
                logger.warning("GitHub %s %s error (attempt %s): %s", method, url, attempt, e)
                if attempt == cfg.max_retries:
                    raise GitHubApiError(f"GitHub {method} {url} failed: {e}") from e
                self._sleep(cfg.delay_for(attempt))
                continue
            if resp.status_code in cfg.retry_on_status_codes:
                logger.warning("GitHub %s %s returned %s (attempt %s)", method, url, resp.status_code, attempt)
                if attempt == cfg.max_retries:
                    raise GitHubApiError(
                        f"GitHub {method} {url} returned HTTP {resp.status_code}",
                        status_code=resp.status_code,
                    )
                retry_after = resp.headers.get("Retry-After")
                delay = cfg.delay_for(attempt)
                if retry_after and retry_after.isdigit():
                    delay = min(float(retry_after), 120.0)
                self._sleep(delay)
                continue
            if resp.status_code >= 400:
                raise GitHubApiError(
                    f"GitHub {method} {url} returned HTTP {resp.status_code}: {resp.text[:300]}",
                    status_code=resp.status_code,
                )
            return resp
        raise GitHubApiError(f"GitHub {method} {url} failed")

    def get_pull_request(self, number: int) -> Dict[str, Any]:
        resp = self._request("GET", self._repo_path(f"/pulls/{number}"))
        return resp.json()

    def list_issue_comments(self, number: int) -> List[Dict[str, Any]]:
        """All comments on the issue/PR, following Link rel=next pages."""
        url: Optional[str] = self._repo_path(f"/issues/{number}/comments")
        params: Optional[Dict[str, Any]] = {"per_page": COMMENTS_PER_PAGE}
        comments: List[Dict[str, Any]] = []
        while url:
            resp = self._request("GET", url, params=params)
            page = resp.json()
            if isinstance(page, list):
                comments.extend(page)
            url = (resp.links or {}).get("next", {}).get("url")
            # next URL already carries the query string
            params = None
        return comments

    def create_issue_comment(self, number: int, body: str) -> Dict[str, Any]:
        resp = self._request(
            "POST", self._repo_path(f"/issues/{number}/comments"), json={"body": body}
        )
        return resp.json()

    def update_issue_comment(self, comment_id: int, body: str) -> Dict[str, Any]:
        resp = self._request(
            "PATCH", self._repo_path(f"/issues/comments/{comment_id}"), json={"body": body}
        )
        return resp.json()
