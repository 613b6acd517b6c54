# -*- coding: utf-8 -*-
"""GitHub REST API client (releases, commits, comparisons)."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, cast
from urllib.parse import quote
from structlog.contextvars import bound_contextvars

from slack_release_notify.config import Settings
from slack_release_notify.exceptions import GitHubAPIError, UpstreamAPIError
from slack_release_notify.models.commits import CommitRecord, ReleaseInfo

if TYPE_CHECKING:
    from .http import AsyncHttpClient


class GitHubClient:
    """Read-only client for the repository named by ``settings.inputs.repository``."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api.github_api_url,
                settings.github.token and settings.inputs.repository).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self.owner, _, self.repo = settings.inputs.repository.partition("/")

    def _repo_url(self) -> str:
        base = self._settings.api.github_api_url.rstrip("/")
        return f"{base}/repos/{self.owner}/{self.repo}"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._settings.github.token:
            headers["Authorization"] = f"Bearer {self._settings.github.token}"
        return headers

    async def _get(self, operation: str, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self._repo_url()}{path}"
        with bound_contextvars(github_operation=operation):
            try:
                return await self._http.get(url, params=params, headers=self._headers())
            except UpstreamAPIError as e:
                raise GitHubAPIError(
                    f"GitHub {operation} failed: {e}",
                    url=url,
                    status_code=e.status_code,
                    cause=e,
                ) from e

    async def get_release_by_tag(self, tag: str) -> ReleaseInfo:
        data = await self._get("get_release_by_tag", f"/releases/tags/{quote(tag, safe='')}")
        return ReleaseInfo.from_response(self._as_dict(data, "get_release_by_tag"))

    async def get_latest_release(self) -> ReleaseInfo:
        data = await self._get("get_latest_release", "/releases/latest")
        return ReleaseInfo.from_response(self._as_dict(data, "get_latest_release"))

    async def list_releases(self, *, per_page: int = 30) -> List[ReleaseInfo]:
        """List releases, newest first (GitHub's order)."""
        data = await self._get("list_releases", "/releases", {"per_page": per_page})
        return [ReleaseInfo.from_response(r) for r in self._as_list_of_dicts(data)]

    async def list_commits(self, *, per_page: int = 30) -> List[CommitRecord]:
        """List the most recent commits of the default branch."""
        data = await self._get("list_commits", "/commits", {"per_page": per_page})
        return [CommitRecord.from_response(c) for c in self._as_list_of_dicts(data)]

    async def compare_commits(self, base: str, head: str) -> List[CommitRecord]:
        """Commits reachable from ``head`` but not from ``base``."""
        path = f"/compare/{quote(base, safe='')}...{quote(head, safe='')}"
        data = await self._get("compare_commits", path)
        commits = self._as_dict(data, "compare_commits").get("commits")
        result = [CommitRecord.from_response(c) for c in self._as_list_of_dicts(commits)]
        self._logger.debug(
            "github_compare_commits",
            github_base=base,
            github_head=head,
            github_commits_count=len(result),
        )
        return result

    @staticmethod
    def _as_dict(data: Any, operation: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise GitHubAPIError(
                f"GitHub {operation} returned {type(data).__name__}, expected an object"
            )
        return cast(Dict[str, Any], data)

    @staticmethod
    def _as_list_of_dicts(x: Any) -> List[Dict[str, Any]]:
        if not isinstance(x, list):
            return []
        result: List[Dict[str, Any]] = []
        for v in cast(List[Any], x):
            if isinstance(v, dict):
                result.append(cast(Dict[str, Any], v))
        return result
