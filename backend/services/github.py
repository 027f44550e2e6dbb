"""HTTP client for the GitHub REST API."""

from __future__ import annotations

import logging

import httpx

from backend import config

logger = logging.getLogger(__name__)


class GitHubAuthError(Exception):
    """GitHub rejected the token (401)."""


class GitHubError(Exception):
    """GitHub is unreachable or answered with an unexpected status."""


class GitHubService:
    """HTTP client for the GitHub REST API.

    The token is passed on every call. Nothing about a user is kept on
    the instance, so one client serves every request.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._base_url = config.settings.GITHUB_API_URL.rstrip("/")
        self._transport = transport

    def _headers(self, token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": config.settings.GITHUB_USER_AGENT,
        }

    async def list_repos(self, token: str) -> list[dict]:
        """
        List the token owner's repositories, most recently updated first.

        Args:
            token: GitHub personal access token

        Returns:
            Repository dicts as returned by GET /user/repos

        Raises:
            GitHubAuthError: If GitHub answers 401
            GitHubError: On transport failure or any other non-2xx status
        """
        params = {"sort": "updated", "per_page": config.settings.GITHUB_REPOS_PER_PAGE}
        try:
            async with httpx.AsyncClient(timeout=10.0, transport=self._transport) as client:
                response = await client.get(
                    f"{self._base_url}/user/repos",
                    params=params,
                    headers=self._headers(token),
                )
        except httpx.HTTPError as e:
            logger.warning("GitHub request failed: %s", e)
            raise GitHubError("GitHub is unreachable") from e

        if response.status_code == 401:
            raise GitHubAuthError("Invalid GitHub token")
        if response.is_error:
            logger.warning("GitHub API error: %s", response.status_code)
            raise GitHubError(f"GitHub API error: {response.status_code}")
        return response.json()


github_service = GitHubService()
