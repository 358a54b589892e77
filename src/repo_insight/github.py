"""GitHub REST client - metadata intake.

Fetches repository metadata, language breakdown, top-level listing and
commit/contributor counts, and normalizes them into a RepositorySnapshot.
"""

from __future__ import annotations

import re
from typing import Any

import httpx

from .logging import get_logger
from .snapshot import (
    RepositorySnapshot,
    detect_ci,
    detect_documentation,
    detect_license,
    detect_readme,
    detect_tests,
)

GITHUB_API_URL = "https://api.github.com"
REQUEST_TIMEOUT = 30  # seconds per request

logger = get_logger("github")

_HOST_URL = re.compile(r"github\.com/([^/\s]+)/([^/\s#?]+)", re.IGNORECASE)
_SHORTHAND = re.compile(r"^([^/\s]+)/([^/\s#?]+)$")
_LAST_PAGE = re.compile(r'[?&]page=(\d+)>;\s*rel="last"')


class GitHubError(Exception):
    """Error fetching repository metadata from GitHub."""


def parse_repo_url(url: str) -> tuple[str, str]:
    """Return (owner, repo) for a GitHub URL or ``owner/repo`` shorthand."""
    target = url.strip().rstrip("/")
    # Input naming the host must be a full owner/repo URL
    if "github.com" in target.lower():
        match = _HOST_URL.search(target)
    else:
        match = _SHORTHAND.match(target)
    if not match:
        raise GitHubError(f"Invalid GitHub repository URL: {url}")
    owner, repo = match.group(1), match.group(2)
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    return owner, repo


def count_from_link_header(link: str | None, default: int) -> int:
    """Page count of a ``per_page=1`` listing, read from its Link header.

    No header means the listing fit on one page (or was empty) and yields
    ``default``. A header without a ``last`` link yields 1.
    """
    if not link:
        return default
    match = _LAST_PAGE.search(link)
    return int(match.group(1)) if match else 1


class GitHubClient:
    """Client for the GitHub REST API."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str = GITHUB_API_URL,
    ):
        self.base_url = base_url.rstrip("/")
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(timeout=REQUEST_TIMEOUT, headers=headers)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        url = f"{self.base_url}{path}"
        logger.debug("GET %s %s", url, params or "")
        try:
            return self._client.get(url, params=params)
        except httpx.TimeoutException:
            raise GitHubError(f"GitHub request timed out after {REQUEST_TIMEOUT}s: {path}")
        except httpx.ConnectError:
            raise GitHubError(f"Cannot connect to {self.base_url}. Check your network connection.")

    def get_repository(self, owner: str, repo: str) -> dict[str, Any]:
        resp = self._get(f"/repos/{owner}/{repo}")
        if resp.status_code == 404:
            raise GitHubError(f"Repository {owner}/{repo} not found or is private")
        if resp.status_code == 403:
            raise GitHubError(
                "GitHub API rate limit exceeded. Set GITHUB_TOKEN or pass --token."
            )
        if resp.status_code != 200:
            raise GitHubError(
                f"GitHub returned {resp.status_code}: {resp.text[:200]}"
            )
        return resp.json()

    def get_languages(self, owner: str, repo: str) -> dict[str, int]:
        resp = self._get(f"/repos/{owner}/{repo}/languages")
        if resp.status_code != 200:
            logger.warning("Language breakdown unavailable for %s/%s (%s)", owner, repo, resp.status_code)
            return {}
        data = resp.json()
        return {k: v for k, v in data.items() if isinstance(v, int)} if isinstance(data, dict) else {}

    def get_top_level_names(self, owner: str, repo: str) -> list[str]:
        resp = self._get(f"/repos/{owner}/{repo}/contents")
        if resp.status_code != 200:
            # Empty repositories answer 404 here
            logger.warning("File listing unavailable for %s/%s (%s)", owner, repo, resp.status_code)
            return []
        data = resp.json()
        if not isinstance(data, list):
            return []
        return [item["name"].lower() for item in data if isinstance(item, dict) and item.get("name")]

    def get_commit_count(self, owner: str, repo: str) -> int:
        resp = self._get(f"/repos/{owner}/{repo}/commits", params={"per_page": 1})
        return count_from_link_header(resp.headers.get("Link"), default=0)

    def get_contributor_count(self, owner: str, repo: str) -> int:
        resp = self._get(f"/repos/{owner}/{repo}/contributors", params={"per_page": 1})
        return count_from_link_header(resp.headers.get("Link"), default=1)

    def fetch_snapshot(self, url: str) -> RepositorySnapshot:
        """Fetch everything the engine needs for one repository."""
        owner, repo = parse_repo_url(url)
        logger.info("Fetching metadata for %s/%s", owner, repo)

        data = self.get_repository(owner, repo)
        languages = self.get_languages(owner, repo)
        file_names = self.get_top_level_names(owner, repo)
        commits = self.get_commit_count(owner, repo)
        contributors = self.get_contributor_count(owner, repo)

        return RepositorySnapshot(
            name=data.get("name") or repo,
            description=data.get("description") or "",
            last_updated=data.get("updated_at") or "",
            stars=data.get("stargazers_count") or 0,
            forks=data.get("forks_count") or 0,
            open_issues=data.get("open_issues_count") or 0,
            primary_language=data.get("language") or None,
            language_byte_counts=languages,
            has_readme=detect_readme(file_names),
            has_license=detect_license(file_names) or bool(data.get("license")),
            has_tests=detect_tests(file_names),
            has_ci=detect_ci(file_names),
            has_documentation=detect_documentation(file_names),
            file_names=tuple(file_names),
            commit_count=commits,
            contributor_count=contributors,
        )
