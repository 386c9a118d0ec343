"""Synchronous GitHub REST client for branches and commits."""

import logging
import os
from typing import TYPE_CHECKING, Any, Sequence

from pydantic import ValidationError

from ..schema.models import Branch, Commit, RepositorySnapshot
from .errors import AuthenticationError, GitHubAPIError, GitHubError

if TYPE_CHECKING:
    import requests

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
BRANCHES_PER_PAGE = 20
COMMITS_PER_PAGE = 40
FILES_PER_PAGE = 20
DEFAULT_TIMEOUT = 10


def default_branch(branches: Sequence[Branch]) -> str | None:
    """Branch to select after loading: the default branch, else the first."""
    for branch in branches:
        if branch.is_main:
            return branch.name
    return branches[0].name if branches else None


def resolve_branch(branches: Sequence[Branch], requested: str | None) -> str | None:
    """Branch whose commits to load.

    The requested branch if it exists, else main, else master, else the
    first branch. None when there are no branches.
    """
    names = [branch.name for branch in branches]
    if requested and requested in names:
        return requested
    for fallback in ("main", "master"):
        if fallback in names:
            return fallback
    return names[0] if names else None


class GitHubClient:
    """Fetches branches and commits (with changed files) from GitHub."""

    def __init__(
        self,
        token: str | None = None,
        session: "requests.Session | None" = None,
        base_url: str = GITHUB_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            token: GitHub token. If not provided, uses GITHUB_TOKEN env var.
            session: HTTP session; a requests.Session is created on first use.
            base_url: API root URL.
            timeout: Per-request timeout in seconds.
        """
        self.token = token or os.environ.get("GITHUB_TOKEN")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session

    @property
    def session(self) -> "requests.Session":
        """Lazy-load the requests session."""
        if self._session is None:
            try:
                import requests
            except ImportError:
                raise GitHubError(
                    "The requests package is not installed. "
                    "Install it with: pip install branchmap[github]"
                )
            self._session = requests.Session()
        return self._session

    def _get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET a JSON document from the API.

        Raises:
            AuthenticationError: If no token is configured or it is rejected.
            GitHubAPIError: If the request fails or returns a non-200 status.
        """
        if not self.token:
            raise AuthenticationError()

        url = f"{self.base_url}{path}"
        request_headers = {"Authorization": f"token {self.token}"}
        request_headers.update(headers or {})

        try:
            response = self.session.get(
                url, params=params, headers=request_headers, timeout=self.timeout
            )
        except OSError as e:
            raise GitHubAPIError(f"Request to {url} failed: {e}") from e

        if response.status_code == 401:
            raise AuthenticationError("Invalid GitHub token")
        if response.status_code != 200:
            raise GitHubAPIError(
                f"GET {path} failed: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"Invalid JSON from {path}: {e}", status_code=response.status_code
            ) from e

    def fetch_branches(self, owner: str, repo: str) -> list[Branch]:
        """Fetch the first page of a repository's branches."""
        data = self._get(
            f"/repos/{owner}/{repo}/branches",
            params={"per_page": BRANCHES_PER_PAGE},
        )
        try:
            return [Branch.model_validate(item) for item in data]
        except (TypeError, ValidationError) as e:
            raise GitHubAPIError(f"Unexpected branches response: {e}") from e

    def fetch_commits(self, owner: str, repo: str, branch: str) -> list[Commit]:
        """Fetch a branch's recent commits with their changed files.

        A commit whose detail request fails is kept without files.
        """
        data = self._get(
            f"/repos/{owner}/{repo}/commits",
            params={"sha": branch, "per_page": COMMITS_PER_PAGE},
            headers={"Accept": "application/vnd.github.v3+json"},
        )
        try:
            commits = [Commit.model_validate(item) for item in data]
        except (TypeError, ValidationError) as e:
            raise GitHubAPIError(f"Unexpected commits response: {e}") from e

        return [self._with_files(owner, repo, commit) for commit in commits]

    def _with_files(self, owner: str, repo: str, commit: Commit) -> Commit:
        """Attach the changed files from the commit detail endpoint."""
        if not commit.sha:
            return commit

        try:
            detail = self._get(
                f"/repos/{owner}/{repo}/commits/{commit.sha}",
                params={"per_page": FILES_PER_PAGE},
            )
            files = Commit.model_validate({"files": detail.get("files") or []}).files
        except (GitHubError, AttributeError, ValidationError) as e:
            logger.warning("Could not fetch files for commit %s: %s", commit.sha, e)
            return commit
        return commit.model_copy(update={"files": files})

    def fetch_snapshot(
        self, owner: str, repo: str, branch: str | None = None
    ) -> RepositorySnapshot:
        """Fetch branches and the commits of one branch.

        Args:
            owner: Repository owner.
            repo: Repository name.
            branch: Branch to load; falls back per resolve_branch.

        Returns:
            A RepositorySnapshot with the resolved branch selected.
        """
        branches = self.fetch_branches(owner, repo)
        selected = resolve_branch(branches, branch or default_branch(branches))

        commits: list[Commit] = []
        if selected is not None:
            commits = self.fetch_commits(owner, repo, selected)

        logger.info(
            "Fetched %d branches and %d commits for %s/%s@%s",
            len(branches),
            len(commits),
            owner,
            repo,
            selected,
        )
        return RepositorySnapshot(
            owner=owner,
            repo=repo,
            branches=branches,
            commits=commits,
            selected_branch=selected,
        )


def fetch_snapshot(
    owner: str,
    repo: str,
    branch: str | None = None,
    token: str | None = None,
) -> RepositorySnapshot:
    """Convenience function to fetch a snapshot."""
    client = GitHubClient(token=token)
    return client.fetch_snapshot(owner, repo, branch)
