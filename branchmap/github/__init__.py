"""GitHub client producing repository snapshots."""

from .errors import AuthenticationError, GitHubAPIError, GitHubError
from .client import GitHubClient, default_branch, fetch_snapshot, resolve_branch

__all__ = [
    "AuthenticationError",
    "GitHubAPIError",
    "GitHubError",
    "GitHubClient",
    "default_branch",
    "fetch_snapshot",
    "resolve_branch",
]
