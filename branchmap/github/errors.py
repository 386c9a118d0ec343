"""Exception classes for the GitHub client."""


class GitHubError(Exception):
    """Base exception for GitHub client errors."""

    pass


class AuthenticationError(GitHubError):
    """Raised when no token is configured or the token is rejected."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class GitHubAPIError(GitHubError):
    """Raised when a request fails or returns an unusable body."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
