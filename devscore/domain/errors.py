"""Error taxonomy shared by the gateway and the application services."""


class GitHubAPIError(Exception):
    """Base class for failures talking to the GitHub API."""
    pass


class NotFoundError(GitHubAPIError):
    """Raised when the requested user (or resource) does not exist upstream."""
    pass


class RateLimitError(GitHubAPIError):
    """Raised when the upstream API throttles the request."""
    pass


class TransportError(GitHubAPIError):
    """Raised on network failures, timeouts, unexpected statuses or bad payloads."""
    pass


class UnavailableError(GitHubAPIError):
    """Raised when the mandatory profile fetch fails at the transport level."""
    pass
