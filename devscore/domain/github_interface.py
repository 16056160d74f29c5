"""GitHub gateway interface (port) for fetching profile and activity data.

This is the anti-corruption layer that shields the domain from GitHub API specifics.
Implementations raise only the errors defined in `devscore.domain.errors`.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional
from devscore.domain.models import (
    AvatarImage,
    ContributionCalendar,
    RepositorySummary,
    UserProfile,
)


class SearchKind(str, Enum):
    """Kinds of search-index counts available for a user."""
    COMMITS = "commits"
    PRS = "prs"
    ISSUES = "issues"
    REVIEWS = "reviews"


class IGitHubGateway(ABC):
    """Abstract interface for GitHub API operations."""

    @abstractmethod
    async def get_user(self, handle: str) -> UserProfile:
        """Fetch the public profile of a user.

        Raises:
            NotFoundError: The handle does not exist
            RateLimitError: The request was throttled
            TransportError: Any other failure
        """
        pass

    @abstractmethod
    async def list_repositories(
        self,
        handle: str,
        page: int,
        page_size: int
    ) -> List[RepositorySummary]:
        """Fetch one page of a user's public repositories.

        Args:
            handle: GitHub login
            page: 1-based page number
            page_size: Number of repositories per page (max 100)

        Returns:
            Repositories on the page; an empty list past the last page
        """
        pass

    @abstractmethod
    async def search_count(self, kind: SearchKind, handle: str) -> int:
        """Return the approximate search-index count of `kind` items for a user."""
        pass

    @abstractmethod
    async def get_contribution_calendar(self, handle: str) -> ContributionCalendar:
        """Fetch the user's daily contribution calendar."""
        pass

    @abstractmethod
    async def fetch_avatar(self, url: str) -> Optional[AvatarImage]:
        """Download an avatar image, or return None when it is not available."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
