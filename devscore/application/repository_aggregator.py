"""Paginated collection of a user's public repositories."""
import logging
from typing import List
from devscore.domain.errors import NotFoundError, RateLimitError, TransportError
from devscore.domain.github_interface import IGitHubGateway
from devscore.domain.models import RepositorySummary


logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class RepositoryAggregator:
    """Collects every public repository of a user, page by page.

    Pagination stops on an empty or short page. A rate limit or transport
    failure truncates the list instead of failing; an unknown user is only
    detected on the first page.
    """

    def __init__(self, gateway: IGitHubGateway, page_size: int = MAX_PAGE_SIZE):
        """Initialize the aggregator.

        Args:
            gateway: GitHub gateway implementation
            page_size: Repositories per page (max 100)
        """
        self._gateway = gateway
        self._page_size = max(1, min(page_size, MAX_PAGE_SIZE))

    async def collect(self, handle: str) -> List[RepositorySummary]:
        """Fetch all repositories for `handle`.

        Raises:
            NotFoundError: If the user is unknown (first page only)
        """
        repositories: List[RepositorySummary] = []
        page = 1

        while True:
            try:
                chunk = await self._gateway.list_repositories(handle, page, self._page_size)
            except NotFoundError:
                if page == 1:
                    raise
                logger.warning(f"Repository page {page} for {handle} not found, stopping")
                break
            except RateLimitError:
                logger.warning(
                    f"Rate limit hit on repository page {page} for {handle}; "
                    f"continuing with {len(repositories)} repositories"
                )
                break
            except TransportError as e:
                logger.warning(
                    f"Error fetching repository page {page} for {handle}: {e}; "
                    f"continuing with {len(repositories)} repositories"
                )
                break

            if not chunk:
                break

            repositories.extend(chunk)
            logger.debug(f"Fetched page {page} for {handle}: {len(chunk)} repositories")

            if len(chunk) < self._page_size:
                break
            page += 1

        logger.info(f"Collected {len(repositories)} repositories for {handle}")
        return repositories
