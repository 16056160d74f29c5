"""Independent, fault-isolated activity counters backed by search counts."""
import asyncio
import logging
from devscore.application.degrade import degrade_to_default
from devscore.domain.github_interface import IGitHubGateway, SearchKind
from devscore.domain.models import ActivityCounts


logger = logging.getLogger(__name__)


class ActivityCounters:
    """Commit, pull request, issue and review counts for a user.

    Each counter degrades to 0 on its own; none of them can fail another.
    """

    def __init__(self, gateway: IGitHubGateway):
        self._gateway = gateway

    async def _count(self, kind: SearchKind, handle: str) -> int:
        count = await degrade_to_default(
            self._gateway.search_count(kind, handle),
            0,
            f"{kind.value} count for {handle}",
        )
        return max(0, int(count or 0))

    async def count_commits(self, handle: str) -> int:
        return await self._count(SearchKind.COMMITS, handle)

    async def count_prs(self, handle: str) -> int:
        return await self._count(SearchKind.PRS, handle)

    async def count_issues(self, handle: str) -> int:
        return await self._count(SearchKind.ISSUES, handle)

    async def count_reviews(self, handle: str) -> int:
        return await self._count(SearchKind.REVIEWS, handle)

    async def collect(self, handle: str) -> ActivityCounts:
        """Run all four counters concurrently."""
        commits, prs, issues, reviews = await asyncio.gather(
            self.count_commits(handle),
            self.count_prs(handle),
            self.count_issues(handle),
            self.count_reviews(handle),
        )
        logger.info(
            f"Activity for {handle}: {commits} commits, {prs} PRs, "
            f"{issues} issues, {reviews} reviews"
        )
        return ActivityCounts(
            total_commits=commits,
            total_prs=prs,
            total_issues=issues,
            total_reviews=reviews,
        )
