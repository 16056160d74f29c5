"""Stats service assembling the complete statistics snapshot for a user."""
import asyncio
import logging
import time
from typing import Optional
from devscore.application.activity_counters import ActivityCounters
from devscore.application.degrade import degrade_to_default
from devscore.application.repository_aggregator import RepositoryAggregator
from devscore.application.streak_analyzer import StreakAnalyzer
from devscore.domain.aggregation import summarize_repositories
from devscore.domain.errors import TransportError, UnavailableError
from devscore.domain.github_interface import IGitHubGateway
from devscore.domain.models import (
    AvatarImage,
    ComputeOptions,
    ContributionStreak,
    GitHubStats,
    ScoringMode,
    UserProfile,
)
from devscore.domain.scoring import compute_score


logger = logging.getLogger(__name__)


class StatsService:
    """Application service computing a user's GitHubStats snapshot.

    Orchestrates the gateway, the repository aggregator, the activity
    counters and the streak analyzer. Only the profile fetch is mandatory;
    every other sub-fetch degrades to an empty value.
    """

    def __init__(
        self,
        gateway: IGitHubGateway,
        mode: ScoringMode = ScoringMode.ACTIVITY
    ):
        """Initialize stats service.

        Args:
            gateway: GitHub gateway implementation
            mode: Default scoring mode when a request does not choose one
        """
        self._gateway = gateway
        self._mode = ScoringMode(mode)
        self._repositories = RepositoryAggregator(gateway)
        self._activity = ActivityCounters(gateway)
        self._streaks = StreakAnalyzer(gateway)

    async def _fetch_profile(self, handle: str) -> UserProfile:
        try:
            return await self._gateway.get_user(handle)
        except TransportError as e:
            logger.error(f"GitHub unavailable while fetching profile for {handle}: {e}")
            raise UnavailableError(f"GitHub API unavailable: {e}") from e

    async def _fetch_avatar(self, user: UserProfile) -> Optional[str]:
        if not user.avatar_url:
            return None
        avatar: Optional[AvatarImage] = await degrade_to_default(
            self._gateway.fetch_avatar(user.avatar_url),
            None,
            f"avatar for {user.login}",
        )
        return avatar.to_data_uri() if avatar else None

    async def _no_streak(self) -> Optional[ContributionStreak]:
        return None

    async def _no_avatar(self) -> Optional[str]:
        return None

    async def compute_stats(
        self,
        handle: str,
        options: Optional[ComputeOptions] = None
    ) -> GitHubStats:
        """Compute the statistics snapshot for a user.

        The profile is fetched first; repositories, activity counts, streak
        and avatar are then gathered concurrently and scoring runs once all
        of them have settled.

        Args:
            handle: GitHub login
            options: Avatar, streak and scoring mode switches

        Returns:
            Fully assembled GitHubStats

        Raises:
            ValueError: If the handle is blank
            NotFoundError: If the user does not exist
            RateLimitError: If the profile fetch is throttled
            UnavailableError: If the profile fetch fails at the transport level
        """
        handle = (handle or "").strip()
        if not handle:
            raise ValueError("A GitHub username is required")

        options = options or ComputeOptions()
        mode = ScoringMode(options.mode or self._mode)
        start_time = time.time()

        logger.info(f"Computing stats for {handle} ({mode.value} scoring)")
        user = await self._fetch_profile(handle)

        results = await asyncio.gather(
            self._repositories.collect(user.login),
            self._activity.collect(user.login),
            self._streaks.analyze(user.login) if options.include_streak else self._no_streak(),
            self._fetch_avatar(user) if options.include_avatar else self._no_avatar(),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        repositories, activity, streak, avatar_data_uri = results

        totals = summarize_repositories(repositories)
        breakdown = compute_score(user, totals, activity, mode)

        stats = GitHubStats(
            user=user,
            total_stars=totals.total_stars,
            total_forks=totals.total_forks,
            languages=dict(totals.languages),
            total_commits=activity.total_commits,
            total_lines=totals.total_lines,
            total_prs=activity.total_prs,
            score=breakdown.total,
            score_breakdown=breakdown,
            total_issues=activity.total_issues,
            total_reviews=activity.total_reviews,
            repository_count=totals.repository_count,
            streak=streak,
            avatar_data_uri=avatar_data_uri,
        )

        duration = time.time() - start_time
        logger.info(
            f"Stats for {handle} computed in {duration:.2f} seconds: "
            f"score {stats.score}/100 from {totals.repository_count} repositories"
        )
        return stats

    async def close(self) -> None:
        """Close connections."""
        await self._gateway.close()

    async def __aenter__(self) -> 'StatsService':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
