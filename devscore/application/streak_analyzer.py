"""Contribution streak analysis with graceful degradation."""
from devscore.application.degrade import degrade_to_default
from devscore.domain.github_interface import IGitHubGateway
from devscore.domain.models import ContributionStreak
from devscore.domain.streak import compute_streak


class StreakAnalyzer:
    """Fetches a user's contribution calendar and derives streak data.

    Never raises: any fetch or parse failure yields an all-zero streak.
    """

    def __init__(self, gateway: IGitHubGateway):
        self._gateway = gateway

    async def _fetch_and_compute(self, handle: str) -> ContributionStreak:
        calendar = await self._gateway.get_contribution_calendar(handle)
        return compute_streak(calendar)

    async def analyze(self, handle: str) -> ContributionStreak:
        return await degrade_to_default(
            self._fetch_and_compute(handle),
            ContributionStreak.empty(),
            f"contribution streak for {handle}",
        )
