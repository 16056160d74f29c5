"""Shared fixtures: an in-memory GitHub gateway."""
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence
import pytest
from devscore.domain.github_interface import IGitHubGateway, SearchKind
from devscore.domain.models import (
    AvatarImage,
    ContributionCalendar,
    ContributionDay,
    RepositorySummary,
    UserProfile,
)


class FakeGateway(IGitHubGateway):
    """Scripted gateway. Exceptions placed in the data are raised when reached."""

    def __init__(
        self,
        user=None,
        pages: Sequence = (),
        counts: Optional[Dict[SearchKind, object]] = None,
        calendar=None,
        avatar=None
    ):
        self.user = user
        self.pages = list(pages)
        self.counts = counts or {}
        self.calendar = calendar if calendar is not None else ContributionCalendar()
        self.avatar = avatar
        self.page_requests: List[int] = []
        self.search_requests: List[SearchKind] = []
        self.closed = False

    @staticmethod
    def _resolve(value):
        if isinstance(value, Exception):
            raise value
        return value

    async def get_user(self, handle: str) -> UserProfile:
        return self._resolve(self.user)

    async def list_repositories(self, handle: str, page: int, page_size: int) -> List[RepositorySummary]:
        self.page_requests.append(page)
        if page > len(self.pages):
            return []
        return self._resolve(self.pages[page - 1])

    async def search_count(self, kind: SearchKind, handle: str) -> int:
        self.search_requests.append(kind)
        return self._resolve(self.counts.get(kind, 0))

    async def get_contribution_calendar(self, handle: str) -> ContributionCalendar:
        return self._resolve(self.calendar)

    async def fetch_avatar(self, url: str) -> Optional[AvatarImage]:
        return self._resolve(self.avatar)

    async def close(self) -> None:
        self.closed = True


def make_repos(count: int, prefix: str = "repo") -> List[RepositorySummary]:
    return [RepositorySummary(name=f"{prefix}-{i}", language="Python", star_count=1, size=10) for i in range(count)]


def make_calendar(counts_recent_first: Sequence[int], latest: date = date(2024, 1, 7)) -> ContributionCalendar:
    """Build a calendar (oldest day first, weeks of seven) from most-recent-first counts."""
    days = [
        ContributionDay(date=latest - timedelta(days=offset), count=count)
        for offset, count in enumerate(counts_recent_first)
    ]
    days.reverse()
    weeks = tuple(tuple(days[i:i + 7]) for i in range(0, len(days), 7))
    return ContributionCalendar(weeks=weeks)


@pytest.fixture
def octocat() -> UserProfile:
    return UserProfile(
        login="octocat",
        name="The Octocat",
        avatar_url="https://avatars.example.com/u/583231",
        public_repos=8,
        followers=10,
        following=9,
    )


@pytest.fixture
def fake_gateway():
    """Factory for FakeGateway instances."""
    return FakeGateway


@pytest.fixture
def repos_factory():
    return make_repos


@pytest.fixture
def calendar_factory():
    return make_calendar
