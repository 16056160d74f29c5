"""Domain models representing the statistics snapshot and its parts."""
import base64
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


def rank_languages(languages: Mapping[str, int], limit: Optional[int] = None) -> List[Tuple[str, int]]:
    """Sorts a language histogram by weight, heaviest first (ties by name)."""
    ranked = sorted(languages.items(), key=lambda item: (-item[1], item[0]))
    return ranked if limit is None else ranked[:limit]


@dataclass(frozen=True)
class UserProfile:
    """Immutable public profile of a GitHub account."""
    login: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        """Returns the display name, falling back to the login."""
        return self.name or self.login


@dataclass(frozen=True)
class RepositorySummary:
    """Per-repository facts needed for aggregation.

    `size` is expressed in the provider's storage unit (kilobytes for GitHub).
    """
    name: str
    language: Optional[str] = None
    star_count: int = 0
    fork_count: int = 0
    size: int = 0
    is_fork: bool = False


@dataclass(frozen=True)
class RepositoryTotals:
    """Totals derived from a user's full repository list."""
    repository_count: int = 0
    total_stars: int = 0
    total_forks: int = 0
    languages: Dict[str, int] = field(default_factory=dict)
    total_lines: int = 0

    def top_languages(self, limit: Optional[int] = None) -> List[Tuple[str, int]]:
        """Returns histogram entries sorted by weight, heaviest first."""
        return rank_languages(self.languages, limit)


@dataclass(frozen=True)
class ActivityCounts:
    """Best-effort search-index counts. Zero means unknown or unavailable."""
    total_commits: int = 0
    total_prs: int = 0
    total_issues: int = 0
    total_reviews: int = 0


@dataclass(frozen=True)
class ContributionDay:
    date: date
    count: int


@dataclass(frozen=True)
class ContributionCalendar:
    """Daily contribution counts grouped by week, as returned by the provider."""
    weeks: Tuple[Tuple[ContributionDay, ...], ...] = ()

    def days(self) -> List[ContributionDay]:
        return [day for week in self.weeks for day in week]


@dataclass(frozen=True)
class ContributionStreak:
    current_streak: int = 0
    longest_streak: int = 0
    total_contributions: int = 0

    @classmethod
    def empty(cls) -> 'ContributionStreak':
        return cls()


class ScoringMode(str, Enum):
    """Selectable scoring schemes.

    PROFILE weighs followers and repository count, ACTIVITY weighs pull
    requests, issues and reviews instead.
    """
    PROFILE = "profile"
    ACTIVITY = "activity"


@dataclass(frozen=True)
class ProfileScoreBreakdown:
    lines: int
    stars: int
    followers: int
    commits: int
    repos: int
    total: int

    mode = ScoringMode.PROFILE

    def categories(self) -> List[Tuple[str, float, int]]:
        """Returns (label, weight, score) per category in display order."""
        return [
            ("Lines", 0.40, self.lines),
            ("Stars", 0.20, self.stars),
            ("Followers", 0.15, self.followers),
            ("Commits", 0.15, self.commits),
            ("Repos", 0.10, self.repos),
        ]


@dataclass(frozen=True)
class ActivityScoreBreakdown:
    lines: int
    stars: int
    contributions: int
    commits: int
    reviews: int
    total: int

    mode = ScoringMode.ACTIVITY

    def categories(self) -> List[Tuple[str, float, int]]:
        """Returns (label, weight, score) per category in display order."""
        return [
            ("Lines", 0.40, self.lines),
            ("Stars", 0.20, self.stars),
            ("PRs + Issues", 0.15, self.contributions),
            ("Commits", 0.15, self.commits),
            ("Reviews", 0.10, self.reviews),
        ]


ScoreBreakdown = Union[ProfileScoreBreakdown, ActivityScoreBreakdown]


@dataclass(frozen=True)
class AvatarImage:
    data: bytes
    content_type: str = "image/png"

    def to_data_uri(self) -> str:
        """Encodes the image as an inline data URI."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


@dataclass(frozen=True)
class ComputeOptions:
    """Per-request switches for building a snapshot."""
    include_avatar: bool = True
    include_streak: bool = True
    mode: Optional[ScoringMode] = None


@dataclass(frozen=True)
class GitHubStats:
    """Immutable snapshot of one user's statistics and score.

    Constructed once per request after every sub-fetch has settled; this is
    the only thing handed to renderers.
    """
    user: UserProfile
    total_stars: int
    total_forks: int
    languages: Mapping[str, int]
    total_commits: int
    total_lines: int
    total_prs: int
    score: int
    score_breakdown: ScoreBreakdown
    total_issues: int = 0
    total_reviews: int = 0
    repository_count: int = 0
    streak: Optional[ContributionStreak] = None
    avatar_data_uri: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "languages", MappingProxyType(dict(self.languages)))

    def top_languages(self, limit: Optional[int] = None) -> List[Tuple[str, int]]:
        return rank_languages(self.languages, limit)

    def to_dict(self) -> Dict[str, Any]:
        """Returns a JSON-ready representation of the snapshot."""
        data = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if is_dataclass(value):
                value = asdict(value)
            elif isinstance(value, Mapping):
                value = dict(value)
            data[item.name] = value
        created_at = self.user.created_at
        data["user"]["created_at"] = created_at.isoformat() if created_at else None
        data["score_breakdown"]["mode"] = self.score_breakdown.mode.value
        return data
