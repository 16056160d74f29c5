"""Score engine: converts aggregated statistics into a 0-100 developer score.

Every category is normalized on a log10 scale,

    score = min(100, log10(max(1, value)) * multiplier)

and the total is the weighted sum of the category scores. Category scores
are reported rounded; the total is rounded once from the weighted sum of
the unrounded category scores. Halves round up.

The module is pure: no I/O, no clock, no randomness.
"""
import math
from typing import Dict, Tuple
from devscore.domain.models import (
    ActivityCounts,
    ActivityScoreBreakdown,
    ProfileScoreBreakdown,
    RepositoryTotals,
    ScoreBreakdown,
    ScoringMode,
    UserProfile,
)


# Raw line counts are scaled down before normalization
LINES_SCALE = 0.003

MULTIPLIERS: Dict[str, float] = {
    "lines": 20,
    "stars": 25,
    "followers": 30,
    "commits": 22,
    "repos": 35,
    "contributions": 28,
    "reviews": 30,
}

PROFILE_WEIGHTS: Dict[str, float] = {
    "lines": 0.40,
    "stars": 0.20,
    "followers": 0.15,
    "commits": 0.15,
    "repos": 0.10,
}

ACTIVITY_WEIGHTS: Dict[str, float] = {
    "lines": 0.40,
    "stars": 0.20,
    "contributions": 0.15,
    "commits": 0.15,
    "reviews": 0.10,
}


def category_score(value: float, multiplier: float) -> float:
    """Normalize a raw count into [0, 100] on a log10 scale.

    NaN and non-positive values score 0; infinity hits the cap.
    """
    if math.isnan(value):
        return 0.0
    if math.isinf(value):
        return 100.0 if value > 0 else 0.0
    score = math.log10(max(1.0, float(value))) * multiplier
    return max(0.0, min(100.0, score))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def weighted_total(scores: Dict[str, float], weights: Dict[str, float]) -> int:
    total = sum(weights[name] * scores[name] for name in weights)
    return int(max(0, min(100, round_half_up(total))))


def _raw_scores(
    mode: ScoringMode,
    user: UserProfile,
    totals: RepositoryTotals,
    activity: ActivityCounts
) -> Tuple[Dict[str, float], Dict[str, float]]:
    scores = {
        "lines": category_score(totals.total_lines * LINES_SCALE, MULTIPLIERS["lines"]),
        "stars": category_score(totals.total_stars, MULTIPLIERS["stars"]),
        "commits": category_score(activity.total_commits, MULTIPLIERS["commits"]),
    }
    if mode is ScoringMode.PROFILE:
        scores["followers"] = category_score(user.followers, MULTIPLIERS["followers"])
        scores["repos"] = category_score(user.public_repos, MULTIPLIERS["repos"])
        return scores, PROFILE_WEIGHTS

    scores["contributions"] = category_score(
        activity.total_prs + activity.total_issues, MULTIPLIERS["contributions"]
    )
    scores["reviews"] = category_score(activity.total_reviews, MULTIPLIERS["reviews"])
    return scores, ACTIVITY_WEIGHTS


def compute_score(
    user: UserProfile,
    totals: RepositoryTotals,
    activity: ActivityCounts,
    mode: ScoringMode = ScoringMode.ACTIVITY
) -> ScoreBreakdown:
    """Compute the per-category breakdown and total score.

    Args:
        user: Profile of the scored user (followers and repos in PROFILE mode)
        totals: Repository totals
        activity: Search-index activity counts
        mode: Scoring scheme to apply

    Returns:
        ProfileScoreBreakdown or ActivityScoreBreakdown depending on `mode`
    """
    mode = ScoringMode(mode)
    scores, weights = _raw_scores(mode, user, totals, activity)
    total = weighted_total(scores, weights)
    rounded = {name: round_half_up(score) for name, score in scores.items()}

    if mode is ScoringMode.PROFILE:
        return ProfileScoreBreakdown(
            lines=rounded["lines"],
            stars=rounded["stars"],
            followers=rounded["followers"],
            commits=rounded["commits"],
            repos=rounded["repos"],
            total=total,
        )
    return ActivityScoreBreakdown(
        lines=rounded["lines"],
        stars=rounded["stars"],
        contributions=rounded["contributions"],
        commits=rounded["commits"],
        reviews=rounded["reviews"],
        total=total,
    )
