"""Pure aggregation of a user's repository list into totals."""
from typing import Dict, Sequence
from devscore.domain.models import RepositorySummary, RepositoryTotals


# Estimated source lines per storage unit (KB) of repository size
LINES_PER_SIZE_UNIT = 18


def build_language_histogram(repositories: Sequence[RepositorySummary]) -> Dict[str, int]:
    """Weight each language by the stars of its repositories plus one per repository.

    Repositories without a detected language contribute nothing.
    """
    histogram: Dict[str, int] = {}
    for repo in repositories:
        if repo.language:
            histogram[repo.language] = histogram.get(repo.language, 0) + repo.star_count + 1
    return histogram


def estimate_lines(repositories: Sequence[RepositorySummary]) -> int:
    """Estimate total lines of code from repository sizes.

    Repositories with a non-positive size are skipped.
    """
    total = 0.0
    for repo in repositories:
        if repo.size > 0:
            total += repo.size * LINES_PER_SIZE_UNIT
    return int(round(total))


def summarize_repositories(repositories: Sequence[RepositorySummary]) -> RepositoryTotals:
    """Derive star, fork, language and line totals from a repository list.

    Forks are counted like any other repository.

    Args:
        repositories: Every repository collected for the user

    Returns:
        RepositoryTotals for the whole list
    """
    return RepositoryTotals(
        repository_count=len(repositories),
        total_stars=sum(max(0, repo.star_count) for repo in repositories),
        total_forks=sum(max(0, repo.fork_count) for repo in repositories),
        languages=build_language_histogram(repositories),
        total_lines=estimate_lines(repositories),
    )
