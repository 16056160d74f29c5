"""Contribution streak computation over a daily calendar."""
from devscore.domain.models import ContributionCalendar, ContributionStreak


def compute_streak(calendar: ContributionCalendar) -> ContributionStreak:
    """Compute current streak, longest streak and total contributions.

    Days are scanned from the most recent one backwards. The current streak is
    the most recent run of active days; a zero current streak is treated as
    "not found yet", so idle days before the first run (today, for example)
    are skipped and the next completed run becomes the current streak.

    Args:
        calendar: Weeks of (date, count) days in any order

    Returns:
        ContributionStreak, all zeros for an empty or idle calendar
    """
    days = calendar.days()
    total = sum(max(0, day.count) for day in days)

    current = 0
    longest = 0
    temp = 0
    current_closed = False

    for day in sorted(days, key=lambda d: d.date, reverse=True):
        if day.count > 0:
            temp += 1
            if not current_closed:
                current = temp
        else:
            if temp > longest:
                longest = temp
            if current > 0:
                current_closed = True
            temp = 0

    if temp > longest:
        longest = temp

    return ContributionStreak(
        current_streak=current,
        longest_streak=longest,
        total_contributions=total,
    )
