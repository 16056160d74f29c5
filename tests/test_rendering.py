"""Tests for themes and SVG rendering."""
from datetime import date, datetime, timezone
import pytest
from devscore.domain.models import (
    ActivityScoreBreakdown,
    ContributionStreak,
    GitHubStats,
    ProfileScoreBreakdown,
    UserProfile,
)
from devscore.rendering.svg import format_number, render_svg, score_rank
from devscore.rendering.themes import DEFAULT_THEME, THEMES, get_theme, theme_names


def _stats(**overrides) -> GitHubStats:
    values = dict(
        user=UserProfile(
            login="octocat",
            name="The <Octo> Cat",
            followers=1500,
            public_repos=8,
            created_at=datetime(2011, 1, 25, tzinfo=timezone.utc),
        ),
        total_stars=2_500_000,
        total_forks=3,
        languages={"Go": 6, "Rust": 1, "Zig": 2},
        total_commits=40,
        total_lines=1800,
        total_prs=5,
        score=72,
        score_breakdown=ActivityScoreBreakdown(
            lines=80, stars=90, contributions=50, commits=40, reviews=0, total=72
        ),
    )
    values.update(overrides)
    return GitHubStats(**values)


@pytest.mark.parametrize("value, expected", [
    (0, "0"),
    (999, "999"),
    (1000, "1K"),
    (1500, "1.5K"),
    (2_000_000, "2M"),
    (2_500_000, "2.5M"),
    (3_000_000_000, "3G"),
])
def test_format_number(value, expected):
    """Test large numbers are abbreviated."""
    assert format_number(value) == expected


@pytest.mark.parametrize("score, rank", [
    (100, "LEGENDARY"),
    (90, "LEGENDARY"),
    (85, "MASTER"),
    (70, "EXPERT"),
    (60, "ADVANCED"),
    (50, "INTERMEDIATE"),
    (30, "BEGINNER"),
    (29, "NEWCOMER"),
    (0, "NEWCOMER"),
])
def test_score_rank(score, rank):
    """Test rank thresholds."""
    assert score_rank(score).rank == rank


def test_get_theme_falls_back_to_default():
    """Test unknown or missing theme names use the default theme."""
    assert get_theme("ocean").name == "ocean"
    assert get_theme("no-such-theme").name == DEFAULT_THEME
    assert get_theme(None).name == DEFAULT_THEME


def test_theme_table_is_complete():
    """Test every theme defines the full palette."""
    assert len(theme_names()) == 11
    keys = set(THEMES[DEFAULT_THEME].colors)
    for theme in THEMES.values():
        assert set(theme.colors) == keys


def test_render_svg_contents():
    """Test the card shows the score, rank, breakdown and languages."""
    svg = render_svg(_stats(), get_theme("dark"), generated_on=date(2024, 5, 1))

    assert svg.startswith('<svg width="800" height="400"')
    assert svg.endswith("</svg>")
    assert "72 / 100" in svg
    assert "EXPERT" in svg
    assert "PRs + Issues (15%)" in svg
    assert "Reviews (10%)" in svg
    assert "2.5M" in svg
    assert "Since 2011" in svg
    assert "2024-05-01" in svg
    assert svg.index(">Go<") < svg.index(">Zig<") < svg.index(">Rust<")
    assert "#00ADD8" in svg


def test_render_svg_escapes_user_text():
    """Test profile text is XML-escaped."""
    svg = render_svg(_stats(), get_theme("light"))

    assert "The &lt;Octo&gt; Cat" in svg
    assert "<Octo>" not in svg


def test_render_svg_avatar_and_streak():
    """Test the inline avatar and streak line are drawn when present."""
    stats = _stats(
        avatar_data_uri="data:image/png;base64,iVBORw==",
        streak=ContributionStreak(current_streak=4, longest_streak=12, total_contributions=1200),
    )

    svg = render_svg(stats, get_theme("github"))

    assert 'href="data:image/png;base64,iVBORw=="' in svg
    assert "Streak 4d (best 12d)" in svg
    assert "1.2K contributions" in svg


def test_render_svg_profile_mode_without_languages():
    """Test profile breakdowns render and an empty histogram is tolerated."""
    stats = _stats(
        languages={},
        score=10,
        score_breakdown=ProfileScoreBreakdown(lines=0, stars=0, followers=95, commits=0, repos=0, total=10),
    )

    svg = render_svg(stats, get_theme("neon"), language_colors={})

    assert "Followers (15%)" in svg
    assert "NEWCOMER" in svg
    assert ">T<" in svg
