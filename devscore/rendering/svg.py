"""SVG badge rendering for a GitHubStats snapshot."""
from datetime import date
from html import escape
from typing import Dict, List, NamedTuple, Optional
from devscore.domain.models import GitHubStats
from devscore.rendering.themes import Theme


WIDTH = 800
HEIGHT = 400
FONT = "Inter, -apple-system, sans-serif"
BAR_WIDTH = 160
LANGUAGE_BAR_WIDTH = 120
MAX_LANGUAGES = 6

LANGUAGE_COLORS: Dict[str, str] = {
    "JavaScript": "#f1e05a",
    "TypeScript": "#3178c6",
    "Python": "#3572A5",
    "Java": "#b07219",
    "Go": "#00ADD8",
    "Rust": "#dea584",
    "C": "#555555",
    "C++": "#f34b7d",
    "HTML": "#e34c26",
    "CSS": "#563d7c",
    "Vue": "#4FC08D",
    "Svelte": "#ff3e00",
}

# Palette keys used for the breakdown bars, in category order
BAR_COLORS = ("green", "yellow", "purple", "accent", "red")


class ScoreRank(NamedTuple):
    rank: str
    color: str


RANKS = (
    (90, ScoreRank("LEGENDARY", "#fbbf24")),
    (80, ScoreRank("MASTER", "#ef4444")),
    (70, ScoreRank("EXPERT", "#06b6d4")),
    (60, ScoreRank("ADVANCED", "#3b82f6")),
    (50, ScoreRank("INTERMEDIATE", "#10b981")),
    (30, ScoreRank("BEGINNER", "#f59e0b")),
)
NEWCOMER = ScoreRank("NEWCOMER", "#64748b")


def score_rank(score: int) -> ScoreRank:
    for threshold, rank in RANKS:
        if score >= threshold:
            return rank
    return NEWCOMER


def format_number(num: int) -> str:
    """Abbreviate large numbers: 1500 -> 1.5K, 2000000 -> 2M."""
    for threshold, suffix in ((1_000_000_000, "G"), (1_000_000, "M"), (1_000, "K")):
        if num >= threshold:
            text = f"{num / threshold:.1f}"
            if text.endswith(".0"):
                text = text[:-2]
            return text + suffix
    return str(num)


def _text(x: float, y: float, fill: str, content: str, size: int = 14, weight: Optional[int] = None) -> str:
    weight_attr = f' font-weight="{weight}"' if weight else ""
    return (
        f'<text x="{x}" y="{y}" fill="{fill}" font-family="{FONT}" '
        f'font-size="{size}"{weight_attr}>{content}</text>'
    )


def _avatar(stats: GitHubStats, colors: Dict[str, str]) -> str:
    if stats.avatar_data_uri:
        return (
            f'<image x="40" y="40" width="40" height="40" href="{escape(stats.avatar_data_uri)}" '
            f'clip-path="url(#avatarClip)"/>'
            f'<circle cx="60" cy="60" r="20" fill="none" stroke="{colors["border"]}" stroke-width="2"/>'
        )
    initial = escape(stats.user.display_name[:1].upper())
    return (
        f'<circle cx="60" cy="60" r="20" fill="{colors["accent"]}" stroke="{colors["border"]}" stroke-width="2"/>'
        f'<text x="60" y="68" fill="{colors["background"]}" font-family="{FONT}" font-size="24" '
        f'font-weight="700" text-anchor="middle">{initial}</text>'
    )


def _quick_stats(stats: GitHubStats, colors: Dict[str, str]) -> List[str]:
    left = [
        (stats.total_lines, "lines(est)"),
        (stats.total_stars, "stars"),
        (stats.user.followers, "followers"),
        (stats.user.public_repos, "repos"),
    ]
    right = [
        (stats.total_commits, "commits"),
        (stats.total_prs, "PRs"),
        (stats.total_forks, "forks"),
    ]
    parts = [
        _text(0, 0, colors["accent"], "Quick Stats", 16, 600),
        _text(115, 0, colors["accent"], "Details", 16, 600),
    ]
    for index, (value, label) in enumerate(left):
        parts.append(_text(0, 30 + index * 25, colors["text"],
                           f'{format_number(value)} <tspan font-size="10">{label}</tspan>'))
    for index, (value, label) in enumerate(right):
        parts.append(_text(115, 30 + index * 25, colors["text"],
                           f'{format_number(value)} <tspan font-size="10">{label}</tspan>'))
    if stats.user.created_at:
        parts.append(_text(115, 105, colors["text"], f"Since {stats.user.created_at.year}"))
    return parts


def _breakdown(stats: GitHubStats, colors: Dict[str, str]) -> List[str]:
    parts = []
    categories = stats.score_breakdown.categories()
    for index, ((label, weight, score), color_key) in enumerate(zip(categories, BAR_COLORS)):
        y = index * 40
        filled = max(0, min(100, score)) / 100 * BAR_WIDTH
        parts.append(_text(0, y + 15, colors["text"], f"{escape(label)} ({round(weight * 100)}%)", 13, 500))
        parts.append(f'<rect x="0" y="{y + 25}" width="{BAR_WIDTH}" height="6" fill="{colors["border"]}" rx="3"/>')
        parts.append(f'<rect x="0" y="{y + 25}" width="{filled:.1f}" height="6" fill="{colors[color_key]}" rx="3"/>')
        parts.append(_text(BAR_WIDTH + 5, y + 30, colors["text_secondary"], str(score), 12))
    if stats.streak is not None:
        streak = stats.streak
        parts.append(_text(0, 225, colors["text_secondary"],
                           f"Streak {streak.current_streak}d (best {streak.longest_streak}d)", 12))
        parts.append(_text(0, 245, colors["text_secondary"],
                           f"{format_number(streak.total_contributions)} contributions this year", 12))
    return parts


def _languages(stats: GitHubStats, colors: Dict[str, str], language_colors: Dict[str, str]) -> List[str]:
    ranked = stats.top_languages(MAX_LANGUAGES)
    if not ranked:
        return []
    total = sum(stats.languages.values())
    heaviest = ranked[0][1]
    parts = []
    for index, (language, weight) in enumerate(ranked):
        y = 85 + index * 50
        percentage = weight / total * 100 if total else 0.0
        bar = max(8.0, weight / heaviest * LANGUAGE_BAR_WIDTH)
        color = language_colors.get(language, colors["accent"])
        parts.append(
            f'<g transform="translate(580, {y})">'
            + _text(0, 0, colors["text"], escape(language), 14, 500)
            + _text(125, 0, colors["text_secondary"], f"{percentage:.1f}%", 13)
            + f'<rect x="0" y="10" width="{LANGUAGE_BAR_WIDTH}" height="8" fill="{colors["border"]}" rx="4"/>'
            + f'<rect x="0" y="10" width="{bar:.1f}" height="8" fill="{color}" rx="4"/>'
            + '</g>'
        )
    return parts


def render_svg(
    stats: GitHubStats,
    theme: Theme,
    language_colors: Optional[Dict[str, str]] = None,
    generated_on: Optional[date] = None
) -> str:
    """Render the stats card as an SVG document.

    Args:
        stats: Fully assembled snapshot
        theme: Palette to draw with
        language_colors: Language name to bar color; defaults to LANGUAGE_COLORS
        generated_on: Footer date; defaults to today

    Returns:
        SVG markup
    """
    colors = theme.colors
    language_colors = LANGUAGE_COLORS if language_colors is None else language_colors
    generated_on = generated_on or date.today()
    rank = score_rank(stats.score)
    user = stats.user

    parts = [
        f'<svg width="{WIDTH}" height="{HEIGHT}" xmlns="http://www.w3.org/2000/svg">',
        '<defs>',
        '<linearGradient id="bg-gradient" x1="0%" y1="0%" x2="100%" y2="100%">'
        f'<stop offset="0%" style="stop-color:{theme.background_gradient[0]}"/>'
        f'<stop offset="100%" style="stop-color:{theme.background_gradient[1]}"/>'
        '</linearGradient>',
        '<linearGradient id="score-gradient" x1="0%" y1="0%" x2="100%" y2="0%">'
        f'<stop offset="0%" style="stop-color:{theme.score_gradient[0]}"/>'
        f'<stop offset="100%" style="stop-color:{theme.score_gradient[1]}"/>'
        '</linearGradient>',
        '<clipPath id="avatarClip"><circle cx="60" cy="60" r="20"/></clipPath>',
        '</defs>',
        '<rect width="100%" height="100%" fill="url(#bg-gradient)" rx="6"/>',
        f'<rect x="2" y="2" width="{WIDTH - 4}" height="{HEIGHT - 4}" fill="none" '
        f'stroke="{colors["border"]}" stroke-width="1" rx="10"/>',
        f'<rect x="20" y="20" width="280" height="360" fill="{colors["card_bg"]}" rx="4" opacity="0.5"/>',
        _avatar(stats, colors),
        _text(90, 55, colors["text"], escape(user.display_name), 20, 700),
        _text(90, 75, colors["text_secondary"], f"@{escape(user.login)}", 15),
        '<rect x="45" y="105" width="230" height="90" fill="url(#score-gradient)" rx="8" opacity="0.15"/>',
        _text(60, 140, rank.color, f"{stats.score} / 100", 36, 800),
        _text(60, 165, rank.color, rank.rank, 16, 600),
        _text(60, 185, colors["text_secondary"], "Developer Score", 13),
        '<g transform="translate(45, 230)">',
        *_quick_stats(stats, colors),
        '</g>',
        f'<rect x="320" y="20" width="220" height="360" fill="{colors["card_bg"]}" rx="8" opacity="0.5"/>',
        _text(340, 50, colors["accent"], "Score Breakdown", 18, 600),
        '<g transform="translate(340, 80)">',
        *_breakdown(stats, colors),
        '</g>',
        f'<rect x="560" y="20" width="220" height="360" fill="{colors["card_bg"]}" rx="8" opacity="0.5"/>',
        _text(580, 50, colors["accent"], "Top Languages", 18, 600),
        *_languages(stats, colors, language_colors),
        _text(20, HEIGHT - 15, colors["text_secondary"], f"devscore • {generated_on.isoformat()}", 11),
        '</svg>',
    ]
    return "\n".join(parts)
