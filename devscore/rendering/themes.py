"""Color themes for the SVG badge."""
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


DEFAULT_THEME = "dark"


@dataclass(frozen=True)
class Theme:
    """A named palette.

    `colors` keys: background, card_bg, border, text, text_secondary, accent,
    green, yellow, purple, red, orange, primary, secondary.
    """
    name: str
    display_name: str
    colors: Dict[str, str]
    score_gradient: Tuple[str, str]
    background_gradient: Tuple[str, str]


def _palette(
    background: str,
    card_bg: str,
    border: str,
    text: str,
    text_secondary: str,
    accent: str,
    green: str,
    yellow: str,
    purple: str,
    red: str,
    orange: str,
    primary: str,
    secondary: str
) -> Dict[str, str]:
    return {
        "background": background,
        "card_bg": card_bg,
        "border": border,
        "text": text,
        "text_secondary": text_secondary,
        "accent": accent,
        "green": green,
        "yellow": yellow,
        "purple": purple,
        "red": red,
        "orange": orange,
        "primary": primary,
        "secondary": secondary,
    }


THEMES: Dict[str, Theme] = {
    theme.name: theme
    for theme in (
        Theme(
            "dark", "Dark",
            _palette("#0f172a", "#1e293b", "#334155", "#e2e8f0", "#94a3b8", "#3b82f6",
                     "#10b981", "#f59e0b", "#8b5cf6", "#ef4444", "#f97316", "#3b82f6", "#8b5cf6"),
            ("#3b82f6", "#8b5cf6"), ("#0f172a", "#1e293b"),
        ),
        Theme(
            "light", "Light",
            _palette("#ffffff", "#f8fafc", "#e2e8f0", "#1e293b", "#64748b", "#3b82f6",
                     "#059669", "#d97706", "#7c3aed", "#dc2626", "#ea580c", "#3b82f6", "#7c3aed"),
            ("#3b82f6", "#7c3aed"), ("#ffffff", "#f8fafc"),
        ),
        Theme(
            "blue", "Blue",
            _palette("#0c1222", "#1a2332", "#2d3748", "#e2e8f0", "#a0aec0", "#4299e1",
                     "#48bb78", "#ed8936", "#9f7aea", "#f56565", "#ff7a00", "#4299e1", "#63b3ed"),
            ("#4299e1", "#63b3ed"), ("#0c1222", "#1a2332"),
        ),
        Theme(
            "green", "Green",
            _palette("#0a1f0f", "#1a2e1a", "#2d4a2d", "#e6ffea", "#9ae6b4", "#48bb78",
                     "#68d391", "#f6e05e", "#b794f6", "#fc8181", "#fbb036", "#48bb78", "#68d391"),
            ("#48bb78", "#68d391"), ("#0a1f0f", "#1a2e1a"),
        ),
        Theme(
            "purple", "Purple",
            _palette("#1a0d26", "#2d1b40", "#44337a", "#f7fafc", "#d6bcfa", "#9f7aea",
                     "#68d391", "#f6e05e", "#b794f6", "#fc8181", "#fbb036", "#9f7aea", "#b794f6"),
            ("#9f7aea", "#b794f6"), ("#1a0d26", "#2d1b40"),
        ),
        Theme(
            "ocean", "Ocean",
            _palette("#0a192f", "#112240", "#233554", "#ccd6f6", "#8892b0", "#64ffda",
                     "#64ffda", "#ffd700", "#c792ea", "#ff6b6b", "#ffb347", "#64ffda", "#5ccfe6"),
            ("#64ffda", "#5ccfe6"), ("#0a192f", "#112240"),
        ),
        Theme(
            "sunset", "Sunset",
            _palette("#2d1b2e", "#3e2723", "#5d4037", "#ffeaa7", "#fab1a0", "#fd79a8",
                     "#00b894", "#fdcb6e", "#a29bfe", "#e84393", "#e17055", "#fd79a8", "#fdcb6e"),
            ("#fd79a8", "#fdcb6e"), ("#2d1b2e", "#3e2723"),
        ),
        Theme(
            "github", "GitHub",
            _palette("#0d1117", "#161b22", "#30363d", "#f0f6fc", "#8b949e", "#58a6ff",
                     "#7c3aed", "#f85149", "#a5a5a5", "#f85149", "#ff7b72", "#58a6ff", "#7c3aed"),
            ("#58a6ff", "#7c3aed"), ("#0d1117", "#161b22"),
        ),
        Theme(
            "cosmic", "Cosmic",
            _palette("#1a0033", "#2d1b69", "#4c1d95", "#ffffff", "#c084fc", "#8b5cf6",
                     "#10b981", "#fbbf24", "#c084fc", "#f472b6", "#fb923c", "#8b5cf6", "#f472b6"),
            ("#8b5cf6", "#f472b6"), ("#4c1d95", "#fb7185"),
        ),
        Theme(
            "neon", "Neon",
            _palette("#0a0a0a", "#1a1a2e", "#16213e", "#ffffff", "#a8c8ec", "#00d4ff",
                     "#39ff14", "#ffff00", "#ff00ff", "#ff073a", "#ff6600", "#00d4ff", "#ff00ff"),
            ("#667eea", "#764ba2"), ("#667eea", "#f093fb"),
        ),
        Theme(
            "gradient", "Gradient",
            _palette("#4c1d95", "rgba(255, 255, 255, 0.1)", "rgba(255, 255, 255, 0.2)", "#ffffff",
                     "rgba(255, 255, 255, 0.8)", "#fbbf24", "#10b981", "#fbbf24", "#c084fc",
                     "#f472b6", "#fb923c", "#8b5cf6", "#f472b6"),
            ("#fbbf24", "#f472b6"), ("#667eea", "#764ba2"),
        ),
    )
}


def get_theme(name: Optional[str] = None, themes: Optional[Dict[str, Theme]] = None) -> Theme:
    """Look up a theme by name, falling back to the default theme."""
    table = THEMES if themes is None else themes
    if not name or name not in table:
        return table[DEFAULT_THEME]
    return table[name]


def theme_names() -> List[str]:
    return list(THEMES)
