"""Palette resolution for templates."""

from typing import Optional

from folio.models.domain import Theme
from folio.rendering.contracts import Palette

DEFAULT_PRIMARY = "#6a0dad"
DEFAULT_SECONDARY = "#2d2550"
DEFAULT_ACCENT = "#c92563"
DEFAULT_BACKGROUND = "#ffffff"
DEFAULT_FONT = "Inter, system-ui, sans-serif"

# Theme applied to the application before a user theme is loaded
DEFAULT_THEME = Theme(
    primary_color="#a21d4c",
    secondary_color="#c92563",
    accent_color="#e94d7a",
    background_color="#ffffff",
    font_family=DEFAULT_FONT,
    theme_mode="light",
    layout="modern",
)


def resolve_palette(theme: Optional[Theme] = None) -> Palette:
    """
    Build a concrete palette from an optional, possibly partial theme.

    Each color falls back to its default independently.

    Args:
        theme: User theme or None

    Returns:
        Palette: Four defined colors
    """
    if theme is None:
        theme = Theme()
    return Palette(
        primary=theme.primary_color or DEFAULT_PRIMARY,
        secondary=theme.secondary_color or DEFAULT_SECONDARY,
        accent=theme.accent_color or DEFAULT_ACCENT,
        background=theme.background_color or DEFAULT_BACKGROUND,
    )


def resolve_font(theme: Optional[Theme], default: str = DEFAULT_FONT) -> str:
    """Return the theme font family, or the template default."""
    if theme is not None and theme.font_family:
        return theme.font_family
    return default
