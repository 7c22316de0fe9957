"""Helper functions for Jinja2 templates."""

from typing import Dict, List, Optional
from jinja2 import Environment

from folio.models.domain import Profile

ELLIPSIS = "…"

# Social networks shown by templates, in display order
SOCIAL_NETWORKS = [
    ("github", "GitHub"),
    ("linkedin", "LinkedIn"),
    ("website", "Website"),
    ("instagram", "Instagram"),
]


def clip(text: Optional[str], limit: Optional[int] = None) -> str:
    """
    Truncate text to a character budget, appending an ellipsis when cut.

    Example: clip("abcdef", 3) -> "abc…"

    Args:
        text: Input text (None renders as empty)
        limit: Character budget; None disables truncation

    Returns:
        str: The text, truncated if longer than the budget
    """
    if not text:
        return ""
    if limit is None or len(text) <= limit:
        return text
    return f"{text[:limit]}{ELLIPSIS}"


def format_period(
    start_year: Optional[str] = None,
    end_year: Optional[str] = None,
    period: Optional[str] = None,
) -> str:
    """
    Format an education period.

    Precedence: "start – end" when both years are present, then whichever
    year is present, then the free-text period, then "".

    Args:
        start_year: Start year
        end_year: End year
        period: Free-text period

    Returns:
        str: Display period
    """
    if start_year and end_year:
        return f"{start_year} – {end_year}"
    if start_year:
        return start_year
    if end_year:
        return end_year
    return period or ""


def initials(name: Optional[str]) -> str:
    """
    Initials badge text: first letter of up to two name tokens, uppercased.

    Returns "CV" when the name yields no letters.
    """
    chunks = (name or "").split()[:2]
    letters = "".join(chunk[0].upper() for chunk in chunks if chunk[0].isalpha())
    return letters or "CV"


def contact_items(profile: Profile) -> List[Dict[str, str]]:
    """Ordered email/phone/location entries, skipping absent fields."""
    items = []
    for kind in ("email", "phone", "location"):
        value = getattr(profile, kind)
        if value and value.strip():
            items.append({"kind": kind, "value": value.strip()})
    return items


def social_entries(profile: Profile) -> List[Dict[str, str]]:
    """Social links with non-empty URLs, in display order."""
    links = profile.social_links or {}
    entries = []
    for key, label in SOCIAL_NETWORKS:
        url = links.get(key)
        if url and url.strip():
            entries.append({"key": key, "label": label, "url": url.strip()})
    return entries


def with_alpha(color: str, alpha_hex: str) -> str:
    """Append an alpha channel to a #rrggbb color; other formats are returned unchanged."""
    if color.startswith("#") and len(color) == 7:
        return f"{color}{alpha_hex}"
    return color


def register_jinja_filters(env: Environment) -> None:
    """
    Register helper functions as Jinja2 filters.

    Args:
        env: Jinja2 Environment instance
    """
    env.filters['clip'] = clip
    env.filters['with_alpha'] = with_alpha
