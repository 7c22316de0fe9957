"""Shared display policy of CV and portfolio templates."""

from typing import Any, Dict, Optional
from jinja2 import Environment

from folio.models.domain import FolioModel, Locale, Profile, Theme
from folio.rendering.labels import PLACEHOLDERS
from folio.rendering.palette import DEFAULT_FONT, resolve_font, resolve_palette
from folio.utils.template_helpers import contact_items, initials, social_entries


class TemplateLayout(FolioModel):
    """
    Display policy of one template.

    Caps and character budgets are per template; a budget of None means the
    field is shown in full.
    """

    template_file: str
    max_experiences: int
    max_projects: int
    max_articles: int = 2
    experience_chars: Optional[int] = None
    project_chars: Optional[int] = None
    article_chars: Optional[int] = None
    default_font: str = DEFAULT_FONT
    headline: Dict[Locale, str]
    summary: Dict[Locale, str]

    def base_context(self, profile: Profile, locale: Locale, theme: Optional[Theme]) -> Dict[str, Any]:
        """
        Build the context every template shares: identity, fallbacks and colors.

        Args:
            profile: Profile to render
            locale: Locale of the document
            theme: Optional user theme

        Returns:
            Dict[str, Any]: Template context
        """
        locale = Locale(locale)
        placeholders = PLACEHOLDERS[locale]
        full_name = (profile.full_name or "").strip()

        return {
            "locale": locale.value,
            "placeholders": placeholders,
            "name": full_name or placeholders["name"],
            "headline": (profile.title or "").strip() or self.headline[locale],
            "summary": (profile.bio or "").strip() or self.summary[locale],
            "initials": initials(full_name),
            "contact_items": contact_items(profile),
            "social_links": social_entries(profile),
            "palette": resolve_palette(theme),
            "font_family": resolve_font(theme, self.default_font),
            "theme_mode": (theme.theme_mode if theme and theme.theme_mode else "light"),
            "policy": self,
        }

    def render_with(self, env: Environment, context: Dict[str, Any]) -> str:
        """Render this layout's Jinja file with a prepared context."""
        template = env.get_template(self.template_file)
        return template.render(**context)
