"""Service for rendering CV and portfolio HTML from templates."""

from pathlib import Path
from typing import Optional, Union
from jinja2 import Environment, FileSystemLoader, select_autoescape

from folio.logger import _log_debug
from folio.models.domain import CvTemplateId, Locale, PortfolioTemplateId
from folio.rendering.contracts import CVTemplateProps, PortfolioTemplateProps
from folio.rendering.cv_templates import CV_TEMPLATES, CVTemplate
from folio.rendering.palette import resolve_palette
from folio.rendering.portfolio_templates import PORTFOLIO_TEMPLATES, PortfolioTemplate
from folio.utils.template_helpers import register_jinja_filters

DEFAULT_CV_TEMPLATE = CvTemplateId.MODERN
DEFAULT_PORTFOLIO_TEMPLATE = PortfolioTemplateId.MODERN


def resolve_cv_template(template_id: Optional[Union[str, CvTemplateId]]) -> CvTemplateId:
    """
    Resolve a stored CV template identifier.

    Identifiers outside the current set (legacy or unknown) resolve to "modern".
    """
    try:
        return CvTemplateId(template_id)
    except ValueError:
        _log_debug(f"Unknown CV template '{template_id}', using '{DEFAULT_CV_TEMPLATE.value}'")
        return DEFAULT_CV_TEMPLATE


def resolve_portfolio_template(
    template_id: Optional[Union[str, PortfolioTemplateId]]
) -> PortfolioTemplateId:
    """Resolve a stored portfolio template identifier, defaulting to "modern"."""
    try:
        return PortfolioTemplateId(template_id)
    except ValueError:
        _log_debug(
            f"Unknown portfolio template '{template_id}', using '{DEFAULT_PORTFOLIO_TEMPLATE.value}'"
        )
        return DEFAULT_PORTFOLIO_TEMPLATE


class TemplateRenderer:
    """Service to render CV and portfolio HTML from Jinja2 templates."""

    def __init__(self, template_dir: Path = None):
        """
        Initialize the renderer.

        Args:
            template_dir: Directory containing Jinja2 templates. Defaults to folio/templates/
        """
        if template_dir is None:
            # Get the package directory (parent of rendering)
            package_dir = Path(__file__).parent.parent
            template_dir = package_dir / "templates"

        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(['html', 'xml'])
        )

        # Register custom filters
        register_jinja_filters(self.env)

    def cv_template(self, template_id: Optional[Union[str, CvTemplateId]]) -> CVTemplate:
        return CV_TEMPLATES[resolve_cv_template(template_id)]

    def portfolio_template(
        self, template_id: Optional[Union[str, PortfolioTemplateId]]
    ) -> PortfolioTemplate:
        return PORTFOLIO_TEMPLATES[resolve_portfolio_template(template_id)]

    def render_cv(
        self, template_id: Optional[Union[str, CvTemplateId]], props: CVTemplateProps
    ) -> str:
        """
        Render a CV fragment with the selected layout.

        Args:
            template_id: CV template identifier; unknown values use "modern"
            props: Normalized CV data

        Returns:
            str: Rendered HTML fragment
        """
        return self.cv_template(template_id).render(self.env, props)

    def render_portfolio(
        self,
        template_id: Optional[Union[str, PortfolioTemplateId]],
        props: PortfolioTemplateProps,
    ) -> str:
        """
        Render a portfolio fragment with the selected layout.

        Args:
            template_id: Portfolio template identifier; unknown values use "modern"
            props: Normalized portfolio data

        Returns:
            str: Rendered HTML fragment
        """
        return self.portfolio_template(template_id).render(self.env, props)

    def render_page(self, body: str, title: str, locale: Locale, theme=None) -> str:
        """Wrap a rendered fragment in a complete HTML document."""
        template = self.env.get_template("page.html")
        return template.render(
            body=body,
            title=title,
            locale=Locale(locale).value,
            palette=resolve_palette(theme),
        )

    def render_message_page(self, title: str, message: str, locale: Locale, theme=None) -> str:
        """Render a complete HTML document holding a single message (blocked, not found)."""
        template = self.env.get_template("message.html")
        return template.render(
            title=title,
            message=message,
            locale=Locale(locale).value,
            palette=resolve_palette(theme),
        )


_renderer: Optional[TemplateRenderer] = None


def get_renderer() -> TemplateRenderer:
    """Get or create the renderer singleton."""
    global _renderer
    if _renderer is None:
        _renderer = TemplateRenderer()
    return _renderer


def render_cv(template_id: Optional[Union[str, CvTemplateId]], props: CVTemplateProps) -> str:
    """Render a CV fragment with the shared renderer."""
    return get_renderer().render_cv(template_id, props)


def render_portfolio(
    template_id: Optional[Union[str, PortfolioTemplateId]], props: PortfolioTemplateProps
) -> str:
    """Render a portfolio fragment with the shared renderer."""
    return get_renderer().render_portfolio(template_id, props)
