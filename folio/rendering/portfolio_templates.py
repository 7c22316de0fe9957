"""The four portfolio layouts and their display policies."""

from typing import Dict
from jinja2 import Environment

from folio.models.domain import Locale, PortfolioTemplateId
from folio.rendering.contracts import PortfolioTemplateProps
from folio.rendering.cv_templates import MULTIDISCIPLINARY
from folio.rendering.labels import PORTFOLIO_SURFACE, labels_for
from folio.rendering.layout import TemplateLayout


class PortfolioTemplate(TemplateLayout):
    """A public portfolio layout: display policy plus its Jinja file."""

    max_videos: int = 2

    def build_context(self, props: PortfolioTemplateProps) -> dict:
        context = self.base_context(props.profile, props.locale, props.theme)
        context.update(
            {
                "labels": labels_for(props.locale, PORTFOLIO_SURFACE),
                "experiences": props.experiences[: self.max_experiences],
                "projects": props.projects[: self.max_projects],
                "videos": props.featured_videos[: self.max_videos],
                "articles": props.articles[: self.max_articles],
            }
        )
        return context

    def render(self, env: Environment, props: PortfolioTemplateProps) -> str:
        """Render a portfolio fragment."""
        return self.render_with(env, self.build_context(props))


PORTFOLIO_TEMPLATES: Dict[PortfolioTemplateId, PortfolioTemplate] = {
    PortfolioTemplateId.MODERN: PortfolioTemplate(
        template_file="portfolio/modern.html",
        max_experiences=3,
        max_projects=4,
        headline=MULTIDISCIPLINARY,
        summary={
            Locale.PT: "Atualize sua descrição para apresentar sua proposta de valor.",
            Locale.EN: "Update your description to present your value proposition.",
            Locale.ES: "Actualiza tu descripción para presentar tu propuesta de valor.",
        },
    ),
    PortfolioTemplateId.MINIMAL: PortfolioTemplate(
        template_file="portfolio/minimal.html",
        max_experiences=3,
        max_projects=3,
        headline=MULTIDISCIPLINARY,
        summary={
            Locale.PT: "Use este espaço para contar sua trajetória e diferenciais.",
            Locale.EN: "Use this space to tell your journey and what sets you apart.",
            Locale.ES: "Usa este espacio para contar tu trayectoria y diferenciales.",
        },
    ),
    PortfolioTemplateId.DARK: PortfolioTemplate(
        template_file="portfolio/dark.html",
        max_experiences=3,
        max_projects=4,
        headline=MULTIDISCIPLINARY,
        summary={
            Locale.PT: "Atualize esta seção com resultados e impacto de projetos recentes.",
            Locale.EN: "Update this section with results and impact from recent projects.",
            Locale.ES: "Actualiza esta sección con resultados e impacto de proyectos recientes.",
        },
    ),
    PortfolioTemplateId.GRADIENT: PortfolioTemplate(
        template_file="portfolio/gradient.html",
        max_experiences=2,
        max_projects=4,
        max_videos=3,
        project_chars=200,
        default_font="Poppins, system-ui, sans-serif",
        headline={
            Locale.PT: "Criando experiências inesquecíveis",
            Locale.EN: "Creating unforgettable experiences",
            Locale.ES: "Creando experiencias inolvidables",
        },
        summary={
            Locale.PT: "Conte sua história com foco em impacto, inovação e resultados.",
            Locale.EN: "Tell your story with a focus on impact, innovation and results.",
            Locale.ES: "Cuenta tu historia con foco en impacto, innovación y resultados.",
        },
    ),
}
