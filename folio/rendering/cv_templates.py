"""The eight CV layouts and their display policies."""

from typing import Dict
from jinja2 import Environment

from folio.models.domain import CvTemplateId, Locale
from folio.rendering.contracts import CVTemplateProps
from folio.rendering.labels import CV_SURFACE, labels_for
from folio.rendering.layout import TemplateLayout
from folio.utils.template_helpers import format_period

MULTIDISCIPLINARY = {
    Locale.PT: "Profissional multidisciplinar",
    Locale.EN: "Multidisciplinary professional",
    Locale.ES: "Profesional multidisciplinario",
}


class CVTemplate(TemplateLayout):
    """A CV layout: display policy plus its Jinja file."""

    max_education: int = 3
    max_skills: int = 10
    photo_slot: bool = False

    def build_context(self, props: CVTemplateProps) -> dict:
        profile = props.profile
        show_photo = bool(profile.photo_url) and profile.show_cv_photo is not False
        context = self.base_context(profile, props.locale, props.theme)
        context.update(
            {
                "labels": labels_for(props.locale, CV_SURFACE),
                "show_photo": self.photo_slot and show_photo,
                "show_initials": self.photo_slot and not show_photo,
                "photo_url": profile.photo_url,
                "experiences": props.experiences[: self.max_experiences],
                "projects": props.projects[: self.max_projects],
                "articles": props.articles[: self.max_articles],
                "skills": [skill for skill in profile.skills if skill][: self.max_skills],
                "education": [
                    {
                        "institution": item.institution,
                        "degree": item.degree,
                        "period": format_period(item.start_year, item.end_year, item.period),
                    }
                    for item in profile.education[: self.max_education]
                ],
            }
        )
        return context

    def render(self, env: Environment, props: CVTemplateProps) -> str:
        """
        Render a CV fragment.

        Args:
            env: Jinja2 environment holding the templates
            props: Normalized CV data

        Returns:
            str: Rendered HTML fragment
        """
        return self.render_with(env, self.build_context(props))


CV_TEMPLATES: Dict[CvTemplateId, CVTemplate] = {
    CvTemplateId.MODERN: CVTemplate(
        template_file="cv/modern.html",
        max_experiences=3,
        max_projects=3,
        max_skills=10,
        experience_chars=320,
        project_chars=150,
        article_chars=120,
        headline=MULTIDISCIPLINARY,
        summary={
            Locale.PT: "Atualize seu resumo profissional para destacar conquistas e objetivos.",
            Locale.EN: "Update your professional summary to highlight achievements and goals.",
            Locale.ES: "Actualiza tu resumen profesional para destacar logros y objetivos.",
        },
    ),
    CvTemplateId.MINIMAL: CVTemplate(
        template_file="cv/minimal.html",
        max_experiences=4,
        max_projects=2,
        max_education=2,
        max_skills=8,
        headline=MULTIDISCIPLINARY,
        summary={
            Locale.PT: "Atualize seu resumo profissional para destacar competências.",
            Locale.EN: "Update your professional summary to highlight your strengths.",
            Locale.ES: "Actualiza tu resumen profesional para destacar tus competencias.",
        },
    ),
    CvTemplateId.CREATIVE: CVTemplate(
        template_file="cv/creative.html",
        max_experiences=3,
        max_projects=3,
        max_skills=9,
        default_font="Poppins, system-ui, sans-serif",
        headline={
            Locale.PT: "Criando experiências memoráveis",
            Locale.EN: "Crafting memorable experiences",
            Locale.ES: "Creando experiencias memorables",
        },
        summary={
            Locale.PT: "Descreva como você combina criatividade e estratégia para gerar impacto real.",
            Locale.EN: "Describe how you combine creativity and strategy to create real impact.",
            Locale.ES: "Describe cómo combinas creatividad y estrategia para generar impacto real.",
        },
    ),
    CvTemplateId.EXECUTIVE: CVTemplate(
        template_file="cv/executive.html",
        max_experiences=4,
        max_projects=2,
        max_skills=8,
        default_font="Georgia, 'Times New Roman', serif",
        headline={
            Locale.PT: "Executivo(a) de alto impacto",
            Locale.EN: "High-impact executive",
            Locale.ES: "Ejecutivo(a) de alto impacto",
        },
        summary={
            Locale.PT: "Atualize seu resumo executivo com resultados quantitativos e cases relevantes.",
            Locale.EN: "Update your executive summary with measurable results and relevant cases.",
            Locale.ES: "Actualiza tu resumen ejecutivo con resultados cuantitativos y casos relevantes.",
        },
    ),
    CvTemplateId.MODERN_CLASSIC: CVTemplate(
        template_file="cv/modern_classic.html",
        max_experiences=4,
        max_projects=3,
        max_education=4,
        max_skills=12,
        experience_chars=320,
        project_chars=180,
        article_chars=140,
        photo_slot=True,
        headline=MULTIDISCIPLINARY,
        summary={
            Locale.PT: "Adicione um resumo para destacar seu valor profissional.",
            Locale.EN: "Add a summary to highlight your professional value.",
            Locale.ES: "Agrega un resumen para destacar tu valor profesional.",
        },
    ),
    CvTemplateId.MINIMAL_ELEGANT: CVTemplate(
        template_file="cv/minimal_elegant.html",
        max_experiences=4,
        max_projects=4,
        max_education=4,
        max_skills=16,
        photo_slot=True,
        headline={
            Locale.PT: "Especialista multidisciplinar",
            Locale.EN: "Multidisciplinary specialist",
            Locale.ES: "Especialista multidisciplinario",
        },
        summary={
            Locale.PT: "Preencha este campo para criar uma introdução concisa sobre seu perfil.",
            Locale.EN: "Fill in this field to write a concise introduction to your profile.",
            Locale.ES: "Completa este campo para crear una introducción concisa sobre tu perfil.",
        },
    ),
    CvTemplateId.CORPORATE: CVTemplate(
        template_file="cv/corporate.html",
        max_experiences=5,
        max_projects=3,
        max_education=4,
        max_skills=12,
        experience_chars=360,
        project_chars=220,
        article_chars=160,
        photo_slot=True,
        headline={
            Locale.PT: "Líder em transformação digital",
            Locale.EN: "Digital transformation leader",
            Locale.ES: "Líder en transformación digital",
        },
        summary={
            Locale.PT: "Resuma suas principais entregas e valores para cargos de liderança.",
            Locale.EN: "Summarize your key deliveries and values for leadership roles.",
            Locale.ES: "Resume tus principales logros y valores para cargos de liderazgo.",
        },
    ),
    CvTemplateId.CREATIVE_ACCENT: CVTemplate(
        template_file="cv/creative_accent.html",
        max_experiences=4,
        max_projects=4,
        max_skills=14,
        experience_chars=320,
        project_chars=200,
        article_chars=160,
        photo_slot=True,
        headline={
            Locale.PT: "Criador de experiências memoráveis",
            Locale.EN: "Creator of memorable experiences",
            Locale.ES: "Creador de experiencias memorables",
        },
        summary={
            Locale.PT: "Conte sua história de maneira envolvente para destacar sua criatividade.",
            Locale.EN: "Tell your story in an engaging way to highlight your creativity.",
            Locale.ES: "Cuenta tu historia de forma atractiva para destacar tu creatividad.",
        },
    ),
}
