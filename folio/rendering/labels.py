"""Static per-locale label tables for CV and portfolio surfaces."""

from typing import Dict

from folio.models.domain import Locale

CV_SURFACE = "cv"
PORTFOLIO_SURFACE = "portfolio"

CV_SECTION_LABELS: Dict[Locale, Dict[str, str]] = {
    Locale.PT: {
        "summary": "Resumo profissional",
        "experience": "Experiências",
        "projects": "Projetos em destaque",
        "articles": "Artigos científicos",
        "skills": "Habilidades",
        "education": "Formação",
        "contact": "Contato",
    },
    Locale.EN: {
        "summary": "Professional summary",
        "experience": "Experience",
        "projects": "Featured projects",
        "articles": "Scientific articles",
        "skills": "Skills",
        "education": "Education",
        "contact": "Contact",
    },
    Locale.ES: {
        "summary": "Resumen profesional",
        "experience": "Experiencia",
        "projects": "Proyectos destacados",
        "articles": "Artículos científicos",
        "skills": "Habilidades",
        "education": "Formación",
        "contact": "Contacto",
    },
}

PORTFOLIO_SECTION_LABELS: Dict[Locale, Dict[str, str]] = {
    Locale.PT: {
        "about": "Sobre mim",
        "experience": "Experiências",
        "projects": "Projetos",
        "articles": "Publicações",
        "videos": "Destaques",
        "contact": "Contato",
    },
    Locale.EN: {
        "about": "About",
        "experience": "Experience",
        "projects": "Projects",
        "articles": "Articles",
        "videos": "Highlights",
        "contact": "Contact",
    },
    Locale.ES: {
        "about": "Sobre mí",
        "experience": "Experiencia",
        "projects": "Proyectos",
        "articles": "Publicaciones",
        "videos": "Destacados",
        "contact": "Contacto",
    },
}

PLACEHOLDERS: Dict[Locale, Dict[str, str]] = {
    Locale.PT: {
        "name": "Nome não informado",
        "view_project": "Ver projeto",
        "networking": "Networking",
    },
    Locale.EN: {
        "name": "Name not provided",
        "view_project": "View project",
        "networking": "Networking",
    },
    Locale.ES: {
        "name": "Nombre no informado",
        "view_project": "Ver proyecto",
        "networking": "Networking",
    },
}

# User-visible status and error messages
MESSAGES: Dict[Locale, Dict[str, str]] = {
    Locale.PT: {
        "not_found": "Portfólio não encontrado.",
        "load_failed": "Erro ao carregar portfólio público.",
        "sync_failed": "Erro ao sincronizar seus dados.",
        "theme_failed": "Não foi possível salvar o tema do portfólio.",
        "locale_failed": "Não foi possível salvar o idioma preferido.",
        "blocked_title": "Acesso bloqueado",
        "blocked_subtitle": "A assinatura deste portfólio expirou. Renove o plano para reativar o acesso.",
    },
    Locale.EN: {
        "not_found": "Portfolio not found.",
        "load_failed": "Could not load the public portfolio.",
        "sync_failed": "Could not synchronize your data.",
        "theme_failed": "Could not save the portfolio theme.",
        "locale_failed": "Could not save the preferred language.",
        "blocked_title": "Access blocked",
        "blocked_subtitle": "The subscription for this portfolio has expired. Renew the plan to restore access.",
    },
    Locale.ES: {
        "not_found": "Portafolio no encontrado.",
        "load_failed": "Error al cargar el portafolio público.",
        "sync_failed": "Error al sincronizar tus datos.",
        "theme_failed": "No fue posible guardar el tema del portafolio.",
        "locale_failed": "No fue posible guardar el idioma preferido.",
        "blocked_title": "Acceso bloqueado",
        "blocked_subtitle": "La suscripción de este portafolio expiró. Renueva el plan para reactivar el acceso.",
    },
}


def labels_for(locale: Locale, surface: str) -> Dict[str, str]:
    """
    Get the section labels of a surface in a locale.

    Args:
        locale: Locale of the rendered document
        surface: "cv" or "portfolio"

    Returns:
        Dict[str, str]: Section identifier -> display string

    Raises:
        ValueError: If the surface is unknown
    """
    locale = Locale(locale)
    if surface == CV_SURFACE:
        return dict(CV_SECTION_LABELS[locale])
    if surface == PORTFOLIO_SURFACE:
        return dict(PORTFOLIO_SECTION_LABELS[locale])
    raise ValueError(f"Unknown surface: {surface}. Supported: 'cv', 'portfolio'")


def message_for(locale: Locale, key: str) -> str:
    """Get a user-visible message in a locale."""
    return MESSAGES[Locale(locale)][key]
