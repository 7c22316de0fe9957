"""Normalization of backend rows into domain models and template data."""

from typing import Any, Dict, List, Optional

from folio.models.domain import (
    Article,
    CvRecord,
    EducationRecord,
    Experience,
    FeaturedVideo,
    Locale,
    Profile,
    Project,
    Subscription,
    Theme,
)
from folio.rendering.contracts import (
    CVTemplateProps,
    PortfolioTemplateProps,
    TemplateArticle,
    TemplateExperience,
    TemplateProject,
    TemplateVideo,
)

# Base language of stored content; translations hold the other locales
BASE_LOCALE = Locale.PT

PLATFORM_LABELS = {
    "youtube": "YouTube",
    "instagram": "Instagram",
    "vimeo": "Vimeo",
}

# Fallbacks applied to stored theme rows with missing columns
THEME_ROW_DEFAULTS = {
    "primary_color": "#a21d4c",
    "secondary_color": "#2d2550",
    "accent_color": "#c92563",
    "background_color": "#ffffff",
    "font_family": "Inter, system-ui, sans-serif",
    "theme_mode": "light",
    "layout": "modern",
}


def _json_object(value: Any) -> Dict[str, Any]:
    """JSON columns that are not objects are treated as absent."""
    return value if isinstance(value, dict) else {}


def _string_map(value: Any) -> Dict[str, str]:
    return {str(key): item for key, item in _json_object(value).items() if isinstance(item, str)}


def _translations(value: Any) -> Dict[str, Dict[str, str]]:
    return {
        str(locale): _string_map(fields)
        for locale, fields in _json_object(value).items()
        if isinstance(fields, dict)
    }


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def _locale_or_none(value: Any) -> Optional[Locale]:
    try:
        return Locale(value)
    except ValueError:
        return None


def education_from_value(value: Any) -> List[EducationRecord]:
    """Parse the education JSON column (a list of objects)."""
    if not isinstance(value, list):
        return []
    records = []
    for item in value:
        if not isinstance(item, dict):
            continue
        records.append(
            EducationRecord(
                institution=item.get("institution") or "",
                degree=item.get("degree") or "",
                start_year=_optional_str(item.get("startYear", item.get("start_year"))),
                end_year=_optional_str(item.get("endYear", item.get("end_year"))),
                period=_optional_str(item.get("period")),
                description=item.get("description"),
            )
        )
    return records


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def profile_from_row(row: Dict[str, Any]) -> Profile:
    """Map a profiles row to a Profile."""
    return Profile(
        id=str(row.get("id") or ""),
        full_name=row.get("full_name") or "",
        slug=row.get("slug"),
        preferred_locale=_locale_or_none(row.get("preferred_locale")),
        title=row.get("title"),
        bio=row.get("bio"),
        location=row.get("location"),
        email=row.get("email"),
        phone=row.get("phone"),
        photo_url=row.get("photo_url"),
        skills=_string_list(row.get("skills")),
        education=education_from_value(row.get("education")),
        social_links=_string_map(row.get("social_links")),
        show_cv_photo=row.get("show_cv_photo"),
        translations=_translations(row.get("translations")),
        portfolio_template=row.get("portfolio_template"),
        cv_template=row.get("cv_template"),
    )


def theme_from_row(row: Optional[Dict[str, Any]]) -> Optional[Theme]:
    """Map a user_themes row to a Theme, filling missing columns with defaults."""
    if not row:
        return None
    values = {key: row.get(key) or default for key, default in THEME_ROW_DEFAULTS.items()}
    return Theme(**values)


def theme_to_row(user_id: str, theme: Theme) -> Dict[str, Any]:
    """Map a Theme to a user_themes row for upsert. Missing fields take the row defaults."""
    row = {"user_id": user_id}
    for key, default in THEME_ROW_DEFAULTS.items():
        row[key] = getattr(theme, key) or default
    return row


def experience_from_row(row: Dict[str, Any]) -> Experience:
    return Experience(
        id=str(row["id"]),
        title=row.get("title") or "",
        company=row.get("company"),
        period=_optional_str(row.get("period")),
        description=row.get("description"),
        location=row.get("location"),
        current=row.get("current"),
        position=row.get("position"),
        translations=_translations(row.get("translations")),
    )


def project_from_row(row: Dict[str, Any]) -> Project:
    return Project(
        id=str(row["id"]),
        title=row.get("title") or "",
        description=row.get("description") or "",
        link=row.get("link"),
        image=row.get("image_url"),
        tags=_string_list(row.get("tags")),
        category=row.get("category"),
        company=row.get("company"),
        position=row.get("position"),
        translations=_translations(row.get("translations")),
    )


def article_from_row(row: Dict[str, Any]) -> Article:
    return Article(
        id=str(row["id"]),
        title=row.get("title") or "",
        summary=row.get("summary"),
        publication=row.get("publication"),
        publication_date=_optional_str(row.get("publication_date")),
        link=row.get("link"),
        doi=row.get("doi"),
        authors=_string_list(row.get("authors")),
        show_in_portfolio=row.get("show_in_portfolio"),
        show_in_cv=row.get("show_in_cv"),
        position=row.get("position"),
        translations=_translations(row.get("translations")),
    )


def video_from_row(row: Dict[str, Any]) -> FeaturedVideo:
    return FeaturedVideo(
        id=str(row["id"]),
        url=row.get("url") or "",
        platform=row.get("platform") or "youtube",
        title=row.get("title") or "",
        description=row.get("description") or "",
        tags=_string_list(row.get("tags")),
        position=row.get("position"),
    )


def cv_from_row(row: Dict[str, Any]) -> CvRecord:
    return CvRecord(
        id=str(row["id"]),
        name=row.get("name") or "",
        language=_locale_or_none(row.get("language")) or BASE_LOCALE,
        template=row.get("template"),
        selected_projects=_string_list(row.get("selected_projects")),
        selected_experiences=_string_list(row.get("selected_experiences")),
        selected_articles=_string_list(row.get("selected_articles")),
        show_cv_photo=row.get("show_cv_photo"),
    )


def subscription_from_row(row: Optional[Dict[str, Any]]) -> Optional[Subscription]:
    if not row:
        return None
    return Subscription(
        status=row.get("status") or "active",
        plan_tier=row.get("plan_tier"),
        trial_ends_at=row.get("trial_ends_at"),
        current_period_end=row.get("current_period_end"),
        grace_days=row.get("grace_days"),
    )


def translated(
    translations: Dict[str, Dict[str, Optional[str]]],
    field: str,
    base: Optional[str],
    locale: Locale,
) -> Optional[str]:
    """
    Pick the localized value of a field.

    The base value is stored in Portuguese; for other locales a non-blank
    translation overrides it.
    """
    locale = Locale(locale)
    if locale == BASE_LOCALE:
        return base
    value = (translations.get(locale.value) or {}).get(field)
    if value and value.strip():
        return value
    return base


def localize_profile(profile: Profile, locale: Locale) -> Profile:
    """Return a copy of the profile with title and bio in the requested locale."""
    return profile.model_copy(
        update={
            "title": translated(profile.translations, "title", profile.title, locale),
            "bio": translated(profile.translations, "bio", profile.bio, locale),
        }
    )


def to_template_experience(experience: Experience, locale: Locale) -> TemplateExperience:
    tr = experience.translations
    return TemplateExperience(
        id=experience.id,
        title=translated(tr, "title", experience.title, locale) or "",
        company=translated(tr, "company", experience.company, locale),
        description=translated(tr, "description", experience.description, locale),
        period=experience.period,
    )


def to_template_project(project: Project, locale: Locale) -> TemplateProject:
    tr = project.translations
    return TemplateProject(
        id=project.id,
        title=translated(tr, "title", project.title, locale) or "",
        description=translated(tr, "description", project.description, locale) or "",
        link=project.link or None,
    )


def to_template_article(article: Article, locale: Locale) -> TemplateArticle:
    tr = article.translations
    return TemplateArticle(
        id=article.id,
        title=translated(tr, "title", article.title, locale) or "",
        summary=translated(tr, "summary", article.summary, locale),
        publication=translated(tr, "publication", article.publication, locale),
    )


def to_template_video(video: FeaturedVideo) -> TemplateVideo:
    platform = (video.platform or "").lower()
    return TemplateVideo(
        id=video.id,
        title=video.title,
        description=video.description,
        platform=PLATFORM_LABELS.get(platform, video.platform or ""),
    )


def _selected(items: list, selected_ids: List[str]) -> list:
    if not selected_ids:
        return list(items)
    wanted = set(selected_ids)
    return [item for item in items if item.id in wanted]


def select_for_cv(
    cv: Optional[CvRecord],
    projects: List[Project],
    experiences: List[Experience],
    articles: List[Article],
):
    """
    Apply a stored CV's selection.

    Keeps the selected ids in their original order; an empty selection keeps
    every item. Articles hidden from CVs are always dropped.

    Returns:
        tuple: (projects, experiences, articles)
    """
    articles = [article for article in articles if article.show_in_cv is not False]
    if cv is None:
        return list(projects), list(experiences), articles
    return (
        _selected(projects, cv.selected_projects),
        _selected(experiences, cv.selected_experiences),
        _selected(articles, cv.selected_articles),
    )


def build_cv_props(
    profile: Profile,
    experiences: List[Experience],
    projects: List[Project],
    articles: List[Article],
    locale: Locale,
    theme: Optional[Theme] = None,
    cv: Optional[CvRecord] = None,
) -> CVTemplateProps:
    """Build CV template input from domain entities."""
    projects, experiences, articles = select_for_cv(cv, projects, experiences, articles)
    localized = localize_profile(profile, locale)
    if cv is not None and cv.show_cv_photo is not None:
        localized = localized.model_copy(update={"show_cv_photo": cv.show_cv_photo})
    return CVTemplateProps(
        profile=localized,
        experiences=[to_template_experience(item, locale) for item in experiences],
        projects=[to_template_project(item, locale) for item in projects],
        articles=[to_template_article(item, locale) for item in articles],
        locale=locale,
        theme=theme,
    )


def build_portfolio_props(
    profile: Profile,
    experiences: List[Experience],
    projects: List[Project],
    videos: List[FeaturedVideo],
    articles: List[Article],
    locale: Locale,
    theme: Optional[Theme] = None,
) -> PortfolioTemplateProps:
    """Build portfolio template input from domain entities."""
    visible_articles = [article for article in articles if article.show_in_portfolio is not False]
    return PortfolioTemplateProps(
        profile=localize_profile(profile, locale),
        experiences=[to_template_experience(item, locale) for item in experiences],
        projects=[to_template_project(item, locale) for item in projects],
        featured_videos=[to_template_video(item) for item in videos],
        articles=[to_template_article(item, locale) for item in visible_articles],
        locale=locale,
        theme=theme,
    )
