"""Tests for the CV layouts."""

import pytest

from folio.models.domain import CvTemplateId, Locale, Profile, Theme
from folio.rendering.contracts import CVTemplateProps, TemplateExperience
from folio.rendering.cv_templates import CV_TEMPLATES
from folio.rendering.labels import CV_SURFACE, PLACEHOLDERS, labels_for

from conftest import make_articles, make_experiences, make_projects

PHOTO_TEMPLATES = [
    CvTemplateId.MODERN_CLASSIC,
    CvTemplateId.MINIMAL_ELEGANT,
    CvTemplateId.CORPORATE,
    CvTemplateId.CREATIVE_ACCENT,
]


@pytest.mark.parametrize("template_id", list(CvTemplateId))
@pytest.mark.parametrize("locale", list(Locale))
def test_empty_profile_renders_placeholders(renderer, template_id, locale):
    """Test that an empty profile renders the localized placeholders and no empty sections."""
    html = renderer.render_cv(template_id, CVTemplateProps(locale=locale))
    policy = CV_TEMPLATES[template_id]

    assert f'data-template="{template_id.value}"' in html
    assert PLACEHOLDERS[locale]["name"] in html
    assert policy.headline[locale] in html
    assert policy.summary[locale] in html
    for section in ("experience", "projects", "articles", "skills", "education", "contact"):
        assert f'data-section="{section}"' not in html


@pytest.mark.parametrize("template_id", list(CvTemplateId))
def test_full_profile_renders_every_section(renderer, template_id, cv_props):
    html = renderer.render_cv(template_id, cv_props)

    assert "Maria Clara Duarte" in html
    assert "Product Designer" in html
    assert "Designs accessible products." in html
    for section in ("summary", "experience", "projects", "articles", "skills", "education", "contact"):
        assert f'data-section="{section}"' in html


@pytest.mark.parametrize("template_id", list(CvTemplateId))
def test_section_labels_follow_locale(renderer, template_id, cv_props):
    props = cv_props.model_copy(update={"locale": Locale.ES})
    html = renderer.render_cv(template_id, props)
    labels = labels_for(Locale.ES, CV_SURFACE)

    assert labels["experience"] in html
    assert labels["skills"] in html
    assert 'lang="es"' in html


@pytest.mark.parametrize("template_id", list(CvTemplateId))
def test_caps_keep_input_order(renderer, template_id, profile):
    """Test that each list is cut to the template cap, keeping the first items in order."""
    policy = CV_TEMPLATES[template_id]
    props = CVTemplateProps(
        profile=profile.model_copy(update={"skills": [f"Skill{i:02d}" for i in range(20)]}),
        experiences=make_experiences(6),
        projects=make_projects(6),
        articles=make_articles(4),
        locale=Locale.EN,
    )
    html = renderer.render_cv(template_id, props)

    assert html.count('data-item="experience"') == policy.max_experiences
    assert html.count('data-item="project"') == policy.max_projects
    assert html.count('data-item="article"') == policy.max_articles
    assert html.count('data-item="skill"') == policy.max_skills

    positions = [html.index(f"Role {i}") for i in range(policy.max_experiences)]
    assert positions == sorted(positions)
    assert f"Role {policy.max_experiences}" not in html


def test_expected_caps():
    caps = {
        template_id: (policy.max_experiences, policy.max_projects, policy.max_skills)
        for template_id, policy in CV_TEMPLATES.items()
    }

    assert caps[CvTemplateId.MODERN] == (3, 3, 10)
    assert caps[CvTemplateId.MINIMAL] == (4, 2, 8)
    assert caps[CvTemplateId.CREATIVE] == (3, 3, 9)
    assert caps[CvTemplateId.EXECUTIVE] == (4, 2, 8)
    assert caps[CvTemplateId.MODERN_CLASSIC] == (4, 3, 12)
    assert caps[CvTemplateId.MINIMAL_ELEGANT] == (4, 4, 16)
    assert caps[CvTemplateId.CORPORATE] == (5, 3, 12)
    assert caps[CvTemplateId.CREATIVE_ACCENT] == (4, 4, 14)


def test_education_cap(renderer, profile):
    education = profile.education * 3
    props = CVTemplateProps(profile=profile.model_copy(update={"education": education}))

    minimal = renderer.render_cv(CvTemplateId.MINIMAL, props)
    corporate = renderer.render_cv(CvTemplateId.CORPORATE, props)

    assert minimal.count('data-item="education"') == 2
    assert corporate.count('data-item="education"') == 4


def test_education_period_formatting(renderer, cv_props):
    html = renderer.render_cv(CvTemplateId.MODERN, cv_props)

    assert "2010 – 2014" in html
    assert "2019" in html


def test_description_truncation(renderer):
    experience = TemplateExperience(id="e1", title="Lead", description="x" * 400)
    props = CVTemplateProps(experiences=[experience])

    modern = renderer.render_cv(CvTemplateId.MODERN, props)
    corporate = renderer.render_cv(CvTemplateId.CORPORATE, props)
    minimal = renderer.render_cv(CvTemplateId.MINIMAL, props)

    assert "x" * 320 + "…" in modern
    assert "x" * 321 not in modern
    assert "x" * 360 + "…" in corporate
    assert "x" * 400 in minimal
    assert "…" not in minimal


@pytest.mark.parametrize("template_id", PHOTO_TEMPLATES)
def test_photo_shown_when_allowed(renderer, template_id, profile):
    props = CVTemplateProps(profile=profile.model_copy(update={"photo_url": "https://cdn.example.com/me.jpg"}))
    html = renderer.render_cv(template_id, props)

    assert 'src="https://cdn.example.com/me.jpg"' in html
    assert "avatar-initials" not in html


@pytest.mark.parametrize("template_id", PHOTO_TEMPLATES)
def test_photo_hidden_by_flag_shows_initials(renderer, template_id, profile):
    hidden = profile.model_copy(
        update={"photo_url": "https://cdn.example.com/me.jpg", "show_cv_photo": False}
    )
    html = renderer.render_cv(template_id, CVTemplateProps(profile=hidden))

    assert "cdn.example.com" not in html
    assert "avatar-initials" in html
    assert ">MC<" in html


@pytest.mark.parametrize("template_id", PHOTO_TEMPLATES)
def test_initials_fallback_without_name(renderer, template_id):
    html = renderer.render_cv(template_id, CVTemplateProps(profile=Profile()))

    assert ">CV<" in html


@pytest.mark.parametrize(
    "template_id", [CvTemplateId.MODERN, CvTemplateId.MINIMAL, CvTemplateId.CREATIVE, CvTemplateId.EXECUTIVE]
)
def test_templates_without_photo_slot(renderer, template_id, profile):
    props = CVTemplateProps(profile=profile.model_copy(update={"photo_url": "https://cdn.example.com/me.jpg"}))
    html = renderer.render_cv(template_id, props)

    assert "cdn.example.com" not in html
    assert "avatar-initials" not in html


def test_theme_colors_and_font(renderer, cv_props):
    props = cv_props.model_copy(update={"theme": Theme(primary_color="#123456", font_family="Lato")})
    html = renderer.render_cv(CvTemplateId.MODERN_CLASSIC, props)

    assert "#123456" in html
    assert "font-family:Lato" in html


def test_template_default_font(renderer, cv_props):
    html = renderer.render_cv(CvTemplateId.CREATIVE, cv_props)

    assert "Poppins" in html


def test_cv_has_no_project_links(renderer, profile):
    props = CVTemplateProps(profile=profile, projects=make_projects(1, link="https://example.com/p"))
    html = renderer.render_cv(CvTemplateId.MODERN, props)

    assert "project-link" not in html


def test_user_text_is_escaped(renderer):
    props = CVTemplateProps(profile=Profile(full_name="<script>alert(1)</script>"))
    html = renderer.render_cv(CvTemplateId.MODERN, props)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_rendering_is_repeatable(renderer, cv_props):
    first = renderer.render_cv(CvTemplateId.CORPORATE, cv_props)
    second = renderer.render_cv(CvTemplateId.CORPORATE, cv_props)

    assert first == second
