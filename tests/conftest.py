"""Shared fixtures for Folio tests."""

import pytest
import yaml

from folio.models.domain import EducationRecord, Locale, Profile
from folio.rendering.contracts import (
    CVTemplateProps,
    PortfolioTemplateProps,
    TemplateArticle,
    TemplateExperience,
    TemplateProject,
    TemplateVideo,
)
from folio.rendering.renderer import TemplateRenderer


@pytest.fixture
def renderer():
    return TemplateRenderer()


@pytest.fixture
def profile():
    return Profile(
        id="user-1",
        full_name="Maria Clara Duarte",
        title="Product Designer",
        bio="Designs accessible products.",
        location="Lisboa",
        email="maria@example.com",
        phone="+351 900 000 000",
        skills=["Figma", "Research", "Prototyping"],
        education=[
            EducationRecord(
                institution="Universidade de Lisboa", degree="MSc Design", start_year="2010", end_year="2014"
            ),
            EducationRecord(institution="IADE", degree="Workshop", period="2019"),
        ],
        social_links={"github": "https://github.com/maria", "linkedin": "", "twitter": "https://x.com/m"},
    )


def make_experiences(count):
    return [
        TemplateExperience(id=f"exp-{i}", title=f"Role {i}", company=f"Company {i}", period="2020")
        for i in range(count)
    ]


def make_projects(count, link=None):
    return [
        TemplateProject(id=f"proj-{i}", title=f"Project {i}", description=f"Description {i}", link=link)
        for i in range(count)
    ]


def make_articles(count):
    return [
        TemplateArticle(id=f"art-{i}", title=f"Article {i}", summary="Summary", publication="Journal")
        for i in range(count)
    ]


def make_videos(count):
    return [
        TemplateVideo(id=f"vid-{i}", title=f"Video {i}", platform="YouTube")
        for i in range(count)
    ]


@pytest.fixture
def cv_props(profile):
    return CVTemplateProps(
        profile=profile,
        experiences=make_experiences(2),
        projects=make_projects(2),
        articles=make_articles(1),
        locale=Locale.EN,
    )


@pytest.fixture
def portfolio_props(profile):
    return PortfolioTemplateProps(
        profile=profile,
        experiences=make_experiences(2),
        projects=make_projects(2, link="https://example.com/p"),
        featured_videos=make_videos(1),
        articles=make_articles(1),
        locale=Locale.EN,
    )


PORTFOLIO_DOCUMENT = {
    "profile": {
        "full_name": "Joao Pereira",
        "preferred_locale": "en",
        "title": "Engenheiro de dados",
        "bio": "Bio em portugues",
        "skills": ["SQL", "Python"],
        "education": [{"institution": "USP", "degree": "BSc", "startYear": 2015, "endYear": 2019}],
        "social_links": {"github": "https://github.com/joao"},
        "translations": {"en": {"title": "Data engineer", "bio": "  "}},
        "portfolio_template": "dark",
        "cv_template": "corporate",
    },
    "theme": {"primary_color": "#112233", "font_family": None},
    "featured_videos": [
        {"id": "v2", "url": "https://youtu.be/2", "title": "Second", "position": 2},
        {"id": "v1", "url": "https://youtu.be/1", "title": "First", "position": 1},
    ],
    "projects": [
        {"id": "p1", "title": "Pipeline", "description": "Batch pipeline", "link": "https://example.com"},
        {"id": "p2", "title": "Dashboard", "description": "Metrics"},
    ],
    "experiences": [
        {"id": "e1", "title": "Engenheiro", "company": "Acme", "period": 2021,
         "translations": {"en": {"title": "Engineer"}}},
    ],
    "articles": [
        {"id": "a1", "title": "Visible", "show_in_portfolio": True, "show_in_cv": True},
        {"id": "a2", "title": "Secret paper", "show_in_portfolio": False, "show_in_cv": False},
    ],
    "cvs": [
        {"id": "cv1", "name": "Main", "language": "es", "template": "executive",
         "selected_projects": ["p2"], "show_cv_photo": False},
    ],
    "subscription": {"status": "active", "plan_tier": "pro", "current_period_end": "2099-01-01T00:00:00+00:00"},
}


@pytest.fixture
def data_dir(tmp_path):
    """A data directory holding one user document (joao) for the YAML backend."""
    portfolios = tmp_path / "portfolios"
    portfolios.mkdir()
    with open(portfolios / "joao.yaml", "w", encoding="utf-8") as f:
        yaml.safe_dump(PORTFOLIO_DOCUMENT, f, allow_unicode=True, sort_keys=False)
    return tmp_path
