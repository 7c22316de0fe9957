"""Pydantic models for portfolio and CV data structures."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class Locale(str, Enum):
    """Supported locales."""

    PT = "pt"
    EN = "en"
    ES = "es"


class CvTemplateId(str, Enum):
    """CV layout identifiers."""

    MODERN = "modern"
    MINIMAL = "minimal"
    CREATIVE = "creative"
    EXECUTIVE = "executive"
    MODERN_CLASSIC = "modernClassic"
    MINIMAL_ELEGANT = "minimalElegant"
    CORPORATE = "corporate"
    CREATIVE_ACCENT = "creativeAccent"


class PortfolioTemplateId(str, Enum):
    """Portfolio layout identifiers."""

    MODERN = "modern"
    MINIMAL = "minimal"
    DARK = "dark"
    GRADIENT = "gradient"


class FolioModel(BaseModel):
    """Immutable base model with camelCase aliases."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class EducationRecord(FolioModel):
    """Education entry model."""

    institution: str = ""
    degree: str = ""
    start_year: Optional[str] = None
    end_year: Optional[str] = None
    period: Optional[str] = None
    description: Optional[str] = None


class Profile(FolioModel):
    """User profile model."""

    id: str = ""
    full_name: str = ""
    slug: Optional[str] = None
    preferred_locale: Optional[Locale] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    photo_url: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    education: List[EducationRecord] = Field(default_factory=list)
    social_links: Dict[str, Optional[str]] = Field(default_factory=dict)
    show_cv_photo: Optional[bool] = None
    # locale code -> field name -> translated text
    translations: Dict[str, Dict[str, Optional[str]]] = Field(default_factory=dict)
    portfolio_template: Optional[str] = None
    cv_template: Optional[str] = None


class Theme(FolioModel):
    """Theme model. Every field may be absent in a partial theme."""

    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    accent_color: Optional[str] = None
    background_color: Optional[str] = None
    font_family: Optional[str] = None
    theme_mode: Optional[str] = None
    layout: Optional[str] = None


class Experience(FolioModel):
    """Experience entry model."""

    id: str
    title: str
    company: Optional[str] = None
    period: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    current: Optional[bool] = None
    position: Optional[int] = None
    translations: Dict[str, Dict[str, Optional[str]]] = Field(default_factory=dict)


class Project(FolioModel):
    """Project model."""

    id: str
    title: str
    description: str = ""
    link: Optional[str] = None
    image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    company: Optional[str] = None
    position: Optional[int] = None
    translations: Dict[str, Dict[str, Optional[str]]] = Field(default_factory=dict)


class Article(FolioModel):
    """Scientific article model."""

    id: str
    title: str
    summary: Optional[str] = None
    publication: Optional[str] = None
    publication_date: Optional[str] = None
    link: Optional[str] = None
    doi: Optional[str] = None
    authors: List[str] = Field(default_factory=list)
    show_in_portfolio: Optional[bool] = None
    show_in_cv: Optional[bool] = None
    position: Optional[int] = None
    translations: Dict[str, Dict[str, Optional[str]]] = Field(default_factory=dict)


class FeaturedVideo(FolioModel):
    """Featured video model."""

    id: str
    url: str = ""
    platform: str = "youtube"
    title: str = ""
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    position: Optional[int] = None


class CvRecord(FolioModel):
    """Stored CV definition: language and the selected items."""

    id: str
    name: str = ""
    language: Locale = Locale.PT
    template: Optional[str] = None
    selected_projects: List[str] = Field(default_factory=list)
    selected_experiences: List[str] = Field(default_factory=list)
    selected_articles: List[str] = Field(default_factory=list)
    show_cv_photo: Optional[bool] = None


class Subscription(FolioModel):
    """Subscription model, read-only."""

    status: str = "active"
    plan_tier: Optional[str] = None
    trial_ends_at: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    grace_days: Optional[int] = None


class PublicPortfolio(FolioModel):
    """Aggregate payload of a published portfolio."""

    profile: Profile
    theme: Optional[Theme] = None
    featured_videos: List[FeaturedVideo] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    experiences: List[Experience] = Field(default_factory=list)
    articles: List[Article] = Field(default_factory=list)
    cvs: List[CvRecord] = Field(default_factory=list)
    subscription: Optional[Subscription] = None
