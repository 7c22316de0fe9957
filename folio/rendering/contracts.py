"""Normalized data shapes consumed by CV and portfolio templates."""

from typing import List, Optional
from pydantic import Field

from folio.models.domain import FolioModel, Locale, Profile, Theme


class Palette(FolioModel):
    """Concrete four-color palette."""

    primary: str
    secondary: str
    accent: str
    background: str


class TemplateExperience(FolioModel):
    """Experience entry as displayed by a template."""

    id: str
    title: str
    company: Optional[str] = None
    description: Optional[str] = None
    period: Optional[str] = None


class TemplateProject(FolioModel):
    """Project entry as displayed by a template."""

    id: str
    title: str
    description: str
    link: Optional[str] = None


class TemplateArticle(FolioModel):
    """Article entry as displayed by a template."""

    id: str
    title: str
    summary: Optional[str] = None
    publication: Optional[str] = None


class TemplateVideo(FolioModel):
    """Featured video as displayed by a template."""

    id: str
    title: str
    description: str = ""
    platform: str = ""


class CVTemplateProps(FolioModel):
    """Input of every CV template."""

    profile: Profile = Field(default_factory=Profile)
    experiences: List[TemplateExperience] = Field(default_factory=list)
    projects: List[TemplateProject] = Field(default_factory=list)
    articles: List[TemplateArticle] = Field(default_factory=list)
    locale: Locale = Locale.PT
    theme: Optional[Theme] = None


class PortfolioTemplateProps(FolioModel):
    """Input of every portfolio template."""

    profile: Profile = Field(default_factory=Profile)
    experiences: List[TemplateExperience] = Field(default_factory=list)
    projects: List[TemplateProject] = Field(default_factory=list)
    featured_videos: List[TemplateVideo] = Field(default_factory=list)
    articles: List[TemplateArticle] = Field(default_factory=list)
    locale: Locale = Locale.PT
    theme: Optional[Theme] = None
