"""Request models for API endpoints."""

from typing import Optional
from pydantic import BaseModel, Field

from folio.models.domain import Locale, Theme
from folio.rendering.contracts import CVTemplateProps, PortfolioTemplateProps


class CvRenderRequest(BaseModel):
    """Request model for rendering a CV preview from already normalized data."""

    template: Optional[str] = Field(
        None,
        description="CV template identifier. Unknown or legacy identifiers render with 'modern'.",
        examples=["corporate"]
    )
    props: CVTemplateProps = Field(
        default_factory=CVTemplateProps,
        description="Profile, experiences, projects, articles, locale and theme of the CV"
    )
    full_page: bool = Field(
        False,
        description="Wrap the fragment in a complete HTML document"
    )


class PortfolioRenderRequest(BaseModel):
    """Request model for rendering a portfolio preview from already normalized data."""

    template: Optional[str] = Field(
        None,
        description="Portfolio template identifier. Unknown identifiers render with 'modern'.",
        examples=["gradient"]
    )
    props: PortfolioTemplateProps = Field(
        default_factory=PortfolioTemplateProps,
        description="Profile, collections, locale and theme of the portfolio"
    )
    full_page: bool = Field(
        False,
        description="Wrap the fragment in a complete HTML document"
    )


class CvGenerateRequest(BaseModel):
    """Request model for generating the PDF of a stored CV."""

    user_id: str = Field(
        ...,
        description="Owner of the CV",
        examples=["demo"]
    )
    cv_id: Optional[str] = Field(
        None,
        description="Stored CV whose selection, language and template are used. "
                    "If omitted, every item of the portfolio is included.",
        examples=["cv-main"]
    )
    locale: Optional[Locale] = Field(
        None,
        description="Overrides the CV language (pt, en or es)",
        examples=["en"]
    )
    template: Optional[str] = Field(
        None,
        description="Overrides the CV template",
        examples=["executive"]
    )


class ThemeUpdateRequest(Theme):
    """Request model for saving the portfolio theme. Missing colors use the defaults."""


class LocaleUpdateRequest(BaseModel):
    """Request model for saving the preferred locale."""

    locale: Locale = Field(
        ...,
        description="Preferred locale (pt, en or es)",
        examples=["es"]
    )
